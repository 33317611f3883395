"""Rule catalogs and the configured rule set.

The four catalogs are fixed and built once per process. A RuleSet is the
immutable, deduplicated concatenation of the catalogs for the enabled
categories, in catalog order. It replaces any process-wide mutable
registry: engines receive a RuleSet at construction.
"""

from __future__ import annotations

from collections.abc import Iterable
from functools import cache
from types import MappingProxyType
from typing import TYPE_CHECKING

from loguru import logger

from aerocheck.validation.rules.airworthiness import get_airworthiness_rules
from aerocheck.validation.rules.base import ComplianceRule, RuleCategory
from aerocheck.validation.rules.maintenance import get_maintenance_rules
from aerocheck.validation.rules.pilot_log import get_pilot_log_rules
from aerocheck.validation.rules.weight_balance import get_weight_balance_rules

if TYPE_CHECKING:
    from aerocheck.config import CheckOptions

CATALOG_ORDER: tuple[RuleCategory, ...] = (
    RuleCategory.MAINTENANCE,
    RuleCategory.PILOT_LOG,
    RuleCategory.AIRWORTHINESS,
    RuleCategory.WEIGHT_BALANCE,
)


@cache
def catalogs() -> MappingProxyType[RuleCategory, tuple[ComplianceRule, ...]]:
    """Return the built-in rule catalogs keyed by category (read-only)."""
    return MappingProxyType({
        RuleCategory.MAINTENANCE: tuple(get_maintenance_rules()),
        RuleCategory.PILOT_LOG: tuple(get_pilot_log_rules()),
        RuleCategory.AIRWORTHINESS: tuple(get_airworthiness_rules()),
        RuleCategory.WEIGHT_BALANCE: tuple(get_weight_balance_rules()),
    })


def all_rules() -> tuple[ComplianceRule, ...]:
    """Every built-in rule, catalog by catalog."""
    return RuleSet.from_categories(CATALOG_ORDER).rules


class RuleSet:
    """Immutable ordered collection of rules for one run."""

    __slots__ = ("_rules",)

    def __init__(self, rules: Iterable[ComplianceRule]) -> None:
        seen: set[str] = set()
        ordered: list[ComplianceRule] = []
        for rule in rules:
            if rule.rule_id in seen:
                continue
            seen.add(rule.rule_id)
            ordered.append(rule)
        self._rules: tuple[ComplianceRule, ...] = tuple(ordered)

    @classmethod
    def from_categories(cls, categories: Iterable[RuleCategory]) -> RuleSet:
        """Build a rule set from enabled categories.

        Categories are always applied in catalog order regardless of the
        order given, and a category listed twice is included once.
        """
        enabled = set(categories)
        built = catalogs()
        rules = [rule for category in CATALOG_ORDER if category in enabled for rule in built[category]]
        rule_set = cls(rules)
        logger.debug(
            "Built rule set with {} rules from categories {}",
            len(rule_set),
            [c.value for c in CATALOG_ORDER if c in enabled],
        )
        return rule_set

    @classmethod
    def from_options(cls, options: CheckOptions) -> RuleSet:
        return cls.from_categories(options.enabled_categories)

    @property
    def rules(self) -> tuple[ComplianceRule, ...]:
        return self._rules

    @property
    def rule_ids(self) -> list[str]:
        return [r.rule_id for r in self._rules]

    def get(self, rule_id: str) -> ComplianceRule | None:
        for rule in self._rules:
            if rule.rule_id == rule_id:
                return rule
        return None

    def __iter__(self):
        return iter(self._rules)

    def __len__(self) -> int:
        return len(self._rules)

    def __repr__(self) -> str:
        return f"RuleSet({self.rule_ids!r})"
