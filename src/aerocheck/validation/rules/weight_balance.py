"""Weight and balance rules (14 CFR 91.9)."""

from __future__ import annotations

import re

from aerocheck.validation.rules.base import (
    ComplianceRule,
    RequiredFieldsRule,
    RequiredItem,
    RuleCategory,
    RuleSeverity,
    item,
    pattern,
)


class WeightBalanceDataRule(RequiredFieldsRule):
    """A weight and balance record must state empty weight, CG and useful load.

    Documents that never mention weight and balance are not checked.
    """

    rule_id: str = "WB-001"
    name: str = "Weight and Balance Data"
    description: str = "Current weight and balance data must be available"
    category: RuleCategory = RuleCategory.WEIGHT_BALANCE
    severity: RuleSeverity = RuleSeverity.ERROR
    regulation: str = "14 CFR 91.9"
    gate: re.Pattern[str] | None = pattern(r"weight\s+(and|&)\s+balance")
    items: tuple[RequiredItem, ...] = (
        item("empty-weight", r"empty\s+weight\s*:?\s*\d+", "Empty Weight"),
        item("cg", r"(center\s+of\s+gravity|CG)\s*:?\s*\d+\.?\d*", "CG Location"),
        item("useful-load", r"useful\s+load\s*:?\s*\d+", "Useful Load"),
    )
    message_template: str = "Missing weight and balance data: {name}"
    suggestion_template: str = "Include {name} in weight and balance documentation"


def get_weight_balance_rules() -> list[ComplianceRule]:
    """Return all weight and balance rules in catalog order."""
    return [WeightBalanceDataRule()]
