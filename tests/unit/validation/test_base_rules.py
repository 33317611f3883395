"""Tests for the rule base models and the generic rule shapes."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from aerocheck.validation.rules.base import (
    ComplianceRule,
    ConditionalRequirementRule,
    RequiredFieldsRule,
    RuleCategory,
    RuleSeverity,
    Violation,
    item,
    pattern,
)


class TestRuleSeverity:
    def test_values(self) -> None:
        assert RuleSeverity.ERROR.value == "error"
        assert RuleSeverity.WARNING.value == "warning"
        assert RuleSeverity.INFO.value == "info"

    def test_rank_order(self) -> None:
        assert RuleSeverity.ERROR.rank > RuleSeverity.WARNING.rank > RuleSeverity.INFO.rank

    def test_display_name(self) -> None:
        assert RuleSeverity.WARNING.display_name == "Warning"

    def test_icons(self) -> None:
        assert RuleSeverity.ERROR.icon == "❌"
        assert RuleSeverity.WARNING.icon == "⚠️"
        assert RuleSeverity.INFO.icon == "ℹ️"


class TestRuleCategory:
    def test_categories(self) -> None:
        assert [c.value for c in RuleCategory] == [
            "maintenance",
            "pilot-log",
            "airworthiness",
            "weight-balance",
        ]


class TestViolation:
    def test_minimal(self) -> None:
        v = Violation(
            rule_id="X-001",
            message="Missing thing",
            severity=RuleSeverity.ERROR,
            regulation="14 CFR 1.1",
        )
        assert v.line is None
        assert v.suggestion is None

    def test_frozen(self) -> None:
        v = Violation(
            rule_id="X-001",
            message="Missing thing",
            severity=RuleSeverity.ERROR,
            regulation="14 CFR 1.1",
        )
        with pytest.raises(ValidationError):
            v.message = "changed"  # type: ignore[misc]


class TestComplianceRule:
    def test_cannot_instantiate_abstract(self) -> None:
        with pytest.raises(TypeError):
            ComplianceRule(  # type: ignore[abstract]
                rule_id="X",
                name="X",
                description="X",
                category=RuleCategory.MAINTENANCE,
                severity=RuleSeverity.ERROR,
                regulation="X",
            )

    def test_violation_copies_rule_fields(self) -> None:
        rule = ConditionalRequirementRule(
            rule_id="T-001",
            name="Test",
            description="Test rule",
            category=RuleCategory.PILOT_LOG,
            severity=RuleSeverity.WARNING,
            regulation="14 CFR 61.51",
            requirement=pattern(r"never"),
            message="unused",
        )
        v = rule.violation("Something missing", "Add it")
        assert v.rule_id == "T-001"
        assert v.severity == RuleSeverity.WARNING
        assert v.regulation == "14 CFR 61.51"
        assert v.suggestion == "Add it"


def _fields_rule(**kwargs) -> RequiredFieldsRule:
    defaults = dict(
        rule_id="T-FIELDS",
        name="Fields",
        description="Fields rule",
        category=RuleCategory.MAINTENANCE,
        severity=RuleSeverity.ERROR,
        regulation="14 CFR 43.9",
        items=(
            item("alpha", r"alpha\s*:\s*\d+", "Alpha value"),
            item("beta", r"beta\s*:\s*\d+", "Beta value"),
        ),
    )
    defaults.update(kwargs)
    return RequiredFieldsRule(**defaults)


class TestRequiredFieldsRule:
    def test_all_present(self) -> None:
        assert _fields_rule().check("alpha: 1\nbeta: 2", "f.md") == []

    def test_one_violation_per_missing_item(self) -> None:
        violations = _fields_rule().check("nothing here", "f.md")
        assert [v.message for v in violations] == [
            "Missing required field: Alpha value",
            "Missing required field: Beta value",
        ]
        assert all(v.rule_id == "T-FIELDS" for v in violations)
        assert all(v.severity == RuleSeverity.ERROR for v in violations)

    def test_patterns_case_insensitive(self) -> None:
        assert _fields_rule().check("ALPHA: 1\nBeta: 2", "f.md") == []

    def test_patterns_match_across_whole_text(self) -> None:
        text = "header\n\n" + "filler\n" * 50 + "beta: 9\n" + "alpha: 3"
        assert _fields_rule().check(text, "f.md") == []

    def test_gate_blocks_evaluation(self) -> None:
        rule = _fields_rule(gate=pattern(r"gate\s+open"))
        assert rule.check("no gate here", "f.md") == []
        assert len(rule.check("GATE OPEN", "f.md")) == 2

    def test_suggestion_template(self) -> None:
        rule = _fields_rule(suggestion_template="Add {field} ({name})")
        violations = rule.check("alpha: 1", "f.md")
        assert violations[0].suggestion == "Add beta (Beta value)"


class TestConditionalRequirementRule:
    @pytest.fixture()
    def rule(self) -> ConditionalRequirementRule:
        return ConditionalRequirementRule(
            rule_id="T-COND",
            name="Conditional",
            description="Conditional rule",
            category=RuleCategory.MAINTENANCE,
            severity=RuleSeverity.WARNING,
            regulation="14 CFR 39",
            trigger=pattern(r"trigger"),
            requirement=pattern(r"requirement"),
            message="Requirement missing",
        )

    def test_no_trigger_no_violation(self, rule: ConditionalRequirementRule) -> None:
        assert rule.check("plain text", "f.md") == []

    def test_trigger_without_requirement(self, rule: ConditionalRequirementRule) -> None:
        violations = rule.check("Trigger here", "f.md")
        assert len(violations) == 1
        assert violations[0].message == "Requirement missing"

    def test_trigger_with_requirement(self, rule: ConditionalRequirementRule) -> None:
        assert rule.check("trigger and REQUIREMENT", "f.md") == []

    def test_unconditional_when_no_trigger(self) -> None:
        rule = ConditionalRequirementRule(
            rule_id="T-STMT",
            name="Statement",
            description="Statement rule",
            category=RuleCategory.MAINTENANCE,
            severity=RuleSeverity.ERROR,
            regulation="14 CFR 43.9",
            requirement=pattern(r"statement"),
            message="Statement missing",
        )
        assert len(rule.check("", "f.md")) == 1
        assert rule.check("a statement", "f.md") == []
