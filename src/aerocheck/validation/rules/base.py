"""Base models for aviation compliance rules.

Defines the core abstractions: RuleSeverity, RuleCategory, Violation,
ComplianceRule and RequiredItem. All concrete compliance rules subclass
ComplianceRule and implement the check() method.
"""

from __future__ import annotations

import re
from abc import abstractmethod
from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field


class RuleSeverity(StrEnum):
    """Severity classification for compliance findings.

    ERROR: Regulatory requirement not met -- fails the document.
    WARNING: Likely gap in the record, should be reviewed.
    INFO: Informational, never changes a document's status.
    """

    ERROR = "error"
    WARNING = "warning"
    INFO = "info"

    @property
    def display_name(self) -> str:
        """Human-friendly display name."""
        return self.value.capitalize()

    @property
    def rank(self) -> int:
        """Ordinal impact: error > warning > info."""
        return _SEVERITY_RANK[self]

    @property
    def icon(self) -> str:
        """Emoji used in text and markdown renderings."""
        return _SEVERITY_ICON[self]


_SEVERITY_RANK: dict[RuleSeverity, int] = {
    RuleSeverity.ERROR: 2,
    RuleSeverity.WARNING: 1,
    RuleSeverity.INFO: 0,
}

_SEVERITY_ICON: dict[RuleSeverity, str] = {
    RuleSeverity.ERROR: "❌",
    RuleSeverity.WARNING: "⚠️",
    RuleSeverity.INFO: "ℹ️",
}


class RuleCategory(StrEnum):
    """Regulatory domain a rule belongs to.

    MAINTENANCE: 14 CFR Part 43 maintenance records.
    PILOT_LOG: 14 CFR Part 61 pilot logbooks.
    AIRWORTHINESS: 14 CFR 91.203 / 91.409 documents and inspections.
    WEIGHT_BALANCE: 14 CFR 91.9 weight and balance data.
    """

    MAINTENANCE = "maintenance"
    PILOT_LOG = "pilot-log"
    AIRWORTHINESS = "airworthiness"
    WEIGHT_BALANCE = "weight-balance"


class Violation(BaseModel):
    """A single detected non-compliance in one document.

    Produced by exactly one rule invocation. Severity and regulation are
    copied from the producing rule.
    """

    model_config = ConfigDict(frozen=True)

    rule_id: str = Field(..., description="Id of the rule that produced this violation")
    line: int | None = Field(default=None, description="1-based line number, when known")
    message: str = Field(..., description="Human-readable finding message")
    severity: RuleSeverity = Field(..., description="Finding severity")
    regulation: str = Field(..., description="Regulation citation, e.g. '14 CFR 43.9(a)'")
    suggestion: str | None = Field(default=None, description="Suggested remediation")


class RequiredItem(BaseModel):
    """One item of a required-field or checklist rule.

    ``field`` is the short key used in suggestions, ``name`` the human
    label used in messages.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    field: str
    name: str
    pattern: re.Pattern[str]

    def present_in(self, content: str) -> bool:
        return self.pattern.search(content) is not None


def item(field: str, pattern: str, name: str | None = None) -> RequiredItem:
    """Build a RequiredItem with a case-insensitive compiled pattern."""
    return RequiredItem(field=field, name=name or field, pattern=re.compile(pattern, re.IGNORECASE))


class ComplianceRule(BaseModel):
    """Abstract base class for all compliance rules.

    Rules are immutable and pure: check() reads the raw document text and
    returns zero or more violations without side effects. Patterns are
    matched against the full text, never per line.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    rule_id: str = Field(..., description="Unique, stable rule identifier (e.g., 'MAINT-001')")
    name: str = Field(..., description="Short rule name")
    description: str = Field(..., description="Human-readable rule description")
    category: RuleCategory = Field(..., description="Rule category")
    severity: RuleSeverity = Field(..., description="Severity of every finding this rule emits")
    regulation: str = Field(..., description="Regulation citation")

    @abstractmethod
    def check(self, content: str, filename: str) -> list[Violation]:
        """Check a document's text against this rule.

        Args:
            content: Raw document text.
            filename: Document name, used for message context only.

        Returns:
            List of Violation findings. Empty list means the rule passed.
        """
        ...

    def violation(self, message: str, suggestion: str | None = None) -> Violation:
        """Build a Violation carrying this rule's id, severity and regulation."""
        return Violation(
            rule_id=self.rule_id,
            message=message,
            severity=self.severity,
            regulation=self.regulation,
            suggestion=suggestion,
        )


class RequiredFieldsRule(ComplianceRule):
    """Emit one violation per required item missing from the document.

    When ``gate`` is set, items are only evaluated if the gate pattern
    matches somewhere in the text.
    """

    items: tuple[RequiredItem, ...]
    gate: re.Pattern[str] | None = None
    message_template: str = "Missing required field: {name}"
    suggestion_template: str = "Add {field} field to the entry"

    def check(self, content: str, filename: str) -> list[Violation]:
        if self.gate is not None and self.gate.search(content) is None:
            return []
        return [
            self.violation(
                self.message_template.format(name=req.name, field=req.field),
                self.suggestion_template.format(name=req.name, field=req.field),
            )
            for req in self.items
            if not req.present_in(content)
        ]


class ConditionalRequirementRule(ComplianceRule):
    """Require a pattern only when a trigger pattern is present.

    Without a trigger the requirement applies unconditionally, which makes
    this the single-statement presence check as well. Emits at most one
    violation.
    """

    requirement: re.Pattern[str]
    trigger: re.Pattern[str] | None = None
    message: str
    suggestion: str | None = None

    def check(self, content: str, filename: str) -> list[Violation]:
        if self.trigger is not None and self.trigger.search(content) is None:
            return []
        if self.requirement.search(content) is not None:
            return []
        return [self.violation(self.message, self.suggestion)]


def pattern(regex: str) -> re.Pattern[str]:
    """Compile a case-insensitive rule pattern."""
    return re.compile(regex, re.IGNORECASE)
