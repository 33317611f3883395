"""Maintenance record rules (14 CFR Part 43).

Checks maintenance log entries for the content required by 14 CFR 43.9,
annual inspection references to Part 43 Appendix D, and AD compliance
statements.
"""

from __future__ import annotations

import re

from aerocheck.validation.rules.base import (
    ComplianceRule,
    ConditionalRequirementRule,
    RequiredFieldsRule,
    RequiredItem,
    RuleCategory,
    RuleSeverity,
    item,
    pattern,
)

DATE_FIELD = r"date\s*:?\s*\d{1,2}[-/]\d{1,2}[-/]\d{2,4}"
ANNUAL_INSPECTION = pattern(r"annual\s+inspection")


class MaintenanceEntryFieldsRule(RequiredFieldsRule):
    """Maintenance entries must describe the work, date it, identify the
    aircraft and carry the mechanic's signature (14 CFR 43.9(a))."""

    rule_id: str = "MAINT-001"
    name: str = "Maintenance Log Entry Required Fields"
    description: str = "Maintenance records must include required information per 14 CFR 43.9"
    category: RuleCategory = RuleCategory.MAINTENANCE
    severity: RuleSeverity = RuleSeverity.ERROR
    regulation: str = "14 CFR 43.9(a)"
    items: tuple[RequiredItem, ...] = (
        item("description", r"description\s*:?\s*.+", "Description of work performed"),
        item("date", DATE_FIELD, "Date of completion"),
        item(
            "aircraft",
            r"(aircraft|tail\s*number|registration)\s*:?\s*[A-Z]-?[A-Z0-9]+",
            "Aircraft identification",
        ),
        item(
            "signature",
            r"(signature|signed\s*by|mechanic)\s*:?\s*.+",
            "Signature and certificate number",
        ),
    )
    suggestion_template: str = "Add {field} field to maintenance log entry"


class ReturnToServiceRule(ConditionalRequirementRule):
    """A maintenance entry must approve the aircraft for return to service."""

    rule_id: str = "MAINT-002"
    name: str = "Return to Service Statement"
    description: str = "Maintenance must include return to service statement"
    category: RuleCategory = RuleCategory.MAINTENANCE
    severity: RuleSeverity = RuleSeverity.ERROR
    regulation: str = "14 CFR 43.9(a)(4)"
    requirement: re.Pattern[str] = pattern(r"return(ed)?\s+to\s+service|approved\s+for\s+return")
    message: str = "Missing return to service statement"
    suggestion: str | None = 'Include "Approved for return to service" or equivalent statement'


class AnnualInspectionAppendixDRule(ConditionalRequirementRule):
    """Annual inspection entries must cite the Appendix D scope."""

    rule_id: str = "MAINT-003"
    name: str = "Annual Inspection Documentation"
    description: str = "Annual inspections must reference 14 CFR 43 Appendix D"
    category: RuleCategory = RuleCategory.MAINTENANCE
    severity: RuleSeverity = RuleSeverity.ERROR
    regulation: str = "14 CFR 91.409(a)"
    trigger: re.Pattern[str] | None = ANNUAL_INSPECTION
    requirement: re.Pattern[str] = pattern(r"appendix\s+d|14\s+cfr\s+43\s+appendix\s+d")
    message: str = "Annual inspection must reference 14 CFR 43 Appendix D"
    suggestion: str | None = (
        'Include reference to "14 CFR 43 Appendix D" in annual inspection entry'
    )


class ADComplianceRule(ConditionalRequirementRule):
    """An entry that cites an Airworthiness Directive must state compliance."""

    rule_id: str = "MAINT-004"
    name: str = "Airworthiness Directive Compliance"
    description: str = "AD compliance must be documented"
    category: RuleCategory = RuleCategory.MAINTENANCE
    severity: RuleSeverity = RuleSeverity.WARNING
    regulation: str = "14 CFR 39"
    trigger: re.Pattern[str] | None = pattern(r"\bAD\s+\d{2,4}-\d{2}-\d{2}")
    requirement: re.Pattern[str] = pattern(r"(complied|compliance|complies)\s+with")
    message: str = "AD reference found but compliance statement missing"
    suggestion: str | None = "Include statement confirming AD compliance"


def get_maintenance_rules() -> list[ComplianceRule]:
    """Return all maintenance record rules in catalog order."""
    return [
        MaintenanceEntryFieldsRule(),
        ReturnToServiceRule(),
        AnnualInspectionAppendixDRule(),
        ADComplianceRule(),
    ]
