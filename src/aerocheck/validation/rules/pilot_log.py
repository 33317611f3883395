"""Pilot logbook rules (14 CFR 61.51)."""

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
from aerocheck.validation.rules.maintenance import DATE_FIELD


class LogbookEntryFieldsRule(RequiredFieldsRule):
    """Each logbook entry needs date, aircraft, registration and flight time."""

    rule_id: str = "PILOT-001"
    name: str = "Logbook Entry Required Fields"
    description: str = "Pilot logbook entries must contain required information per 14 CFR 61.51"
    category: RuleCategory = RuleCategory.PILOT_LOG
    severity: RuleSeverity = RuleSeverity.ERROR
    regulation: str = "14 CFR 61.51(b)"
    items: tuple[RequiredItem, ...] = (
        item("date", DATE_FIELD, "Date"),
        item("aircraft", r"(aircraft|make|model)\s*:?\s*.+", "Aircraft make and model"),
        item(
            "registration",
            r"(tail|registration|N\s*number)\s*:?\s*[A-Z]-?[A-Z0-9]+",
            "Aircraft registration",
        ),
        item(
            "flight-time",
            r"(total\s+time|flight\s+time|duration)\s*:?\s*\d+\.?\d*",
            "Total flight time",
        ),
    )
    suggestion_template: str = "Add {field} to logbook entry"


class NightTimeRule(ConditionalRequirementRule):
    """Night operations must have night time logged as a number."""

    rule_id: str = "PILOT-002"
    name: str = "Night Flight Time Logging"
    description: str = "Night time must be logged if operation occurred after sunset"
    category: RuleCategory = RuleCategory.PILOT_LOG
    severity: RuleSeverity = RuleSeverity.WARNING
    regulation: str = "14 CFR 61.51(b)(3)"
    trigger: re.Pattern[str] | None = pattern(r"night")
    requirement: re.Pattern[str] = pattern(r"(night\s+time|night\s+flight)\s*:?\s*\d+\.?\d*")
    message: str = "Night operation indicated but night time not logged"
    suggestion: str | None = "Log night flight time separately"


class InstrumentApproachRule(ConditionalRequirementRule):
    """Logged approaches must name the approach type and runway."""

    rule_id: str = "PILOT-003"
    name: str = "Instrument Approach Logging"
    description: str = "Instrument approaches must include location and type"
    category: RuleCategory = RuleCategory.PILOT_LOG
    severity: RuleSeverity = RuleSeverity.WARNING
    regulation: str = "14 CFR 61.51(g)"
    trigger: re.Pattern[str] | None = pattern(r"approach|approaches|IAP")
    requirement: re.Pattern[str] = pattern(r"(ILS|VOR|RNAV|GPS|LOC|NDB)\s+(RWY)?\s*\d{1,2}[LRC]?")
    message: str = "Instrument approach logged without type and runway"
    suggestion: str | None = "Include approach type (ILS, RNAV, etc.) and runway"


def get_pilot_log_rules() -> list[ComplianceRule]:
    """Return all pilot logbook rules in catalog order."""
    return [
        LogbookEntryFieldsRule(),
        NightTimeRule(),
        InstrumentApproachRule(),
    ]
