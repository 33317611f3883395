"""Airworthiness documentation rules.

AROW-001 checks that the documents required aboard the aircraft by
14 CFR 91.203 (Airworthiness certificate, Registration, Operating
limitations, Weight and balance) are referenced. INSP-001 flags annual
inspections older than 365 days.
"""

from __future__ import annotations

import re
from collections.abc import Callable
from datetime import date

from loguru import logger
from pydantic import Field

from aerocheck.errors import MalformedDateError
from aerocheck.validation.rules.base import (
    ComplianceRule,
    RequiredFieldsRule,
    RequiredItem,
    RuleCategory,
    RuleSeverity,
    Violation,
    item,
)
from aerocheck.validation.rules.maintenance import ANNUAL_INSPECTION

_DATE_SHAPE = re.compile(r"(\d{1,2})[-/](\d{1,2})[-/](\d{2,4})")

INSPECTION_INTERVAL_DAYS = 365


class AROWDocumentsRule(RequiredFieldsRule):
    """Required aircraft documents must be referenced (AROW)."""

    rule_id: str = "AROW-001"
    name: str = "AROW Document Checklist"
    description: str = "Aircraft must have required documents (AROW)"
    category: RuleCategory = RuleCategory.AIRWORTHINESS
    severity: RuleSeverity = RuleSeverity.ERROR
    regulation: str = "14 CFR 91.203"
    items: tuple[RequiredItem, ...] = (
        item("airworthiness-certificate", r"airworthiness\s+certificate", "Airworthiness Certificate"),
        item("registration", r"registration|n-number", "Registration"),
        item(
            "operating-limitations",
            r"operating\s+limitations|pilot\s+operating\s+handbook|POH",
            "Operating Limitations",
        ),
        item("weight-and-balance", r"weight\s+(and|&)\s+balance", "Weight and Balance"),
    )
    message_template: str = "Missing AROW document reference: {name}"
    suggestion_template: str = "Ensure {name} is documented and current"


def parse_log_date(text: str) -> date:
    """Parse a ``M/D/YY[YY]`` or ``M-D-YY[YY]`` date string.

    Two-digit years below 50 are read as 20xx, the rest as 19xx. Three-
    and four-digit years are taken literally, so ``1/1/202`` is 202 AD.

    Raises:
        MalformedDateError: If the text is not date-shaped or is not a real
            calendar date.
    """
    match = _DATE_SHAPE.fullmatch(text.strip())
    if match is None:
        raise MalformedDateError(text)

    month, day, year_text = int(match.group(1)), int(match.group(2)), match.group(3)
    year = int(year_text)
    if len(year_text) == 2:
        year += 2000 if year < 50 else 1900

    try:
        return date(year, month, day)
    except ValueError as exc:
        raise MalformedDateError(text) from exc


def first_date(content: str) -> str | None:
    """Return the first date-shaped substring of the document, if any."""
    match = _DATE_SHAPE.search(content)
    return match.group(0) if match else None


class InspectionCurrencyRule(ComplianceRule):
    """Annual inspection must have been performed within 365 days.

    Only the first date-shaped substring in the whole document is used as
    the inspection date. When a record carries several dates (AD compliance
    dates, prior entries) the result depends on which appears first, which
    may not be the inspection date. An unparsable date counts as no date
    and yields no finding.

    Dates have no time of day, so an inspection dated exactly 365 days
    before today is already overdue.
    """

    rule_id: str = "INSP-001"
    name: str = "Inspection Currency"
    description: str = "Annual inspection must be current"
    category: RuleCategory = RuleCategory.AIRWORTHINESS
    severity: RuleSeverity = RuleSeverity.ERROR
    regulation: str = "14 CFR 91.409(a)"
    clock: Callable[[], date] = Field(default=date.today, exclude=True)

    def check(self, content: str, filename: str) -> list[Violation]:
        if ANNUAL_INSPECTION.search(content) is None:
            return []

        raw = first_date(content)
        if raw is None:
            return []
        try:
            inspected = parse_log_date(raw)
        except MalformedDateError:
            logger.debug("{}: ignoring malformed date {!r} in {}", self.rule_id, raw, filename)
            return []

        elapsed = (self.clock() - inspected).days
        if elapsed >= INSPECTION_INTERVAL_DAYS:
            return [
                self.violation(
                    "Annual inspection appears to be out of date",
                    "Annual inspection must be completed within preceding 12 calendar months",
                )
            ]
        return []


def get_airworthiness_rules() -> list[ComplianceRule]:
    """Return all airworthiness rules in catalog order."""
    return [
        AROWDocumentsRule(),
        InspectionCurrencyRule(),
    ]
