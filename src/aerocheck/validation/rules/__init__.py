"""Compliance rules for aviation log documents.

Rules are organized by category:
- maintenance: 14 CFR Part 43 maintenance records (MAINT-*)
- pilot_log: 14 CFR 61.51 pilot logbooks (PILOT-*)
- airworthiness: AROW documents and inspection currency (AROW-*, INSP-*)
- weight_balance: 14 CFR 91.9 weight and balance data (WB-*)
"""

from aerocheck.validation.rules.base import (
    ComplianceRule,
    RuleCategory,
    RuleSeverity,
    Violation,
)

__all__ = [
    "ComplianceRule",
    "RuleCategory",
    "RuleSeverity",
    "Violation",
]
