"""Pattern-based compliance rules, engine and report.

Rules are organized by category (maintenance, pilot log, airworthiness,
weight and balance) and produce structured violations with severity
levels. The engine applies a configured RuleSet to documents and the
report aggregates the findings.
"""

from aerocheck.validation.catalog import RuleSet, all_rules
from aerocheck.validation.engine import ComplianceChecker, RuleOutcome
from aerocheck.validation.report import (
    ComplianceReport,
    FileComplianceResult,
    FileStatus,
    determine_status,
)
from aerocheck.validation.rules.base import (
    ComplianceRule,
    RuleCategory,
    RuleSeverity,
    Violation,
)

__all__ = [
    "ComplianceChecker",
    "ComplianceReport",
    "ComplianceRule",
    "FileComplianceResult",
    "FileStatus",
    "RuleCategory",
    "RuleOutcome",
    "RuleSet",
    "RuleSeverity",
    "Violation",
    "all_rules",
    "determine_status",
]
