"""Compliance engine orchestrator.

Runs a configured RuleSet against documents and reduces the findings into
a ComplianceReport. Every rule runs against every document independently;
a rule that raises is recorded as a failed RuleOutcome and contributes no
violations, and the run continues with the next rule.
"""

from __future__ import annotations

from collections.abc import Iterable
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import TYPE_CHECKING

from loguru import logger
from pydantic import BaseModel, ConfigDict, Field

from aerocheck.errors import RuleExecutionError
from aerocheck.io.documents import Document, find_documents, read_documents
from aerocheck.validation.catalog import RuleSet
from aerocheck.validation.report import (
    ComplianceReport,
    FileComplianceResult,
    FileStatus,
    determine_status,
)
from aerocheck.validation.rules.base import ComplianceRule, Violation

if TYPE_CHECKING:
    from aerocheck.config import CheckOptions

__all__ = [
    "ComplianceChecker",
    "FileStatus",
    "RuleOutcome",
    "determine_status",
]


class RuleOutcome(BaseModel):
    """Result of running one rule against one document.

    Either a success carrying the rule's violations, or a failure carrying
    the RuleExecutionError. A failed outcome never contributes violations.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    rule_id: str
    violations: tuple[Violation, ...] = Field(default=())
    error: RuleExecutionError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, rule_id: str, violations: Iterable[Violation]) -> RuleOutcome:
        return cls(rule_id=rule_id, violations=tuple(violations))

    @classmethod
    def failure(cls, error: RuleExecutionError) -> RuleOutcome:
        return cls(rule_id=error.rule_id, error=error)


class ComplianceChecker:
    """Applies a RuleSet to documents and builds compliance reports.

    The checker holds no per-run state, so one instance can check any
    number of batches and identical inputs always give identical results.
    """

    def __init__(self, rule_set: RuleSet, *, max_workers: int | None = None) -> None:
        """Initialize the checker.

        Args:
            rule_set: Immutable set of rules to apply, in evaluation order.
            max_workers: When greater than 1, documents are checked on a
                thread pool of this size. Results keep input order.
        """
        self._rule_set = rule_set
        self._max_workers = max_workers

    @classmethod
    def from_options(cls, options: CheckOptions, *, max_workers: int | None = None) -> ComplianceChecker:
        return cls(RuleSet.from_options(options), max_workers=max_workers)

    @property
    def rule_set(self) -> RuleSet:
        return self._rule_set

    @staticmethod
    def run_rule(rule: ComplianceRule, document: Document) -> RuleOutcome:
        """Run one rule against one document, capturing any exception."""
        try:
            violations = rule.check(document.content, document.filename)
        except Exception as exc:
            error = RuleExecutionError(rule.rule_id, document.filename, exc)
            logger.error("Error checking rule {} on {}: {}", rule.rule_id, document.filename, exc)
            return RuleOutcome.failure(error)
        return RuleOutcome.success(rule.rule_id, violations)

    def check_document(self, document: Document) -> FileComplianceResult:
        """Run every configured rule against one document.

        Violations are concatenated in rule order.
        """
        violations: list[Violation] = []
        failures: list[str] = []
        for rule in self._rule_set:
            outcome = self.run_rule(rule, document)
            if outcome.ok:
                violations.extend(outcome.violations)
            else:
                failures.append(outcome.rule_id)

        result = FileComplianceResult(
            filename=document.filename,
            violations=violations,
            rule_failures=failures,
        )
        logger.debug(
            "Checked {} ({} rules): {} violation(s), status {}",
            document.filename,
            len(self._rule_set),
            len(violations),
            result.status.value,
        )
        return result

    def check_documents(self, documents: Iterable[Document]) -> ComplianceReport:
        """Check documents and aggregate the results into a report.

        Documents sharing a filename are checked once, keeping the first.

        Args:
            documents: Documents in the order they should be reported.

        Returns:
            ComplianceReport with file results in input order.
        """
        unique: dict[str, Document] = {}
        for document in documents:
            if document.filename in unique:
                logger.debug("Skipping duplicate document {}", document.filename)
                continue
            unique[document.filename] = document
        batch = list(unique.values())

        logger.info("Checking {} document(s) against {} rule(s)", len(batch), len(self._rule_set))

        if self._max_workers and self._max_workers > 1 and len(batch) > 1:
            with ThreadPoolExecutor(max_workers=self._max_workers) as pool:
                # map() yields in submission order
                file_results = list(pool.map(self.check_document, batch))
        else:
            file_results = [self.check_document(doc) for doc in batch]

        report = ComplianceReport.from_results(file_results)
        logger.info(
            "Compliance check complete: {} violation(s) ({} error, {} warning, {} info)",
            report.total_violations,
            report.error_count,
            report.warning_count,
            report.info_count,
        )
        return report

    def check_files(self, patterns: Iterable[str], root: Path | None = None) -> ComplianceReport:
        """Find, read and check every file matching the glob patterns.

        Raises:
            DocumentUnavailableError: If a matched file cannot be read.
        """
        filenames = find_documents(patterns, root)
        return self.check_documents(read_documents(filenames, root))
