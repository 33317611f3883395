"""Tests for the ComplianceChecker orchestrator."""

from __future__ import annotations

import pytest

from aerocheck.errors import DocumentUnavailableError, RuleExecutionError
from aerocheck.io.documents import Document
from aerocheck.validation.catalog import CATALOG_ORDER, RuleSet
from aerocheck.validation.engine import ComplianceChecker, RuleOutcome
from aerocheck.validation.report import FileStatus
from aerocheck.validation.rules.base import (
    ComplianceRule,
    RuleCategory,
    RuleSeverity,
    Violation,
)

# ---------------------------------------------------------------------------
# Test helpers
# ---------------------------------------------------------------------------


class FixedRule(ComplianceRule):
    """Rule that always returns one finding at its own severity."""

    def check(self, content: str, filename: str) -> list[Violation]:
        return [self.violation(f"{self.rule_id} on {filename}")]


class KeywordRule(ComplianceRule):
    """Rule that reports when the document contains 'bad'."""

    def check(self, content: str, filename: str) -> list[Violation]:
        if "bad" in content:
            return [self.violation("bad content")]
        return []


class ExplodingRule(ComplianceRule):
    """Rule that raises an exception during check."""

    def check(self, content: str, filename: str) -> list[Violation]:
        msg = "Something went wrong"
        raise RuntimeError(msg)


def _rule(cls: type[ComplianceRule], rule_id: str, severity: RuleSeverity) -> ComplianceRule:
    return cls(
        rule_id=rule_id,
        name=rule_id,
        description=f"{rule_id} test rule",
        category=RuleCategory.MAINTENANCE,
        severity=severity,
        regulation="14 CFR 0.0",
    )


def _doc(name: str, content: str = "") -> Document:
    return Document(filename=name, content=content)


@pytest.fixture()
def full_checker() -> ComplianceChecker:
    return ComplianceChecker(RuleSet.from_categories(CATALOG_ORDER))


# ---------------------------------------------------------------------------
# ComplianceChecker tests
# ---------------------------------------------------------------------------


class TestRunRule:
    def test_success_outcome(self) -> None:
        outcome = ComplianceChecker.run_rule(_rule(FixedRule, "F-1", RuleSeverity.ERROR), _doc("a"))
        assert outcome.ok
        assert outcome.rule_id == "F-1"
        assert len(outcome.violations) == 1

    def test_failure_outcome(self) -> None:
        outcome = ComplianceChecker.run_rule(
            _rule(ExplodingRule, "BOOM", RuleSeverity.ERROR), _doc("a.md")
        )
        assert not outcome.ok
        assert outcome.violations == ()
        assert isinstance(outcome.error, RuleExecutionError)
        assert outcome.error.rule_id == "BOOM"
        assert outcome.error.filename == "a.md"
        assert isinstance(outcome.error.cause, RuntimeError)

    def test_outcome_constructors(self) -> None:
        err = RuleExecutionError("X", "f", ValueError("v"))
        assert RuleOutcome.failure(err).rule_id == "X"
        assert RuleOutcome.success("Y", []).ok


class TestCheckDocument:
    def test_violations_in_rule_order(self) -> None:
        rules = RuleSet(
            [
                _rule(FixedRule, "B-2", RuleSeverity.WARNING),
                _rule(FixedRule, "A-1", RuleSeverity.INFO),
            ]
        )
        result = ComplianceChecker(rules).check_document(_doc("x.md"))
        assert [v.rule_id for v in result.violations] == ["B-2", "A-1"]

    def test_exploding_rule_does_not_abort(self) -> None:
        rules = RuleSet(
            [
                _rule(ExplodingRule, "BOOM", RuleSeverity.ERROR),
                _rule(FixedRule, "W-1", RuleSeverity.WARNING),
            ]
        )
        result = ComplianceChecker(rules).check_document(_doc("x.md"))
        assert [v.rule_id for v in result.violations] == ["W-1"]
        assert result.rule_failures == ["BOOM"]
        assert result.status == FileStatus.WARNING

    def test_exploding_rule_alone_passes(self) -> None:
        rules = RuleSet([_rule(ExplodingRule, "BOOM", RuleSeverity.ERROR)])
        result = ComplianceChecker(rules).check_document(_doc("x.md"))
        assert result.violations == []
        assert result.status == FileStatus.PASS

    def test_no_rules(self) -> None:
        result = ComplianceChecker(RuleSet([])).check_document(_doc("x.md", "anything"))
        assert result.violations == []
        assert result.status == FileStatus.PASS


class TestCheckDocuments:
    def test_duplicate_filenames_checked_once(self) -> None:
        rules = RuleSet([_rule(FixedRule, "F-1", RuleSeverity.ERROR)])
        report = ComplianceChecker(rules).check_documents(
            [_doc("a.md"), _doc("b.md"), _doc("a.md")]
        )
        assert [r.filename for r in report.file_results] == ["a.md", "b.md"]
        assert report.files_checked == 2
        assert report.total_violations == 2

    def test_input_order_preserved(self) -> None:
        names = [f"doc{i:02d}.md" for i in range(12)]
        report = ComplianceChecker(RuleSet([])).check_documents([_doc(n) for n in reversed(names)])
        assert [r.filename for r in report.file_results] == list(reversed(names))

    def test_parallel_matches_sequential(self, full_checker: ComplianceChecker) -> None:
        docs = [
            _doc(f"doc{i}.md", "Annual inspection\nNight landing\n" if i % 2 else "Weight and balance")
            for i in range(20)
        ]
        sequential = full_checker.check_documents(docs)
        parallel = ComplianceChecker(full_checker.rule_set, max_workers=4).check_documents(docs)
        assert [r.filename for r in parallel.file_results] == [d.filename for d in docs]
        assert parallel.model_dump(exclude={"generated_at"}) == sequential.model_dump(
            exclude={"generated_at"}
        )

    def test_idempotent(self, full_checker: ComplianceChecker) -> None:
        docs = [_doc("a.md", "Annual inspection"), _doc("b.md", "")]
        first = full_checker.check_documents(docs)
        second = full_checker.check_documents(docs)
        assert first.to_markdown() == second.to_markdown()
        assert first.summary == second.summary

    def test_status_per_document(self) -> None:
        rules = RuleSet([_rule(KeywordRule, "K-1", RuleSeverity.ERROR)])
        report = ComplianceChecker(rules).check_documents(
            [_doc("good.md", "fine"), _doc("bad.md", "bad entry")]
        )
        statuses = {r.filename: r.status for r in report.file_results}
        assert statuses == {"good.md": FileStatus.PASS, "bad.md": FileStatus.FAIL}


class TestScenarios:
    def test_complete_maintenance_entry(self, full_checker: ComplianceChecker) -> None:
        text = (
            "Date: 01/15/2026\n"
            "Aircraft: N12345\n"
            "Description: Replaced vacuum pump\n"
            "Signature: John Smith\n"
            "Approved for return to service\n"
        )
        result = full_checker.check_document(_doc("entry.md", text))
        ids = {v.rule_id for v in result.violations}
        assert "MAINT-001" not in ids
        assert "MAINT-002" not in ids

    def test_missing_signature(self, full_checker: ComplianceChecker) -> None:
        text = (
            "Date: 01/15/2026\n"
            "Aircraft: N12345\n"
            "Description: Replaced vacuum pump\n"
            "Approved for return to service\n"
        )
        result = full_checker.check_document(_doc("entry.md", text))
        maint = [v for v in result.violations if v.rule_id == "MAINT-001"]
        assert len(maint) == 1
        assert "Signature and certificate number" in maint[0].message
        assert maint[0].severity == RuleSeverity.ERROR
        assert result.status == FileStatus.FAIL

    def test_annual_without_appendix_d(self, full_checker: ComplianceChecker) -> None:
        result = full_checker.check_document(_doc("annual.md", "Annual inspection complete."))
        maint3 = [v for v in result.violations if v.rule_id == "MAINT-003"]
        assert len(maint3) == 1
        assert maint3[0].severity == RuleSeverity.ERROR

    def test_night_without_night_time(self) -> None:
        checker = ComplianceChecker(RuleSet.from_categories([RuleCategory.PILOT_LOG]))
        text = (
            "Date: 03/02/2026\n"
            "Aircraft: Cessna 172\n"
            "Registration: N12345\n"
            "Total time: 1.5\n"
            "Night landing full stop\n"
        )
        result = checker.check_document(_doc("log.md", text))
        assert [v.rule_id for v in result.violations] == ["PILOT-002"]
        assert result.violations[0].severity == RuleSeverity.WARNING
        assert result.status == FileStatus.WARNING

    def test_weight_and_balance_missing_useful_load(self) -> None:
        checker = ComplianceChecker(RuleSet.from_categories([RuleCategory.WEIGHT_BALANCE]))
        text = "Weight and balance\nEmpty weight: 1500\nCG: 40.5\n"
        result = checker.check_document(_doc("wb.md", text))
        assert len(result.violations) == 1
        assert result.violations[0].message == "Missing weight and balance data: Useful Load"


class TestCheckFiles:
    def test_reads_and_checks(self, tmp_path) -> None:
        (tmp_path / "a.md").write_text("bad", encoding="utf-8")
        (tmp_path / "b.txt").write_text("ok", encoding="utf-8")
        rules = RuleSet([_rule(KeywordRule, "K-1", RuleSeverity.ERROR)])
        report = ComplianceChecker(rules).check_files(["*.md", "*.txt", "a.*"], tmp_path)
        assert [r.filename for r in report.file_results] == ["a.md", "b.txt"]
        assert report.failed_files == 1
        assert report.passed_files == 1

    def test_unreadable_file_is_fatal(self, tmp_path) -> None:
        (tmp_path / "broken.md").write_bytes(b"\xff\xfe\xfa not utf-8")
        checker = ComplianceChecker(RuleSet([]))
        with pytest.raises(DocumentUnavailableError):
            checker.check_files(["*.md"], tmp_path)

    def test_no_matches_gives_empty_report(self, tmp_path) -> None:
        report = ComplianceChecker(RuleSet([])).check_files(["*.md"], tmp_path)
        assert report.files_checked == 0
        assert report.total_violations == 0
