"""Compliance report model.

Aggregates per-file results into a ComplianceReport with severity counts,
per-status file counts and a plain-text summary. Renders the report as
Markdown (for PR comments and report files) and JSON. Renderings are pure
projections of the report and never recompute counts.
"""

from __future__ import annotations

from datetime import UTC, datetime
from enum import StrEnum

from pydantic import BaseModel, Field, computed_field

from aerocheck.validation.rules.base import RuleSeverity, Violation

REPORT_FOOTER = (
    "*Generated by [Aviation Compliance Checker]"
    "(https://github.com/marketplace/actions/aviation-compliance-checker)*"
)


class FileStatus(StrEnum):
    """Per-document roll-up of violation severities."""

    PASS = "PASS"
    WARNING = "WARNING"
    FAIL = "FAIL"


def determine_status(violations: list[Violation]) -> FileStatus:
    """Classify a document from its violations.

    FAIL if any violation is an error, else WARNING if any is a warning,
    else PASS. Info findings alone never change PASS.
    """
    severities = {v.severity for v in violations}
    if RuleSeverity.ERROR in severities:
        return FileStatus.FAIL
    if RuleSeverity.WARNING in severities:
        return FileStatus.WARNING
    return FileStatus.PASS


class FileComplianceResult(BaseModel):
    """All findings for one checked document."""

    filename: str = Field(..., description="Checked document name")
    violations: list[Violation] = Field(
        default_factory=list, description="Findings in rule evaluation order"
    )
    rule_failures: list[str] = Field(
        default_factory=list,
        description="Ids of rules whose check raised on this document",
    )

    @computed_field  # type: ignore[prop-decorator]
    @property
    def status(self) -> FileStatus:
        return determine_status(self.violations)


class ComplianceReport(BaseModel):
    """Aggregated compliance report for one run."""

    total_files: int = Field(default=0, description="Number of documents in the run")
    files_checked: int = Field(default=0, description="Number of documents checked")
    total_violations: int = Field(default=0, description="Sum of per-file violation counts")
    violations_by_severity: dict[str, int] = Field(
        default_factory=lambda: {s.value: 0 for s in RuleSeverity},
        description="Severity -> violation count; always has error, warning and info",
    )
    file_results: list[FileComplianceResult] = Field(
        default_factory=list, description="Per-file results in input order"
    )
    passed_files: int = Field(default=0)
    warning_files: int = Field(default=0)
    failed_files: int = Field(default=0)
    summary: str = Field(default="", description="Plain-text run summary")
    generated_at: str = Field(default="", description="ISO 8601 timestamp of report generation")

    @property
    def error_count(self) -> int:
        return self.violations_by_severity.get(RuleSeverity.ERROR.value, 0)

    @property
    def warning_count(self) -> int:
        return self.violations_by_severity.get(RuleSeverity.WARNING.value, 0)

    @property
    def info_count(self) -> int:
        return self.violations_by_severity.get(RuleSeverity.INFO.value, 0)

    @property
    def compliance_status(self) -> FileStatus:
        """Run-level status: FAIL if any error was found, else PASS."""
        return FileStatus.FAIL if self.error_count > 0 else FileStatus.PASS

    def should_fail(self, fail_on_violation: bool) -> bool:
        """Whether a CI run should fail: configured to, and errors exist."""
        return fail_on_violation and self.error_count > 0

    def files_with_status(self, status: FileStatus) -> list[FileComplianceResult]:
        return [r for r in self.file_results if r.status == status]

    @classmethod
    def from_results(cls, file_results: list[FileComplianceResult]) -> ComplianceReport:
        """Create a ComplianceReport by reducing per-file results.

        Args:
            file_results: One result per checked document, in input order.

        Returns:
            A fully populated ComplianceReport.
        """
        total_violations = sum(len(r.violations) for r in file_results)

        by_severity = {s.value: 0 for s in RuleSeverity}
        for result in file_results:
            for violation in result.violations:
                by_severity[violation.severity.value] += 1

        statuses = [r.status for r in file_results]
        passed = statuses.count(FileStatus.PASS)
        warned = statuses.count(FileStatus.WARNING)
        failed = statuses.count(FileStatus.FAIL)

        summary = _build_summary(
            files_checked=len(file_results),
            passed=passed,
            warned=warned,
            failed=failed,
            total_violations=total_violations,
            by_severity=by_severity,
        )

        return cls(
            total_files=len(file_results),
            files_checked=len(file_results),
            total_violations=total_violations,
            violations_by_severity=by_severity,
            file_results=list(file_results),
            passed_files=passed,
            warning_files=warned,
            failed_files=failed,
            summary=summary,
            generated_at=datetime.now(tz=UTC).isoformat(),
        )

    def to_markdown(self) -> str:
        """Render the report as a Markdown document.

        Files are grouped by status: failed first, then warned, then
        passed. Every violation line carries its own severity icon, the
        regulation citation and the suggestion when there is one.
        """
        lines: list[str] = []

        lines.append("# ✈️ Aviation Compliance Report")
        lines.append("")

        lines.append("## Summary")
        lines.append("")
        lines.append(f"- **Files Checked:** {self.files_checked}")
        lines.append(f"- **Total Violations:** {self.total_violations}")
        lines.append(f"- **Errors:** {self.error_count} {RuleSeverity.ERROR.icon}")
        lines.append(f"- **Warnings:** {self.warning_count} {RuleSeverity.WARNING.icon}")
        lines.append(f"- **Info:** {self.info_count} {RuleSeverity.INFO.icon}")
        lines.append("")

        failed = self.files_with_status(FileStatus.FAIL)
        if failed:
            lines.append("## ❌ Failed Files")
            lines.append("")
            for result in failed:
                lines.extend(_file_section(result))

        warned = self.files_with_status(FileStatus.WARNING)
        if warned:
            lines.append("## ⚠️ Files with Warnings")
            lines.append("")
            for result in warned:
                lines.extend(_file_section(result))

        passed = self.files_with_status(FileStatus.PASS)
        if passed:
            lines.append("## ✅ Passed Files")
            lines.append("")
            for result in passed:
                lines.append(f"- `{result.filename}`")
            lines.append("")

        lines.append("---")
        lines.append("")
        lines.append(REPORT_FOOTER)
        lines.append("")

        return "\n".join(lines)

    def to_json(self, *, indent: int | None = 2) -> str:
        """Serialize the report, including per-file status, as JSON."""
        return self.model_dump_json(indent=indent)


def _file_section(result: FileComplianceResult) -> list[str]:
    lines = [f"### `{result.filename}`", ""]
    for v in result.violations:
        lines.append(f"{v.severity.icon} **{v.rule_id}**: {v.message}")
        lines.append(f"   - *Regulation:* {v.regulation}")
        if v.suggestion:
            lines.append(f"   - *Suggestion:* {v.suggestion}")
        lines.append("")
    return lines


def _build_summary(
    *,
    files_checked: int,
    passed: int,
    warned: int,
    failed: int,
    total_violations: int,
    by_severity: dict[str, int],
) -> str:
    lines = [
        "Aviation Compliance Check Complete",
        "",
        f"Files Checked: {files_checked}",
        f"✅ Passed: {passed}",
        f"⚠️  Warnings: {warned}",
        f"❌ Failed: {failed}",
        "",
        f"Total Violations: {total_violations}",
        f"  - Errors: {by_severity[RuleSeverity.ERROR.value]}",
        f"  - Warnings: {by_severity[RuleSeverity.WARNING.value]}",
        f"  - Info: {by_severity[RuleSeverity.INFO.value]}",
        "",
    ]
    return "\n".join(lines)
