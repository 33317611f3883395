"""Rich display helpers for terminal output.

Provides formatted display functions for compliance reports, per-file
violations and the rule catalog using Rich tables.
"""

from __future__ import annotations

from collections.abc import Iterable

from rich.console import Console
from rich.table import Table
from rich.text import Text

from aerocheck.validation.report import ComplianceReport, FileStatus
from aerocheck.validation.rules.base import ComplianceRule, RuleSeverity

_STATUS_STYLE: dict[FileStatus, str] = {
    FileStatus.PASS: "bold green",
    FileStatus.WARNING: "yellow",
    FileStatus.FAIL: "bold red",
}

_SEVERITY_STYLE: dict[RuleSeverity, str] = {
    RuleSeverity.ERROR: "bold red",
    RuleSeverity.WARNING: "yellow",
    RuleSeverity.INFO: "dim",
}


def display_compliance_summary(report: ComplianceReport, console: Console) -> None:
    """Print a compliance report summary with Rich formatting.

    Shows file counts per status, violation counts per severity and the
    overall compliance status in a structured table.

    Args:
        report: ComplianceReport to display.
        console: Rich Console for output.
    """
    table = Table(title="Compliance Summary", show_lines=True)
    table.add_column("Metric", style="bold")
    table.add_column("Value", justify="right")

    table.add_row("Files Checked", str(report.files_checked))
    table.add_row("Passed", Text(str(report.passed_files), style="green"))
    table.add_row(
        "Warnings",
        Text(str(report.warning_files), style="yellow" if report.warning_files else "green"),
    )
    table.add_row(
        "Failed",
        Text(str(report.failed_files), style="bold red" if report.failed_files else "green"),
    )
    table.add_row("Total Violations", str(report.total_violations))
    table.add_row(
        "Errors",
        Text(str(report.error_count), style="bold red" if report.error_count else "green"),
    )
    table.add_row(
        "Warnings (findings)",
        Text(str(report.warning_count), style="yellow" if report.warning_count else "green"),
    )
    table.add_row("Info", str(report.info_count))

    status = report.compliance_status
    table.add_row("Compliance Status", Text(status.value, style=_STATUS_STYLE[status]))

    console.print(table)


def display_violations(report: ComplianceReport, console: Console) -> None:
    """Print every violation, grouped by file, in report order.

    Files without violations are skipped. Files whose rules raised are
    listed with the failing rule ids.

    Args:
        report: ComplianceReport to display.
        console: Rich Console for output.
    """
    if report.total_violations == 0:
        console.print("[green]All files passed aviation compliance checks![/green]")

    for result in report.file_results:
        if not result.violations and not result.rule_failures:
            continue

        status_text = Text(result.status.value, style=_STATUS_STYLE[result.status])
        console.print(Text.assemble("\n", (result.filename, "bold cyan"), " (", status_text, ")"))

        if result.violations:
            table = Table(show_lines=False, show_header=True)
            table.add_column("Severity", no_wrap=True)
            table.add_column("Rule", style="bold", no_wrap=True)
            table.add_column("Message", max_width=60)
            table.add_column("Regulation", style="dim", no_wrap=True)

            for v in result.violations:
                table.add_row(
                    Text(v.severity.display_name, style=_SEVERITY_STYLE[v.severity]),
                    v.rule_id,
                    v.message if not v.suggestion else f"{v.message}\n[dim]{v.suggestion}[/dim]",
                    v.regulation,
                )
            console.print(table)

        if result.rule_failures:
            console.print(
                f"[yellow]Rules that failed to run: {', '.join(result.rule_failures)}[/yellow]"
            )


def display_rules(rules: Iterable[ComplianceRule], console: Console) -> None:
    """Print the rule catalog as a table."""
    table = Table(title="Compliance Rules", show_lines=True)
    table.add_column("Rule", style="bold cyan", no_wrap=True)
    table.add_column("Category", no_wrap=True)
    table.add_column("Severity", no_wrap=True)
    table.add_column("Regulation", no_wrap=True)
    table.add_column("Description", max_width=50)

    count = 0
    for rule in rules:
        count += 1
        table.add_row(
            rule.rule_id,
            rule.category.value,
            Text(rule.severity.display_name, style=_SEVERITY_STYLE[rule.severity]),
            rule.regulation,
            rule.description,
        )

    console.print(table)
    console.print(f"\n[bold]{count}[/bold] rules")
