"""aerocheck CLI application entry point.

Provides commands for checking aviation log documents against the
compliance rule catalog and for listing the catalog.

Usage:
    aerocheck check "logs/**/*.md, records/*.txt"
    aerocheck check --no-pilot-logs --report report.md "logs/*.md"
    aerocheck rules --category maintenance
    aerocheck version
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Annotated

import typer
from loguru import logger
from rich.console import Console
from rich.markup import escape

from aerocheck.config import (
    DEFAULT_REPORT_NAME,
    build_options,
    load_options,
    split_patterns,
)
from aerocheck.errors import AerocheckError

app = typer.Typer(
    name="aerocheck",
    help="Rule-based compliance linter for aviation maintenance, pilot and airworthiness logs.",
    no_args_is_help=True,
)

console = Console()


def _configure_logging(verbose: bool) -> None:
    logger.remove()
    logger.add(sys.stderr, level="DEBUG" if verbose else "WARNING")


@app.command()
def version() -> None:
    """Show the current version."""
    from aerocheck import __version__

    console.print(f"aerocheck {__version__}")


@app.command()
def check(
    files: Annotated[
        list[str] | None,
        typer.Argument(help="Glob patterns (comma-separated or repeated) of documents to check"),
    ] = None,
    config: Annotated[
        Path | None,
        typer.Option("--config", "-c", help="JSON config file with check options"),
    ] = None,
    no_maintenance_logs: Annotated[
        bool,
        typer.Option("--no-maintenance-logs", help="Skip maintenance record rules"),
    ] = False,
    no_pilot_logs: Annotated[
        bool,
        typer.Option("--no-pilot-logs", help="Skip pilot logbook rules"),
    ] = False,
    no_airworthiness: Annotated[
        bool,
        typer.Option("--no-airworthiness", help="Skip airworthiness rules"),
    ] = False,
    no_weight_balance: Annotated[
        bool,
        typer.Option("--no-weight-balance", help="Skip weight and balance rules"),
    ] = False,
    no_fail: Annotated[
        bool,
        typer.Option(
            "--no-fail-on-violation",
            help="Exit with code 0 even when error-severity violations are found",
        ),
    ] = False,
    report: Annotated[
        Path,
        typer.Option("--report", "-r", help="Write the Markdown report to this file"),
    ] = Path(DEFAULT_REPORT_NAME),
    json_output: Annotated[
        Path | None,
        typer.Option("--json", help="Also write the report as JSON to this file"),
    ] = None,
    workers: Annotated[
        int,
        typer.Option("--workers", "-w", min=1, help="Check documents on this many threads"),
    ] = 1,
    root: Annotated[
        Path | None,
        typer.Option("--root", help="Directory glob patterns are resolved against"),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Show debug logging"),
    ] = False,
) -> None:
    """Check aviation log documents for compliance violations.

    Runs every rule of the enabled categories against each matched file,
    prints a summary and the violations, and writes a Markdown report.
    """
    from aerocheck.cli.display import display_compliance_summary, display_violations
    from aerocheck.validation.engine import ComplianceChecker

    _configure_logging(verbose)

    overrides = {
        "check_maintenance_logs": False if no_maintenance_logs else None,
        "check_pilot_logs": False if no_pilot_logs else None,
        "check_airworthiness": False if no_airworthiness else None,
        "check_weight_balance": False if no_weight_balance else None,
        "fail_on_violation": False if no_fail else None,
        "files": split_patterns(files) if files else None,
    }

    try:
        if config is not None:
            options = load_options(config, **overrides)
        else:
            options = build_options(None, **overrides)
    except AerocheckError as e:
        console.print(f"[bold red]Error:[/bold red] {escape(str(e))}")
        raise typer.Exit(code=1) from e

    if root is not None and not root.is_dir():
        console.print(f"[bold red]Error:[/bold red] Directory not found: {escape(str(root))}")
        raise typer.Exit(code=1)

    console.print("[bold blue]Starting Aviation Compliance Check...[/bold blue]")
    console.print(f"Files pattern: {escape(', '.join(options.files))}")

    checker = ComplianceChecker.from_options(options, max_workers=workers)
    try:
        result = checker.check_files(options.files, root)
    except AerocheckError as e:
        console.print(f"[bold red]Error:[/bold red] {escape(str(e))}")
        raise typer.Exit(code=1) from e

    console.print()
    display_compliance_summary(result, console)
    display_violations(result, console)

    report.write_text(result.to_markdown(), encoding="utf-8")
    console.print(f"\n[green]Report saved to {escape(str(report))}[/green]")

    if json_output is not None:
        json_output.write_text(result.to_json(), encoding="utf-8")
        console.print(f"[green]JSON report saved to {escape(str(json_output))}[/green]")

    if result.should_fail(options.fail_on_violation):
        console.print(f"[bold red]Found {result.error_count} compliance error(s)[/bold red]")
        raise typer.Exit(code=1)
    if result.total_violations > 0:
        console.print(
            f"[yellow]Found {result.total_violations} violation(s), "
            "but not failing due to configuration[/yellow]"
        )


@app.command()
def rules(
    category: Annotated[
        str | None,
        typer.Option(
            "--category",
            help="Only list rules in this category "
            "(maintenance, pilot-log, airworthiness, weight-balance)",
        ),
    ] = None,
) -> None:
    """List the built-in compliance rules."""
    from aerocheck.cli.display import display_rules
    from aerocheck.validation.catalog import CATALOG_ORDER, RuleSet
    from aerocheck.validation.rules.base import RuleCategory

    if category is None:
        rule_set = RuleSet.from_categories(CATALOG_ORDER)
    else:
        try:
            selected = RuleCategory(category.lower())
        except ValueError:
            console.print(f"[bold red]Error:[/bold red] Unknown category: {escape(category)}")
            console.print(f"Available categories: {', '.join(c.value for c in CATALOG_ORDER)}")
            raise typer.Exit(code=1) from None
        rule_set = RuleSet.from_categories([selected])

    display_rules(rule_set, console)


def main() -> None:
    app()
