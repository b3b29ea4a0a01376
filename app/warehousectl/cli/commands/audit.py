"""Clean audit command.

Checks whether the paths listed in the audit config are gone from the
device.
"""

import json
from pathlib import Path
from typing import Annotated

import typer
from rich.markup import escape

from warehousectl.audit.check import is_clean, run_audit
from warehousectl.audit.config import ConfigurationError
from warehousectl.audit.models import AuditResult, PatternOutcome
from warehousectl.cli.types import OutputFormat, get_settings
from warehousectl.utils.formatting import (
    console,
    create_table,
    print_error,
    print_success,
    print_warning,
)

app = typer.Typer(
    help="Check the device for leftover data.",
    invoke_without_command=True,
)


@app.callback(invoke_without_command=True)
def clean_check(
    ctx: typer.Context,
    age: Annotated[
        int,
        typer.Option(
            "--age",
            "-a",
            help="Only count objects modified more than AGE seconds ago (-1 = any).",
        ),
    ] = -1,
    config_path: Annotated[
        Path | None,
        typer.Option("--config", "-c", help="Audit config file (overrides settings)."),
    ] = None,
    output_format: Annotated[
        OutputFormat,
        typer.Option("--format", "-f", help="Output format.", case_sensitive=False),
    ] = OutputFormat.TEXT,
) -> None:
    """Report listed paths that still exist on the device.

    Exits with code 1 if the audit config is unusable and code 2 if
    the device is not clean.

    Examples:
        warehousectl audit                     # Check all listed paths
        warehousectl audit --age 3600          # Ignore objects newer than an hour
        warehousectl audit --format json       # Output as JSON
    """
    settings = get_settings(ctx)
    if config_path is not None:
        settings = settings.model_copy(update={"audit_config_path": config_path})

    if output_format == OutputFormat.JSON:
        result = is_clean(settings, age)
        console.print_json(json.dumps(result.to_dict()))
        if not result.success:
            raise typer.Exit(code=1)
        if not result.data["clean"]:
            raise typer.Exit(code=2)
        return

    try:
        audit = run_audit(settings, age)
    except ConfigurationError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    _print_report(audit)
    if not audit.clean:
        raise typer.Exit(code=2)


def _print_report(audit: AuditResult) -> None:
    """Print per-pattern results and a summary."""
    table = create_table("Audit", "Pattern", "Object", "Status")
    for report in audit.reports:
        if report.outcome == PatternOutcome.UNTESTED:
            reason = escape(f"untested ({report.variable or 'variable'} empty)")
            table.add_row(escape(report.pattern), "-", f"[untested]{reason}[/]")
            continue
        if report.outcome == PatternOutcome.NO_MATCHES:
            table.add_row(escape(report.pattern), "-", "[absent]no matches[/]")
            continue
        for obj in report.objects:
            status = "[present]present[/]" if obj.exists else "[absent]absent[/]"
            table.add_row(escape(report.pattern), escape(obj.path), status)
    console.print(table)

    untested = sum(1 for r in audit.reports if r.outcome == PatternOutcome.UNTESTED)
    if untested:
        print_warning(f"{untested} pattern(s) not tested")

    if audit.clean:
        print_success(f"Device is clean ({audit.total_processed} patterns checked).")
    else:
        print_error(f"Found {len(audit.files)} leftover object(s).")
