"""Reset commands.

Provides the light, internal and factory reset commands.
"""

import json
from typing import Annotated, Any

import typer

from warehousectl.cli.types import OutputFormat, emit_result, get_settings
from warehousectl.core.responses import OperationResult
from warehousectl.reset.operations import (
    CommandPowerManager,
    ResetDispatcher,
    internal_reset,
    light_reset,
)
from warehousectl.reset.template import TemplateResolver
from warehousectl.utils.formatting import console, print_info

app = typer.Typer(
    help="Reset the device.",
    no_args_is_help=True,
)

FormatOption = Annotated[
    OutputFormat,
    typer.Option("--format", "-f", help="Output format.", case_sensitive=False),
]


@app.command("light")
def light(
    ctx: typer.Context,
    dry_run: Annotated[
        bool,
        typer.Option("--dry-run", help="Print the resolved script without running it."),
    ] = False,
    output_format: FormatOption = OutputFormat.TEXT,
) -> None:
    """Remove application data (light reset)."""
    settings = get_settings(ctx)

    if dry_run:
        script = TemplateResolver().resolve(settings.light_reset_script)
        if output_format == OutputFormat.JSON:
            console.print_json(json.dumps({"script": script}))
        else:
            console.print(script, markup=False, highlight=False, soft_wrap=True)
        return

    emit_result(light_reset(settings), output_format, "Light reset succeeded.")


@app.command("internal")
def internal(
    ctx: typer.Context,
    pass_phrase: Annotated[
        str | None,
        typer.Option("--pass-phrase", help="Test pass phrase."),
    ] = None,
    output_format: FormatOption = OutputFormat.TEXT,
) -> None:
    """Wipe DRM and web credentials and reboot (test images only)."""
    settings = get_settings(ctx)
    emit_result(
        internal_reset(pass_phrase, settings),
        output_format,
        "Internal reset started.",
    )


@app.command("device")
def device(
    ctx: typer.Context,
    suppress_reboot: Annotated[
        bool,
        typer.Option("--suppress-reboot", help="Do not reboot after the reset."),
    ] = False,
    output_format: FormatOption = OutputFormat.TEXT,
) -> None:
    """Factory reset the device through the power manager."""
    settings = get_settings(ctx)

    events: list[dict[str, Any]] = []

    def notify(event: str, params: dict[str, Any]) -> None:
        events.append({"event": event, **params})

    power_manager = (
        CommandPowerManager(settings.reset_command, timeout=float(settings.command_timeout))
        if settings.reset_command
        else None
    )
    dispatcher = ResetDispatcher(power_manager, notify)

    if output_format == OutputFormat.TEXT:
        print_info("Factory reset requested.")
    dispatcher.reset_device(suppress_reboot)
    dispatcher.join()

    params = events[-1] if events else {"success": False, "error": "Reset failed"}
    result = OperationResult(
        success=bool(params.get("success")),
        error=params.get("error"),
    )
    emit_result(result, output_format, "Factory reset done.")
