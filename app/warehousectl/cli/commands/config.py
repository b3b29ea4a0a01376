"""Settings commands.

Provides commands to show, locate and initialize the settings file.
"""

import json
from typing import Annotated

import typer
from rich.markup import escape

from warehousectl.cli.types import OutputFormat, get_settings
from warehousectl.core.paths import get_settings_path
from warehousectl.core.settings import Settings, SettingsError, save_settings
from warehousectl.utils.formatting import (
    console,
    create_table,
    print_error,
    print_info,
    print_success,
)
from warehousectl.utils.shell import command_exists

app = typer.Typer(
    help="Manage warehousectl settings.",
    no_args_is_help=True,
)

# Tools the device helpers rely on
_REQUIRED_TOOLS: tuple[str, ...] = ("sh", "find", "head")


@app.command()
def show(
    ctx: typer.Context,
    output_format: Annotated[
        OutputFormat,
        typer.Option("--format", "-f", help="Output format.", case_sensitive=False),
    ] = OutputFormat.TEXT,
) -> None:
    """Show the effective settings."""
    settings = get_settings(ctx)

    if output_format == OutputFormat.JSON:
        console.print_json(json.dumps(settings.model_dump(mode="json")))
        return

    table = create_table("Settings", "Key", "Value")
    for key, value in settings.model_dump(mode="json").items():
        table.add_row(key, "-" if value is None else escape(str(value)))
    console.print(table)

    missing = [tool for tool in _REQUIRED_TOOLS if not command_exists(tool)]
    if missing:
        print_error(f"Missing tools: {', '.join(missing)}")


@app.command()
def path(ctx: typer.Context) -> None:
    """Print the settings file path."""
    obj = ctx.find_root().obj or {}
    target = obj.get("settings_path") or get_settings_path()
    console.print(str(target), markup=False, soft_wrap=True)


@app.command()
def init(
    ctx: typer.Context,
    force: Annotated[
        bool,
        typer.Option("--force", help="Overwrite an existing settings file."),
    ] = False,
) -> None:
    """Write a settings file with default values."""
    obj = ctx.find_root().obj or {}
    target = obj.get("settings_path") or get_settings_path()

    if target.exists() and not force:
        print_info(f"Settings already exist: {target} (use --force to overwrite)")
        return

    try:
        saved = save_settings(Settings(), obj.get("settings_path"))
    except (SettingsError, RuntimeError) as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    print_success(f"Settings written to {saved}")
