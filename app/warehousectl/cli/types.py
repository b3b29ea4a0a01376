"""Shared CLI types and helpers.

Provides common enums, settings loading and result output used
across CLI commands.
"""

import json
from enum import Enum
from pathlib import Path

import typer

from warehousectl.core.responses import OperationResult
from warehousectl.core.settings import Settings, SettingsError, load_settings
from warehousectl.utils.formatting import console, print_error, print_success


class OutputFormat(str, Enum):
    """Output format options."""

    TEXT = "text"
    JSON = "json"


def get_settings(ctx: typer.Context) -> Settings:
    """Load settings selected by the global ``--settings`` option.

    Args:
        ctx: Typer context carrying the global options.

    Returns:
        Validated Settings.

    Raises:
        typer.Exit: If the settings file is invalid.
    """
    obj = ctx.find_root().obj or {}
    path: Path | None = obj.get("settings_path")
    try:
        return load_settings(path)
    except SettingsError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e


def emit_result(
    result: OperationResult,
    output_format: OutputFormat,
    success_message: str,
) -> None:
    """Print an operation result and exit non-zero on failure.

    Args:
        result: Operation outcome.
        output_format: Text or JSON output.
        success_message: Message printed for successful text output.

    Raises:
        typer.Exit: With code 1 if the operation failed.
    """
    if output_format == OutputFormat.JSON:
        console.print_json(json.dumps(result.to_dict()))
    elif result.success:
        print_success(success_message)
    else:
        print_error(result.error or "operation failed")

    if not result.success:
        raise typer.Exit(code=1)
