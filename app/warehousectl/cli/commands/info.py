"""Device information command."""

import json
from typing import Annotated

import typer

from warehousectl.cli.types import OutputFormat, get_settings
from warehousectl.device.info import get_device_info
from warehousectl.utils.formatting import console, create_table, print_error

app = typer.Typer(
    help="Show device information.",
    invoke_without_command=True,
)


@app.callback(invoke_without_command=True)
def show_info(
    ctx: typer.Context,
    output_format: Annotated[
        OutputFormat,
        typer.Option("--format", "-f", help="Output format.", case_sensitive=False),
    ] = OutputFormat.TEXT,
) -> None:
    """Show software version and network details of the device."""
    settings = get_settings(ctx)
    result = get_device_info(settings)

    if output_format == OutputFormat.JSON:
        console.print_json(json.dumps(result.to_dict()))
    else:
        if result.data:
            table = create_table("Device Information", "Property", "Value")
            for key, value in sorted(result.data.items()):
                table.add_row(key, value)
            console.print(table)
        if not result.success:
            print_error(result.error or "device information unavailable")

    if not result.success:
        raise typer.Exit(code=1)
