"""Main CLI application entry point.

Defines the Typer application and global options.
"""

from pathlib import Path
from typing import Annotated

import typer

from warehousectl import __version__
from warehousectl.cli.commands import audit, config, info, panel, reset
from warehousectl.utils.formatting import setup_logging

# Create main Typer app
app = typer.Typer(
    name="warehousectl",
    help="Maintenance operations for set-top devices.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"warehousectl version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    ctx: typer.Context,
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit.",
        ),
    ] = None,
    settings_path: Annotated[
        Path | None,
        typer.Option(
            "--settings",
            "-s",
            help="Settings file (default: ~/.config/warehousectl/settings.toml).",
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Enable verbose output.",
        ),
    ] = False,
    quiet: Annotated[
        bool,
        typer.Option(
            "--quiet",
            "-q",
            help="Suppress non-essential output.",
        ),
    ] = False,
) -> None:
    """warehousectl - maintenance operations for set-top devices.

    Reset devices, collect device information, drive the front panel
    and audit devices for leftover data.
    """
    setup_logging(verbose=verbose, quiet=quiet)

    # Store options in context for subcommands
    ctx.ensure_object(dict)
    ctx.obj["settings_path"] = settings_path
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet


# Register commands
app.add_typer(reset.app, name="reset")
app.add_typer(info.app, name="info")
app.add_typer(panel.app, name="panel")
app.add_typer(audit.app, name="audit")
app.add_typer(config.app, name="config")


if __name__ == "__main__":
    app()
