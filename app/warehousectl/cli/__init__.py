"""CLI package for warehousectl.

This package contains the Typer application and all subcommands.
"""

from warehousectl.cli.main import app

__all__ = ["app"]
