"""CLI commands for warehousectl.

This package contains all subcommand implementations.
"""

from warehousectl.cli.commands import audit, config, info, panel, reset

__all__ = ["audit", "config", "info", "panel", "reset"]
