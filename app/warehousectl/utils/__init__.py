"""Utility modules for warehousectl.

This module exports commonly used utility functions.
"""

from warehousectl.utils.formatting import (
    console,
    create_table,
    err_console,
    print_error,
    print_info,
    print_success,
    print_warning,
    setup_logging,
)
from warehousectl.utils.shell import CommandResult, command_exists, run_command, run_shell

__all__ = [
    "CommandResult",
    "command_exists",
    "console",
    "create_table",
    "err_console",
    "print_error",
    "print_info",
    "print_success",
    "print_warning",
    "run_command",
    "run_shell",
    "setup_logging",
]
