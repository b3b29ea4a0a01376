"""Device information retrieval.

Runs the platform's device details script, which prints one
``key=value`` line per property (software version, IP and MAC
addresses of the network interfaces, ...).
"""

import logging
import subprocess

from warehousectl.core.responses import OperationResult
from warehousectl.core.settings import Settings
from warehousectl.utils.shell import run_shell

logger = logging.getLogger(__name__)

# Extra keys kept for clients of older releases
_COMPAT_ALIASES: dict[str, tuple[str, ...]] = {
    "imageVersion": ("version", "software_version"),
    "cableCardVersion": ("cable_card_firmware_version",),
}


def parse_device_details(output: str) -> dict[str, str]:
    """Parse ``key=value`` lines into a dictionary.

    Lines without ``=`` are ignored; values may contain ``=``.

    Args:
        output: Script output.

    Returns:
        Properties including compatibility aliases.
    """
    details: dict[str, str] = {}
    for line in output.splitlines():
        key, sep, value = line.partition("=")
        if not sep:
            continue
        details[key] = value
        for alias in _COMPAT_ALIASES.get(key, ()):
            details[alias] = value
    return details


def get_device_info(settings: Settings) -> OperationResult:
    """Collect device details.

    Args:
        settings: Settings providing the device details command.

    Returns:
        OperationResult whose data holds the device properties. A script
        that exits non-zero yields success=False with whatever it printed.
    """
    command = settings.device_info_command
    try:
        result = run_shell(command, timeout=float(settings.command_timeout))
    except (OSError, subprocess.TimeoutExpired) as e:
        logger.warning("failed to run %s: %s", command, e)
        return OperationResult.failure(f"failed to run {command}")

    logger.info("'%s' returned: %s", command, result.stdout)
    details = parse_device_details(result.stdout)

    if not result.success:
        error = result.stderr.strip() or f"{command} exited with {result.returncode}"
        return OperationResult(success=False, error=error, data=details)
    return OperationResult(success=True, data=details)
