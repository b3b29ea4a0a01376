"""Reset operations.

Provides the three ways of wiping a device:

- light reset: removes application data listed in a script template,
- internal reset: removes DRM and web credentials and reboots
  (test images only),
- factory reset: delegated to the power manager on a worker thread,
  with completion reported through a ``resetDone`` event.
"""

from __future__ import annotations

import logging
import subprocess
import threading
from collections.abc import Callable
from pathlib import Path
from typing import Any, Protocol

from warehousectl.core.responses import OperationResult
from warehousectl.core.settings import Settings
from warehousectl.reset.script import ScriptRunner
from warehousectl.reset.template import TemplateResolver
from warehousectl.utils.shell import run_shell

logger = logging.getLogger(__name__)

INTERNAL_RESET_PASS_PHRASE = "FOR TEST PURPOSES ONLY"
RESET_DONE_EVENT = "resetDone"

Notify = Callable[[str, dict[str, Any]], None]


def runner_from_settings(settings: Settings) -> ScriptRunner:
    """Create a ScriptRunner honoring the configured limits."""
    return ScriptRunner(
        max_length=settings.max_script_length,
        timeout=float(settings.command_timeout),
    )


def light_reset(
    settings: Settings,
    *,
    resolver: TemplateResolver | None = None,
    runner: ScriptRunner | None = None,
) -> OperationResult:
    """Remove application data by running the light reset script.

    Args:
        settings: Settings providing the script template.
        resolver: Resolver for template placeholders.
        runner: Script runner.

    Returns:
        OperationResult; on failure the error carries the runner's message.
    """
    resolver = resolver or TemplateResolver()
    runner = runner or runner_from_settings(settings)

    script = resolver.resolve(settings.light_reset_script)
    logger.warning("lightReset: %s", script)

    result = runner.run(script)
    if result.success:
        logger.warning("lightReset succeeded")
        return OperationResult(success=True)

    logger.error("lightReset failed. %s", result.message)
    return OperationResult.failure(result.message)


def is_production_image(version_file: Path) -> bool:
    """Check whether the running image is a production build.

    The first line of the version file containing ``imagename:``
    decides; an unreadable file counts as non-production.

    Args:
        version_file: Path to the image version file.

    Returns:
        True if the image name contains ``PROD``.
    """
    try:
        with open(version_file, encoding="utf-8", errors="replace") as f:
            for line in f:
                if "imagename:" in line:
                    return "PROD" in line
    except OSError as e:
        logger.warning("Cannot read version file %s: %s", version_file, e)
    return False


def internal_reset(
    pass_phrase: str | None,
    settings: Settings,
    *,
    runner: ScriptRunner | None = None,
) -> OperationResult:
    """Wipe credentials and reboot a non-production device.

    Args:
        pass_phrase: Must equal the test pass phrase.
        settings: Settings providing the version file and the script.
        runner: Script runner.

    Returns:
        OperationResult describing the outcome.
    """
    if pass_phrase != INTERNAL_RESET_PASS_PHRASE:
        return OperationResult.failure("incorrect pass phrase")

    if is_production_image(settings.version_file_path):
        return OperationResult.failure("version is PROD")

    runner = runner or runner_from_settings(settings)
    result = runner.run(settings.internal_reset_script)
    if not result.success:
        return OperationResult.failure(result.message)
    return OperationResult(success=True)


class PowerManager(Protocol):
    """Capability performing the factory reset."""

    def warehouse_reset(self, suppress_reboot: bool) -> bool:
        """Reset the device; return True on success."""
        ...


class CommandPowerManager:
    """Power manager backed by a configured reset command.

    The command receives ``WAREHOUSE_SUPPRESS_REBOOT=1`` in its
    environment when the reboot should be skipped.
    """

    def __init__(self, command: str, timeout: float | None = None) -> None:
        self._command = command
        self._timeout = timeout

    def warehouse_reset(self, suppress_reboot: bool) -> bool:
        env = {"WAREHOUSE_SUPPRESS_REBOOT": "1" if suppress_reboot else "0"}
        try:
            result = run_shell(self._command, timeout=self._timeout, env=env)
        except (OSError, subprocess.TimeoutExpired) as e:
            logger.error("Reset command failed: %s", e)
            return False
        if not result.success:
            logger.error("Reset command returned %d: %s", result.returncode, result.stderr.strip())
        return result.success


class ResetDispatcher:
    """Runs factory resets off the caller's thread.

    Only one reset worker exists at a time; a new request waits for the
    previous worker to finish before starting.

    Args:
        power_manager: Reset capability, or None if unavailable.
        notify: Receives the event name and its parameters.
    """

    def __init__(self, power_manager: PowerManager | None, notify: Notify) -> None:
        self._power_manager = power_manager
        self._notify = notify
        self._lock = threading.Lock()
        self._worker: threading.Thread | None = None

    def reset_device(self, suppress_reboot: bool = False) -> OperationResult:
        """Start a factory reset.

        The request is always accepted; the outcome arrives later as a
        ``resetDone`` event.

        Args:
            suppress_reboot: Skip the reboot after resetting.

        Returns:
            A successful OperationResult.
        """
        if self._power_manager is None:
            self._notify(RESET_DONE_EVENT, {"success": False, "error": "No power manager"})
            return OperationResult(success=True)

        logger.warning("Received request to reset device (suppress_reboot=%s)", suppress_reboot)
        with self._lock:
            self.join()
            self._worker = threading.Thread(
                target=self._run,
                args=(self._power_manager, suppress_reboot),
                name="warehouse-reset",
                daemon=True,
            )
            self._worker.start()
        return OperationResult(success=True)

    def join(self, timeout: float | None = None) -> None:
        """Wait for the current reset worker, if any."""
        worker = self._worker
        if worker is not None and worker.is_alive():
            worker.join(timeout)

    def _run(self, power_manager: PowerManager, suppress_reboot: bool) -> None:
        ok = power_manager.warehouse_reset(suppress_reboot)
        params: dict[str, Any] = {"success": ok}
        if not ok:
            params["error"] = "Reset failed"
        logger.info("Notify %s %s", RESET_DONE_EVENT, params)
        self._notify(RESET_DONE_EVENT, params)
