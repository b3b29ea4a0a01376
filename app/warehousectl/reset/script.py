"""Script execution for reset operations.

Reset scripts are handed to the system script runner, which accepts a
bounded command line and reports the script's return value.
"""

import logging
import subprocess
from dataclasses import dataclass

from warehousectl.utils.shell import run_shell

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ScriptResult:
    """Result of running a reset script.

    Attributes:
        success: Whether the script returned 0.
        returncode: Script return value, None if it never ran.
        message: Diagnostic text (``script returned: N`` or the reason
            the script was rejected).
    """

    success: bool
    returncode: int | None
    message: str


class ScriptRunner:
    """Runs reset scripts through the shell.

    Args:
        max_length: Size of the script buffer; a script must be strictly
            shorter than this to be accepted.
        timeout: Maximum time in seconds to wait for a script.
    """

    def __init__(self, max_length: int = 256, timeout: float | None = 60.0) -> None:
        self._max_length = max_length
        self._timeout = timeout

    @property
    def max_length(self) -> int:
        """Script buffer size."""
        return self._max_length

    def run(self, script: str) -> ScriptResult:
        """Run a script and report its outcome.

        Args:
            script: Shell script (a single command line).

        Returns:
            ScriptResult describing the outcome. Never raises for
            script failures.
        """
        if len(script) > self._max_length - 1:
            message = f"Length of script greater than allowed limit of {self._max_length}."
            logger.warning("%s", message)
            return ScriptResult(success=False, returncode=None, message=message)

        try:
            result = run_shell(script, timeout=self._timeout)
        except subprocess.TimeoutExpired:
            message = f"script timed out after {self._timeout} seconds"
            logger.error("%s", message)
            return ScriptResult(success=False, returncode=None, message=message)
        except OSError as e:
            message = f"script could not be started: {e}"
            logger.error("%s", message)
            return ScriptResult(success=False, returncode=None, message=message)

        message = f"script returned: {result.returncode}"
        logger.info("%s", message)
        if not result.success and result.stderr.strip():
            logger.debug("script stderr: %s", result.stderr.strip())
        return ScriptResult(
            success=result.success,
            returncode=result.returncode,
            message=message,
        )
