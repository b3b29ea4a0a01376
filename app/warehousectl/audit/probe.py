"""Device probes used by the clean audit.

The audit scanner never touches the device directly. It asks a
:class:`DeviceProbe` to resolve property variables, expand wildcard
patterns and stat paths. :class:`ShellDeviceProbe` answers these
questions on a real device by sourcing the device properties file and
running ``find``.
"""

import logging
import os
import re
import shlex
import subprocess
import time
from pathlib import Path
from typing import NamedTuple, Protocol

from warehousectl.core.paths import DEVICE_PROPERTIES_FILE
from warehousectl.utils.shell import run_shell

logger = logging.getLogger(__name__)

# Maximum number of objects reported per wildcard pattern
FIND_RESULT_LIMIT = 10

_SHELL_NAME = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")


class PathState(NamedTuple):
    """Existence and age of a path.

    Attributes:
        exists: Whether the path exists.
        older_than_threshold: Whether it was last modified more than the
            requested number of seconds ago; None when no age was requested.
    """

    exists: bool
    older_than_threshold: bool | None = None


class DeviceProbe(Protocol):
    """Queries the audit scanner makes against the device."""

    def resolve_variable(self, name: str) -> str:
        """Return the value of a device property variable."""
        ...

    def find(self, pattern: str, recursive: bool) -> list[str]:
        """Expand a wildcard pattern into existing, non-hidden paths."""
        ...

    def stat(self, path: str, age: int | None) -> PathState:
        """Report whether a path exists and how its age compares to ``age``."""
        ...


def build_find_command(pattern: str, recursive: bool, properties_file: Path) -> str:
    """Build the shell command line expanding a wildcard pattern.

    The directory part (up to the last ``/``) is searched for entries
    whose name matches the remainder. Hidden entries are skipped and the
    output is capped at :data:`FIND_RESULT_LIMIT` lines.

    Args:
        pattern: Path pattern, possibly containing property variables.
        recursive: Search below the immediate directory.
        properties_file: Device properties file sourced before expansion.

    Returns:
        Shell command line.
    """
    props = shlex.quote(str(properties_file))
    max_depth = "" if recursive else "-maxdepth 1 "
    return (
        f"if [ -r {props} ]; then . {props}; fi; "
        f'fp="{pattern}"; p=${{fp%/*}}; f=${{fp##*/}}; '
        f'find $p -mindepth 1 {max_depth}! -path "*/\\.*" -name "$f" '
        f"| head -n {FIND_RESULT_LIMIT}"
    )


class ShellDeviceProbe:
    """DeviceProbe backed by the shell and the local filesystem.

    Args:
        properties_file: Shell-sourceable device properties file.
        timeout: Timeout in seconds for each helper command.
    """

    def __init__(
        self,
        properties_file: Path = DEVICE_PROPERTIES_FILE,
        timeout: float | None = 60.0,
    ) -> None:
        self._properties_file = properties_file
        self._timeout = timeout

    def resolve_variable(self, name: str) -> str:
        """Source the properties file and echo the variable.

        Args:
            name: Variable name.

        Returns:
            Trimmed value; empty if unset, invalid or on failure.
        """
        if not _SHELL_NAME.fullmatch(name):
            logger.warning("Ignoring invalid variable name '%s'", name)
            return ""

        props = shlex.quote(str(self._properties_file))
        command = f'if [ -r {props} ]; then . {props}; fi; echo "${name}"'
        return self._output(command).strip()

    def find(self, pattern: str, recursive: bool) -> list[str]:
        """Expand a wildcard pattern with ``find``.

        Args:
            pattern: Path pattern.
            recursive: Search below the immediate directory.

        Returns:
            Matching paths in ``find`` order; empty if nothing matched.
        """
        command = build_find_command(pattern, recursive, self._properties_file)
        output = self._output(command).strip()
        if len(output) <= 1:
            return []
        return [line for line in output.split("\n") if line]

    def stat(self, path: str, age: int | None) -> PathState:
        """Check existence and modification age of a path.

        Args:
            path: Filesystem path.
            age: Threshold in seconds, or None for a plain existence check.

        Returns:
            PathState for the path.
        """
        try:
            mtime = os.stat(path).st_mtime
        except OSError:
            return PathState(exists=False, older_than_threshold=None if age is None else False)

        if age is None:
            return PathState(exists=True)
        return PathState(exists=True, older_than_threshold=time.time() - mtime > age)

    def _output(self, command: str) -> str:
        try:
            result = run_shell(command, timeout=self._timeout)
        except (OSError, subprocess.TimeoutExpired) as e:
            logger.warning("Failed to run '%s': %s", command, e)
            return ""
        if result.stderr.strip():
            logger.debug("'%s' reported: %s", command, result.stderr.strip())
        return result.stdout
