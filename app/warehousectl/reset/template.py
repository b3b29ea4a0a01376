"""Script template resolution.

A script template is a shell command line in which bare upper-case
words such as ``XDG_CACHE_HOME/*`` stand for environment variables. Each
placeholder is replaced by the variable's value followed by its literal
suffix. Placeholders whose variable is unset disappear together with
their leading whitespace, and a placeholder that would expand to a
wildcard at the filesystem root (``/*``) is dropped.

Example:
    >>> resolver = TemplateResolver(env_lookup={"FOO": "/data"}.get)
    >>> resolver.resolve("rm -rf FOO/*")
    'rm -rf /data/*'
"""

import logging
import os
import re
import subprocess
from collections.abc import Callable, Iterator
from typing import NamedTuple

from warehousectl.utils.shell import run_shell

logger = logging.getLogger(__name__)

# Whitespace, variable name, then everything up to the next whitespace
PLACEHOLDER_PATTERN = re.compile(r"(\s+)([A-Z_][0-9A-Z_]*)(\S*)")

# Variable resolved from the mount table when absent from the environment
SD_CARD_MOUNT_VARIABLE = "SD_CARD_MOUNT_PATH"
SD_CARD_MOUNT_COMMAND = "cat  /proc/mounts | grep mmcblk0p1 | awk '{print $2}' "

EnvLookup = Callable[[str], str | None]
ShellExec = Callable[[str], str]


class Placeholder(NamedTuple):
    """A placeholder occurrence in a template.

    Attributes:
        start: Offset of the leading whitespace in the template.
        end: Offset just past the suffix.
        leading: Whitespace preceding the variable name.
        name: Variable name.
        suffix: Literal text following the name up to the next whitespace.
    """

    start: int
    end: int
    leading: str
    name: str
    suffix: str


def iter_placeholders(template: str) -> Iterator[Placeholder]:
    """Yield placeholders left to right, without overlap.

    Args:
        template: Script template to scan.

    Yields:
        Placeholder for each match.
    """
    for match in PLACEHOLDER_PATTERN.finditer(template):
        yield Placeholder(
            start=match.start(),
            end=match.end(),
            leading=match.group(1),
            name=match.group(2),
            suffix=match.group(3),
        )


def shell_output(command: str) -> str:
    """Run a helper command line and return its standard output.

    Failures to start or finish the command are logged and produce an
    empty string.
    """
    try:
        return run_shell(command, timeout=10.0).stdout
    except (OSError, subprocess.TimeoutExpired) as e:
        logger.warning("Failed to run '%s': %s", command, e)
        return ""


class TemplateResolver:
    """Resolves placeholders in script templates.

    Args:
        env_lookup: Returns the value of a variable, or None if unset.
            Defaults to the process environment.
        shell_exec: Runs a command line and returns its standard output.
            Used for the SD card mount path fallback.
    """

    def __init__(
        self,
        env_lookup: EnvLookup | None = None,
        shell_exec: ShellExec | None = None,
    ) -> None:
        self._env_lookup = env_lookup or os.environ.get
        self._shell_exec = shell_exec or shell_output

    def resolve(self, template: str) -> str:
        """Substitute every placeholder in the template.

        The template is never modified; the result is assembled from
        the text between placeholders and their replacements.

        Args:
            template: Script template.

        Returns:
            The fully substituted script.
        """
        parts: list[str] = []
        cursor = 0
        for placeholder in iter_placeholders(template):
            parts.append(template[cursor : placeholder.start])
            parts.append(self._replacement(placeholder))
            cursor = placeholder.end
        parts.append(template[cursor:])
        return "".join(parts)

    def lookup(self, name: str) -> str:
        """Get the value of a template variable.

        Args:
            name: Variable name.

        Returns:
            The value, or an empty string if the variable is unset.
        """
        value = self._env_lookup(name) or ""
        if not value and name == SD_CARD_MOUNT_VARIABLE:
            value = self._shell_exec(SD_CARD_MOUNT_COMMAND).strip()
            logger.debug("%s resolved from mount table: '%s'", name, value)
        return value

    def _replacement(self, placeholder: Placeholder) -> str:
        """Compute the text that replaces a placeholder span."""
        value = self.lookup(placeholder.name)
        if not value:
            return ""

        candidate = value + placeholder.suffix
        if candidate.startswith("/"):
            rest = candidate.lstrip("/")
            # Nothing but slashes, or a wildcard directly under the root
            if not rest or rest[0] == "*":
                logger.warning(
                    "Dropping '%s': resolves to root directory '%s'",
                    placeholder.name + placeholder.suffix,
                    candidate,
                )
                return ""
        return placeholder.leading + candidate
