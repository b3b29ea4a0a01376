"""Clean audit scanner.

Checks a list of path patterns against the device and reports which
paths are still present. Patterns may reference device property
variables (``$SD_CARD_MOUNT_PATH/netflix/*``) and contain wildcards.

Per pattern:

1. A pattern containing ``$`` carries a variable. Its value is resolved
   through the probe; an empty value skips the pattern as untested.
2. A pattern containing a wildcard character is expanded by the probe.
   The search is recursive only if the pattern ends with ``/*``.
3. Any other pattern is checked as a single concrete path.

Each concrete path is stat'ed. With an age threshold a path counts as
present only if it also was modified more than ``age`` seconds ago.
"""

import logging
import re
from collections.abc import Sequence

from warehousectl.audit.config import ConfigurationError
from warehousectl.audit.models import (
    AuditResult,
    MatchedObject,
    PatternOutcome,
    PatternReport,
)
from warehousectl.audit.probe import DeviceProbe

logger = logging.getLogger(__name__)

WILDCARD_CHARS = frozenset("$*?+")

# Text before the first "$", the "$"/"${" marker, then the variable name
_VARIABLE_PATTERN = re.compile(r"([^$]*)([${]*)([^${}/]*)(.*)", re.DOTALL)


def extract_variable(pattern: str) -> str:
    """Extract the first variable name referenced by a pattern.

    Only one variable is extracted per pattern.

    Args:
        pattern: Path pattern.

    Returns:
        Variable name, or an empty string if none follows the marker.
    """
    match = _VARIABLE_PATTERN.match(pattern)
    if match is None:
        return ""
    return match.group(3).strip()


def has_wildcard(pattern: str) -> bool:
    """Check whether a pattern needs wildcard expansion."""
    return any(c in WILDCARD_CHARS for c in pattern)


def is_recursive(pattern: str) -> bool:
    """Check whether a wildcard pattern is expanded recursively.

    Only a trailing ``/*`` searches below the immediate directory;
    shapes like ``/opt/*.ini`` stay at one level.
    """
    return len(pattern) > 1 and pattern.endswith("/*")


class AuditScanner:
    """Scans path patterns for objects left on the device.

    The scanner holds no state between scans; all device access goes
    through the injected probe.

    Args:
        probe: Device probe answering variable, wildcard and stat queries.
    """

    def __init__(self, probe: DeviceProbe) -> None:
        self._probe = probe

    def scan(self, patterns: Sequence[str], age: int | None = None) -> AuditResult:
        """Audit a list of path patterns.

        Args:
            patterns: Path patterns in config order.
            age: Age threshold in seconds. None or a negative value means
                plain existence checks.

        Returns:
            AuditResult with the present paths in pattern order.

        Raises:
            ConfigurationError: If there are no patterns to scan.
        """
        if not patterns:
            raise ConfigurationError("no path patterns to scan")

        threshold = age if age is not None and age >= 0 else None

        reports: list[PatternReport] = []
        objects_checked = 0
        for pattern in patterns:
            report = self._scan_pattern(pattern, threshold, objects_checked)
            objects_checked += max(len(report.objects), 1)
            reports.append(report)

        files = tuple(path for report in reports for path in report.existing)
        logger.info("checked %d paths, found objects %d", objects_checked, len(files))
        return AuditResult(
            total_processed=len(reports),
            files=files,
            reports=tuple(reports),
            objects_checked=objects_checked,
        )

    def _scan_pattern(self, pattern: str, age: int | None, counter: int) -> PatternReport:
        """Audit a single pattern.

        Args:
            pattern: Path pattern.
            age: Age threshold in seconds, or None.
            counter: Objects checked before this pattern, for log numbering.

        Returns:
            PatternReport for the pattern.
        """
        variable: str | None = None
        value: str | None = None

        if "$" in pattern:
            variable = extract_variable(pattern)
            value = self._probe.resolve_variable(variable).strip() if variable else ""
            if not value:
                logger.warning(
                    "path %d '%s' hasn't been tested, due to the empty value of '%s'",
                    counter + 1,
                    pattern,
                    variable,
                )
                return PatternReport(
                    pattern=pattern,
                    outcome=PatternOutcome.UNTESTED,
                    variable=variable,
                    value=value,
                )
            logger.info("variable '%s' has value '%s'", variable, value)

        if has_wildcard(pattern):
            candidates = self._probe.find(pattern, is_recursive(pattern))
            if not candidates:
                logger.info("objects %d by path '%s' don't exist", counter + 1, pattern)
                return PatternReport(
                    pattern=pattern,
                    outcome=PatternOutcome.NO_MATCHES,
                    variable=variable,
                    value=value,
                )
        else:
            candidates = [pattern]

        objects = tuple(
            self._check(pattern, path, age, counter + index)
            for index, path in enumerate(candidates, start=1)
        )
        return PatternReport(
            pattern=pattern,
            outcome=PatternOutcome.CHECKED,
            variable=variable,
            value=value,
            objects=objects,
        )

    def _check(self, pattern: str, path: str, age: int | None, number: int) -> MatchedObject:
        """Stat a concrete path and log the verdict."""
        state = self._probe.stat(path, age)
        if age is None:
            exists = state.exists
            logger.info(
                "object %d by path '%s' : '%s' %s",
                number,
                pattern,
                path,
                "exists" if exists else "doesn't exist",
            )
            return MatchedObject(path=path, pattern=pattern, exists=exists)

        older = bool(state.older_than_threshold)
        exists = state.exists and older
        logger.info(
            "object %d by path '%s' : '%s' %s %d seconds",
            number,
            pattern,
            path,
            "exists and was modified more than" if exists else "doesn't exist or was modified in",
            age,
        )
        return MatchedObject(
            path=path,
            pattern=pattern,
            exists=exists,
            older_than_threshold=older,
        )
