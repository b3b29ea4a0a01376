"""Audit configuration file parsing.

The audit config lists one path pattern per line. Blank lines, ``#``
comments and ``[section]`` headers are ignored::

    [apps]
    # removed by light reset
    /opt/netflix/*
    $SD_CARD_MOUNT_PATH/netflix/*
    /opt/hn_service_settings.conf
"""

import logging
from collections.abc import Iterable
from pathlib import Path

logger = logging.getLogger(__name__)


class ConfigurationError(Exception):
    """Raised when the audit config is missing, unreadable or empty."""


def parse_patterns(lines: Iterable[str]) -> list[str]:
    """Extract path patterns from config lines.

    Args:
        lines: Raw config lines.

    Returns:
        Trimmed patterns in file order.
    """
    patterns: list[str] = []
    for raw in lines:
        line = raw.strip()
        if not line or line[0] in "#[":
            continue
        patterns.append(line)
    return patterns


def load_patterns(path: Path) -> list[str]:
    """Read path patterns from an audit config file.

    Args:
        path: Audit config file.

    Returns:
        Non-empty list of patterns.

    Raises:
        ConfigurationError: If the file cannot be opened or holds no patterns.
    """
    try:
        with open(path, encoding="utf-8", errors="replace") as f:
            patterns = parse_patterns(f)
    except OSError as e:
        logger.error("Can't open file %s: %s", path, e)
        raise ConfigurationError(f"Can't open file {path}") from e

    if not patterns:
        msg = f"file {path} doesn't have any lines with paths"
        logger.error("%s", msg)
        raise ConfigurationError(msg)

    return patterns
