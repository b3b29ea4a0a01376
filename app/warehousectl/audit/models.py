"""Audit domain models.

This module defines the data structures produced by the clean audit:
the per-path match records, the per-pattern report and the aggregate
result returned to the caller.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any


class PatternOutcome(str, Enum):
    """How a path pattern was handled during the audit.

    Attributes:
        UNTESTED: The pattern's variable resolved to an empty value.
        NO_MATCHES: The wildcard expansion found nothing.
        CHECKED: One or more concrete paths were checked.
    """

    UNTESTED = "untested"
    NO_MATCHES = "no_matches"
    CHECKED = "checked"


@dataclass(frozen=True, slots=True)
class MatchedObject:
    """A concrete path produced by resolving a path pattern.

    Attributes:
        path: Concrete filesystem path.
        pattern: Pattern the path was produced from.
        exists: Whether the path counts as present (and, when an age
            threshold was given, older than it).
        older_than_threshold: Age comparison result, None without a threshold.
    """

    path: str
    pattern: str
    exists: bool
    older_than_threshold: bool | None = None

    def __post_init__(self) -> None:
        """Validate matched object data after initialization."""
        if not self.path:
            msg = "Path cannot be empty"
            raise ValueError(msg)


@dataclass(frozen=True, slots=True)
class PatternReport:
    """Audit record for a single path pattern.

    Attributes:
        pattern: The path pattern as read from the audit config.
        outcome: How the pattern was handled.
        variable: Variable name extracted from the pattern, if any.
        value: Resolved variable value, if any.
        objects: Concrete paths checked for this pattern, in query order.
    """

    pattern: str
    outcome: PatternOutcome
    variable: str | None = None
    value: str | None = None
    objects: tuple[MatchedObject, ...] = ()

    @property
    def existing(self) -> list[str]:
        """Paths of this pattern that count as present."""
        return [obj.path for obj in self.objects if obj.exists]


@dataclass(frozen=True, slots=True)
class AuditResult:
    """Aggregate result of a clean audit.

    Attributes:
        total_processed: Number of patterns processed, untested ones included.
        files: Present paths across all patterns, in pattern order.
        reports: Per-pattern records.
        objects_checked: Untested and unmatched patterns plus every
            concrete path checked.
    """

    total_processed: int
    files: tuple[str, ...]
    reports: tuple[PatternReport, ...] = ()
    objects_checked: int = 0

    @property
    def clean(self) -> bool:
        """True when no listed path is present."""
        return not self.files

    def to_dict(self) -> dict[str, Any]:
        """Convert to the clean-check response fields."""
        return {"clean": self.clean, "files": list(self.files)}
