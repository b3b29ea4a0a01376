"""Structured operation responses.

Every maintenance operation reports a success flag, an optional
human-readable error and operation-specific fields. Failures are never
raised to the caller.
"""

from dataclasses import dataclass, field
from typing import Any


@dataclass(slots=True)
class OperationResult:
    """Outcome of a maintenance operation.

    Attributes:
        success: Whether the operation completed successfully.
        error: Error message if the operation failed, None otherwise.
        data: Additional response fields (e.g. ``clean``, ``files``).
    """

    success: bool
    error: str | None = None
    data: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def failure(cls, error: str, **data: Any) -> "OperationResult":
        """Create a failed result with the given message."""
        return cls(success=False, error=error, data=dict(data))

    def to_dict(self) -> dict[str, Any]:
        """Convert to a response dictionary.

        The ``error`` key is only present on failure.
        """
        response: dict[str, Any] = {"success": self.success}
        if self.error is not None:
            response["error"] = self.error
        response.update(self.data)
        return response
