"""Unit tests for operation responses."""

from warehousectl.core.responses import OperationResult


class TestOperationResult:
    """Tests for OperationResult."""

    def test_success_has_no_error_key(self) -> None:
        """Successful results carry no error."""
        result = OperationResult(success=True, data={"clean": True, "files": []})

        assert result.to_dict() == {"success": True, "clean": True, "files": []}

    def test_failure(self) -> None:
        """failure() builds an unsuccessful result with extra fields."""
        result = OperationResult.failure("unsupported", clean=False)

        assert result.success is False
        assert result.to_dict() == {"success": False, "error": "unsupported", "clean": False}
