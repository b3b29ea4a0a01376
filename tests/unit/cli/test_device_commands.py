"""Unit tests for the info and panel CLI commands."""

import json
from collections.abc import Callable
from pathlib import Path
from unittest.mock import MagicMock, patch

from typer.testing import CliRunner

from warehousectl.cli.main import app
from warehousectl.core.responses import OperationResult

runner = CliRunner()


class TestInfoCommand:
    """Tests for warehousectl info."""

    @patch("warehousectl.cli.commands.info.get_device_info")
    def test_json(self, mock_info: MagicMock, write_settings: Callable[..., Path]) -> None:
        """Device details are printed as JSON."""
        mock_info.return_value = OperationResult(success=True, data={"estb_ip": "10.0.0.12"})

        result = runner.invoke(
            app, ["--settings", str(write_settings()), "info", "--format", "json"]
        )

        assert result.exit_code == 0
        assert json.loads(result.stdout) == {"success": True, "estb_ip": "10.0.0.12"}

    @patch("warehousectl.cli.commands.info.get_device_info")
    def test_failure(self, mock_info: MagicMock, write_settings: Callable[..., Path]) -> None:
        """A failing details script exits with code 1."""
        mock_info.return_value = OperationResult.failure("failed to run details")

        result = runner.invoke(app, ["--settings", str(write_settings()), "info"])

        assert result.exit_code == 1
        assert "failed to run details" in result.output


class TestPanelCommand:
    """Tests for warehousectl panel set."""

    def test_unsupported(self, write_settings: Callable[..., Path]) -> None:
        """Without LED devices the front panel is unsupported."""
        result = runner.invoke(
            app,
            ["--settings", str(write_settings()), "panel", "set", "failed", "--format", "json"],
        )

        assert result.exit_code == 1
        assert json.loads(result.stdout) == {"success": False, "error": "unsupported"}

    def test_sets_leds(self, tmp_path: Path, write_settings: Callable[..., Path]) -> None:
        """The first animation step is written to the LED devices."""
        leds = tmp_path / "leds"
        for name in ("message", "record"):
            (leds / name).mkdir(parents=True)
            (leds / name / "max_brightness").write_text("100\n")
        settings = write_settings(front_panel_led_dir=leds)

        result = runner.invoke(app, ["--settings", str(settings), "panel", "set", "in-progress"])

        assert result.exit_code == 0
        assert "Front panel set to in-progress." in result.output
        assert (leds / "message" / "brightness").read_text() == "100\n"
        assert (leds / "record" / "brightness").read_text() == "0\n"
