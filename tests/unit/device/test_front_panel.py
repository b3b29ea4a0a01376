"""Unit tests for front panel signaling."""

import threading
from pathlib import Path

import pytest

from warehousectl.device.front_panel import (
    DATA_INDICATOR,
    RECORD_INDICATOR,
    FrontPanelController,
    FrontPanelState,
    LedPattern,
    SysfsFrontPanel,
    apply_pattern,
    led_pattern,
)


class RecordingDriver:
    """FrontPanelDriver recording every call."""

    def __init__(self, result: bool = True) -> None:
        self.result = result
        self.calls: list[tuple[str, object]] = []
        self.applied = threading.Event()

    def power_on_led(self, indicator: str) -> bool:
        self.calls.append(("on", indicator))
        return self.result

    def power_off_led(self, indicator: str) -> bool:
        self.calls.append(("off", indicator))
        return self.result

    def set_brightness(self, brightness: int) -> bool:
        self.calls.append(("brightness", brightness))
        self.applied.set()
        return self.result


class TestLedPattern:
    """Tests for led_pattern."""

    @pytest.mark.parametrize(
        ("iteration", "data", "brightness"),
        [
            (0, True, 100),
            (1, True, 75),
            (2, True, 50),
            (3, True, 25),
            (4, False, 0),
            (5, False, 25),
            (6, False, 50),
            (7, False, 75),
            (8, True, 100),
        ],
    )
    def test_in_progress(self, iteration: int, data: bool, brightness: int) -> None:
        """In progress alternates LEDs every four steps and sweeps brightness."""
        pattern = led_pattern(FrontPanelState.IN_PROGRESS, iteration)

        assert pattern == LedPattern(data=data, record=not data, brightness=brightness)

    @pytest.mark.parametrize(("iteration", "data"), [(0, True), (1, False), (2, True)])
    def test_failed(self, iteration: int, data: bool) -> None:
        """Failed alternates LEDs every step at full brightness."""
        pattern = led_pattern(FrontPanelState.FAILED, iteration)

        assert pattern == LedPattern(data=data, record=not data, brightness=100)

    def test_none(self) -> None:
        """None switches both LEDs off."""
        assert led_pattern(FrontPanelState.NONE, 0) == LedPattern(False, False, 100)


class TestApplyPattern:
    """Tests for apply_pattern."""

    def test_driver_calls(self) -> None:
        """LEDs are switched and the brightness set."""
        driver = RecordingDriver()

        assert apply_pattern(driver, LedPattern(True, False, 75)) is True
        assert driver.calls == [
            ("on", DATA_INDICATOR),
            ("off", RECORD_INDICATOR),
            ("brightness", 75),
        ]

    def test_all_calls_failing(self) -> None:
        """Nothing set means failure."""
        assert apply_pattern(RecordingDriver(result=False), LedPattern(True, False, 100)) is False


class TestFrontPanelController:
    """Tests for FrontPanelController."""

    def test_unsupported_without_driver(self) -> None:
        """Devices without a front panel report unsupported."""
        result = FrontPanelController(None).set_state(FrontPanelState.FAILED)

        assert result.to_dict() == {"success": False, "error": "unsupported"}

    def test_incorrect_state(self) -> None:
        """Unknown states are rejected."""
        driver = RecordingDriver()

        result = FrontPanelController(driver).set_state(2)

        assert result.to_dict() == {"success": False, "error": "incorrect state"}
        assert driver.calls == []

    def test_not_set(self) -> None:
        """A driver that changes nothing fails the request."""
        controller = FrontPanelController(RecordingDriver(result=False))

        result = controller.set_state(FrontPanelState.IN_PROGRESS)

        assert result.error == "front panel not set"
        assert controller.animating is False

    def test_none_does_not_animate(self) -> None:
        """The none state is applied once."""
        controller = FrontPanelController(RecordingDriver())

        assert controller.set_state(-1).success is True
        assert controller.animating is False

    def test_animation_advances(self) -> None:
        """Animated states continue on the timer from step 1."""
        driver = RecordingDriver()
        controller = FrontPanelController(driver, interval=0.01)

        assert controller.set_state(FrontPanelState.IN_PROGRESS).success is True
        assert controller.animating is True
        driver.applied.clear()
        assert driver.applied.wait(2)
        controller.stop()

        # Step 0 at full brightness, step 1 at 75
        brightness = [value for kind, value in driver.calls if kind == "brightness"]
        assert brightness[:2] == [100, 75]
        assert controller.animating is False

    def test_new_state_replaces_animation(self) -> None:
        """Setting a state stops the previous animation."""
        driver = RecordingDriver()
        controller = FrontPanelController(driver, interval=60)

        controller.set_state(FrontPanelState.FAILED)
        controller.set_state(FrontPanelState.NONE)

        assert controller.animating is False


class TestSysfsFrontPanel:
    """Tests for SysfsFrontPanel."""

    def _leds(self, tmp_path: Path) -> Path:
        for name in (DATA_INDICATOR, RECORD_INDICATOR):
            led = tmp_path / name
            led.mkdir()
            (led / "max_brightness").write_text("200\n")
            (led / "brightness").write_text("0\n")
        return tmp_path

    def test_on_off_and_brightness(self, tmp_path: Path) -> None:
        """Lit LEDs follow the brightness percentage."""
        base = self._leds(tmp_path)
        driver = SysfsFrontPanel(base)

        assert apply_pattern(driver, LedPattern(True, False, 50)) is True

        assert (base / DATA_INDICATOR / "brightness").read_text() == "100\n"
        assert (base / RECORD_INDICATOR / "brightness").read_text() == "0\n"

    def test_missing_led(self, tmp_path: Path) -> None:
        """Missing LED devices cannot be set."""
        driver = SysfsFrontPanel(tmp_path / "none")

        assert driver.power_on_led(DATA_INDICATOR) is False
        assert driver.set_brightness(100) is False

    def test_none_state_on_missing_leds(self, tmp_path: Path) -> None:
        """Switching off LEDs that do not exist is not reported as set."""
        controller = FrontPanelController(SysfsFrontPanel(tmp_path / "no-such-leds"))

        result = controller.set_state(FrontPanelState.NONE)

        assert result.success is False
        assert result.error == "front panel not set"
