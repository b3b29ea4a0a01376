"""Front panel signaling.

The front panel shows the state of a software download with two LEDs
(data and record) and a shared brightness level:

- NONE: LEDs off.
- IN_PROGRESS: the lit LED alternates every four steps while the
  brightness sweeps 100, 75, 50, 25, 0, 25, 50, 75.
- FAILED: the LEDs alternate every step at full brightness.

Animated states are advanced by a repeating timer.
"""

from __future__ import annotations

import logging
import threading
from enum import IntEnum
from pathlib import Path
from typing import NamedTuple, Protocol

from warehousectl.core.responses import OperationResult

logger = logging.getLogger(__name__)

DATA_INDICATOR = "message"
RECORD_INDICATOR = "record"


class FrontPanelState(IntEnum):
    """Front panel states accepted by :meth:`FrontPanelController.set_state`."""

    NONE = -1
    IN_PROGRESS = 1
    FAILED = 3


class LedPattern(NamedTuple):
    """LED settings for one animation step.

    Attributes:
        data: Data LED lit.
        record: Record LED lit.
        brightness: Brightness in percent.
    """

    data: bool
    record: bool
    brightness: int


def led_pattern(state: FrontPanelState, iteration: int) -> LedPattern:
    """Compute the LED settings for a state at an animation step.

    Args:
        state: Front panel state.
        iteration: Animation step, starting at 0.

    Returns:
        LedPattern for the step.
    """
    if state == FrontPanelState.IN_PROGRESS:
        data = (iteration // 4) % 2 == 0
        return LedPattern(data=data, record=not data, brightness=abs(100 - 25 * (iteration % 8)))
    if state == FrontPanelState.FAILED:
        data = iteration % 2 == 0
        return LedPattern(data=data, record=not data, brightness=100)
    return LedPattern(data=False, record=False, brightness=100)


class FrontPanelDriver(Protocol):
    """LED hardware capability. Each call returns True if it took effect."""

    def power_on_led(self, indicator: str) -> bool: ...

    def power_off_led(self, indicator: str) -> bool: ...

    def set_brightness(self, brightness: int) -> bool: ...


class SysfsFrontPanel:
    """Front panel driver for Linux LED class devices.

    Each indicator is a directory below ``base_dir`` holding
    ``brightness`` and ``max_brightness`` files
    (``/sys/class/leds/<indicator>/``).

    Args:
        base_dir: Directory containing the indicator LED devices.
    """

    def __init__(self, base_dir: Path) -> None:
        self._base_dir = base_dir
        self._percent = 100
        self._lit: set[str] = set()

    def power_on_led(self, indicator: str) -> bool:
        self._lit.add(indicator)
        return self._write(indicator, self._level(indicator))

    def power_off_led(self, indicator: str) -> bool:
        self._lit.discard(indicator)
        return self._write(indicator, 0)

    def set_brightness(self, brightness: int) -> bool:
        self._percent = max(0, min(100, brightness))
        ok = True
        for indicator in (DATA_INDICATOR, RECORD_INDICATOR):
            level = self._level(indicator) if indicator in self._lit else 0
            ok = self._write(indicator, level) and ok
        return ok

    def _level(self, indicator: str) -> int:
        try:
            text = (self._base_dir / indicator / "max_brightness").read_text()
            maximum = int(text.strip())
        except (OSError, ValueError):
            maximum = 255
        return maximum * self._percent // 100

    def _write(self, indicator: str, value: int) -> bool:
        path = self._base_dir / indicator / "brightness"
        try:
            path.write_text(f"{value}\n")
        except OSError as e:
            logger.warning("Cannot set %s: %s", path, e)
            return False
        return True


def apply_pattern(driver: FrontPanelDriver, pattern: LedPattern) -> bool:
    """Apply LED settings through a driver.

    Returns:
        True if any of the driver calls took effect.
    """
    logger.info(
        "SetFrontPanelLights set Brightness=%d (LEDs: Data=%d Record=%d)",
        pattern.brightness,
        int(pattern.data),
        int(pattern.record),
    )
    did_set = False
    if pattern.data:
        did_set |= driver.power_on_led(DATA_INDICATOR)
    else:
        did_set |= driver.power_off_led(DATA_INDICATOR)
    if pattern.record:
        did_set |= driver.power_on_led(RECORD_INDICATOR)
    else:
        did_set |= driver.power_off_led(RECORD_INDICATOR)
    did_set |= driver.set_brightness(pattern.brightness)
    return did_set


class FrontPanelController:
    """Sets front panel states and runs their animation.

    Args:
        driver: LED driver, or None if the device has no front panel.
        interval: Seconds between animation steps.
    """

    def __init__(self, driver: FrontPanelDriver | None, interval: float = 5.0) -> None:
        self._driver = driver
        self._interval = interval
        self._lock = threading.Lock()
        self._timer: threading.Timer | None = None
        self._state = FrontPanelState.NONE
        self._iteration = 0

    @property
    def animating(self) -> bool:
        """Whether an animation timer is scheduled."""
        return self._timer is not None

    def set_state(self, state: int) -> OperationResult:
        """Switch the front panel to a new state.

        Any running animation is stopped. Animated states show their
        first step immediately and continue on a timer.

        Args:
            state: One of the FrontPanelState values.

        Returns:
            OperationResult describing the outcome.
        """
        if self._driver is None:
            logger.error("FrontPanel unsupported")
            return OperationResult.failure("unsupported")

        try:
            panel_state = FrontPanelState(state)
        except ValueError:
            logger.error("FrontPanelState incorrect state %d", state)
            return OperationResult.failure("incorrect state")

        with self._lock:
            self._cancel_timer()
            did_set = apply_pattern(self._driver, led_pattern(panel_state, 0))
            logger.info("FrontPanelState %s to %d", "set" if did_set else "not set", state)
            if not did_set:
                return OperationResult.failure("front panel not set")

            if panel_state != FrontPanelState.NONE:
                logger.info("Triggering FrontPanel update by timer")
                self._state = panel_state
                self._iteration = 1
                self._schedule()
        return OperationResult(success=True)

    def stop(self) -> None:
        """Stop the animation, leaving the LEDs as they are."""
        with self._lock:
            self._cancel_timer()

    def _schedule(self) -> None:
        self._timer = threading.Timer(self._interval, self._on_timer)
        self._timer.daemon = True
        self._timer.start()

    def _cancel_timer(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def _on_timer(self) -> None:
        with self._lock:
            # Cancelled or replaced while waiting for the lock
            if self._timer is not threading.current_thread() or self._driver is None:
                return
            apply_pattern(self._driver, led_pattern(self._state, self._iteration))
            self._iteration += 1
            self._schedule()
