"""Device information and front panel module."""

from warehousectl.device.front_panel import (
    FrontPanelController,
    FrontPanelDriver,
    FrontPanelState,
    LedPattern,
    SysfsFrontPanel,
    led_pattern,
)
from warehousectl.device.info import get_device_info, parse_device_details

__all__ = [
    "FrontPanelController",
    "FrontPanelDriver",
    "FrontPanelState",
    "LedPattern",
    "SysfsFrontPanel",
    "get_device_info",
    "led_pattern",
    "parse_device_details",
]
