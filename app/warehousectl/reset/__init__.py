"""Device reset module.

This module provides script templating, script execution and the
light, internal and factory reset operations.
"""

from warehousectl.reset.operations import (
    CommandPowerManager,
    PowerManager,
    ResetDispatcher,
    internal_reset,
    light_reset,
)
from warehousectl.reset.script import ScriptResult, ScriptRunner
from warehousectl.reset.template import Placeholder, TemplateResolver, iter_placeholders

__all__ = [
    "CommandPowerManager",
    "Placeholder",
    "PowerManager",
    "ResetDispatcher",
    "ScriptResult",
    "ScriptRunner",
    "TemplateResolver",
    "internal_reset",
    "iter_placeholders",
    "light_reset",
]
