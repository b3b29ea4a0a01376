"""Clean audit module.

This module provides audit config parsing, the audit scanner, its
device probes and the clean check operation.
"""

from warehousectl.audit.check import is_clean, run_audit
from warehousectl.audit.config import ConfigurationError, load_patterns, parse_patterns
from warehousectl.audit.models import AuditResult, MatchedObject, PatternOutcome, PatternReport
from warehousectl.audit.probe import DeviceProbe, PathState, ShellDeviceProbe
from warehousectl.audit.scanner import AuditScanner, extract_variable

__all__ = [
    "AuditResult",
    "AuditScanner",
    "ConfigurationError",
    "DeviceProbe",
    "MatchedObject",
    "PathState",
    "PatternOutcome",
    "PatternReport",
    "ShellDeviceProbe",
    "extract_variable",
    "is_clean",
    "load_patterns",
    "parse_patterns",
    "run_audit",
]
