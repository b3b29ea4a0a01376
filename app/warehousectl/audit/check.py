"""Clean check operation.

Loads the audit config, scans it and shapes the result into an
operation response with ``clean`` and ``files`` fields.
"""

from warehousectl.audit.config import ConfigurationError, load_patterns
from warehousectl.audit.models import AuditResult
from warehousectl.audit.probe import DeviceProbe, ShellDeviceProbe
from warehousectl.audit.scanner import AuditScanner
from warehousectl.core.responses import OperationResult
from warehousectl.core.settings import Settings


def run_audit(
    settings: Settings,
    age: int | None = None,
    *,
    probe: DeviceProbe | None = None,
) -> AuditResult:
    """Scan the configured audit paths.

    Args:
        settings: Settings providing the audit config and properties file.
        age: Age threshold in seconds, or None.
        probe: Device probe. Defaults to a shell-backed probe.

    Returns:
        AuditResult for the configured patterns.

    Raises:
        ConfigurationError: If the audit config is missing or empty.
    """
    patterns = load_patterns(settings.audit_config_path)
    probe = probe or ShellDeviceProbe(
        properties_file=settings.device_properties_path,
        timeout=float(settings.command_timeout),
    )
    return AuditScanner(probe).scan(patterns, age)


def is_clean(
    settings: Settings,
    age: int | None = None,
    *,
    probe: DeviceProbe | None = None,
) -> OperationResult:
    """Check whether the device is free of the audited objects.

    Args:
        settings: Settings providing the audit config and properties file.
        age: Age threshold in seconds; None or negative disables it.
        probe: Device probe. Defaults to a shell-backed probe.

    Returns:
        OperationResult with ``clean`` and ``files`` fields. A config
        problem yields success=False, clean=False and no files.
    """
    try:
        result = run_audit(settings, age, probe=probe)
    except ConfigurationError as e:
        return OperationResult.failure(str(e), clean=False, files=[])

    return OperationResult(success=True, data=result.to_dict())
