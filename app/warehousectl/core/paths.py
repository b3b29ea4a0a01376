"""Path management for warehousectl.

Device-side paths are fixed by the platform image; only the tool's own
settings file follows the XDG Base Directory Specification.

XDG defaults:
- Config: ~/.config/warehousectl/
"""

import os
from pathlib import Path

# Application identifier for directory naming
APP_NAME = "warehousectl"

# Device files shipped with the platform image
AUDIT_CONFIG_FILE = Path("/lib/rdk/cust-data.conf")
DEVICE_PROPERTIES_FILE = Path("/etc/device.properties")
VERSION_FILE = Path("/version.txt")
DEVICE_INFO_SCRIPT = "sh /lib/rdk/getDeviceDetails.sh read"


def _get_xdg_dir(env_var: str, default_subdir: str) -> Path:
    """Get XDG directory respecting environment variable override.

    Args:
        env_var: XDG environment variable name (e.g., "XDG_CONFIG_HOME").
        default_subdir: Default subdirectory under home (e.g., ".config").

    Returns:
        Path to the application-specific directory.
    """
    base = os.environ.get(env_var)
    if base:
        return Path(base) / APP_NAME
    return Path.home() / default_subdir / APP_NAME


def get_config_dir() -> Path:
    """Get the configuration directory path.

    Returns:
        Path to ~/.config/warehousectl/ (or XDG_CONFIG_HOME/warehousectl/).
    """
    return _get_xdg_dir("XDG_CONFIG_HOME", ".config")


def get_settings_path() -> Path:
    """Get the settings file path.

    Returns:
        Path to ~/.config/warehousectl/settings.toml.
    """
    return get_config_dir() / "settings.toml"


def ensure_config_dir() -> Path:
    """Create the configuration directory if it doesn't exist.

    Returns:
        Path to the configuration directory.

    Raises:
        RuntimeError: If the directory cannot be created.
    """
    path = get_config_dir()
    try:
        path.mkdir(parents=True, exist_ok=True)
    except PermissionError as e:
        msg = f"Cannot create config directory {path}: Permission denied"
        raise RuntimeError(msg) from e
    except OSError as e:
        msg = f"Cannot create config directory {path}: {e}"
        raise RuntimeError(msg) from e
    return path
