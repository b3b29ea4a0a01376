"""Settings model and I/O functions.

Settings control where device files live, which scripts the reset
operations run and the limits applied to them. They are stored in
~/.config/warehousectl/settings.toml; a missing file means defaults.
"""

import logging
import os
import tomllib
from pathlib import Path
from tempfile import NamedTemporaryFile
from typing import Annotated

import tomli_w
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from warehousectl.core.paths import (
    AUDIT_CONFIG_FILE,
    DEVICE_INFO_SCRIPT,
    DEVICE_PROPERTIES_FILE,
    VERSION_FILE,
    ensure_config_dir,
    get_settings_path,
)

logger = logging.getLogger(__name__)

LIGHT_RESET_SCRIPT = (
    "rm -rf /opt/netflix/* SD_CARD_MOUNT_PATH/netflix/* XDG_DATA_HOME/* XDG_CACHE_HOME/* "
    "XDG_CACHE_HOME/../.sparkStorage/ /opt/QT/home/data/* /opt/hn_service_settings.conf "
    "/opt/apps/common/proxies.conf /opt/lib/bluetooth"
)

INTERNAL_RESET_SCRIPT = (
    "rm -rf /opt/drm /opt/www/whitebox /opt/www/authService "
    "&& /rebootNow.sh -s WarehouseService &"
)


class Settings(BaseModel):
    """Runtime settings for warehousectl.

    Attributes:
        audit_config_path: File listing the paths checked by the clean audit.
        device_properties_path: Shell-sourceable device properties file.
        version_file_path: Image version file consulted by internal reset.
        device_info_command: Command printing ``key=value`` device details.
        light_reset_script: Template for the light reset script.
        internal_reset_script: Script run by internal reset.
        max_script_length: Buffer size of the script runner; scripts must
            be strictly shorter.
        command_timeout: Timeout in seconds for helper commands and scripts.
        front_panel_interval: Seconds between front panel blink steps.
        reset_command: Command performing the factory reset, or None when
            no power manager is available.
        front_panel_led_dir: Directory holding the front panel LED devices,
            or None when the device has no front panel.
    """

    model_config = ConfigDict(extra="forbid")

    audit_config_path: Annotated[
        Path,
        Field(description="Audit path list"),
    ] = AUDIT_CONFIG_FILE
    device_properties_path: Annotated[
        Path,
        Field(description="Device properties file"),
    ] = DEVICE_PROPERTIES_FILE
    version_file_path: Annotated[
        Path,
        Field(description="Image version file"),
    ] = VERSION_FILE
    device_info_command: Annotated[
        str,
        Field(min_length=1, description="Device details command"),
    ] = DEVICE_INFO_SCRIPT
    light_reset_script: Annotated[
        str,
        Field(min_length=1, description="Light reset script template"),
    ] = LIGHT_RESET_SCRIPT
    internal_reset_script: Annotated[
        str,
        Field(min_length=1, description="Internal reset script"),
    ] = INTERNAL_RESET_SCRIPT
    max_script_length: Annotated[
        int,
        Field(ge=16, le=65536, description="Script buffer size (16-65536)"),
    ] = 256
    command_timeout: Annotated[
        int,
        Field(ge=1, le=3600, description="Timeout in seconds (1-3600)"),
    ] = 60
    front_panel_interval: Annotated[
        float,
        Field(gt=0, le=60, description="Blink interval in seconds"),
    ] = 5.0
    reset_command: Annotated[
        str | None,
        Field(description="Factory reset command (None = no power manager)"),
    ] = None
    front_panel_led_dir: Annotated[
        Path | None,
        Field(description="LED class directory (None = no front panel)"),
    ] = None


class SettingsError(Exception):
    """Base exception for settings errors."""


class SettingsNotFoundError(SettingsError):
    """Raised when the settings file is not found."""


class SettingsParseError(SettingsError):
    """Raised when the settings file cannot be parsed."""


def load_settings(path: Path | None = None, *, missing_ok: bool = True) -> Settings:
    """Load settings from a TOML file.

    Args:
        path: Path to the settings file. If None, uses the default path.
        missing_ok: Return defaults when the file does not exist.

    Returns:
        Validated Settings object.

    Raises:
        SettingsNotFoundError: If the file doesn't exist and missing_ok is False.
        SettingsParseError: If the TOML syntax is invalid.
        SettingsError: If the content doesn't match the schema.
    """
    settings_path = path or get_settings_path()

    if not settings_path.exists():
        if missing_ok:
            logger.debug("No settings file at %s, using defaults", settings_path)
            return Settings()
        raise SettingsNotFoundError(f"Settings not found: {settings_path}")

    try:
        with open(settings_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise SettingsParseError(f"Invalid TOML syntax: {e}") from e
    except OSError as e:
        raise SettingsError(f"Failed to read settings: {e}") from e

    try:
        return Settings.model_validate(data)
    except (ValueError, ValidationError) as e:
        raise SettingsError(f"Invalid settings content: {e}") from e


def save_settings(settings: Settings, path: Path | None = None) -> Path:
    """Save settings to a TOML file.

    The file is written to a temporary file first and then moved into
    place with os.replace().

    Args:
        settings: The Settings object to save.
        path: Path to save to. If None, uses the default path.

    Returns:
        Path where the settings were saved.

    Raises:
        SettingsError: If the file cannot be written.
        RuntimeError: If the config directory cannot be created.
    """
    if path is None:
        ensure_config_dir()
        settings_path = get_settings_path()
    else:
        settings_path = path
        settings_path.parent.mkdir(parents=True, exist_ok=True)

    # TOML has no null; unset optional values are left out
    data = settings.model_dump(mode="json", exclude_none=True)

    tmp_path: Path | None = None
    try:
        with NamedTemporaryFile(
            mode="wb",
            dir=settings_path.parent,
            delete=False,
            suffix=".tmp",
        ) as f:
            tmp_path = Path(f.name)
            tomli_w.dump(data, f)
        os.replace(str(tmp_path), str(settings_path))
    except OSError as e:
        if tmp_path is not None and tmp_path.exists():
            tmp_path.unlink()
        raise SettingsError(f"Failed to write settings: {e}") from e

    return settings_path
