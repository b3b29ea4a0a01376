"""Pytest configuration and shared fixtures.

This module contains fixtures used across all test modules.
"""

from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest
import tomli_w


@pytest.fixture
def audit_config_text() -> str:
    """Sample audit config in the platform's format."""
    return """[netflix]
# cached titles and settings
/opt/netflix/*
$SD_CARD_MOUNT_PATH/netflix/*

[home network]
/opt/hn_service_settings.conf
"""


@pytest.fixture
def write_settings(tmp_path: Path) -> Callable[..., Path]:
    """Factory writing a settings file and returning its path."""

    def _write(**values: Any) -> Path:
        path = tmp_path / "settings.toml"
        data = {
            key: str(value) if isinstance(value, Path) else value
            for key, value in values.items()
        }
        path.write_bytes(tomli_w.dumps(data).encode())
        return path

    return _write
