"""Unit tests for audit config parsing."""

from pathlib import Path

import pytest

from warehousectl.audit.config import ConfigurationError, load_patterns, parse_patterns


class TestParsePatterns:
    """Tests for parse_patterns."""

    def test_filters_comments_sections_and_blanks(self) -> None:
        """Comments, section headers and blank lines are ignored."""
        lines = [
            "[netflix]\n",
            "# cached titles\n",
            "   /opt/netflix/*   \n",
            "\n",
            "   \n",
            "  # indented comment\n",
            "$SD_CARD_MOUNT_PATH/netflix/*\n",
            "/opt/hn_service_settings.conf",
        ]

        assert parse_patterns(lines) == [
            "/opt/netflix/*",
            "$SD_CARD_MOUNT_PATH/netflix/*",
            "/opt/hn_service_settings.conf",
        ]

    def test_platform_config(self, audit_config_text: str) -> None:
        """The shipped config format yields one pattern per path line."""
        patterns = parse_patterns(audit_config_text.splitlines())

        assert patterns == [
            "/opt/netflix/*",
            "$SD_CARD_MOUNT_PATH/netflix/*",
            "/opt/hn_service_settings.conf",
        ]

    def test_hash_inside_path_kept(self) -> None:
        """Only a leading '#' marks a comment."""
        assert parse_patterns(["/opt/a#b"]) == ["/opt/a#b"]


class TestLoadPatterns:
    """Tests for load_patterns."""

    def test_loads_file(self, tmp_path: Path) -> None:
        """Patterns are read in file order."""
        config = tmp_path / "cust-data.conf"
        config.write_text("[x]\n/opt/b\n/opt/a\n")

        assert load_patterns(config) == ["/opt/b", "/opt/a"]

    def test_missing_file(self, tmp_path: Path) -> None:
        """A missing file is a configuration error."""
        config = tmp_path / "missing.conf"

        with pytest.raises(ConfigurationError, match="Can't open file"):
            load_patterns(config)

    def test_empty_after_filtering(self, tmp_path: Path) -> None:
        """A file with only comments is a configuration error."""
        config = tmp_path / "cust-data.conf"
        config.write_text("# nothing\n[section]\n\n")

        with pytest.raises(ConfigurationError, match="doesn't have any lines with paths"):
            load_patterns(config)
