"""Unit tests for the shell-backed device probe."""

import os
import subprocess
import time
from pathlib import Path
from unittest.mock import MagicMock, patch

from warehousectl.audit.probe import PathState, ShellDeviceProbe, build_find_command
from warehousectl.utils.shell import CommandResult


def _ok(stdout: str) -> CommandResult:
    return CommandResult(stdout=stdout, stderr="", returncode=0)


class TestBuildFindCommand:
    """Tests for build_find_command."""

    def test_recursive(self) -> None:
        """Recursive searches have no depth limit."""
        command = build_find_command("/opt/netflix/*", True, Path("/etc/device.properties"))

        assert command == (
            "if [ -r /etc/device.properties ]; then . /etc/device.properties; fi; "
            'fp="/opt/netflix/*"; p=${fp%/*}; f=${fp##*/}; '
            'find $p -mindepth 1 ! -path "*/\\.*" -name "$f" | head -n 10'
        )

    def test_single_level(self) -> None:
        """Non-recursive searches stay in the immediate directory."""
        command = build_find_command("/opt/*.ini", False, Path("/etc/device.properties"))

        assert "-mindepth 1 -maxdepth 1 ! -path" in command

    def test_properties_file_quoted(self) -> None:
        """Unusual properties file paths are shell-quoted."""
        command = build_find_command("/x/*", True, Path("/tmp/my props"))

        assert "'/tmp/my props'" in command


class TestResolveVariable:
    """Tests for ShellDeviceProbe.resolve_variable."""

    @patch("warehousectl.audit.probe.run_shell")
    def test_sources_properties(self, mock_run: MagicMock) -> None:
        """The properties file is sourced and the value echoed."""
        mock_run.return_value = _ok(" /mnt/sd \n")
        probe = ShellDeviceProbe(properties_file=Path("/etc/device.properties"))

        assert probe.resolve_variable("SD_CARD_MOUNT_PATH") == "/mnt/sd"
        command = mock_run.call_args.args[0]
        assert command.startswith("if [ -r /etc/device.properties ]")
        assert command.endswith('echo "$SD_CARD_MOUNT_PATH"')

    @patch("warehousectl.audit.probe.run_shell")
    def test_invalid_name_not_run(self, mock_run: MagicMock) -> None:
        """Names that are not shell identifiers are never executed."""
        probe = ShellDeviceProbe()

        assert probe.resolve_variable("X; reboot") == ""
        mock_run.assert_not_called()

    @patch(
        "warehousectl.audit.probe.run_shell",
        side_effect=subprocess.TimeoutExpired(cmd="sh", timeout=1),
    )
    def test_timeout_gives_empty(self, _mock_run: MagicMock) -> None:
        """A helper timeout resolves to an empty value."""
        assert ShellDeviceProbe().resolve_variable("X") == ""


class TestFind:
    """Tests for ShellDeviceProbe.find."""

    @patch("warehousectl.audit.probe.run_shell")
    def test_splits_output(self, mock_run: MagicMock) -> None:
        """Each output line is one candidate, in find order."""
        mock_run.return_value = _ok("/opt/x/b\n/opt/x/a\n")

        assert ShellDeviceProbe().find("/opt/x/*", True) == ["/opt/x/b", "/opt/x/a"]

    @patch("warehousectl.audit.probe.run_shell")
    def test_short_output_is_no_match(self, mock_run: MagicMock) -> None:
        """Output of one character or less means nothing matched."""
        mock_run.return_value = _ok(" \n")

        assert ShellDeviceProbe().find("/opt/x/*", True) == []

    @patch("warehousectl.audit.probe.run_shell")
    def test_errors_not_reported_as_paths(self, mock_run: MagicMock) -> None:
        """find diagnostics on stderr never become candidates."""
        mock_run.return_value = CommandResult(
            stdout="",
            stderr="find: '/opt/none': No such file or directory",
            returncode=0,
        )

        assert ShellDeviceProbe().find("/opt/none/*", True) == []

    def test_real_find(self, tmp_path: Path) -> None:
        """Hidden entries are skipped and depth follows the pattern."""
        (tmp_path / "a.ini").write_text("")
        (tmp_path / ".hidden.ini").write_text("")
        sub = tmp_path / "sub"
        sub.mkdir()
        (sub / "b.ini").write_text("")
        probe = ShellDeviceProbe(properties_file=tmp_path / "missing.properties")

        flat = probe.find(f"{tmp_path}/*.ini", False)
        deep = probe.find(f"{tmp_path}/*", True)

        assert flat == [str(tmp_path / "a.ini")]
        assert sorted(deep) == sorted(
            [str(tmp_path / "a.ini"), str(sub), str(sub / "b.ini")]
        )


class TestStat:
    """Tests for ShellDeviceProbe.stat."""

    def test_missing_path(self, tmp_path: Path) -> None:
        """Missing paths do not exist."""
        probe = ShellDeviceProbe()

        assert probe.stat(str(tmp_path / "none"), None) == PathState(exists=False)
        assert probe.stat(str(tmp_path / "none"), 10) == PathState(False, False)

    def test_existing_without_threshold(self, tmp_path: Path) -> None:
        """Existing paths exist without an age verdict."""
        target = tmp_path / "a.conf"
        target.write_text("x")

        assert ShellDeviceProbe().stat(str(target), None) == PathState(exists=True)

    def test_age_comparison(self, tmp_path: Path) -> None:
        """Old files are older than the threshold, fresh ones are not."""
        old = tmp_path / "old.conf"
        old.write_text("x")
        past = time.time() - 7200
        os.utime(old, (past, past))
        fresh = tmp_path / "fresh.conf"
        fresh.write_text("x")
        probe = ShellDeviceProbe()

        assert probe.stat(str(old), 3600) == PathState(True, True)
        assert probe.stat(str(fresh), 3600) == PathState(True, False)
