"""
Unit tests for privileged command execution.
"""

import subprocess
from unittest.mock import Mock, patch

import pytest

from droidprocs.system.commands import CommandResult, SuCommandRunner, run_command
from droidprocs.system.packages import StaticPackageService


@pytest.mark.unit
class TestRunCommand:
    """Test cases for the subprocess wrapper."""

    @patch("droidprocs.system.commands.subprocess.run")
    def test_success(self, mock_run):
        """Test capture of exit code and output."""
        mock_run.return_value = Mock(returncode=0, stdout="line1\nline2\n", stderr="")

        assert run_command(["ps"]) == (0, "line1\nline2\n", "")
        args, kwargs = mock_run.call_args
        assert args[0] == ["ps"]
        assert kwargs["capture_output"] is True
        assert kwargs["check"] is False
        assert "timeout" not in kwargs

    @patch("droidprocs.system.commands.subprocess.run", side_effect=FileNotFoundError("su"))
    def test_missing_binary(self, mock_run):
        """Test that a missing binary is reported as exit code -1."""
        exit_code, stdout, stderr = run_command(["su", "-c", "id"])

        assert exit_code == -1
        assert stdout == ""
        assert "su" in stderr

    @patch("droidprocs.system.commands.subprocess.run", side_effect=PermissionError("denied"))
    def test_os_error(self, mock_run):
        """Test that other OS errors are reported as exit code -1."""
        assert run_command(["su"])[0] == -1

    def test_real_process(self):
        """Test a real command through the shell-free path."""
        exit_code, stdout, _ = run_command(["sh", "-c", "echo hello"])
        assert exit_code == 0
        assert stdout.strip() == "hello"


@pytest.mark.unit
class TestSuCommandRunner:
    """Test cases for the default privileged runner."""

    @patch("droidprocs.system.commands.run_command")
    def test_run_wraps_in_su(self, mock_run_command):
        """Test the command line and the split output."""
        mock_run_command.return_value = (0, "USER PID\nroot 1\n", "")

        result = SuCommandRunner("su").run("toolbox ps -p -P -x -c")

        mock_run_command.assert_called_once_with(["su", "-c", "toolbox ps -p -P -x -c"])
        assert result == CommandResult(exit_code=0, stdout=["USER PID", "root 1"], stderr="")
        assert result.is_successful is True

    @patch("droidprocs.system.commands.run_command")
    def test_denied(self, mock_run_command):
        """Test that a denied request is an unsuccessful result."""
        mock_run_command.return_value = (1, "", "Permission denied")

        result = SuCommandRunner().run("id")

        assert result.is_successful is False
        assert result.stdout == []

    @patch("droidprocs.system.commands.subprocess.run", side_effect=subprocess.SubprocessError("boom"))
    def test_subprocess_error_propagates(self, mock_run):
        """Test that unexpected subprocess failures are not swallowed."""
        with pytest.raises(subprocess.SubprocessError):
            SuCommandRunner().run("id")


@pytest.mark.unit
class TestStaticPackageService:
    """Test cases for the table-backed package service."""

    def test_lookups(self):
        """Test launch intent and label lookups."""
        service = StaticPackageService(
            launch_intents={"com.example.app": "com.example.app/.Main"},
            labels={"com.example.app": "Example"},
        )

        assert service.get_launch_intent("com.example.app") == "com.example.app/.Main"
        assert service.get_launch_intent("com.other") is None
        assert service.get_label("com.example.app") == "Example"
        assert service.get_label("com.other") is None
