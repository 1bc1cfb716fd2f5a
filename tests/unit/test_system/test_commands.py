"""
Unit tests for the command execution primitive.
"""

import subprocess
from unittest.mock import Mock, patch

import pytest

from mountkit.system import is_command_available, run_command
from mountkit.validation import ExecutionError

SUBPROCESS_RUN = "mountkit.system.commands.subprocess.run"


@pytest.mark.unit
class TestRunCommand:
    """Test cases for run_command()."""

    @patch(SUBPROCESS_RUN)
    def test_returns_lines_and_status(self, mock_run):
        """Test output lines and exit status."""
        mock_run.return_value = Mock(returncode=0, stdout="/dev/sda1\n", stderr="")
        output, returncode = run_command("findmnt", ["-f", "-n", "-o", "SOURCE", "/"])
        assert output == ["/dev/sda1"]
        assert returncode == 0
        assert mock_run.call_args[0][0] == ["findmnt", "-f", "-n", "-o", "SOURCE", "/"]
        assert mock_run.call_args[1]["stderr"] == subprocess.PIPE
        assert mock_run.call_args[1]["stdin"] == subprocess.DEVNULL

    @patch(SUBPROCESS_RUN)
    def test_merge_stderr(self, mock_run):
        """Test stderr merged into stdout."""
        mock_run.return_value = Mock(returncode=0, stdout="", stderr=None)
        run_command("mount", ["-v"], merge_stderr=True)
        assert mock_run.call_args[1]["stderr"] == subprocess.STDOUT

    @patch(SUBPROCESS_RUN)
    def test_quiet(self, mock_run):
        """Test that quiet discards stderr."""
        mock_run.return_value = Mock(returncode=1, stdout="", stderr=None)
        output, returncode = run_command("mountpoint", ["-q", "/srv"], quiet=True, check=False)
        assert mock_run.call_args[1]["stderr"] == subprocess.DEVNULL
        assert (output, returncode) == ([], 1)

    @patch(SUBPROCESS_RUN)
    def test_nonzero_exit_raises(self, mock_run):
        """Test that a non-zero exit raises ExecutionError."""
        mock_run.return_value = Mock(
            returncode=32, stdout="", stderr="umount: /srv/data: target is busy.\n"
        )
        with pytest.raises(ExecutionError) as exc_info:
            run_command("umount", ["-v", "/srv/data"])
        error = exc_info.value
        assert error.command == "umount"
        assert error.arguments == ["-v", "/srv/data"]
        assert error.returncode == 32
        assert error.output == ["umount: /srv/data: target is busy."]
        assert "umount -v /srv/data" in str(error)

    @patch(SUBPROCESS_RUN)
    def test_nonzero_exit_without_check(self, mock_run):
        """Test a non-zero exit with check disabled."""
        mock_run.return_value = Mock(returncode=2, stdout="partial\n", stderr="")
        assert run_command("awk", ["{print $4}"], check=False) == (["partial"], 2)

    @patch(SUBPROCESS_RUN, side_effect=FileNotFoundError(2, "No such file or directory"))
    def test_missing_program(self, mock_run):
        """Test that a missing program raises with exit code -1."""
        with pytest.raises(ExecutionError) as exc_info:
            run_command("findmnt", ["/"], check=False)
        assert exc_info.value.returncode == -1

    def test_real_process(self):
        """Test running a real process."""
        output, returncode = run_command("echo", ["hello", "world"])
        assert output == ["hello world"]
        assert returncode == 0

    def test_real_failure(self):
        """Test a real failing process."""
        with pytest.raises(ExecutionError) as exc_info:
            run_command("false")
        assert exc_info.value.returncode == 1


@pytest.mark.unit
class TestIsCommandAvailable:
    """Test cases for is_command_available()."""

    def test_available(self):
        """Test a program on PATH."""
        assert is_command_available("sh") is True

    def test_missing(self):
        """Test a program not on PATH."""
        assert is_command_available("definitely-not-a-real-command-xyz") is False
