"""
Unit tests for external command execution.
"""

import os
import subprocess
import sys

import pytest

from rustkit.core.command import Binary, Command, ProcessOutput, Runnable
from rustkit.core.exceptions import (
    CommandFailedError,
    CommandSpawnError,
    CommandTimeoutError,
)


class PrefixRunnable(Runnable):
    """Runnable adding a fixed argument prefix."""

    def name(self):
        return Binary("tool")

    def prepare_args(self, args):
        return ["--prefix"] + args


class TestBinary:
    """Test binary selectors."""

    def test_defaults_to_global(self):
        """Test binaries are looked up on PATH by default."""
        assert Binary("git").managed is False

    def test_empty_rejected(self):
        """Test empty executable names are rejected."""
        with pytest.raises(ValueError):
            Binary("")

    def test_str(self):
        """Test str() gives the executable name."""
        assert str(Binary("rustup", managed=True)) == "rustup"

    def test_is_runnable(self):
        """Test a binary runs itself."""
        binary = Binary("git")
        assert binary.name() is binary


class TestCommandArgv:
    """Test argument vector construction."""

    def test_global_binary(self, workspace):
        """Test global binaries are passed by name."""
        assert Command(workspace, Binary("git")).args("status").argv() == [
            "git",
            "status",
        ]

    def test_managed_binary(self, workspace):
        """Test managed binaries resolve into the workspace cargo home."""
        argv = Command(workspace, Binary("rustup", managed=True)).argv()
        expected = workspace.cargo_home / "bin" / "rustup"
        if os.name == "nt":
            expected = expected.with_name("rustup.exe")
        assert argv == [str(expected)]

    def test_args_appended_in_order(self, workspace):
        """Test args() calls accumulate in order."""
        cmd = Command(workspace, Binary("tool")).args("a", "b").args("c")
        assert cmd.argv()[1:] == ["a", "b", "c"]

    def test_args_converted_to_str(self, workspace, tmp_path):
        """Test non-string arguments are converted."""
        cmd = Command(workspace, Binary("tool")).args(tmp_path, 3)
        assert cmd.argv()[1:] == [str(tmp_path), "3"]

    def test_prepared_args_come_first(self, workspace):
        """Test the runnable's prefix comes before caller arguments."""
        cmd = Command(workspace, PrefixRunnable()).args("x")
        assert cmd.argv() == ["tool", "--prefix", "x"]

    def test_prefix_added_once(self, workspace):
        """Test building the argument vector twice does not repeat the prefix."""
        cmd = Command(workspace, PrefixRunnable()).args("x")
        cmd.argv()
        assert cmd.argv() == ["tool", "--prefix", "x"]

    def test_construction_does_not_run(self, workspace, mock_run):
        """Test nothing is spawned until run()."""
        Command(workspace, Binary("tool")).args("x")
        mock_run.assert_not_called()


class TestCommandRun:
    """Test command execution."""

    def test_success(self, workspace, mock_run, completed):
        """Test successful run returns captured output."""
        mock_run.return_value = completed(stdout="one\ntwo\n", stderr="warn\n")

        output = Command(workspace, Binary("tool")).run()

        assert output == ProcessOutput(
            returncode=0, stdout_lines=["one", "two"], stderr_lines=["warn"]
        )

    def test_subprocess_options(self, workspace, mock_run, tmp_path):
        """Test output is captured as text with cwd and timeout forwarded."""
        Command(workspace, Binary("tool")).cwd(tmp_path).timeout(30).run()

        kwargs = mock_run.call_args[1]
        assert kwargs["capture_output"] is True
        assert kwargs["text"] is True
        assert kwargs["encoding"] == "utf-8"
        assert kwargs["errors"] == "replace"
        assert kwargs["cwd"] == tmp_path
        assert kwargs["timeout"] == 30

    def test_environment(self, workspace, mock_run, monkeypatch):
        """Test workspace and command variables override the process environment."""
        monkeypatch.setenv("CARGO_HOME", "/somewhere/else")
        monkeypatch.setenv("RUSTKIT_TEST_KEEP", "1")

        Command(workspace, Binary("tool")).env("RUSTFLAGS", "-Dwarnings").run()

        env = mock_run.call_args[1]["env"]
        assert env["CARGO_HOME"] == str(workspace.cargo_home)
        assert env["RUSTUP_HOME"] == str(workspace.rustup_home)
        assert env["RUSTFLAGS"] == "-Dwarnings"
        assert env["RUSTKIT_TEST_KEEP"] == "1"

    def test_nonzero_exit(self, workspace, mock_run, completed):
        """Test nonzero exit raises CommandFailedError."""
        mock_run.return_value = completed(returncode=3, stderr="boom\n")

        with pytest.raises(CommandFailedError) as exc_info:
            Command(workspace, Binary("tool")).args("x").run()

        error = exc_info.value
        assert error.returncode == 3
        assert error.stderr == "boom\n"
        assert error.argv == ["tool", "x"]
        assert "exit code 3" in str(error)
        assert "boom" in str(error)

    def test_spawn_failure(self, workspace, mock_run):
        """Test OSError on spawn raises CommandSpawnError."""
        mock_run.side_effect = FileNotFoundError("No such file or directory")

        with pytest.raises(CommandSpawnError) as exc_info:
            Command(workspace, Binary("missing")).run()

        assert isinstance(exc_info.value.__cause__, FileNotFoundError)
        assert exc_info.value.argv == ["missing"]

    def test_timeout(self, workspace, mock_run):
        """Test expired timeout raises CommandTimeoutError."""
        mock_run.side_effect = subprocess.TimeoutExpired(cmd=["tool"], timeout=5)

        with pytest.raises(CommandTimeoutError) as exc_info:
            Command(workspace, Binary("tool")).timeout(5).run()

        assert exc_info.value.timeout == 5

    def test_output_logged_at_debug(self, workspace, mock_run, completed, caplog):
        """Test captured output is logged."""
        mock_run.return_value = completed(stdout="compiling foo\n")

        with caplog.at_level("DEBUG", logger="rustkit.core.command"):
            Command(workspace, Binary("tool")).run()

        assert "[stdout] compiling foo" in caplog.text


class TestCommandRealProcess:
    """Run real processes through the command builder."""

    def test_runs_python(self, workspace):
        """Test a real process runs and its output is captured."""
        output = (
            Command(workspace, Binary(sys.executable))
            .args("-c", "import os; print(os.environ['RUSTUP_HOME'])")
            .run()
        )

        assert output.stdout_lines == [str(workspace.rustup_home)]

    def test_real_failure(self, workspace):
        """Test a real nonzero exit is reported."""
        with pytest.raises(CommandFailedError) as exc_info:
            Command(workspace, Binary(sys.executable)).args(
                "-c", "import sys; sys.exit(4)"
            ).run()

        assert exc_info.value.returncode == 4

    def test_real_missing_binary(self, workspace):
        """Test a missing managed binary fails to spawn."""
        with pytest.raises(CommandSpawnError):
            Command(workspace, Binary("rustup", managed=True)).run()

    def test_invalid_utf8_output_replaced(self, workspace):
        """Test output that is not valid UTF-8 is decoded with replacement."""
        output = (
            Command(workspace, Binary(sys.executable))
            .args("-c", "import sys; sys.stdout.buffer.write(b'\\xff\\xfe\\n')")
            .run()
        )

        assert output.stdout_lines == ["\ufffd\ufffd"]
