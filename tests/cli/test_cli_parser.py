"""
Tests for CLI argument parser.
"""

import pytest
from pathlib import Path
from unittest.mock import patch

from rustkit.cli.parser import CLI


class TestCLIBasics:
    """Test basic CLI functionality."""

    def test_cli_creation(self):
        """Test CLI can be created."""
        cli = CLI()
        assert cli.parser is not None

    def test_no_command_shows_help(self, capsys):
        """Test that running without command shows help."""
        result = CLI().run([])

        assert result == 1
        captured = capsys.readouterr()
        assert "usage:" in captured.out.lower()

    def test_version_flag(self, capsys):
        """Test --version flag."""
        with pytest.raises(SystemExit) as exc_info:
            CLI().run(["--version"])

        assert exc_info.value.code == 0
        assert "rustkit" in capsys.readouterr().out

    def test_global_options(self):
        """Test global options are parsed."""
        args = CLI().parse_args(
            ["-v", "--config", "x.yaml", "--workspace", "/tmp/ws", "sync"]
        )

        assert args.verbose is True
        assert args.quiet is False
        assert args.config == Path("x.yaml")
        assert args.workspace == Path("/tmp/ws")
        assert args.command == "sync"


class TestCommandParsing:
    """Test subcommand parsing."""

    def test_install(self):
        """Test install takes a toolchain."""
        args = CLI().parse_args(["install", "ci:abc-alt"])

        assert args.command == "install"
        assert args.toolchain == "ci:abc-alt"

    def test_install_requires_toolchain(self):
        """Test install without toolchain is an error."""
        with pytest.raises(SystemExit):
            CLI().parse_args(["install"])

    def test_uninstall(self):
        """Test uninstall takes a toolchain."""
        args = CLI().parse_args(["uninstall", "beta"])

        assert args.command == "uninstall"
        assert args.toolchain == "beta"

    def test_component_add(self):
        """Test component add takes a toolchain and names."""
        args = CLI().parse_args(["component", "add", "stable", "clippy", "rustfmt"])

        assert args.command == "component"
        assert args.component_command == "add"
        assert args.toolchain == "stable"
        assert args.names == ["clippy", "rustfmt"]

    def test_target_add(self):
        """Test target add takes a toolchain and names."""
        args = CLI().parse_args(["target", "add", "stable", "wasm32-unknown-unknown"])

        assert args.command == "target"
        assert args.target_command == "add"
        assert args.names == ["wasm32-unknown-unknown"]

    def test_run(self):
        """Test run collects the tool arguments."""
        args = CLI().parse_args(["run", "--bin", "rustc", "beta", "--", "--version"])

        assert args.toolchain == "beta"
        assert args.bin == "rustc"
        assert args.tool_args == ["--version"]

    def test_run_defaults_to_cargo(self):
        """Test run uses cargo by default."""
        args = CLI().parse_args(["run", "beta"])

        assert args.bin == "cargo"
        assert args.tool_args == []

    def test_run_bin_after_toolchain(self):
        """Test --bin is an option wherever it appears before --."""
        args = CLI().parse_args(["run", "stable", "--bin", "rustc", "--", "--version"])

        assert args.toolchain == "stable"
        assert args.bin == "rustc"
        assert args.tool_args == ["--version"]

    def test_run_plain_tool_args(self):
        """Test tool arguments not starting with - need no separator."""
        args = CLI().parse_args(["run", "beta", "build", "--", "--release"])

        assert args.bin == "cargo"
        assert args.tool_args == ["build", "--release"]

    def test_run_passes_later_separators_through(self):
        """Test only the first -- is consumed."""
        args = CLI().parse_args(["run", "beta", "--", "test", "--", "--nocapture"])

        assert args.tool_args == ["test", "--", "--nocapture"]

    def test_separator_rejected_outside_run(self):
        """Test -- with extra arguments is an error for other commands."""
        with pytest.raises(SystemExit):
            CLI().parse_args(["install", "stable", "--", "extra"])


class TestDispatch:
    """Test command dispatch."""

    def test_dispatch_to_module(self):
        """Test commands are routed to their module's run()."""
        with patch("rustkit.cli.commands.install.run", return_value=0) as run:
            result = CLI().run(["install", "stable"])

        assert result == 0
        assert run.call_args[0][0].toolchain == "stable"

    def test_dispatch_component_add(self):
        """Test component add is routed with the thing label."""
        with patch("rustkit.cli.commands.add.run", return_value=0) as run:
            result = CLI().run(["component", "add", "stable", "clippy"])

        assert result == 0
        assert run.call_args[1]["thing"] == "component"

    def test_dispatch_target_add(self):
        """Test target add is routed with the thing label."""
        with patch("rustkit.cli.commands.add.run", return_value=0) as run:
            CLI().run(["target", "add", "stable", "wasm32-wasi"])

        assert run.call_args[1]["thing"] == "target"

    def test_unexpected_error_returns_one(self):
        """Test unexpected exceptions are turned into exit code 1."""
        with patch(
            "rustkit.cli.commands.show.run", side_effect=RuntimeError("boom")
        ):
            assert CLI().run(["show", "stable"]) == 1

    def test_keyboard_interrupt(self):
        """Test cancellation returns 130."""
        with patch(
            "rustkit.cli.commands.sync.run", side_effect=KeyboardInterrupt
        ):
            assert CLI().run(["sync"]) == 130
