"""
rustkit CLI argument parser.

This module implements the command-line interface for rustkit using argparse.
"""

import argparse
import importlib
import logging
import sys
from pathlib import Path
from typing import List, Optional

# Get version from package
try:
    from importlib.metadata import version

    __version__ = version("rustkit")
except Exception:
    __version__ = "0.1.0"

logger = logging.getLogger(__name__)

TOOLCHAIN_HELP = "Toolchain name (e.g. stable, nightly-2024-01-01) or ci:<sha>[-alt]"


class CLI:
    """rustkit command-line interface."""

    def __init__(self):
        """Initialize CLI with argument parser."""
        self.parser = self._create_parser()

    def _create_parser(self) -> argparse.ArgumentParser:
        """
        Create argument parser with all subcommands.

        Returns:
            Configured ArgumentParser instance
        """
        parser = argparse.ArgumentParser(
            prog="rustkit",
            description="rustkit - Rust toolchain management for build sandboxes",
            epilog='Use "rustkit COMMAND --help" for command-specific help',
            formatter_class=argparse.RawDescriptionHelpFormatter,
        )

        # Global options
        parser.add_argument(
            "--version", action="version", version=f"rustkit {__version__}"
        )
        parser.add_argument(
            "--verbose", "-v", action="store_true", help="Enable verbose output"
        )
        parser.add_argument(
            "--quiet",
            "-q",
            action="store_true",
            help="Enable minimal output (errors only)",
        )
        parser.add_argument(
            "--config",
            type=Path,
            metavar="PATH",
            help="Path to configuration file (default: ./rustkit.yaml)",
        )
        parser.add_argument(
            "--workspace",
            type=Path,
            metavar="PATH",
            help="Workspace directory (default: from config, else ./.rustkit)",
        )

        # Subcommands
        subparsers = parser.add_subparsers(
            dest="command", help="Available commands", metavar="COMMAND"
        )

        self._add_install_command(subparsers)
        self._add_uninstall_command(subparsers)
        self._add_component_command(subparsers)
        self._add_target_command(subparsers)
        self._add_run_command(subparsers)
        self._add_show_command(subparsers)
        self._add_sync_command(subparsers)

        return parser

    def _add_install_command(self, subparsers):
        """Add 'install' subcommand."""
        parser = subparsers.add_parser(
            "install",
            help="Install a toolchain",
            description="Install a toolchain into the workspace",
        )
        parser.add_argument("toolchain", metavar="TOOLCHAIN", help=TOOLCHAIN_HELP)

    def _add_uninstall_command(self, subparsers):
        """Add 'uninstall' subcommand."""
        parser = subparsers.add_parser(
            "uninstall",
            help="Uninstall a toolchain",
            description="Remove a toolchain from the workspace, freeing disk space",
        )
        parser.add_argument("toolchain", metavar="TOOLCHAIN", help=TOOLCHAIN_HELP)

    def _add_component_command(self, subparsers):
        """Add 'component' subcommand with sub-subcommands."""
        parser = subparsers.add_parser(
            "component",
            help="Manage toolchain components",
            description="Manage components (clippy, rustfmt, ...) of a toolchain",
        )
        component_subparsers = parser.add_subparsers(
            dest="component_command", help="Component commands", metavar="COMMAND"
        )
        add_parser = component_subparsers.add_parser(
            "add", help="Add components to a toolchain"
        )
        add_parser.add_argument("toolchain", metavar="TOOLCHAIN", help=TOOLCHAIN_HELP)
        add_parser.add_argument(
            "names", nargs="+", metavar="NAME", help="Component name(s)"
        )

    def _add_target_command(self, subparsers):
        """Add 'target' subcommand with sub-subcommands."""
        parser = subparsers.add_parser(
            "target",
            help="Manage toolchain targets",
            description="Manage compilation targets of a toolchain",
        )
        target_subparsers = parser.add_subparsers(
            dest="target_command", help="Target commands", metavar="COMMAND"
        )
        add_parser = target_subparsers.add_parser(
            "add", help="Add targets to a toolchain"
        )
        add_parser.add_argument("toolchain", metavar="TOOLCHAIN", help=TOOLCHAIN_HELP)
        add_parser.add_argument(
            "names", nargs="+", metavar="NAME", help="Target triple(s)"
        )

    def _add_run_command(self, subparsers):
        """Add 'run' subcommand."""
        parser = subparsers.add_parser(
            "run",
            help="Run a tool with a toolchain",
            description="Run cargo (or another rustup proxy) with a toolchain",
            usage="rustkit run [--bin NAME] TOOLCHAIN [ARGS ...] [-- ARGS ...]",
            epilog="Everything after -- is passed to the tool unchanged; "
            "use it for tool arguments that start with '-'.",
        )
        parser.add_argument("toolchain", metavar="TOOLCHAIN", help=TOOLCHAIN_HELP)
        parser.add_argument(
            "--bin",
            default="cargo",
            metavar="NAME",
            help="Proxy binary to run (default: cargo)",
        )
        parser.add_argument(
            "tool_args",
            nargs="*",
            metavar="ARGS",
            help="Arguments passed to the tool",
        )

    def _add_show_command(self, subparsers):
        """Add 'show' subcommand."""
        parser = subparsers.add_parser(
            "show",
            help="Show a toolchain record",
            description="Print the configuration record of a toolchain",
        )
        parser.add_argument("toolchain", metavar="TOOLCHAIN", help=TOOLCHAIN_HELP)

    def _add_sync_command(self, subparsers):
        """Add 'sync' subcommand."""
        subparsers.add_parser(
            "sync",
            help="Install configured toolchains",
            description="Install every toolchain, component and target "
            "listed in rustkit.yaml",
        )

    def parse_args(self, args: Optional[List[str]] = None):
        """
        Parse command-line arguments.

        Arguments after the first ``--`` are not parsed; they are appended to
        ``tool_args`` of the 'run' command.

        Args:
            args: Arguments to parse (uses sys.argv if None)

        Returns:
            Parsed arguments namespace
        """
        args = list(sys.argv[1:] if args is None else args)
        passthrough: List[str] = []
        if "--" in args:
            split = args.index("--")
            args, passthrough = args[:split], args[split + 1 :]

        parsed = self.parser.parse_args(args)

        if passthrough:
            if parsed.command != "run":
                self.parser.error(
                    f"unrecognized arguments: -- {' '.join(passthrough)}"
                )
            parsed.tool_args = list(parsed.tool_args) + passthrough

        return parsed

    def run(self, args: Optional[List[str]] = None) -> int:
        """
        Run CLI with given arguments.

        Args:
            args: Arguments to parse (uses sys.argv if None)

        Returns:
            Exit code (0 for success, non-zero for error)
        """
        parsed_args = self.parse_args(args)

        # Configure logging
        self._configure_logging(parsed_args)

        # Check if command specified
        if not parsed_args.command:
            self.parser.print_help()
            return 1

        # Dispatch to command handler
        try:
            return self._dispatch_command(parsed_args)
        except KeyboardInterrupt:
            logger.info("Operation cancelled by user")
            return 130  # Standard exit code for SIGINT
        except Exception as e:
            logger.error(f"Error: {e}")
            if parsed_args.verbose:
                import traceback

                traceback.print_exc()
            return 1

    def _configure_logging(self, args):
        """
        Configure logging based on verbose/quiet flags.

        Args:
            args: Parsed arguments with verbose/quiet flags
        """
        if args.verbose:
            level = logging.DEBUG
            format_str = "%(levelname)s [%(name)s] %(message)s"
        elif args.quiet:
            level = logging.ERROR
            format_str = "%(levelname)s: %(message)s"
        else:
            level = logging.INFO
            format_str = "%(message)s"

        logging.basicConfig(
            level=level,
            format=format_str,
            force=True,  # Reconfigure if already configured
        )

    def _dispatch_command(self, args) -> int:
        """
        Dispatch to appropriate command handler.

        Args:
            args: Parsed arguments with command field

        Returns:
            Exit code from command handler
        """
        # Commands with sub-commands
        if args.command in ("component", "target"):
            return self._dispatch_add_command(args)

        # Command module mapping
        command_map = {
            "install": "rustkit.cli.commands.install",
            "uninstall": "rustkit.cli.commands.uninstall",
            "run": "rustkit.cli.commands.run",
            "show": "rustkit.cli.commands.show",
            "sync": "rustkit.cli.commands.sync",
        }

        module_name = command_map.get(args.command)
        if not module_name:
            logger.error(f"Unknown command: {args.command}")
            return 1

        module = importlib.import_module(module_name)
        return module.run(args)

    def _dispatch_add_command(self, args) -> int:
        """
        Dispatch 'component add' and 'target add'.

        Args:
            args: Parsed arguments with component_command/target_command field

        Returns:
            Exit code from command handler
        """
        sub_command = getattr(args, f"{args.command}_command", None)
        if sub_command != "add":
            logger.error(f"No {args.command} sub-command specified")
            self.parser.parse_args([args.command, "--help"])
            return 1

        from rustkit.cli.commands import add

        return add.run(args, thing=args.command)


def main():
    """Main entry point for CLI."""
    cli = CLI()
    sys.exit(cli.run())


if __name__ == "__main__":
    main()
