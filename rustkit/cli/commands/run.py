"""
Run command implementation.

Runs a rustup proxy binary (cargo by default) with a toolchain.
"""

import logging

from rustkit.cli.utils import report_error, resolve_workspace, toolchain_from_args
from rustkit.core.command import Command
from rustkit.core.exceptions import CommandFailedError, RustkitError
from rustkit.toolchain.installer import as_runnable_binary

logger = logging.getLogger(__name__)


def run(args) -> int:
    """
    Run the run command.

    Args:
        args: Parsed command-line arguments with:
            - toolchain: Toolchain spelling
            - bin: Proxy binary name
            - tool_args: Arguments for the binary

    Returns:
        Exit code of the tool, or 1 if it could not be run
    """
    tool_args = list(args.tool_args or [])

    try:
        toolchain = toolchain_from_args(args)
        workspace = resolve_workspace(args)
        command = Command(workspace, as_runnable_binary(toolchain, args.bin))
        output = command.args(*tool_args).run()
    except CommandFailedError as e:
        report_error(e)
        return e.returncode
    except (RustkitError, ValueError) as e:
        report_error(e)
        return 1

    for line in output.stdout_lines:
        print(line)
    return 0
