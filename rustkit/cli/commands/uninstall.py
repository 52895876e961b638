"""
Uninstall command implementation.

Removes a toolchain from the workspace.
"""

import logging

from rustkit.cli.utils import report_error, resolve_workspace, toolchain_from_args
from rustkit.core.exceptions import RustkitError
from rustkit.toolchain.installer import uninstall

logger = logging.getLogger(__name__)


def run(args) -> int:
    """
    Run the uninstall command.

    Args:
        args: Parsed command-line arguments with:
            - toolchain: Toolchain spelling

    Returns:
        Exit code (0 for success, non-zero for error)
    """
    try:
        toolchain = toolchain_from_args(args)
        workspace = resolve_workspace(args)
        uninstall(toolchain, workspace)
    except (RustkitError, ValueError) as e:
        report_error(e)
        return 1

    logger.info(f"Toolchain {toolchain} uninstalled")
    return 0
