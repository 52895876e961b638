"""
Sync command implementation.

Installs every toolchain listed in rustkit.yaml together with its
components and targets.
"""

import logging

from rustkit.cli.utils import load_config, report_error, resolve_workspace
from rustkit.core.exceptions import RustkitError
from rustkit.toolchain.installer import ToolchainInstaller

logger = logging.getLogger(__name__)


def run(args) -> int:
    """
    Run the sync command.

    Toolchains are processed in declaration order; the first failure stops
    the command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 for success, non-zero for error)
    """
    try:
        config = load_config(args, required=True)
        installer = ToolchainInstaller(resolve_workspace(args, config))

        if not config.toolchains:
            logger.warning("No toolchains configured, nothing to do")
            return 0

        for entry in config.toolchains:
            installer.sync(entry)
    except RustkitError as e:
        report_error(e)
        return 1

    logger.info(f"Synced {len(config.toolchains)} toolchain(s)")
    return 0
