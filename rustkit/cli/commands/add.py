"""
Component and target command implementation.

Handles 'component add' and 'target add'.
"""

import logging

from rustkit.cli.utils import report_error, resolve_workspace, toolchain_from_args
from rustkit.core.exceptions import RustkitError
from rustkit.toolchain.installer import add_component, add_target

logger = logging.getLogger(__name__)

_ADDERS = {
    "component": add_component,
    "target": add_target,
}


def run(args, thing: str) -> int:
    """
    Run 'component add' or 'target add'.

    Names are added in the order given; the first failure stops the command.

    Args:
        args: Parsed command-line arguments with:
            - toolchain: Toolchain spelling
            - names: Component or target names
        thing: "component" or "target"

    Returns:
        Exit code (0 for success, non-zero for error)
    """
    adder = _ADDERS[thing]

    try:
        toolchain = toolchain_from_args(args)
        workspace = resolve_workspace(args)
        for name in args.names:
            adder(toolchain, workspace, name)
    except (RustkitError, ValueError) as e:
        report_error(e)
        return 1

    logger.info(f"Added {len(args.names)} {thing}(s) to toolchain {toolchain}")
    return 0
