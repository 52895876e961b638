"""
Show command implementation.

Prints the configuration record of a toolchain as YAML, ready to paste into
rustkit.yaml.
"""

import yaml

from rustkit.cli.utils import report_error, toolchain_from_args


def run(args) -> int:
    """
    Run the show command.

    Args:
        args: Parsed command-line arguments with:
            - toolchain: Toolchain spelling

    Returns:
        Exit code (0 for success, non-zero for error)
    """
    try:
        toolchain = toolchain_from_args(args)
    except ValueError as e:
        report_error(e)
        return 1

    print(yaml.safe_dump(toolchain.to_dict(), sort_keys=False), end="")
    return 0
