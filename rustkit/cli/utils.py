"""
Shared utilities for CLI commands.

Provides common functionality used across multiple CLI commands to
ensure consistent behavior.
"""

import logging
import sys
from pathlib import Path
from typing import Optional

from rustkit.config.parser import (
    CONFIG_FILE_NAME,
    DEFAULT_WORKSPACE_DIR,
    RustkitConfig,
    parse_config,
)
from rustkit.core.workspace import Workspace
from rustkit.toolchain.model import Toolchain, parse_toolchain

logger = logging.getLogger(__name__)


# ============================================================================
# Configuration Management
# ============================================================================


def resolve_config_path(args) -> Path:
    """
    Get the configuration file path for a command.

    Args:
        args: Parsed arguments with optional ``config`` field

    Returns:
        --config if given, otherwise ./rustkit.yaml
    """
    config = getattr(args, "config", None)
    if config:
        return Path(config)
    return Path.cwd() / CONFIG_FILE_NAME


def load_config(args, required: bool = False) -> Optional[RustkitConfig]:
    """
    Load the configuration file for a command.

    Args:
        args: Parsed arguments
        required: If True, a missing file is an error

    Returns:
        Parsed configuration, or None if the file doesn't exist and isn't required

    Raises:
        ConfigError: If the file is invalid, or missing while required
    """
    config_path = resolve_config_path(args)
    if not config_path.exists() and not required:
        logger.debug(f"Config file not found (optional): {config_path}")
        return None
    return parse_config(config_path)


# ============================================================================
# Workspace and Toolchain Resolution
# ============================================================================


def resolve_workspace(args, config: Optional[RustkitConfig] = None) -> Workspace:
    """
    Resolve and initialize the workspace for a command.

    Precedence: --workspace, then the config file, then ./.rustkit.

    Args:
        args: Parsed arguments with optional ``workspace`` field
        config: Already loaded configuration (loaded on demand if None)

    Returns:
        Initialized workspace
    """
    workspace_dir = getattr(args, "workspace", None)
    if not workspace_dir:
        if config is None:
            config = load_config(args)
        if config is not None:
            workspace_dir = config.workspace
        else:
            workspace_dir = Path.cwd() / DEFAULT_WORKSPACE_DIR

    logger.debug(f"Using workspace: {workspace_dir}")
    return Workspace(Path(workspace_dir)).init()


def toolchain_from_args(args) -> Toolchain:
    """
    Get the toolchain named on the command line.

    Raises:
        ValueError: If the toolchain spelling is invalid
    """
    return parse_toolchain(args.toolchain)


# ============================================================================
# Output
# ============================================================================


def print_error(message: str, details: Optional[str] = None):
    """
    Print error message to stderr in consistent format.

    Args:
        message: Main error message
        details: Optional additional details
    """
    print(f"ERROR: {message}", file=sys.stderr)
    if details:
        print(f"  {details}", file=sys.stderr)


def report_error(error: BaseException):
    """Print an error together with its chain of causes."""
    causes = []
    cause = error.__cause__
    while cause is not None:
        causes.append(f"caused by: {cause}")
        cause = cause.__cause__
    print_error(str(error), "\n  ".join(causes) or None)
