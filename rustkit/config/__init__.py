"""Configuration module for rustkit.

This module provides YAML configuration parsing and validation for rustkit.yaml.
"""

from rustkit.config.parser import (
    CONFIG_FILE_NAME,
    DEFAULT_WORKSPACE_DIR,
    ToolchainEntry,
    RustkitConfig,
    parse_config,
)
from rustkit.core.exceptions import ConfigError

__all__ = [
    "CONFIG_FILE_NAME",
    "DEFAULT_WORKSPACE_DIR",
    "ToolchainEntry",
    "RustkitConfig",
    "ConfigError",
    "parse_config",
]
