"""YAML configuration parser for rustkit.

This module provides parsing and validation for rustkit.yaml configuration files.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import List
import logging

import yaml

from rustkit.core.exceptions import ConfigError, InvalidToolchainRecordError
from rustkit.toolchain.model import CIToolchain, Toolchain, toolchain_from_dict

logger = logging.getLogger(__name__)

CONFIG_FILE_NAME = "rustkit.yaml"

DEFAULT_WORKSPACE_DIR = ".rustkit"


@dataclass
class ToolchainEntry:
    """Configuration for a single toolchain."""

    toolchain: Toolchain
    components: List[str] = field(default_factory=list)  # e.g. 'clippy', 'rustfmt'
    targets: List[str] = field(default_factory=list)  # e.g. 'wasm32-unknown-unknown'


@dataclass
class RustkitConfig:
    """Complete rustkit configuration."""

    version: int
    workspace: Path
    toolchains: List[ToolchainEntry] = field(default_factory=list)


def parse_config(config_path: Path) -> RustkitConfig:
    """
    Parse rustkit.yaml configuration file.

    Args:
        config_path: Path to rustkit.yaml

    Returns:
        Parsed and validated configuration

    Raises:
        ConfigError: If configuration is invalid
    """
    if not config_path.exists():
        raise ConfigError(f"Configuration file not found: {config_path}")

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML syntax: {e}") from e

    if data is None:
        raise ConfigError("Configuration file is empty")

    if not isinstance(data, dict):
        raise ConfigError("Configuration must be a mapping")

    logger.debug(f"Loaded configuration from {config_path}")

    return _parse_and_validate(data, config_path.resolve().parent)


def _parse_and_validate(data: dict, base_dir: Path) -> RustkitConfig:
    """Parse and validate configuration data."""
    if "version" not in data:
        raise ConfigError("Missing required field: version")

    if data["version"] != 1:
        raise ConfigError(f"Unsupported version: {data['version']} (expected 1)")

    workspace = Path(data.get("workspace", DEFAULT_WORKSPACE_DIR))
    if not workspace.is_absolute():
        workspace = base_dir / workspace

    toolchains_data = data.get("toolchains", [])
    if not isinstance(toolchains_data, list):
        raise ConfigError("toolchains must be a list")

    entries = []
    seen = set()

    for tc_data in toolchains_data:
        entry = _parse_toolchain_entry(tc_data)

        toolchain_id = entry.toolchain.rustup_name
        if toolchain_id in seen:
            raise ConfigError(f"Duplicate toolchain: {toolchain_id}")

        seen.add(toolchain_id)
        entries.append(entry)

    return RustkitConfig(
        version=data["version"],
        workspace=workspace,
        toolchains=entries,
    )


def _parse_toolchain_entry(data: dict) -> ToolchainEntry:
    """Parse toolchain entry."""
    if not isinstance(data, dict):
        raise ConfigError(f"Toolchain entry must be a mapping, got: {data!r}")

    record = dict(data)
    components = _parse_name_list(record.pop("components", []), "components")
    targets = _parse_name_list(record.pop("targets", []), "targets")

    # alt builds are opt-in
    if record.get("type") == "ci":
        record.setdefault("alt", False)

    try:
        toolchain = toolchain_from_dict(record)
    except InvalidToolchainRecordError as e:
        raise ConfigError(f"Invalid toolchain entry: {e}") from e

    if isinstance(toolchain, CIToolchain) and (components or targets):
        raise ConfigError(
            f"CI toolchain {toolchain} cannot list components or targets"
        )

    return ToolchainEntry(toolchain=toolchain, components=components, targets=targets)


def _parse_name_list(value, field_name: str) -> List[str]:
    """Parse a list of component or target names."""
    if not isinstance(value, list) or not all(
        isinstance(item, str) and item for item in value
    ):
        raise ConfigError(f"{field_name} must be a list of non-empty strings")
    return list(value)
