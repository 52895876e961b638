"""
Toolchain identity and installation.

This package defines the Toolchain value types and the operations that
install, configure, and remove them through rustup.
"""

from .model import (
    MAIN_TOOLCHAIN_NAME,
    MAIN_TOOLCHAIN,
    Toolchain,
    DistToolchain,
    CIToolchain,
    canonical_identifier,
    toolchain_from_dict,
    parse_toolchain,
)

from .installer import (
    install,
    add_component,
    add_target,
    uninstall,
    ToolchainBinary,
    as_runnable_binary,
    cargo,
    ToolchainInstaller,
)

from .tools import RUSTUP, RUSTUP_TOOLCHAIN_INSTALL_MASTER

__all__ = [
    "MAIN_TOOLCHAIN_NAME",
    "MAIN_TOOLCHAIN",
    "Toolchain",
    "DistToolchain",
    "CIToolchain",
    "canonical_identifier",
    "toolchain_from_dict",
    "parse_toolchain",
    "install",
    "add_component",
    "add_target",
    "uninstall",
    "ToolchainBinary",
    "as_runnable_binary",
    "cargo",
    "ToolchainInstaller",
    "RUSTUP",
    "RUSTUP_TOOLCHAIN_INSTALL_MASTER",
]
