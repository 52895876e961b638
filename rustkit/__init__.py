"""
rustkit - Rust toolchain management for build sandboxes.

Toolchains are immutable values (DistToolchain, CIToolchain) that are
installed, configured and removed inside a Workspace by driving rustup and
rustup-toolchain-install-master.
"""

from rustkit.core.workspace import Workspace
from rustkit.toolchain import (
    MAIN_TOOLCHAIN,
    Toolchain,
    DistToolchain,
    CIToolchain,
    ToolchainInstaller,
)

__all__ = [
    "Workspace",
    "MAIN_TOOLCHAIN",
    "Toolchain",
    "DistToolchain",
    "CIToolchain",
    "ToolchainInstaller",
]
