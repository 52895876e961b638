"""
External tools driven by the toolchain installer.

Both binaries are managed by the workspace: they are expected in
``<workspace>/cargo-home/bin``.
"""

from rustkit.core.command import Binary

# Toolchain manager for channel releases, components and targets.
RUSTUP = Binary("rustup", managed=True)

# Installer for per-commit CI artifacts of rust-lang/rust.
RUSTUP_TOOLCHAIN_INSTALL_MASTER = Binary(
    "rustup-toolchain-install-master", managed=True
)

__all__ = ["RUSTUP", "RUSTUP_TOOLCHAIN_INSTALL_MASTER"]
