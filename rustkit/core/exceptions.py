"""
Centralized exception hierarchy for rustkit.

This module defines all custom exceptions used across the codebase
to provide clear exception semantics.
"""

from typing import Optional, Sequence


# ============================================================================
# Base Exceptions
# ============================================================================


class RustkitError(Exception):
    """Base exception for all rustkit errors."""

    pass


class WorkspaceError(RustkitError):
    """Raised when the workspace directory layout cannot be used."""

    pass


class ConfigError(RustkitError):
    """Configuration parsing or validation error."""

    pass


# ============================================================================
# Command Exceptions
# ============================================================================


class CommandError(RustkitError):
    """Base exception for external command failures."""

    def __init__(self, message: str, argv: Optional[Sequence[str]] = None):
        self.argv = list(argv) if argv is not None else []
        super().__init__(message)


class CommandSpawnError(CommandError):
    """Raised when the external command could not be started."""

    pass


class CommandFailedError(CommandError):
    """Raised when the external command exited with a nonzero status."""

    def __init__(self, argv: Sequence[str], returncode: int, stderr: str = ""):
        self.returncode = returncode
        self.stderr = stderr
        msg = f"command `{' '.join(argv)}` failed with exit code {returncode}"
        if stderr.strip():
            msg += f"\n{stderr.rstrip()}"
        super().__init__(msg, argv)


class CommandTimeoutError(CommandError):
    """Raised when the external command did not finish within its timeout."""

    def __init__(self, argv: Sequence[str], timeout: float):
        self.timeout = timeout
        super().__init__(
            f"command `{' '.join(argv)}` timed out after {timeout} seconds", argv
        )


# ============================================================================
# Toolchain Exceptions
# ============================================================================


class ToolchainError(RustkitError):
    """Base exception for toolchain-related errors."""

    pass


class UnsupportedOperationError(ToolchainError):
    """Raised when an operation is not available for a toolchain variant."""

    pass


class ExternalCommandError(ToolchainError):
    """
    Raised when the external tool backing a toolchain operation fails.

    The underlying CommandError is available as ``__cause__``.

    Attributes:
        operation: What was attempted (e.g. "install toolchain")
        toolchain_id: Canonical identifier of the toolchain
        tool: Name of the external tool that was invoked
    """

    def __init__(self, message: str, operation: str, toolchain_id: str, tool: str):
        self.operation = operation
        self.toolchain_id = toolchain_id
        self.tool = tool
        super().__init__(message)


class InvalidToolchainRecordError(ToolchainError, ValueError):
    """Raised when a serialized toolchain record cannot be decoded."""

    pass


__all__ = [
    "RustkitError",
    "WorkspaceError",
    "ConfigError",
    "CommandError",
    "CommandSpawnError",
    "CommandFailedError",
    "CommandTimeoutError",
    "ToolchainError",
    "UnsupportedOperationError",
    "ExternalCommandError",
    "InvalidToolchainRecordError",
]
