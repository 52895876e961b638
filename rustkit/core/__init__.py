"""
Core functionality for rustkit.

This package contains the foundational modules that other components depend on.
"""

from .workspace import Workspace

from .command import (
    Runnable,
    Binary,
    ProcessOutput,
    Command,
)

from .exceptions import (
    RustkitError,
    WorkspaceError,
    ConfigError,
    CommandError,
    CommandSpawnError,
    CommandFailedError,
    CommandTimeoutError,
    ToolchainError,
    UnsupportedOperationError,
    ExternalCommandError,
    InvalidToolchainRecordError,
)

__all__ = [
    "Workspace",
    "Runnable",
    "Binary",
    "ProcessOutput",
    "Command",
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
