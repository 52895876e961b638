"""
External command execution for rustkit.

Commands run synchronously inside a Workspace: the workspace environment is
merged over the current process environment, output is captured and logged,
and failures are raised as CommandError subclasses.

Example:
    >>> from rustkit.core.command import Binary, Command
    >>> output = Command(workspace, Binary("rustup", managed=True)).args(
    ...     "--version"
    ... ).run()
    >>> print(output.stdout_lines[0])
"""

import logging
import os
import subprocess
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional

from rustkit.core.exceptions import (
    CommandFailedError,
    CommandSpawnError,
    CommandTimeoutError,
)
from rustkit.core.workspace import Workspace

logger = logging.getLogger(__name__)


class Runnable(ABC):
    """
    Something a Command can execute.

    A runnable names the binary to spawn and may transform the argument
    list the command was given.
    """

    @abstractmethod
    def name(self) -> "Binary":
        """
        Get the binary to execute.

        Returns:
            Binary selector
        """
        pass

    def prepare_args(self, args: List[str]) -> List[str]:
        """
        Transform the arguments of a command about to be executed.

        Args:
            args: Arguments passed to Command.args(), in order

        Returns:
            The arguments to execute the binary with
        """
        return args


@dataclass(frozen=True)
class Binary(Runnable):
    """
    Binary selector.

    Attributes:
        executable: File name of the binary
        managed: If True, the binary lives in the workspace's CARGO_HOME/bin;
                 otherwise it is looked up on PATH
    """

    executable: str
    managed: bool = False

    def __post_init__(self):
        """Validate binary selector."""
        if not self.executable:
            raise ValueError("Binary executable cannot be empty")

    def name(self) -> "Binary":
        return self

    def __str__(self) -> str:
        return self.executable


@dataclass
class ProcessOutput:
    """Captured result of a finished command."""

    returncode: int
    stdout_lines: List[str] = field(default_factory=list)
    stderr_lines: List[str] = field(default_factory=list)


class Command:
    """
    Builder for a single external invocation.

    The runnable's prepare_args() is applied to the arguments when the
    argument vector is built, so a prefix it adds always comes first.
    Nothing is spawned until run() is called.
    """

    def __init__(self, workspace: Workspace, runnable: Runnable):
        """
        Initialize command.

        Args:
            workspace: Workspace the command runs in
            runnable: Binary (or binary wrapper) to execute
        """
        self._workspace = workspace
        self._runnable = runnable
        self._binary = runnable.name()
        self._args: List[str] = []
        self._env: Dict[str, str] = {}
        self._cwd: Optional[Path] = None
        self._timeout: Optional[float] = None

    def args(self, *args: str) -> "Command":
        """Append arguments."""
        self._args.extend(str(arg) for arg in args)
        return self

    def env(self, key: str, value: str) -> "Command":
        """Set an environment variable for this command only."""
        self._env[key] = value
        return self

    def cwd(self, path: Path) -> "Command":
        """Set the working directory."""
        self._cwd = Path(path)
        return self

    def timeout(self, seconds: Optional[float]) -> "Command":
        """Set a timeout in seconds (None disables it)."""
        self._timeout = seconds
        return self

    @property
    def binary(self) -> Binary:
        return self._binary

    def argv(self) -> List[str]:
        """
        Get the fully-formed argument vector.

        Returns:
            List with the resolved executable followed by all arguments
        """
        return [self._resolve_executable()] + self._runnable.prepare_args(
            list(self._args)
        )

    def _resolve_executable(self) -> str:
        if not self._binary.managed:
            return self._binary.executable
        name = self._binary.executable
        if os.name == "nt":
            name += ".exe"
        return str(self._workspace.cargo_home / "bin" / name)

    def run(self) -> ProcessOutput:
        """
        Run the command and wait for it to finish.

        Returns:
            Captured output

        Raises:
            CommandSpawnError: If the binary could not be started
            CommandFailedError: If the command exited with nonzero status
            CommandTimeoutError: If the timeout expired
        """
        argv = self.argv()
        env = os.environ.copy()
        env.update(self._workspace.environment())
        env.update(self._env)

        logger.debug(f"Running: {' '.join(argv)}")

        try:
            result = subprocess.run(
                argv,
                capture_output=True,
                text=True,
                encoding="utf-8",
                errors="replace",
                cwd=self._cwd,
                env=env,
                timeout=self._timeout,
            )
        except subprocess.TimeoutExpired as e:
            raise CommandTimeoutError(argv, self._timeout) from e
        except OSError as e:
            raise CommandSpawnError(f"failed to run `{argv[0]}`: {e}", argv) from e

        output = ProcessOutput(
            returncode=result.returncode,
            stdout_lines=(result.stdout or "").splitlines(),
            stderr_lines=(result.stderr or "").splitlines(),
        )
        for line in output.stdout_lines:
            logger.debug(f"[stdout] {line}")
        for line in output.stderr_lines:
            logger.debug(f"[stderr] {line}")

        if result.returncode != 0:
            raise CommandFailedError(argv, result.returncode, result.stderr or "")

        return output

    def __repr__(self) -> str:
        return f"Command({self.argv()!r})"


__all__ = [
    "Runnable",
    "Binary",
    "ProcessOutput",
    "Command",
]
