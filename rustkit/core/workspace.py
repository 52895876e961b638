"""
Workspace directory management for rustkit.

A workspace scopes where toolchains are installed. External tools run inside
it with ``CARGO_HOME`` and ``RUSTUP_HOME`` pointing at workspace-local
directories, so the toolchain registry never touches the user's own setup.

Directory Structure:
    <root>/
        - cargo-home/     : CARGO_HOME, managed binaries live in bin/
        - rustup-home/    : RUSTUP_HOME, the toolchain registry
"""

import logging
from pathlib import Path, PurePath
from typing import Dict

from rustkit.core.exceptions import WorkspaceError

logger = logging.getLogger(__name__)


class Workspace:
    """
    Sandboxed environment in which external commands run.

    Example:
        >>> workspace = Workspace(Path("/var/lib/builds")).init()
        >>> workspace.rustup_home
        PosixPath('/var/lib/builds/rustup-home')

    Attributes:
        root: Root directory of the workspace
    """

    def __init__(self, root: Path):
        """
        Initialize workspace handle.

        Args:
            root: Root directory of the workspace (created by init())

        Raises:
            WorkspaceError: If root exists and is not a directory
        """
        if not isinstance(root, (Path, PurePath)):
            root = Path(root)
        if root.exists() and not root.is_dir():
            raise WorkspaceError(
                f"Workspace root is not a directory: {root}. "
                f"Expected a valid directory path."
            )
        self.root = Path(root).resolve()

    @property
    def cargo_home(self) -> Path:
        """CARGO_HOME used by commands run in this workspace."""
        return self.root / "cargo-home"

    @property
    def rustup_home(self) -> Path:
        """RUSTUP_HOME used by commands run in this workspace."""
        return self.root / "rustup-home"

    def environment(self) -> Dict[str, str]:
        """Environment variables that scope external tools to this workspace."""
        return {
            "CARGO_HOME": str(self.cargo_home),
            "RUSTUP_HOME": str(self.rustup_home),
        }

    def init(self) -> "Workspace":
        """
        Create the workspace directory structure.

        Safe to call multiple times.

        Returns:
            The workspace itself, for chaining

        Raises:
            WorkspaceError: If directories cannot be created
        """
        try:
            for path in (self.root, self.cargo_home / "bin", self.rustup_home):
                path.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise WorkspaceError(
                f"Failed to create workspace at {self.root}: {e}"
            ) from e

        logger.debug(f"Workspace ready at {self.root}")
        return self

    def __repr__(self) -> str:
        return f"Workspace({str(self.root)!r})"
