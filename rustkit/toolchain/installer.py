"""
Toolchain installation and configuration.

Each operation turns a Toolchain into a single invocation of rustup or
rustup-toolchain-install-master inside a Workspace. Nothing is cached
locally: the registry under the workspace's RUSTUP_HOME is the only source
of truth for what is installed.

Example:
    >>> from rustkit.core.command import Command
    >>> from rustkit.core.workspace import Workspace
    >>> from rustkit.toolchain import DistToolchain, add_component, cargo, install
    >>> workspace = Workspace(Path("/var/lib/builds")).init()
    >>> toolchain = DistToolchain("beta")
    >>> install(toolchain, workspace)
    >>> add_component(toolchain, workspace, "clippy")
    >>> Command(workspace, cargo(toolchain)).args("check").run()
"""

import logging
from dataclasses import dataclass
from typing import List

from rustkit.core.command import Binary, Command, Runnable
from rustkit.core.exceptions import (
    CommandError,
    ExternalCommandError,
    UnsupportedOperationError,
)
from rustkit.core.workspace import Workspace
from rustkit.toolchain.model import CIToolchain, DistToolchain, Toolchain
from rustkit.toolchain.tools import RUSTUP, RUSTUP_TOOLCHAIN_INSTALL_MASTER

logger = logging.getLogger(__name__)


def _unsupported_variant(toolchain) -> TypeError:
    return TypeError(f"Unsupported toolchain type: {type(toolchain).__name__}")


def install(toolchain: Toolchain, workspace: Workspace) -> None:
    """
    Download and install the toolchain.

    Args:
        toolchain: Toolchain to install
        workspace: Workspace to install it into

    Raises:
        ExternalCommandError: If the installer fails
    """
    if isinstance(toolchain, DistToolchain):
        _install_from_dist(workspace, toolchain.name)
    elif isinstance(toolchain, CIToolchain):
        _install_from_ci(workspace, toolchain.sha, toolchain.alt)
    else:
        raise _unsupported_variant(toolchain)


def _install_from_dist(workspace: Workspace, name: str) -> None:
    logger.info(f"installing toolchain {name}")
    try:
        Command(workspace, RUSTUP).args("toolchain", "install", name).run()
    except CommandError as e:
        raise ExternalCommandError(
            f"unable to install toolchain {name} via {RUSTUP}",
            operation="install toolchain",
            toolchain_id=name,
            tool=str(RUSTUP),
        ) from e


def _install_from_ci(workspace: Workspace, sha: str, alt: bool) -> None:
    toolchain_id = CIToolchain(sha, alt=alt).rustup_name
    logger.info(f"installing toolchain {toolchain_id}")

    args = [sha, "-c", "cargo"]
    if alt:
        args.append("--alt")

    tool = RUSTUP_TOOLCHAIN_INSTALL_MASTER
    try:
        Command(workspace, tool).args(*args).run()
    except CommandError as e:
        raise ExternalCommandError(
            f"unable to install toolchain {toolchain_id} via {tool}",
            operation="install toolchain",
            toolchain_id=toolchain_id,
            tool=str(tool),
        ) from e


def add_component(toolchain: Toolchain, workspace: Workspace, name: str) -> None:
    """
    Download and install a component (e.g. "clippy") for the toolchain.

    Raises:
        UnsupportedOperationError: If the toolchain is a CI toolchain
        ExternalCommandError: If rustup fails
    """
    _add_rustup_thing(toolchain, workspace, "component", name)


def add_target(toolchain: Toolchain, workspace: Workspace, name: str) -> None:
    """
    Download and install a target (e.g. "wasm32-unknown-unknown") for the toolchain.

    Raises:
        UnsupportedOperationError: If the toolchain is a CI toolchain
        ExternalCommandError: If rustup fails
    """
    _add_rustup_thing(toolchain, workspace, "target", name)


def _add_rustup_thing(
    toolchain: Toolchain, workspace: Workspace, thing: str, name: str
) -> None:
    if isinstance(toolchain, CIToolchain):
        raise UnsupportedOperationError(
            f"installing {thing} on CI toolchains is not supported yet"
        )
    if not isinstance(toolchain, DistToolchain):
        raise _unsupported_variant(toolchain)

    toolchain_id = toolchain.rustup_name
    logger.info(f"installing {thing} {name} for toolchain {toolchain_id}")

    try:
        Command(workspace, RUSTUP).args(
            thing, "add", "--toolchain", toolchain_id, name
        ).run()
    except CommandError as e:
        raise ExternalCommandError(
            f"unable to install {thing} {name} for toolchain {toolchain_id} "
            f"via {RUSTUP}",
            operation=f"install {thing}",
            toolchain_id=toolchain_id,
            tool=str(RUSTUP),
        ) from e


def uninstall(toolchain: Toolchain, workspace: Workspace) -> None:
    """
    Remove the toolchain from the workspace, freeing up disk space.

    Raises:
        ExternalCommandError: If rustup fails
    """
    toolchain_id = toolchain.rustup_name
    logger.info(f"uninstalling toolchain {toolchain_id}")

    try:
        Command(workspace, RUSTUP).args("toolchain", "uninstall", toolchain_id).run()
    except CommandError as e:
        raise ExternalCommandError(
            f"unable to uninstall toolchain {toolchain_id} via {RUSTUP}",
            operation="uninstall toolchain",
            toolchain_id=toolchain_id,
            tool=str(RUSTUP),
        ) from e


@dataclass(frozen=True)
class ToolchainBinary(Runnable):
    """
    A rustup proxy binary bound to a toolchain.

    Running it through a Command prefixes the arguments with ``+<toolchain>``,
    which makes the rustup proxy dispatch to that toolchain.

    Attributes:
        toolchain: Toolchain to run the binary with
        executable: Proxy name in CARGO_HOME/bin (e.g. "cargo", "rustc")
    """

    toolchain: Toolchain
    executable: str

    def name(self) -> Binary:
        return Binary(self.executable, managed=True)

    def prepare_args(self, args: List[str]) -> List[str]:
        return [f"+{self.toolchain.rustup_name}"] + args


def as_runnable_binary(toolchain: Toolchain, binary_name: str) -> ToolchainBinary:
    """
    Get a runnable that executes ``binary_name`` with the toolchain.

    No process is spawned; pass the result to Command.
    """
    return ToolchainBinary(toolchain, binary_name)


def cargo(toolchain: Toolchain) -> ToolchainBinary:
    """
    Get a runnable that executes cargo with the toolchain.

    Example:
        >>> Command(workspace, cargo(DistToolchain("beta"))).args("check").run()
    """
    return as_runnable_binary(toolchain, "cargo")


class ToolchainInstaller:
    """
    Toolchain operations bound to one workspace.

    Example:
        >>> installer = ToolchainInstaller(workspace)
        >>> installer.install(MAIN_TOOLCHAIN)
        >>> for entry in config.toolchains:
        ...     installer.sync(entry)
    """

    def __init__(self, workspace: Workspace):
        self.workspace = workspace

    def install(self, toolchain: Toolchain) -> None:
        install(toolchain, self.workspace)

    def uninstall(self, toolchain: Toolchain) -> None:
        uninstall(toolchain, self.workspace)

    def add_component(self, toolchain: Toolchain, name: str) -> None:
        add_component(toolchain, self.workspace, name)

    def add_target(self, toolchain: Toolchain, name: str) -> None:
        add_target(toolchain, self.workspace, name)

    def command(self, toolchain: Toolchain, binary_name: str = "cargo") -> Command:
        """Create a command running ``binary_name`` with the toolchain."""
        return Command(self.workspace, as_runnable_binary(toolchain, binary_name))

    def sync(self, entry) -> None:
        """
        Install a configured toolchain with its components and targets.

        Args:
            entry: ToolchainEntry from the configuration

        Raises:
            UnsupportedOperationError: If a CI toolchain lists components or targets
            ExternalCommandError: If any invocation fails; later steps are skipped
        """
        self.install(entry.toolchain)
        for component in entry.components:
            self.add_component(entry.toolchain, component)
        for target in entry.targets:
            self.add_target(entry.toolchain, target)


__all__ = [
    "install",
    "add_component",
    "add_target",
    "uninstall",
    "ToolchainBinary",
    "as_runnable_binary",
    "cargo",
    "ToolchainInstaller",
]
