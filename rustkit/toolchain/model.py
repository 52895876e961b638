"""
Toolchain identity model.

A toolchain is either a release distributed through rustup (DistToolchain)
or a per-commit CI artifact of rust-lang/rust (CIToolchain). Both are
immutable values whose canonical identifier is the name rustup knows them by.

Example:
    >>> from rustkit.toolchain.model import CIToolchain, DistToolchain
    >>> str(DistToolchain("beta"))
    'beta'
    >>> CIToolchain("abc123", alt=True).rustup_name
    'abc123-alt'
    >>> CIToolchain("abc123").to_dict()
    {'type': 'ci', 'sha': 'abc123', 'alt': False}
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, Mapping

from rustkit.core.exceptions import InvalidToolchainRecordError

MAIN_TOOLCHAIN_NAME = "stable"

ALT_SUFFIX = "-alt"

# Command-line prefix selecting a CI toolchain, e.g. "ci:<sha>" or "ci:<sha>-alt".
CI_PREFIX = "ci:"


class Toolchain(ABC):
    """
    Base class of the two toolchain variants.

    Only DistToolchain and CIToolchain derive from it; code dispatching on the
    variant handles both and raises TypeError for anything else.
    """

    @property
    @abstractmethod
    def rustup_name(self) -> str:
        """Canonical identifier used in every rustup invocation."""
        pass

    @abstractmethod
    def to_dict(self) -> Dict[str, Any]:
        """Convert to a discriminated record for YAML/JSON serialization."""
        pass

    def __str__(self) -> str:
        return self.rustup_name


@dataclass(frozen=True)
class DistToolchain(Toolchain):
    """
    Toolchain available through rustup and distributed from static.rust-lang.org.

    Attributes:
        name: Name as passed to ``rustup toolchain install <name>``
              (e.g. "stable", "nightly-2024-01-01", "1.75.0")
    """

    name: str

    def __post_init__(self):
        """Validate toolchain name."""
        if not isinstance(self.name, str):
            raise TypeError(f"name must be str, got {type(self.name)}")
        if not self.name:
            raise ValueError("Toolchain name cannot be empty")

    @property
    def rustup_name(self) -> str:
        return self.name

    def to_dict(self) -> Dict[str, Any]:
        return {"type": "dist", "name": self.name}


@dataclass(frozen=True)
class CIToolchain(Toolchain):
    """
    CI artifact from the rust-lang/rust repository.

    Each merged PR has its own full build available for a while after it has
    been merged, identified by the merge commit sha. There is no retention or
    stability guarantee for these builds.

    Attributes:
        sha: Hash of the merge commit
        alt: Whether to use the "alt" build, which has extra compiler
             assertions enabled
    """

    sha: str
    alt: bool = False

    def __post_init__(self):
        """Validate commit hash and build flavor."""
        if not isinstance(self.sha, str):
            raise TypeError(f"sha must be str, got {type(self.sha)}")
        if not self.sha:
            raise ValueError("CI toolchain sha cannot be empty")
        if not isinstance(self.alt, bool):
            raise TypeError(f"alt must be bool, got {type(self.alt)}")

    @property
    def rustup_name(self) -> str:
        if self.alt:
            return f"{self.sha}{ALT_SUFFIX}"
        return self.sha

    def to_dict(self) -> Dict[str, Any]:
        return {"type": "ci", "sha": self.sha, "alt": self.alt}


MAIN_TOOLCHAIN = DistToolchain(MAIN_TOOLCHAIN_NAME)


def canonical_identifier(toolchain: Toolchain) -> str:
    """
    Get the identifier rustup uses for a toolchain.

    Args:
        toolchain: Toolchain value

    Returns:
        ``name`` for dist toolchains, ``sha`` or ``sha-alt`` for CI toolchains
    """
    return toolchain.rustup_name


_RECORD_FIELDS = {
    "dist": {"name": str},
    "ci": {"sha": str, "alt": bool},
}


def toolchain_from_dict(data: Mapping[str, Any]) -> Toolchain:
    """
    Decode a record produced by ``Toolchain.to_dict()``.

    Args:
        data: Mapping with a ``type`` discriminator ("dist" or "ci") and the
              variant's fields

    Returns:
        Decoded toolchain

    Raises:
        InvalidToolchainRecordError: If the type is unknown or fields are
            missing, unexpected or of the wrong type
    """
    if not isinstance(data, Mapping):
        raise InvalidToolchainRecordError(
            f"Toolchain record must be a mapping, got {type(data).__name__}"
        )

    kind = data.get("type")
    if kind not in _RECORD_FIELDS:
        raise InvalidToolchainRecordError(
            f"Unknown toolchain type: {kind!r}. "
            f"Expected one of: {', '.join(sorted(_RECORD_FIELDS))}"
        )

    fields = _RECORD_FIELDS[kind]
    unknown = sorted(set(data) - set(fields) - {"type"})
    if unknown:
        raise InvalidToolchainRecordError(
            f"Unknown field(s) for {kind} toolchain: {', '.join(unknown)}"
        )

    for key, expected in fields.items():
        if key not in data:
            raise InvalidToolchainRecordError(
                f"Missing field '{key}' for {kind} toolchain"
            )
        if not isinstance(data[key], expected):
            raise InvalidToolchainRecordError(
                f"Field '{key}' of {kind} toolchain must be {expected.__name__}, "
                f"got {type(data[key]).__name__}"
            )

    try:
        if kind == "dist":
            return DistToolchain(data["name"])
        return CIToolchain(data["sha"], alt=data["alt"])
    except (TypeError, ValueError) as e:
        raise InvalidToolchainRecordError(f"Invalid {kind} toolchain: {e}") from e


def parse_toolchain(text: str) -> Toolchain:
    """
    Parse the command-line spelling of a toolchain.

    ``ci:<sha>`` and ``ci:<sha>-alt`` select a CI toolchain; anything else is
    taken verbatim as a dist toolchain name. No version resolution happens
    here, "stable" stays "stable".

    Args:
        text: Toolchain spelling

    Returns:
        Parsed toolchain

    Raises:
        ValueError: If the text (or the sha after the prefix) is empty
    """
    text = text.strip()
    if not text:
        raise ValueError("Toolchain cannot be empty")

    if not text.startswith(CI_PREFIX):
        return DistToolchain(text)

    sha = text[len(CI_PREFIX) :]
    alt = sha.endswith(ALT_SUFFIX)
    if alt:
        sha = sha[: -len(ALT_SUFFIX)]
    if not sha:
        raise ValueError(f"Missing commit sha in CI toolchain: {text!r}")
    return CIToolchain(sha, alt=alt)


__all__ = [
    "MAIN_TOOLCHAIN_NAME",
    "MAIN_TOOLCHAIN",
    "Toolchain",
    "DistToolchain",
    "CIToolchain",
    "canonical_identifier",
    "toolchain_from_dict",
    "parse_toolchain",
]
