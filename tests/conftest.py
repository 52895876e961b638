"""
Pytest configuration and shared fixtures for rustkit tests.
"""

import pytest
from pathlib import Path
from unittest.mock import Mock, patch

from rustkit.core.workspace import Workspace


def pytest_addoption(parser):
    """Add custom command line options."""
    parser.addoption(
        "--integration",
        action="store_true",
        default=False,
        help="run integration tests that call the real rustup",
    )


def pytest_collection_modifyitems(config, items):
    """Skip integration tests unless --integration flag is provided."""
    if not config.getoption("--integration"):
        skip_integration = pytest.mark.skip(reason="need --integration option to run")
        for item in items:
            if "integration" in item.keywords:
                item.add_marker(skip_integration)


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers",
        "integration: marks tests as integration tests (requires --integration)",
    )


# ============================================================================
# Shared Test Fixtures
# ============================================================================


@pytest.fixture
def completed():
    """Factory for mock subprocess.CompletedProcess results."""

    def _completed(returncode: int = 0, stdout: str = "", stderr: str = "") -> Mock:
        return Mock(returncode=returncode, stdout=stdout, stderr=stderr)

    return _completed


@pytest.fixture
def workspace(tmp_path: Path) -> Workspace:
    """Create an initialized workspace in a temporary directory."""
    return Workspace(tmp_path / "workspace").init()


@pytest.fixture
def mock_run(completed):
    """Patch subprocess.run as used by rustkit commands; succeeds by default."""
    with patch("rustkit.core.command.subprocess.run") as run:
        run.return_value = completed()
        yield run


@pytest.fixture
def invoked_args(mock_run):
    """Get the arguments (without the executable) of each subprocess.run call."""

    def _invoked_args(index: int = 0):
        return mock_run.call_args_list[index][0][0][1:]

    return _invoked_args
