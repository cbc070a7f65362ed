"""
Pytest configuration and shared fixtures for doublekit tests.
"""

import pytest
from pathlib import Path

from doublekit.builder import MockBuilder
from doublekit.provider.factory import MockFactory

# Import test fixtures to make them available to all tests
# These imports register the fixtures with pytest's fixture discovery system
# ruff: noqa: F401
from tests.fixtures.doubles_files import (
    valid_doubles_file,
    strict_doubles_file,
    broken_doubles_file,
)

pytest_plugins = ["doublekit.pytest_plugin", "pytester"]


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "unit: marks tests as unit tests")
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )


# ============================================================================
# Shared Test Fixtures
# ============================================================================


@pytest.fixture
def factory() -> MockFactory:
    """Create a fresh mock factory."""
    return MockFactory()


@pytest.fixture
def builder(factory: MockFactory) -> MockBuilder:
    """Create a builder on top of the shared factory."""
    return MockBuilder(factory=factory)


@pytest.fixture
def strict_builder(factory: MockFactory) -> MockBuilder:
    """Create a builder rejecting unrecognized invocation counts."""
    return MockBuilder(factory=factory, strict=True)


@pytest.fixture
def doubles_dir(tmp_path: Path) -> Path:
    """Create a directory for doubles files."""
    directory = tmp_path / "doubles"
    directory.mkdir()
    return directory
