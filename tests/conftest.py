"""
Pytest configuration and shared fixtures.

This module provides central pytest configuration, custom markers,
and shared fixtures for the blart test suite.
"""

import shutil
import tempfile
from collections.abc import Generator
from pathlib import Path

import pytest

# =============================================================================
# Plugin Registration
# =============================================================================

pytest_plugins = [
    "tests.fixtures.logging",
    "tests.fixtures.child",
]


# =============================================================================
# Pytest Configuration
# =============================================================================


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "unit: Unit tests (fast, isolated, no external dependencies)"
    )
    config.addinivalue_line(
        "markers", "integration: Integration tests (real processes, filesystem)"
    )
    config.addinivalue_line(
        "markers", "e2e: End-to-end tests (the blart CLI as a subprocess)"
    )
    config.addinivalue_line("markers", "property: Property-based tests")
    config.addinivalue_line("markers", "slow: Tests that take >1 second to run")
    config.addinivalue_line("markers", "posix: Tests that need POSIX signals")


# =============================================================================
# Shared Fixtures
# =============================================================================


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """
    Provide a temporary directory that is cleaned up after the test.

    Yields:
        Path: Temporary directory path
    """
    temp_path = Path(tempfile.mkdtemp(prefix="blart-test-"))
    try:
        yield temp_path
    finally:
        shutil.rmtree(temp_path, ignore_errors=True)


@pytest.fixture
def watched_file(temp_dir: Path) -> Path:
    """A file that exists, for tests that need something to watch."""
    path = temp_dir / "app.conf"
    path.write_text("setting = 1\n")
    return path


# =============================================================================
# Test Collection Hooks
# =============================================================================


def pytest_collection_modifyitems(config, items):
    """
    Add markers and skip conditions.

    Tests without another category marker are unit tests; tests marked
    posix are skipped where POSIX signals are unavailable.
    """
    import signal

    no_posix = pytest.mark.skip(reason="needs POSIX signals")
    for item in items:
        if not any(
            mark.name in ["integration", "e2e"] for mark in item.iter_markers()
        ):
            item.add_marker(pytest.mark.unit)
        if item.get_closest_marker("posix") and not hasattr(signal, "SIGHUP"):
            item.add_marker(no_posix)
