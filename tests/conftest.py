"""
Pytest configuration and shared fixtures for tempreg tests.
"""

from collections.abc import Generator
from pathlib import Path
import tempfile
from unittest.mock import Mock

import pytest

from tempreg import registry as registry_module
from tempreg.registry import TempRegistry


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for test files."""
    with tempfile.TemporaryDirectory() as temp_dir:
        yield Path(temp_dir)


@pytest.fixture
def temp_root(temp_dir: Path, monkeypatch) -> Path:
    """Point the configured temp root at a per-test directory."""
    root = temp_dir / "temp_root"
    monkeypatch.setenv("TEMPREG_TEMP_ROOT", str(root))
    return root


@pytest.fixture
def exit_hook() -> Mock:
    """Stand-in for atexit.register."""
    return Mock()


@pytest.fixture
def registry(exit_hook: Mock) -> TempRegistry:
    """Registry whose exit hook is recorded instead of installed."""
    return TempRegistry(exit_hook=exit_hook)


@pytest.fixture(autouse=True)
def default_registry(monkeypatch) -> TempRegistry:
    """Replace the process-wide registry so tests never touch atexit."""
    isolated = TempRegistry(exit_hook=Mock())
    monkeypatch.setattr(registry_module, "_registry_instance", isolated)
    return isolated
