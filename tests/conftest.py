"""
Shared test fixtures and configuration.
"""

import logging
from pathlib import Path

import pytest

from devsetup.core.config.catalog_loader import load_catalog
from devsetup.core.models.tool import ToolCatalog

_ENV_VARS = (
    "OSTYPE",
    "DEVSETUP_LOG_LEVEL",
    "DEVSETUP_LOG_FILE",
    "DEVSETUP_LOG_FILE_LEVEL",
    "DEVSETUP_POLL_INTERVAL",
    "DEVSETUP_OS_RELEASE",
    "DEVSETUP_MARKER_COMMAND",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch):
    """Keep the host's shell and DEVSETUP_* settings out of every test."""
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture(autouse=True)
def restore_root_logger():
    """The CLI reconfigures the root logger; put it back afterwards."""
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def catalog() -> ToolCatalog:
    """The packaged tool catalog."""
    return load_catalog()


@pytest.fixture
def os_release(tmp_path: Path):
    """Factory writing an os-release file and returning its path."""

    def _write(content: str) -> Path:
        path = tmp_path / "os-release"
        path.write_text(content)
        return path

    return _write
