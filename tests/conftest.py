"""Root pytest configuration for all tests."""

from __future__ import annotations

from pathlib import Path

import pytest

from waitfiles.config import reset_config
from waitfiles.logging import reset_logging

_ENV_VARS = (
    "WAITFILES_LOG",
    "WAITFILES_LOG_LEVEL",
    "WAITFILES_VERBOSE",
    "WAITFILES_POLL_INTERVAL",
    "WAITFILES_MAX_WORKERS",
)


@pytest.fixture(autouse=True)
def isolated_environment(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    """Keep user config, env overrides and logging state out of each test."""
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg"))
    reset_config()
    reset_logging()
    yield
    reset_config()
    reset_logging()
