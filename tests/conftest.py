"""Pytest fixtures for coda tests."""

import logging
import os
from pathlib import Path

import pytest

from coda.diff import DiffPreviewer
from coda.foundation.config import DiffConfig, reset_config


@pytest.fixture(autouse=True)
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    """Keep every test away from the real ~/.coda and CODA_* variables."""
    for key in list(os.environ):
        if key.startswith("CODA_"):
            monkeypatch.delenv(key)
    monkeypatch.setenv("CODA_CONFIG_DIR", str(tmp_path / "config-home"))
    reset_config()
    yield
    reset_config()


@pytest.fixture(autouse=True)
def restore_root_logger():
    """The CLI reconfigures the root logger; put it back after each test."""
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def workspace(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """An empty project directory that is also the cwd."""
    ws = tmp_path / "workspace"
    ws.mkdir()
    monkeypatch.chdir(ws)
    return ws


@pytest.fixture
def previewer(workspace: Path, tmp_path: Path) -> DiffPreviewer:
    """A previewer with default settings and its own snapshot dir."""
    return DiffPreviewer(DiffConfig(), snapshot_dir=tmp_path / "snapshots")
