"""Shared fixtures: every test runs with a private home directory and no
``MINEPLACK_TODO_*`` environment overrides."""

from __future__ import annotations

import logging
import os
from pathlib import Path

import pytest

from mineplack_todo.cli.session import Session
from mineplack_todo.config import ENV_PREFIX, TodoConfig


@pytest.fixture(autouse=True)
def isolated_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point HOME at a temp directory and drop MINEPLACK_TODO_* variables."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    for key in list(os.environ):
        if key.startswith(ENV_PREFIX):
            monkeypatch.delenv(key)
    return home


@pytest.fixture()
def data_dir(tmp_path: Path) -> Path:
    """Return a (not yet created) data directory inside the temp dir."""
    return tmp_path / "data"


@pytest.fixture()
def config(data_dir: Path) -> TodoConfig:
    return TodoConfig(data_dir=str(data_dir))


@pytest.fixture()
def session(config: TodoConfig) -> Session:
    """Return a loaded session on the default file of an empty data dir."""
    s = Session(config)
    s.load()
    return s


@pytest.fixture(autouse=True)
def reset_package_logger():
    """Drop handlers added by ``configure_logging`` during a test."""
    pkg_logger = logging.getLogger("mineplack_todo")
    saved_handlers = list(pkg_logger.handlers)
    saved_level = pkg_logger.level
    yield
    for handler in list(pkg_logger.handlers):
        if handler not in saved_handlers:
            pkg_logger.removeHandler(handler)
    pkg_logger.setLevel(saved_level)
