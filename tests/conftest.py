"""Shared fixtures for the termforge test suite."""

import logging

import pytest

from termforge.config import config_manager
from termforge.palette.palette import Palette


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Point XDG config lookups at empty temporary directories."""
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    monkeypatch.setenv("XDG_CONFIG_DIRS", str(tmp_path / "system"))
    config_manager.reload_configs()
    yield tmp_path
    monkeypatch.undo()
    config_manager.reload_configs()


@pytest.fixture(autouse=True)
def restore_root_logger():
    """setup_logging replaces root handlers; put them back after each test."""
    root_logger = logging.getLogger()
    level = root_logger.level
    handlers = root_logger.handlers[:]
    yield
    root_logger.setLevel(level)
    root_logger.handlers[:] = handlers


@pytest.fixture
def palette():
    """A small Tokyo Night style palette."""
    return Palette(
        name="tokyonight",
        category="dark",
        colors={
            "bg": "#1a1b26",
            "fg": "#c0caf5",
            "primary": "#7aa2f7",
            "secondary": "#bb9af7",
            "error": "#db4b4b",
            "warning": "#e0af68",
            "info": "#0db9d7",
            "success": "#9ece6a",
            "comment": "#565f89",
            "red": "#f7768e",
            "green": "#9ece6a",
            "blue": "#7aa2f7",
        },
    )
