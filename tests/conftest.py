"""Pytest configuration and fixtures for mediamatch tests."""

from __future__ import annotations

import tempfile
from pathlib import Path
from typing import Generator

import pytest

from mediamatch import config as config_module
from mediamatch.config import Settings
from mediamatch.matcher import parser as parser_module
from mediamatch.matcher.cache import ParseCache, reset_cache
from mediamatch.matcher.units import DEFAULT_ROOT_FONT_SIZE, set_root_font_size


@pytest.fixture(autouse=True)
def fresh_cache() -> Generator[ParseCache, None, None]:
    """Give every test an empty process-wide parse cache."""
    yield reset_cache()
    reset_cache()


@pytest.fixture(autouse=True)
def restore_root_font_size() -> Generator[None, None, None]:
    """Undo root font size changes made by a test."""
    set_root_font_size(DEFAULT_ROOT_FONT_SIZE)
    yield
    set_root_font_size(DEFAULT_ROOT_FONT_SIZE)


@pytest.fixture(autouse=True)
def reset_globals() -> Generator[None, None, None]:
    """Forget lazily created settings and parser instances."""
    config_module._settings = None
    parser_module._parser = None
    yield
    config_module._settings = None
    parser_module._parser = None


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def config_file(temp_dir: Path) -> Path:
    """Write a configuration file with a few named environments."""
    path = temp_dir / "mediamatch.yaml"
    path.write_text(
        """
units:
  root_font_size: 16
logging:
  level: warning
environments:
  phone:
    type: screen
    width: 375
    height: 812
    orientation: portrait
    device-pixel-ratio: 3
  desktop:
    type: screen
    width: 1440
    height: 900
    orientation: landscape
    color: 8
  printer:
    type: print
    resolution: 300dpi
    monochrome: 1
"""
    )
    return path


@pytest.fixture
def test_settings() -> Settings:
    """Create test settings without touching the filesystem."""
    return Settings(
        units={"root_font_size": 10},
        logging={"level": "DEBUG"},
        environments={"tablet": {"type": "screen", "width": 768}},
    )
