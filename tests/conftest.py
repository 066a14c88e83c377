"""Pytest configuration.

Ensures src/ is on sys.path so tests can import `fastmatch.*` without an
install, and provides synthetic images.
"""

import sys
from pathlib import Path

import numpy as np
import pytest

PROJECT_ROOT = Path(__file__).resolve().parent.parent
SRC_DIR = PROJECT_ROOT / "src"
if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))


@pytest.fixture
def rng():
    return np.random.default_rng(1234)


@pytest.fixture
def noise_scene(rng):
    """100x100 uint8 noise; every 20x20 patch is distinctive."""
    return rng.integers(0, 256, size=(100, 100), dtype=np.uint8)


@pytest.fixture
def restore_root_logger(monkeypatch):
    """Undo setup_logging: drop its handlers, restore the root level and env."""
    import logging

    monkeypatch.setenv("FM_LOG_SESSION_DIR", "")
    root = logging.getLogger()
    level = root.level
    yield
    for h in root.handlers[:]:
        if type(h) in (logging.FileHandler, logging.StreamHandler):
            root.removeHandler(h)
            h.close()
    root.setLevel(level)
