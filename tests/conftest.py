"""
Pytest configuration file.

Ensures the repo root is on sys.path so that 'import src...' works, and
clears the process-wide caches (settings, clock offset) around every test.
"""
import sys
from pathlib import Path

import pytest

# Add the repo root to sys.path
repo_root = Path(__file__).parent.parent
if str(repo_root) not in sys.path:
    sys.path.insert(0, str(repo_root))

from src.config.settings import reset_settings
from src.utils.time import reset_clock_offset


@pytest.fixture(autouse=True)
def clean_global_state():
    """Start and finish each test with no cached settings or clock offset."""
    reset_settings()
    reset_clock_offset()
    yield
    reset_settings()
    reset_clock_offset()
