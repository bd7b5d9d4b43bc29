"""
Shared test configuration and path setup.

All test files in this directory import from qsort_grid/. This conftest.py
adds the project root to sys.path once, so the suite also runs from a plain
checkout without installing the package.
"""

import os
import sys

import pytest

_PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if _PROJECT_ROOT not in sys.path:
    sys.path.insert(0, _PROJECT_ROOT)

PROJECT_ROOT = _PROJECT_ROOT

from qsort_grid.config import GridEngineConfig, set_config  # noqa: E402


@pytest.fixture(autouse=True)
def default_engine_config():
    """Every test starts from the built-in defaults, whatever the environment says."""
    set_config(GridEngineConfig())
    yield
    set_config(None)
