# tests/conftest.py
# Ensure the project root (the folder that contains 'loom' and 'tests') is on sys.path
# so that `from loom...` imports work during pytest collection without an install.

import sys
import pathlib

import pytest

ROOT = pathlib.Path(__file__).resolve().parents[1]
ROOT_STR = str(ROOT)

if ROOT_STR not in sys.path:
    sys.path.insert(0, ROOT_STR)

# Sanity check: make sure 'loom' is importable
try:
    import loom.interpreter  # noqa: F401
except Exception as e:
    raise RuntimeError(f"Failed to import 'loom' from {ROOT_STR}") from e


@pytest.fixture
def programs_dir() -> pathlib.Path:
    return ROOT / "Programs"
