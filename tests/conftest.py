"""
Shared test setup: make the repository root importable when running plain ``pytest``.
"""
import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(ROOT))

from collision.sources import load_registry_dump


@pytest.fixture
def registry_source():
    return load_registry_dump(str(ROOT / "tests" / "data" / "registry_small.json"))
