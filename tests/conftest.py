"""Pytest configuration and fixtures for TimeShield tests."""

from __future__ import annotations

import random
import sys
from pathlib import Path

import pytest

# Add the parent directory to sys.path so timeshield can be imported
# without needing to install the package
project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))


@pytest.fixture
def rng() -> random.Random:
    """Seeded random source so property tests are reproducible."""
    return random.Random(0x5EED)
