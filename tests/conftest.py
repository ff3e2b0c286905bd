"""Pytest configuration for the project."""
from __future__ import annotations

import sys
from datetime import datetime
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]

if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))


@pytest.fixture
def fixed_now() -> datetime:
    """A moment inside the recorded February 2024 history window."""
    return datetime(2024, 2, 10, 15, 30)
