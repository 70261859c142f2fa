"""Test configuration ensuring repository modules are discoverable."""
from __future__ import annotations

import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from festival.broadcast import MemoryBroadcaster  # noqa: E402
from festival.engine import SchedulingEngine  # noqa: E402


def pytest_configure(config):
    config.addinivalue_line("markers", "slow: marks tests as slow and optional")


@pytest.fixture
def broadcaster():
    return MemoryBroadcaster()


@pytest.fixture
def engine(broadcaster):
    return SchedulingEngine(broadcaster=broadcaster)
