"""
Pytest configuration for the test suite.

This file is automatically loaded by pytest and applies configuration
to all tests in the tests/ directory.

Engines are driven by a ManualClock so timed behaviour (settle delays,
ticks, countdowns) is tested in virtual time without sleeping.
"""

import os
import sys

import pytest

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from minigames.config import Config
from minigames.core.scheduler import ManualClock
from minigames.core.scores import InMemoryScoreStore


def pytest_configure(config):
    """Configure pytest with custom markers and settings."""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )


@pytest.fixture
def config():
    """Create a test configuration."""
    return Config()


@pytest.fixture
def clock():
    """Virtual clock advanced explicitly by the test."""
    return ManualClock()


@pytest.fixture
def store():
    """Process-local score store."""
    return InMemoryScoreStore()


class FailingScoreStore(InMemoryScoreStore):
    """Store whose writes always fail, as with a read-only disk."""

    def _write(self, game_key, data):
        from minigames.core.errors import PersistenceError
        raise PersistenceError(game_key, "disk is read-only")


@pytest.fixture
def failing_store():
    return FailingScoreStore()
