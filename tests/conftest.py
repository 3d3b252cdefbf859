"""
Pytest configuration and shared fixtures.
"""

import os

import pytest

from memgate.config.settings import get_settings
from memgate.core.domain import MemoryHit
from memgate.core.services.query_gate import QueryGate


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line("markers", "unit: Unit tests (no external dependencies)")
    config.addinivalue_line("markers", "integration: Integration tests (API and CLI surfaces)")


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep MEMGATE_* variables from the developer's shell out of the tests."""
    for key in list(os.environ):
        if key.startswith("MEMGATE_"):
            monkeypatch.delenv(key)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def gate():
    """A gate with the built-in thresholds."""
    return QueryGate()


@pytest.fixture
def sample_hits():
    """Memories as a store would return them."""
    return [
        MemoryHit(
            content="Never run rm -rf outside the project workspace.",
            score=0.91,
            metadata={"kind": "constraint"},
        ),
        MemoryHit(
            content="User prefers dry-run flags before destructive commands.",
            score=0.74,
            metadata={"kind": "preference"},
        ),
    ]
