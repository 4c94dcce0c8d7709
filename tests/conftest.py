"""
Pytest Configuration and Fixtures.

This file configures pytest and provides shared fixtures for all tests.
"""
import sys
from datetime import UTC, date, datetime, timedelta
from pathlib import Path

import pytest

# Add project root to path
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from mastery_engine.config import get_settings  # noqa: E402
from mastery_engine.core.models import AttemptRecord  # noqa: E402

REFERENCE_NOW = datetime(2024, 6, 15, 12, 0, tzinfo=UTC)


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line("markers", "unit: Unit tests")
    config.addinivalue_line("markers", "integration: Tests running several components together")


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their location."""
    for item in items:
        if "unit" in str(item.fspath):
            item.add_marker(pytest.mark.unit)
        elif "integration" in str(item.fspath):
            item.add_marker(pytest.mark.integration)


@pytest.fixture(autouse=True)
def fresh_settings(monkeypatch):
    """Isolate every test from cached settings and stray MASTERY_ENGINE_* variables."""
    import os

    for key in list(os.environ):
        if key.startswith("MASTERY_ENGINE_"):
            monkeypatch.delenv(key)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def now():
    """Fixed reference time for recency calculations."""
    return REFERENCE_NOW


@pytest.fixture
def today():
    """Calendar day of the reference time."""
    return date(2024, 6, 15)


@pytest.fixture
def make_attempt(now):
    """Build an AttemptRecord `days_ago` days before the reference time."""

    def _make(is_correct: bool, days_ago: float = 0, time_spent: float | None = None) -> AttemptRecord:
        return AttemptRecord(
            is_correct=is_correct,
            timestamp=now - timedelta(days=days_ago),
            time_spent=time_spent,
        )

    return _make
