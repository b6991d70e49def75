"""
Pytest Configuration and Fixtures.

This file configures pytest and provides shared fixtures for all tests.
"""
import random
import sys
from datetime import UTC, datetime, timedelta
from pathlib import Path

import pytest

# Add project root to path
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from mathsprint.config import ProgressionSettings  # noqa: E402
from mathsprint.core.models import Operation, QuestionResult, SessionStats  # noqa: E402


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line("markers", "unit: Unit tests")
    config.addinivalue_line("markers", "smoke: Smoke tests for CLI commands")


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their location."""
    for item in items:
        if "unit" in str(item.fspath):
            item.add_marker(pytest.mark.unit)
        elif "smoke" in str(item.fspath):
            item.add_marker(pytest.mark.smoke)


@pytest.fixture
def settings():
    """Default progression settings, isolated from the environment."""
    return ProgressionSettings(_env_file=None)


@pytest.fixture
def rng():
    """Seeded random source for reproducible generator output."""
    return random.Random(1234)


def make_result(op="add", a=12, b=7, correct=True, ms=1500) -> QuestionResult:
    return QuestionResult(
        operation=Operation(op),
        operand_a=a,
        operand_b=b,
        is_correct=correct,
        response_time_ms=ms,
    )


@pytest.fixture
def result_factory():
    """Build QuestionResults with sensible defaults."""
    return make_result


@pytest.fixture
def session_factory():
    """Build SessionStats dated one day apart."""
    start = datetime(2026, 3, 1, 9, 0, tzinfo=UTC)

    def build(day=0, valid=True, accuracy=0.8, xp=100, avg_ms=1500.0, fluency=0.6, results=None):
        return SessionStats(
            date=start + timedelta(days=day),
            session_type="daily",
            accuracy=accuracy,
            avg_response_time_ms=avg_ms,
            xp_earned=xp,
            level_before=1,
            results=tuple(results or ()),
            valid=valid,
            duration_seconds=120.0,
            fluency_score=fluency,
        )

    return build
