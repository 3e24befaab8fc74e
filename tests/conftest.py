"""Shared test fixtures for HabitLoop tests.

This module provides common fixtures used across all test modules:
- Database isolation with temporary files
- Fixed reference time and timezone for window calculations
- Standard entries, patterns, signatures and programs

Usage:
    def test_something(store_db):
        # the store writes to a temporary database for this test
        ...
"""

import os
import tempfile
from collections.abc import Generator
from datetime import datetime, timezone
from pathlib import Path
from unittest.mock import patch

import pytest

from habitloop.models import (
    ActivityEntry,
    DailyCheckIn,
    EmotionalBalance,
    InsightSignature,
    Pattern,
    SpendingFrequency,
    TimePreference,
)


# ─────────────────────────────────────────────────────────────────────────────
# Path Constants
# ─────────────────────────────────────────────────────────────────────────────

PROJECT_ROOT = Path(__file__).parent.parent


# ─────────────────────────────────────────────────────────────────────────────
# Time Helpers
# ─────────────────────────────────────────────────────────────────────────────


def utc_ms(year: int, month: int, day: int, hour: int = 0, minute: int = 0) -> int:
    """Epoch millis for a UTC wall-clock time."""
    return int(datetime(year, month, day, hour, minute, tzinfo=timezone.utc).timestamp() * 1000)


# 2024-03-15 12:00 UTC
NOW_MS = utc_ms(2024, 3, 15, 12)


# ─────────────────────────────────────────────────────────────────────────────
# Database Fixtures
# ─────────────────────────────────────────────────────────────────────────────


@pytest.fixture
def temp_db() -> Generator[Path, None, None]:
    """Create a temporary database file for testing.

    The database file is automatically deleted after the test completes.

    Yields:
        Path to the temporary database file
    """
    with tempfile.NamedTemporaryFile(suffix=".db", delete=False) as f:
        db_path = Path(f.name)

    yield db_path

    # Cleanup
    if db_path.exists():
        os.unlink(db_path)


@pytest.fixture
def store_db(temp_db: Path) -> Generator[Path, None, None]:
    """Point the HabitLoop store at a temporary database."""
    with patch("habitloop.storage.store.DB_PATH", temp_db):
        yield temp_db


# ─────────────────────────────────────────────────────────────────────────────
# Entry Fixtures
# ─────────────────────────────────────────────────────────────────────────────


@pytest.fixture
def now_ms() -> int:
    """Fixed reference time: 2024-03-15 12:00 UTC."""
    return NOW_MS


@pytest.fixture
def at_utc():
    """Build epoch millis from UTC wall-clock parts."""
    return utc_ms


@pytest.fixture
def sample_entries() -> list[ActivityEntry]:
    """Four entries around the reference time.

    Three fall inside the 7-day window (morning, evening, night);
    the fourth is two weeks old and only inside the 30-day window.
    """
    return [
        ActivityEntry(
            id=1,
            timestamp=utc_ms(2024, 3, 1, 10),
            source_label="Shopping",
            notes="buy buy",
        ),
        ActivityEntry(
            id=2,
            timestamp=utc_ms(2024, 3, 14, 2),
            source_label="News",
            notes="read the headlines",
        ),
        ActivityEntry(
            id=3,
            timestamp=utc_ms(2024, 3, 14, 22),
            source_label="Social Feed",
            notes="stressed and scrolling",
        ),
        ActivityEntry(
            id=4,
            timestamp=utc_ms(2024, 3, 15, 8),
            source_label="Shopping",
            notes="happy with the deal today",
        ),
    ]


# ─────────────────────────────────────────────────────────────────────────────
# Pattern and Signature Fixtures
# ─────────────────────────────────────────────────────────────────────────────


@pytest.fixture
def sample_patterns() -> list[Pattern]:
    """Stored detections in append order."""
    return [
        Pattern(pattern_type="Emotional Tone", snippet="I felt anxious", confidence_score=60),
        Pattern(pattern_type="Screen-Time & Scrolling", snippet="scrolling for hours", confidence_score=80),
        Pattern(pattern_type="Emotional Tone", snippet="I felt anxious", confidence_score=70),
        Pattern(pattern_type="Shopping & Spending Triggers", snippet="added to cart", confidence_score=50),
    ]


@pytest.fixture
def neutral_signature() -> InsightSignature:
    return InsightSignature(
        emotional_balance=EmotionalBalance.NEUTRAL,
        spending_frequency=SpendingFrequency.LOW,
        time_preference=TimePreference.MORNING,
        pattern_count=10,
        window=7,
    )


@pytest.fixture
def sample_check_ins() -> list[DailyCheckIn]:
    """Four check-ins: completed, missed, then two completed."""
    return [
        DailyCheckIn(day=1, task_completed=True, notes="Left the cart alone", mood_rating=3),
        DailyCheckIn(day=2, task_completed=False, notes="", mood_rating=4),
        DailyCheckIn(day=3, task_completed=True, notes="Phone in the kitchen", mood_rating=5, reduced_behavior=True),
        DailyCheckIn(day=4, task_completed=True),
    ]
