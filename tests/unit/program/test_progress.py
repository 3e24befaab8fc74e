"""Tests for habitloop/program/progress.py"""

import pytest

from habitloop.models import DailyCheckIn, Program
from habitloop.program.progress import (
    InvalidCheckInError,
    current_day,
    summarize_progress,
    upsert_check_in,
)


class TestCurrentDay:
    """Tests for current_day()."""

    def test_no_program(self):
        assert current_day(None) == 1

    def test_no_check_ins(self):
        assert current_day(Program()) == 1

    def test_advances_with_check_ins(self, sample_check_ins):
        assert current_day(Program(check_ins=sample_check_ins)) == 5

    def test_capped_at_last_day(self):
        check_ins = [DailyCheckIn(day=d, task_completed=True) for d in range(1, 31)]
        assert current_day(Program(check_ins=check_ins)) == 30


class TestUpsertCheckIn:
    """Tests for upsert_check_in()."""

    def test_appends_new_day(self):
        program = Program()
        upsert_check_in(program, DailyCheckIn(day=1, task_completed=True))

        assert len(program.check_ins) == 1

    def test_replaces_same_day(self):
        program = Program()
        upsert_check_in(program, DailyCheckIn(day=1, task_completed=False))
        upsert_check_in(program, DailyCheckIn(day=1, task_completed=True, notes="done after all"))

        assert len(program.check_ins) == 1
        assert program.check_ins[0].task_completed is True
        assert program.check_ins[0].notes == "done after all"

    @pytest.mark.parametrize("day", [0, 31, -1])
    def test_day_out_of_range(self, day):
        with pytest.raises(InvalidCheckInError, match="Day must be between 1 and 30"):
            upsert_check_in(Program(), DailyCheckIn(day=day, task_completed=True))

    @pytest.mark.parametrize("mood", [0, 6])
    def test_mood_out_of_range(self, mood):
        with pytest.raises(InvalidCheckInError, match="Mood rating"):
            upsert_check_in(Program(), DailyCheckIn(day=1, task_completed=True, mood_rating=mood))

    def test_mood_is_optional(self):
        program = upsert_check_in(Program(), DailyCheckIn(day=1, task_completed=True))
        assert program.check_ins[0].mood_rating is None

    def test_invalid_check_in_leaves_program_unchanged(self):
        program = Program()
        with pytest.raises(InvalidCheckInError):
            upsert_check_in(program, DailyCheckIn(day=1, task_completed=True, mood_rating=9))
        assert program.check_ins == []


class TestSummarizeProgress:
    """Tests for summarize_progress()."""

    def test_no_program(self):
        assert summarize_progress(None) == {
            "completed_days": 0,
            "total_days": 30,
            "completion_rate": 0,
            "current_streak": 0,
            "average_mood": None,
        }

    def test_summary(self, sample_check_ins):
        summary = summarize_progress(Program(check_ins=sample_check_ins))

        assert summary["completed_days"] == 3
        assert summary["completion_rate"] == 10
        # Days 4 and 3 completed, day 2 missed
        assert summary["current_streak"] == 2
        # (3 + 4 + 5) / 3; day 4 has no rating
        assert summary["average_mood"] == 4.0

    def test_streak_uses_day_order_not_insertion_order(self):
        check_ins = [
            DailyCheckIn(day=3, task_completed=True),
            DailyCheckIn(day=1, task_completed=True),
            DailyCheckIn(day=2, task_completed=True),
        ]
        assert summarize_progress(Program(check_ins=check_ins))["current_streak"] == 3

    def test_streak_broken_by_latest_day(self):
        check_ins = [
            DailyCheckIn(day=1, task_completed=True),
            DailyCheckIn(day=2, task_completed=False),
        ]
        assert summarize_progress(Program(check_ins=check_ins))["current_streak"] == 0

    def test_average_mood_one_decimal(self):
        check_ins = [
            DailyCheckIn(day=1, task_completed=True, mood_rating=3),
            DailyCheckIn(day=2, task_completed=True, mood_rating=4),
            DailyCheckIn(day=3, task_completed=True, mood_rating=4),
        ]
        assert summarize_progress(Program(check_ins=check_ins))["average_mood"] == 3.7

    def test_completion_rate_rounds(self):
        check_ins = [DailyCheckIn(day=d, task_completed=True) for d in range(1, 3)]
        # 2 / 30 = 6.67%
        assert summarize_progress(Program(check_ins=check_ins))["completion_rate"] == 7


class TestProgramLength:
    """A program configured shorter than 30 days."""

    def test_current_day_capped_at_length(self):
        check_ins = [DailyCheckIn(day=d, task_completed=True) for d in range(1, 15)]
        assert current_day(Program(check_ins=check_ins), length_days=14) == 14

    def test_day_past_length_rejected(self):
        with pytest.raises(InvalidCheckInError, match="Day must be between 1 and 14, got 15"):
            upsert_check_in(Program(), DailyCheckIn(day=15, task_completed=True), length_days=14)

    def test_summary_uses_length(self):
        check_ins = [DailyCheckIn(day=d, task_completed=True) for d in range(1, 8)]
        summary = summarize_progress(Program(check_ins=check_ins), length_days=14)

        assert summary["total_days"] == 14
        assert summary["completion_rate"] == 50

    def test_no_program(self):
        assert summarize_progress(None, length_days=14)["total_days"] == 14
