"""
Tool: Program Progress
Purpose: Record daily check-ins and summarize how the program is going

The program has length_days days (program.length_days in
args/habitloop.yaml, 30 by default). The "current day" is the next day
without a check-in, capped at the last day:

    current_day = min(len(check_ins) + 1, length_days)

Check-ins are keyed by day. Submitting a second check-in for the same
day replaces the first.

Streak counts completed check-ins walking down from the highest
checked-in day, stopping at the first one that was not completed.
"""

import logging
from typing import Any

from habitloop.analysis import round_half_up
from habitloop.models import DailyCheckIn, Program
from habitloop.program import PROGRAM_LENGTH_DAYS

logger = logging.getLogger(__name__)

MIN_MOOD = 1
MAX_MOOD = 5


class InvalidCheckInError(ValueError):
    """Check-in day or mood rating out of range."""


def current_day(program: Program | None, length_days: int = PROGRAM_LENGTH_DAYS) -> int:
    """Day the next check-in applies to."""
    if program is None:
        return 1
    return min(len(program.check_ins) + 1, length_days)


def validate_check_in(check_in: DailyCheckIn, length_days: int = PROGRAM_LENGTH_DAYS) -> None:
    if not 1 <= check_in.day <= length_days:
        raise InvalidCheckInError(f"Day must be between 1 and {length_days}, got {check_in.day}")

    if check_in.mood_rating is not None and not MIN_MOOD <= check_in.mood_rating <= MAX_MOOD:
        raise InvalidCheckInError(
            f"Mood rating must be between {MIN_MOOD} and {MAX_MOOD}, got {check_in.mood_rating}"
        )


def upsert_check_in(
    program: Program, check_in: DailyCheckIn, length_days: int = PROGRAM_LENGTH_DAYS
) -> Program:
    """
    Add or replace the check-in for check_in.day.

    Mutates and returns the program.

    Raises:
        InvalidCheckInError: day outside 1..length_days or mood outside 1..5
    """
    validate_check_in(check_in, length_days)

    for i, existing in enumerate(program.check_ins):
        if existing.day == check_in.day:
            program.check_ins[i] = check_in
            logger.debug(f"Replaced check-in for day {check_in.day}")
            return program

    program.check_ins.append(check_in)
    return program


def summarize_progress(
    program: Program | None, length_days: int = PROGRAM_LENGTH_DAYS
) -> dict[str, Any]:
    """
    Completion, streak and mood for a program.

    Returns:
        dict with completed_days, total_days, completion_rate (percent),
        current_streak and average_mood (None without any ratings)
    """
    check_ins = program.check_ins if program is not None else []

    completed = sum(1 for c in check_ins if c.task_completed)

    streak = 0
    for check_in in sorted(check_ins, key=lambda c: c.day, reverse=True):
        if not check_in.task_completed:
            break
        streak += 1

    moods = [c.mood_rating for c in check_ins if c.mood_rating is not None]
    average_mood = round_half_up(sum(moods) / len(moods), 1) if moods else None

    return {
        "completed_days": completed,
        "total_days": length_days,
        "completion_rate": int(round_half_up(completed / length_days * 100)),
        "current_streak": streak,
        "average_mood": average_mood,
    }
