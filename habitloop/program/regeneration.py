"""
Tool: Program Regeneration
Purpose: Decide when behavior has shifted enough to re-plan the program

A change is significant when any categorical field of the insight
signature differs, or when the pattern count moved by more than
pattern_count_delta (5 by default) since the last observation.

Regenerating rebuilds the days but keeps every check-in as-is.
"""

import logging

from habitloop.config_models import ProgramConfig, load_config
from habitloop.models import DailyCheckIn, Habit, InsightSignature, Pattern, Program
from habitloop.program.generator import generate_program

logger = logging.getLogger(__name__)


def has_significant_change(
    previous: InsightSignature | None,
    current: InsightSignature,
    pattern_count_delta: int = 5,
) -> bool:
    """Whether current differs enough from previous to warrant a new program."""
    if previous is None:
        return False

    return (
        previous.emotional_balance != current.emotional_balance
        or previous.spending_frequency != current.spending_frequency
        or previous.time_preference != current.time_preference
        or abs(current.pattern_count - previous.pattern_count) > pattern_count_delta
    )


class SignatureTracker:
    """
    Remembers the last observed insight signature.

    The first observation only sets the baseline. Every later one is
    compared against the previous observation, then becomes the new
    baseline.
    """

    def __init__(self, pattern_count_delta: int = 5):
        self.pattern_count_delta = pattern_count_delta
        self.last: InsightSignature | None = None

    def observe(self, signature: InsightSignature) -> bool:
        changed = has_significant_change(self.last, signature, self.pattern_count_delta)
        if changed:
            logger.info(f"Insight signature changed: {self.last.to_dict()} -> {signature.to_dict()}")
        self.last = signature
        return changed

    def reset(self) -> None:
        self.last = None


def regenerate_program(
    existing: Program,
    patterns: list[Pattern],
    habit_library: list[Habit],
    signature: InsightSignature | None,
    config: ProgramConfig | None = None,
) -> Program:
    """
    Build a new program from current patterns, carrying over check-ins.

    Raises:
        IncompleteHabitLibraryError: shortfall_policy is "error" and a
            ranked category has no habits
    """
    if config is None:
        config = load_config().program

    program = generate_program(patterns, habit_library, signature, config)
    program.check_ins = [
        DailyCheckIn(
            day=c.day,
            task_completed=c.task_completed,
            notes=c.notes,
            reduced_behavior=c.reduced_behavior,
            mood_rating=c.mood_rating,
        )
        for c in existing.check_ins
    ]

    logger.info(f"Program regenerated with {len(program.check_ins)} check-ins preserved")
    return program
