"""
Tool: Program Generator
Purpose: Turn detected patterns into a 30-day habit program

Steps:
    1. Every pattern adds its confidence to each habit category it maps to
    2. The insight signature boosts categories it flags (+50 each)
    3. Categories are ranked by priority (ties keep first-seen order)
       - no priorities at all: every library category, in library order
    4. Day d gets category  cats[(d-1) % n]
       and habit            habits[((d-1) // n) % len(habits)]
       so categories rotate daily and habits advance once per full rotation
    5. Every third day carries a reflection prompt

A category with no habits in the library cannot fill its days. The
shortfall policy decides what happens:
    skip   leave those days out and list them in Program.skipped_days
    error  raise IncompleteHabitLibraryError before anything is built
"""

import logging
from collections.abc import Callable
from dataclasses import replace

from habitloop.config_models import ProgramConfig, load_config
from habitloop.models import (
    DailyProgramEntry,
    EmotionalBalance,
    Habit,
    InsightSignature,
    Pattern,
    Program,
    SpendingFrequency,
    TimePreference,
)
from habitloop.program import (
    CATEGORY_MAPPING,
    EMOTIONAL_REGULATION,
    REFLECTION_PROMPTS,
    SLEEP_WIND_DOWN,
    SPENDING_AWARENESS,
)

logger = logging.getLogger(__name__)


class IncompleteHabitLibraryError(ValueError):
    """A ranked category has no habits in the library."""

    def __init__(self, missing_categories: list[str]):
        self.missing_categories = missing_categories
        super().__init__(f"Habit library has no habits for: {', '.join(missing_categories)}")


# (category, condition on signature, sentence appended to the explanation)
SIGNATURE_BOOSTS: tuple[tuple[str, Callable[[InsightSignature], bool], str], ...] = (
    (
        SPENDING_AWARENESS,
        lambda s: s.spending_frequency == SpendingFrequency.HIGH,
        " Your recent activity shows high exposure to shopping triggers.",
    ),
    (
        EMOTIONAL_REGULATION,
        lambda s: s.emotional_balance == EmotionalBalance.NEGATIVE,
        " This will help improve your emotional well-being.",
    ),
    (
        SLEEP_WIND_DOWN,
        lambda s: s.time_preference == TimePreference.NIGHT,
        " Your nighttime activity suggests this habit is especially important.",
    ),
)


def rank_categories(
    patterns: list[Pattern],
    signature: InsightSignature | None = None,
    boost: int = 50,
) -> dict[str, int]:
    """Accumulate category priorities from patterns and signature boosts."""
    priority: dict[str, int] = {}

    for pattern in patterns:
        for category in CATEGORY_MAPPING.get(pattern.pattern_type, ()):
            priority[category] = priority.get(category, 0) + pattern.confidence_score

    if signature is not None:
        for category, condition, _ in SIGNATURE_BOOSTS:
            if condition(signature):
                priority[category] = priority.get(category, 0) + boost

    return priority


def target_categories(
    patterns: list[Pattern],
    habit_library: list[Habit],
    signature: InsightSignature | None = None,
    boost: int = 50,
) -> list[str]:
    """Categories in rotation order."""
    priority = rank_categories(patterns, signature, boost)
    if priority:
        return [c for c, _ in sorted(priority.items(), key=lambda item: item[1], reverse=True)]

    return list(dict.fromkeys(h.category for h in habit_library))


def explain(category: str, patterns: list[Pattern], signature: InsightSignature | None) -> str:
    """Why this day's habit was chosen."""
    explanation = f"This task addresses your {category.lower()} patterns."

    for pattern in patterns:
        if category in CATEGORY_MAPPING.get(pattern.pattern_type, ()):
            explanation = (
                f"Based on your detected {pattern.pattern_type.lower()}, "
                "this habit helps break that loop and build healthier patterns."
            )
            break

    if signature is not None:
        for boosted, condition, sentence in SIGNATURE_BOOSTS:
            if category == boosted and condition(signature):
                explanation += sentence

    return explanation


def reflection_prompt_for(day: int, every: int = 3) -> str | None:
    if day % every != 0:
        return None
    return REFLECTION_PROMPTS[(day // every - 1) % len(REFLECTION_PROMPTS)]


def generate_program(
    patterns: list[Pattern],
    habit_library: list[Habit],
    signature: InsightSignature | None = None,
    config: ProgramConfig | None = None,
) -> Program:
    """
    Generate a fresh program with no check-ins.

    Args:
        patterns: Stored pattern detections
        habit_library: Available habits
        signature: Current insight signature, if computed
        config: Program settings (defaults to args/habitloop.yaml)

    Returns:
        Program

    Raises:
        IncompleteHabitLibraryError: shortfall_policy is "error" and a
            ranked category has no habits
    """
    if config is None:
        config = load_config().program

    categories = target_categories(patterns, habit_library, signature, config.signature_boost)
    if not categories:
        logger.warning("Program generation skipped: no patterns and an empty habit library")
        return Program(skipped_days=list(range(1, config.length_days + 1)))

    habits_by_category: dict[str, list[Habit]] = {c: [] for c in categories}
    for habit in habit_library:
        if habit.category in habits_by_category:
            habits_by_category[habit.category].append(habit)

    # Only the first length_days categories in the rotation are ever reached
    missing = [c for c in categories[: config.length_days] if not habits_by_category[c]]
    if missing and config.shortfall_policy == "error":
        raise IncompleteHabitLibraryError(missing)

    days: list[DailyProgramEntry] = []
    skipped: list[int] = []

    for day in range(1, config.length_days + 1):
        category = categories[(day - 1) % len(categories)]
        category_habits = habits_by_category[category]

        if not category_habits:
            skipped.append(day)
            continue

        habit = category_habits[((day - 1) // len(categories)) % len(category_habits)]

        days.append(
            DailyProgramEntry(
                day=day,
                task=replace(habit),
                explanation=explain(category, patterns, signature),
                reflection_prompt=reflection_prompt_for(day, config.reflection_every),
            )
        )

    if skipped:
        logger.warning(
            f"Program is short {len(skipped)} day(s): no habits for {', '.join(missing)}"
        )

    logger.info(
        f"Program generated: {len(days)} days across {len(categories)} categories "
        f"from {len(patterns)} patterns"
    )

    return Program(days=days, check_ins=[], skipped_days=skipped)
