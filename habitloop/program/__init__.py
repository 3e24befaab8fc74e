"""Program Engine - 30-day habit programs built from detected patterns

Philosophy:
    One small habit a day beats a plan nobody follows.
    The program leans on whatever the pattern detector saw most,
    and re-plans itself when behavior shifts.

Components:
    generator.py: Rank habit categories and lay out the 30 days
    habit_library.py: Seed library of small, concrete habits
    progress.py: Daily check-ins, streaks, completion
    regeneration.py: Signature change detection and re-planning

Usage:
    from habitloop.program.generator import generate_program
    from habitloop.program.habit_library import HABIT_LIBRARY

    program = generate_program(patterns, HABIT_LIBRARY, signature)
    print(program.days[0].task.action)
"""

PROGRAM_LENGTH_DAYS = 30

# Habit categories
SPENDING_AWARENESS = "Spending Awareness"
MINDFUL_PAUSING = "Mindful Pausing"
EMOTIONAL_REGULATION = "Emotional Regulation"
SLEEP_WIND_DOWN = "Sleep & Wind-down"
DIGITAL_BALANCE = "Digital Balance"
FOCUS_DEEP_WORK = "Focus & Deep Work"

HABIT_CATEGORIES = (
    SPENDING_AWARENESS,
    MINDFUL_PAUSING,
    EMOTIONAL_REGULATION,
    SLEEP_WIND_DOWN,
    DIGITAL_BALANCE,
    FOCUS_DEEP_WORK,
)

# Pattern title -> habit categories it feeds
CATEGORY_MAPPING = {
    "Shopping & Spending Triggers": (SPENDING_AWARENESS, MINDFUL_PAUSING),
    "Emotional Tone": (EMOTIONAL_REGULATION, MINDFUL_PAUSING),
    "Time-of-Day Habits": (SLEEP_WIND_DOWN, DIGITAL_BALANCE),
    "Screen-Time & Scrolling": (DIGITAL_BALANCE, FOCUS_DEEP_WORK),
    "Cue-Craving-Reward Loops": (MINDFUL_PAUSING, EMOTIONAL_REGULATION, DIGITAL_BALANCE),
}

REFLECTION_PROMPTS = (
    "What triggered the urge to engage in this behavior today?",
    "How did you feel before and after completing this task?",
    "What alternative action could you take next time you feel this urge?",
    "What patterns are you noticing in your behavior?",
    "How has this habit changed your awareness today?",
)

__all__ = [
    "PROGRAM_LENGTH_DAYS",
    "HABIT_CATEGORIES",
    "CATEGORY_MAPPING",
    "REFLECTION_PROMPTS",
    "SPENDING_AWARENESS",
    "MINDFUL_PAUSING",
    "EMOTIONAL_REGULATION",
    "SLEEP_WIND_DOWN",
    "DIGITAL_BALANCE",
    "FOCUS_DEEP_WORK",
]
