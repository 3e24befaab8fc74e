"""Analysis Tools - Keyword pattern detection and dashboard insights

Philosophy:
    Notes are written quickly and loosely. Keyword overlap is enough to
    point at a loop; it is not a diagnosis.

Components:
    pattern_detector.py: Score free text against five keyword categories
        - Shopping & spending triggers
        - Emotional tone
        - Time-of-day habits
        - Screen-time & scrolling
        - Cue-craving-reward loops

    dashboard_insights.py: Window-based trends over logged entries
        - Emotional trend per day
        - Spending triggers per day
        - Morning/afternoon/evening/night distribution
        - Insight signature for regeneration decisions

    pattern_summary.py: Headline numbers for stored patterns

Note:
    The detector and the dashboard keep separate keyword tables.
    They answer different questions and are tuned independently.
"""

from decimal import ROUND_HALF_UP, Decimal

# Pattern categories, in detection order
PATTERN_TYPES = {
    "SHOPPING": {
        "id": "shopping",
        "title": "Shopping & Spending Triggers",
        "description": "Patterns related to online shopping, purchases, and spending behaviors",
        "summary": "You frequently encounter shopping-related content and purchase prompts.",
    },
    "EMOTIONAL": {
        "id": "emotional",
        "title": "Emotional Tone",
        "description": "Emotional language and sentiment patterns in your activity",
        "summary": "Your activity shows emotional language patterns and sentiment expressions.",
    },
    "TIME_OF_DAY": {
        "id": "time-of-day",
        "title": "Time-of-Day Habits",
        "description": "Temporal patterns and time-based behavioral cues",
        "summary": "Temporal patterns suggest specific times when you engage with content.",
    },
    "SCREEN_TIME": {
        "id": "screen-time",
        "title": "Screen-Time & Scrolling",
        "description": "Indicators of prolonged engagement and scrolling behaviors",
        "summary": "Indicators of extended browsing and scrolling behaviors detected.",
    },
    "FEEDBACK_LOOP": {
        "id": "feedback-loop",
        "title": "Cue-Craving-Reward Loops",
        "description": "Addictive feedback patterns and habit loop language",
        "summary": "Addictive feedback patterns and habit loop language identified.",
    },
}

DEFAULT_PATTERN_SUMMARY = "Behavioral pattern detected in your activity."


def round_half_up(value: float, ndigits: int = 0) -> float:
    """Round halves away from zero instead of to even."""
    quantum = Decimal(1).scaleb(-ndigits)
    return float(Decimal(str(value)).quantize(quantum, rounding=ROUND_HALF_UP))


__all__ = [
    "PATTERN_TYPES",
    "DEFAULT_PATTERN_SUMMARY",
    "round_half_up",
]
