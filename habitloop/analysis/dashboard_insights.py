"""
Tool: Dashboard Insights
Purpose: Summarize logged activity over a 7 or 30 day window

Three series feed the dashboard, and together they produce an insight
signature - a small snapshot of current behavior the program
coordinator compares between refreshes:

    emotional trend     positive / negative / neutral entries per day
    spending triggers   entries mentioning spending, per day
    time distribution   morning [6,12) afternoon [12,18)
                        evening [18,24) night [0,6)

An entry is inside the window when
    timestamp >= now - window_days * 86_400_000

Day keys and hours come from the same timezone (local by default).

These keyword lists are deliberately separate from the pattern
detector's categories.

Dependencies:
    - datetime (stdlib)
"""

import logging
from collections import defaultdict
from datetime import datetime, tzinfo
from typing import Any, Iterable

from habitloop.analysis.pattern_summary import MAX_COMMON_SNIPPETS, summarize_patterns
from habitloop.models import (
    ActivityEntry,
    EmotionalBalance,
    EmotionalTrend,
    InsightSignature,
    Pattern,
    SpendingFrequency,
    SpendingTrigger,
    TimeDistribution,
    TimePreference,
)

logger = logging.getLogger(__name__)

MS_PER_DAY = 24 * 60 * 60 * 1000

POSITIVE_KEYWORDS = (
    "happy", "excited", "great", "love", "amazing",
    "wonderful", "joy", "grateful", "blessed", "awesome",
)
NEGATIVE_KEYWORDS = (
    "sad", "angry", "frustrated", "hate", "terrible",
    "awful", "depressed", "anxious", "worried", "stressed",
)
SPENDING_KEYWORDS = (
    "buy", "purchase", "shop", "cart", "checkout",
    "order", "sale", "deal", "discount", "price",
)

POSITIVE_RATIO_THRESHOLD = 0.4
NEGATIVE_RATIO_THRESHOLD = 0.2
HIGH_SPENDING_PER_DAY = 2
MEDIUM_SPENDING_PER_DAY = 0.5


def _now_ms() -> int:
    return int(datetime.now().timestamp() * 1000)


def _entry_datetime(entry: ActivityEntry, tz: tzinfo | None) -> datetime:
    return datetime.fromtimestamp(entry.timestamp / 1000, tz)


def _contains_any(text: str, keywords: Iterable[str]) -> bool:
    return any(keyword in text for keyword in keywords)


def entries_in_window(
    entries: list[ActivityEntry], window_days: int, now_ms: int | None = None
) -> list[ActivityEntry]:
    """Entries with timestamp >= now - window (inclusive lower bound)."""
    start = (now_ms if now_ms is not None else _now_ms()) - window_days * MS_PER_DAY
    return [e for e in entries if e.timestamp >= start]


def compute_emotional_trends(
    patterns: list[Pattern],
    entries: list[ActivityEntry],
    window_days: int,
    now_ms: int | None = None,
    tz: tzinfo | None = None,
) -> list[EmotionalTrend]:
    """Count positive, negative and neutral entries per day, oldest first."""
    days: dict[str, EmotionalTrend] = {}

    for entry in entries_in_window(entries, window_days, now_ms):
        day_key = _entry_datetime(entry, tz).date().isoformat()
        trend = days.setdefault(day_key, EmotionalTrend(date=day_key))
        text = entry.text.lower()

        # Positive wins when both appear
        if _contains_any(text, POSITIVE_KEYWORDS):
            trend.positive += 1
        elif _contains_any(text, NEGATIVE_KEYWORDS):
            trend.negative += 1
        else:
            trend.neutral += 1

    return [days[key] for key in sorted(days)]


def compute_spending_triggers(
    patterns: list[Pattern],
    entries: list[ActivityEntry],
    window_days: int,
    now_ms: int | None = None,
    tz: tzinfo | None = None,
) -> list[SpendingTrigger]:
    """Count entries mentioning spending per day. Days with none are omitted."""
    counts: dict[str, int] = defaultdict(int)

    for entry in entries_in_window(entries, window_days, now_ms):
        if _contains_any(entry.text.lower(), SPENDING_KEYWORDS):
            day_key = _entry_datetime(entry, tz).date().isoformat()
            counts[day_key] += 1

    return [SpendingTrigger(date=key, count=counts[key]) for key in sorted(counts)]


def compute_time_distribution(
    patterns: list[Pattern],
    entries: list[ActivityEntry],
    window_days: int,
    now_ms: int | None = None,
    tz: tzinfo | None = None,
) -> TimeDistribution:
    """Histogram of entries by part of day."""
    distribution = TimeDistribution()

    for entry in entries_in_window(entries, window_days, now_ms):
        hour = _entry_datetime(entry, tz).hour
        if 6 <= hour < 12:
            distribution.morning += 1
        elif 12 <= hour < 18:
            distribution.afternoon += 1
        elif 18 <= hour < 24:
            distribution.evening += 1
        else:
            distribution.night += 1

    return distribution


def classify_emotional_balance(trends: list[EmotionalTrend]) -> EmotionalBalance:
    total = sum(t.positive + t.negative + t.neutral for t in trends)
    positive_ratio = sum(t.positive for t in trends) / total if total > 0 else 0

    if positive_ratio > POSITIVE_RATIO_THRESHOLD:
        return EmotionalBalance.POSITIVE
    if positive_ratio < NEGATIVE_RATIO_THRESHOLD:
        return EmotionalBalance.NEGATIVE
    return EmotionalBalance.NEUTRAL


def classify_spending_frequency(triggers: list[SpendingTrigger], window_days: int) -> SpendingFrequency:
    avg_per_day = sum(t.count for t in triggers) / window_days

    if avg_per_day > HIGH_SPENDING_PER_DAY:
        return SpendingFrequency.HIGH
    if avg_per_day > MEDIUM_SPENDING_PER_DAY:
        return SpendingFrequency.MEDIUM
    return SpendingFrequency.LOW


def classify_time_preference(distribution: TimeDistribution) -> TimePreference:
    if distribution.total == 0:
        return TimePreference.BALANCED

    # Ties resolve in this order
    buckets = (
        (TimePreference.MORNING, distribution.morning),
        (TimePreference.AFTERNOON, distribution.afternoon),
        (TimePreference.EVENING, distribution.evening),
        (TimePreference.NIGHT, distribution.night),
    )
    max_count = max(count for _, count in buckets)
    for preference, count in buckets:
        if count == max_count:
            return preference
    return TimePreference.BALANCED


def generate_insight_signature(
    patterns: list[Pattern],
    entries: list[ActivityEntry],
    window_days: int,
    now_ms: int | None = None,
    tz: tzinfo | None = None,
) -> InsightSignature:
    """
    Build the insight signature for a window.

    Args:
        patterns: All stored patterns (only counted)
        entries: All logged entries
        window_days: Window size in days
        now_ms: Reference time in epoch millis (defaults to now)
        tz: Timezone for day and hour bucketing (defaults to local)

    Returns:
        InsightSignature
    """
    if now_ms is None:
        now_ms = _now_ms()

    trends = compute_emotional_trends(patterns, entries, window_days, now_ms, tz)
    triggers = compute_spending_triggers(patterns, entries, window_days, now_ms, tz)
    distribution = compute_time_distribution(patterns, entries, window_days, now_ms, tz)

    return InsightSignature(
        emotional_balance=classify_emotional_balance(trends),
        spending_frequency=classify_spending_frequency(triggers, window_days),
        time_preference=classify_time_preference(distribution),
        pattern_count=len(patterns),
        window=window_days,
    )


def build_dashboard(
    patterns: list[Pattern],
    entries: list[ActivityEntry],
    window_days: int,
    now_ms: int | None = None,
    tz: tzinfo | None = None,
    snippet_limit: int = MAX_COMMON_SNIPPETS,
) -> dict[str, Any]:
    """Everything the pattern dashboard shows for one window."""
    if now_ms is None:
        now_ms = _now_ms()

    trends = compute_emotional_trends(patterns, entries, window_days, now_ms, tz)
    triggers = compute_spending_triggers(patterns, entries, window_days, now_ms, tz)
    distribution = compute_time_distribution(patterns, entries, window_days, now_ms, tz)
    signature = generate_insight_signature(patterns, entries, window_days, now_ms, tz)

    logger.debug(
        f"Dashboard built: window={window_days}d entries={len(entries)} "
        f"patterns={len(patterns)} signature={signature.to_dict()}"
    )

    return {
        "window_days": window_days,
        "summary": summarize_patterns(patterns, window_days, snippet_limit),
        "emotional_trends": [t.to_dict() for t in trends],
        "spending_triggers": [t.to_dict() for t in triggers],
        "time_distribution": distribution.to_dict(),
        "signature": signature.to_dict(),
    }
