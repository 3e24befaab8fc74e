"""Headline numbers for the pattern dashboard.

Works on the most recent N stored patterns (append order), where N is
the dashboard window. Pattern rows carry no timestamp, so the window is
a count, not a date range.
"""

from collections import Counter
from typing import Any

from habitloop.analysis import DEFAULT_PATTERN_SUMMARY, PATTERN_TYPES, round_half_up
from habitloop.models import Pattern

SUMMARIES = {p["title"]: p["summary"] for p in PATTERN_TYPES.values()}

MAX_COMMON_SNIPPETS = 10


def summarize_patterns(
    patterns: list[Pattern], window_size: int, snippet_limit: int = MAX_COMMON_SNIPPETS
) -> dict[str, Any]:
    """
    Summarize the most recent patterns.

    Returns:
        dict with total_patterns, unique_types, avg_confidence,
        top_types (type, count, summary) and common_snippets
    """
    if not patterns:
        return {
            "total_patterns": 0,
            "unique_types": 0,
            "avg_confidence": 0,
            "top_types": [],
            "common_snippets": [],
        }

    recent = patterns[-window_size:] if window_size > 0 else list(patterns)

    type_counts = Counter(p.pattern_type for p in recent)
    total_confidence = sum(p.confidence_score for p in recent)

    # Counter.most_common keeps first-seen order for ties
    top_types = [
        {
            "type": pattern_type,
            "count": count,
            "summary": SUMMARIES.get(pattern_type, DEFAULT_PATTERN_SUMMARY),
        }
        for pattern_type, count in type_counts.most_common()
    ]

    common_snippets = list(dict.fromkeys(p.snippet for p in recent))[:snippet_limit]

    return {
        "total_patterns": len(recent),
        "unique_types": len(type_counts),
        "avg_confidence": int(round_half_up(total_confidence / len(recent))),
        "top_types": top_types,
        "common_snippets": common_snippets,
    }
