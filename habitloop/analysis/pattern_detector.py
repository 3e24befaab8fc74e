"""
Tool: Pattern Detector
Purpose: Detect behavioral patterns in a logged activity note

Each of five categories has a flat keyword list. A category fires when
at least one of its keywords appears anywhere in the text (plain,
case-insensitive substring match - no stemming, no word boundaries).

Confidence is keyword density scaled onto a per-category floor:

    confidence = round(min(95, base + matches / word_count * 1000))

    Category                      base
    Shopping & Spending Triggers   40
    Emotional Tone                 35
    Time-of-Day Habits             30
    Screen-Time & Scrolling        45
    Cue-Craving-Reward Loops       50

The thresholds are tuned to substring matching. Swapping in tokenized
matching changes every score downstream.

Usage:
    python -m habitloop.analysis.pattern_detector --text "Added three things to my cart at midnight"

Dependencies:
    - re (stdlib)

Output:
    JSON result with success status and detections
"""

import argparse
import json
import re
import sys
from typing import Any

from habitloop.analysis import PATTERN_TYPES, round_half_up
from habitloop.config_models import AnalysisConfig, load_config
from habitloop.models import DetectedPattern


SHOPPING_KEYWORDS = (
    "buy", "purchase", "cart", "checkout", "sale", "discount", "deal", "price",
    "order", "shipping", "delivery", "add to cart", "wishlist", "coupon", "promo",
    "limited time", "hurry", "stock", "available", "$", "free shipping",
)

EMOTIONAL_KEYWORDS = (
    "feel", "feeling", "felt", "happy", "sad", "angry", "frustrated", "excited",
    "anxious", "worried", "stressed", "depressed", "lonely", "afraid", "scared",
    "love", "hate", "miss", "wish", "hope", "regret", "guilt", "shame",
)

TIME_KEYWORDS = (
    "morning", "afternoon", "evening", "night", "midnight", "late", "early",
    "always", "usually", "often", "every day", "daily", "routine", "habit",
    "before bed", "wake up", "lunch", "dinner", "weekend",
)

SCROLLING_KEYWORDS = (
    "scroll", "scrolling", "feed", "endless", "hours", "lost track", "binge",
    "can't stop", "addicted", "refresh", "check", "notification", "update",
    "swipe", "browse", "surfing", "rabbit hole",
)

FEEDBACK_LOOP_KEYWORDS = (
    "crave", "craving", "need", "must", "have to", "can't resist", "can't stop",
    "urge", "trigger", "reward", "dopamine", "instant", "gratification",
    "compulsive", "automatic", "mindless", "habit", "loop", "cycle", "pattern",
    "again and again",
)

# (pattern key, keywords, base confidence) in detection order
CATEGORY_RULES = (
    ("SHOPPING", SHOPPING_KEYWORDS, 40),
    ("EMOTIONAL", EMOTIONAL_KEYWORDS, 35),
    ("TIME_OF_DAY", TIME_KEYWORDS, 30),
    ("SCREEN_TIME", SCROLLING_KEYWORDS, 45),
    ("FEEDBACK_LOOP", FEEDBACK_LOOP_KEYWORDS, 50),
)

SENTENCE_SPLIT = re.compile(r"[.!?]+")
WHITESPACE_SPLIT = re.compile(r"\s+")


def count_keywords(text: str, keywords: tuple[str, ...]) -> int:
    """Count how many distinct keywords occur in text."""
    lower_text = text.lower()
    return sum(1 for keyword in keywords if keyword.lower() in lower_text)


def _truncate(text: str, limit: int) -> str:
    return text[:limit] + ("..." if len(text) > limit else "")


def extract_snippet(text: str, keywords: tuple[str, ...], limit: int = 100) -> str:
    """Return the first sentence mentioning a keyword, truncated to limit."""
    sentences = [s for s in SENTENCE_SPLIT.split(text) if s.strip()]

    for sentence in sentences:
        lower_sentence = sentence.lower()
        for keyword in keywords:
            if keyword.lower() in lower_sentence:
                return _truncate(sentence.strip(), limit)

    return _truncate(text, limit)


def score_confidence(match_count: int, word_count: int, base: int, config: AnalysisConfig) -> int:
    """Density-scaled confidence, floored at base and capped at max_confidence."""
    raw = base + (match_count / word_count) * config.density_scale
    return int(round_half_up(min(config.max_confidence, raw)))


def detect_patterns(text: str, config: AnalysisConfig | None = None) -> list[DetectedPattern]:
    """
    Detect behavioral patterns in free text.

    Args:
        text: Note text to analyze
        config: Analysis thresholds (defaults to args/habitloop.yaml)

    Returns:
        Detections sorted by descending confidence. Empty when the text
        is shorter than the configured minimum.
    """
    if config is None:
        config = load_config().analysis

    if not text or len(text.strip()) < config.min_text_length:
        return []

    word_count = len(WHITESPACE_SPLIT.split(text))
    patterns: list[DetectedPattern] = []

    for key, keywords, base in CATEGORY_RULES:
        match_count = count_keywords(text, keywords)
        if match_count == 0:
            continue

        patterns.append(
            DetectedPattern(
                type=PATTERN_TYPES[key]["title"],
                confidence=score_confidence(match_count, word_count, base, config),
                snippet=extract_snippet(text, keywords, config.snippet_length),
            )
        )

    return sorted(patterns, key=lambda p: p.confidence, reverse=True)


def main():
    parser = argparse.ArgumentParser(
        description="Pattern Detector - Keyword-based behavioral pattern detection",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    python -m habitloop.analysis.pattern_detector --text "I keep scrolling the feed for hours"
    echo "Bought two more things during the flash sale" | python -m habitloop.analysis.pattern_detector
        """,
    )
    parser.add_argument("--text", help="Text to analyze (reads stdin when omitted)")

    args = parser.parse_args()
    text = args.text if args.text is not None else sys.stdin.read()

    detections = detect_patterns(text)
    result: dict[str, Any] = {
        "success": True,
        "patterns": [d.to_dict() for d in detections],
        "count": len(detections),
    }
    if not detections:
        result["message"] = "No clear patterns detected. Try adding more detailed text."

    print(json.dumps(result, indent=2))


if __name__ == "__main__":
    main()
