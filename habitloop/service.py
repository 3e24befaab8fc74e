"""
Tool: HabitLoop Service
Purpose: User-facing operations over the store and the analysis pipeline

Every operation returns a result dict:
    {"success": True, ...data}
    {"success": False, "error": "..."}

Store failures are logged with their traceback and reported as a
generic "Please try again." error. Nothing is retried.

Usage:
    from habitloop.service import log_entry, analyze_entry, create_program

    entry = log_entry("Shopping", "Added three things to my cart at midnight again")
    analyze_entry(entry["entry"]["id"])
    create_program()
"""

import logging
import sqlite3
import time
from datetime import tzinfo
from typing import Any

from habitloop.analysis.dashboard_insights import build_dashboard, generate_insight_signature
from habitloop.analysis.pattern_detector import detect_patterns
from habitloop.config_models import HabitLoopConfig, load_config
from habitloop.models import DailyCheckIn
from habitloop.program.generator import generate_program
from habitloop.program.habit_library import HABIT_LIBRARY, ensure_library
from habitloop.program.progress import current_day, summarize_progress, upsert_check_in
from habitloop.program.regeneration import SignatureTracker, regenerate_program
from habitloop.storage import store

logger = logging.getLogger(__name__)

SOURCE_LABELS = (
    "Shopping",
    "Social Feed",
    "Messages",
    "Browsing",
    "News",
    "Entertainment",
    "Work",
    "Other",
)

MAX_IMAGE_BYTES = 5 * 1024 * 1024


def _now_ms() -> int:
    return int(time.time() * 1000)


def _failure(action: str) -> dict[str, Any]:
    return {"success": False, "error": f"Failed to {action}. Please try again."}


def _validate_window(window_days: int, config: HabitLoopConfig) -> str | None:
    allowed = config.insights.allowed_windows
    if window_days not in allowed:
        return f"Invalid window. Must be one of: {allowed}"
    return None


# =============================================================================
# Entries and patterns
# =============================================================================


def log_entry(
    source_label: str,
    notes: str,
    timestamp: int | None = None,
    image: bytes | None = None,
    external_blob: str | None = None,
) -> dict[str, Any]:
    """
    Log one snippet of online activity.

    Args:
        source_label: Where the activity happened (one of SOURCE_LABELS)
        notes: What the user saw or did, in their own words
        timestamp: Epoch millis (defaults to now)
        image: Optional screenshot, at most 5MB
        external_blob: Optional reference to externally stored media

    Returns:
        dict with success status and the stored entry
    """
    if not notes or not notes.strip():
        return {"success": False, "error": "Please paste some text to analyze"}

    if source_label not in SOURCE_LABELS:
        return {"success": False, "error": f"Invalid source. Must be one of: {list(SOURCE_LABELS)}"}

    if image is not None and len(image) > MAX_IMAGE_BYTES:
        return {"success": False, "error": "Image must be smaller than 5MB"}

    try:
        entry = store.add_activity_entry(
            timestamp=timestamp if timestamp is not None else _now_ms(),
            source_label=source_label,
            notes=notes.strip(),
            image=image,
            external_blob=external_blob,
        )
    except sqlite3.Error:
        logger.exception("Failed to add activity entry")
        return _failure("add entry")

    logger.info(f"Entry {entry.id} logged from {source_label}")
    return {"success": True, "entry": entry.to_dict(), "message": "Entry added successfully!"}


def list_entries() -> dict[str, Any]:
    try:
        entries = store.get_activity_entries()
    except sqlite3.Error:
        logger.exception("Failed to load activity entries")
        return _failure("load entries")

    return {"success": True, "entries": [e.to_dict() for e in entries], "count": len(entries)}


def get_entry(entry_id: int) -> dict[str, Any]:
    try:
        entry = store.get_activity_entry(entry_id)
    except sqlite3.Error:
        logger.exception(f"Failed to load activity entry {entry_id}")
        return _failure("load entry")

    if entry is None:
        return {"success": False, "error": f"Entry {entry_id} not found"}
    return {"success": True, "entry": entry.to_dict()}


def analyze_entry(entry_id: int) -> dict[str, Any]:
    """
    Run pattern detection on a stored entry and save every detection.

    Only the entry notes are analyzed. Running this twice on the same
    entry stores the detections twice.
    """
    try:
        entry = store.get_activity_entry(entry_id)
        if entry is None:
            return {"success": False, "error": f"Entry {entry_id} not found"}

        detections = detect_patterns(entry.notes)
        if not detections:
            return {
                "success": True,
                "patterns": [],
                "message": "No clear patterns detected in this entry. Try adding more detailed text.",
            }

        for detection in detections:
            store.add_pattern(detection.to_pattern())
    except sqlite3.Error:
        logger.exception(f"Failed to analyze entry {entry_id}")
        return _failure("analyze entry")

    count = len(detections)
    logger.info(f"Entry {entry_id} analyzed: {count} patterns stored")
    return {
        "success": True,
        "patterns": [d.to_dict() for d in detections],
        "message": f"Detected {count} pattern{'s' if count > 1 else ''}!",
    }


def list_patterns() -> dict[str, Any]:
    try:
        patterns = store.get_patterns()
    except sqlite3.Error:
        logger.exception("Failed to load patterns")
        return _failure("load patterns")

    return {"success": True, "patterns": [p.to_dict() for p in patterns], "count": len(patterns)}


def get_dashboard(
    window_days: int | None = None,
    now_ms: int | None = None,
    tz: tzinfo | None = None,
) -> dict[str, Any]:
    """Pattern summary, trends and insight signature for a 7 or 30 day window."""
    config = load_config()
    if window_days is None:
        window_days = config.insights.default_window_days

    error = _validate_window(window_days, config)
    if error:
        return {"success": False, "error": error}

    try:
        patterns = store.get_patterns()
        entries = store.get_activity_entries()
    except sqlite3.Error:
        logger.exception("Failed to load dashboard data")
        return _failure("load dashboard")

    dashboard = build_dashboard(
        patterns, entries, window_days, now_ms, tz, config.insights.summary_snippet_limit
    )
    return {"success": True, **dashboard}


# =============================================================================
# Habit library and program
# =============================================================================


def get_habit_library() -> dict[str, Any]:
    """The stored habit library, seeded on first use."""
    try:
        habits = store.get_habit_library()
        if not habits:
            store.seed_habit_library(HABIT_LIBRARY)
            habits = store.get_habit_library()
    except sqlite3.Error:
        logger.exception("Failed to load habit library")
        return _failure("load habit library")

    return {"success": True, "habits": [h.to_dict() for h in habits], "count": len(habits)}


def create_program(window_days: int | None = None) -> dict[str, Any]:
    """
    Generate and store a new 30-day program, replacing any existing one.

    Requires at least one stored pattern. The insight signature for the
    window feeds category ranking.
    """
    config = load_config()
    if window_days is None:
        window_days = config.insights.default_window_days

    error = _validate_window(window_days, config)
    if error:
        return {"success": False, "error": error}

    try:
        patterns = store.get_patterns()
        if not patterns:
            return {"success": False, "error": "Please add and analyze entries first to detect patterns."}

        library = store.get_habit_library()
        if not library:
            store.seed_habit_library(HABIT_LIBRARY)
            library = store.get_habit_library()

        signature = generate_insight_signature(patterns, store.get_activity_entries(), window_days)
        program = generate_program(patterns, library, signature, config.program)
        store.create_program(program)
        store.save_last_signature(signature)
    except ValueError as e:
        return {"success": False, "error": str(e)}
    except sqlite3.Error:
        logger.exception("Failed to create program")
        return _failure("generate program")

    result: dict[str, Any] = {
        "success": True,
        "program": program.to_dict(),
        "message": "Your personalized 30-day program is ready!",
    }
    if program.skipped_days:
        result["warning"] = f"{len(program.skipped_days)} day(s) have no habit available"
    return result


def get_program() -> dict[str, Any]:
    try:
        program = store.get_program()
    except sqlite3.Error:
        logger.exception("Failed to load program")
        return _failure("load program")

    if program is None:
        return {"success": False, "error": "No active program found. Generate your program first."}

    length_days = load_config().program.length_days
    return {
        "success": True,
        "program": program.to_dict(),
        "current_day": current_day(program, length_days),
    }


def submit_check_in(
    task_completed: bool,
    mood_rating: int | None = None,
    notes: str = "",
    reduced_behavior: bool = False,
) -> dict[str, Any]:
    """Record the check-in for the current program day."""
    length_days = load_config().program.length_days
    try:
        program = store.get_program()
        if program is None:
            return {"success": False, "error": "No active program found. Generate your program first."}

        day = current_day(program, length_days)
        existing = program.get_check_in(day)
        check_in = DailyCheckIn(
            day=day,
            task_completed=task_completed,
            notes=(notes or "").strip(),
            reduced_behavior=reduced_behavior,
            mood_rating=mood_rating,
        )

        upsert_check_in(program, check_in, length_days)
        store.add_check_in(check_in)
    except ValueError as e:
        return {"success": False, "error": str(e)}
    except sqlite3.Error:
        logger.exception("Failed to save check-in")
        return _failure("save check-in")

    logger.info(f"Check-in saved for day {day} (completed={task_completed})")
    return {
        "success": True,
        "check_in": check_in.to_dict(),
        "message": "Check-in updated!" if existing else "Check-in saved!",
    }


def get_progress() -> dict[str, Any]:
    length_days = load_config().program.length_days
    try:
        program = store.get_program()
    except sqlite3.Error:
        logger.exception("Failed to load program")
        return _failure("load progress")

    return {
        "success": True,
        "current_day": current_day(program, length_days),
        "has_program": program is not None,
        **summarize_progress(program, length_days),
    }


# =============================================================================
# Regeneration
# =============================================================================


class ProgramCoordinator:
    """
    Watches the insight signature and re-plans the program when it shifts.

    The baseline is the last signature saved in the store, so refreshes
    compare across processes. With no saved signature the first refresh
    only records a baseline. On a significant change the stored program
    is regenerated with its check-ins intact.
    """

    def __init__(self, tracker: SignatureTracker | None = None, config: HabitLoopConfig | None = None):
        self.config = config or load_config()
        self.tracker = tracker or SignatureTracker(self.config.program.pattern_count_delta)

    def refresh(
        self,
        window_days: int | None = None,
        now_ms: int | None = None,
        tz: tzinfo | None = None,
    ) -> dict[str, Any]:
        if window_days is None:
            window_days = self.config.insights.default_window_days

        error = _validate_window(window_days, self.config)
        if error:
            return {"success": False, "error": error}

        try:
            patterns = store.get_patterns()
            entries = store.get_activity_entries()
            signature = generate_insight_signature(patterns, entries, window_days, now_ms, tz)

            # The store holds the baseline; create_program may have moved it
            self.tracker.last = store.get_last_signature()

            changed = self.tracker.observe(signature)
            store.save_last_signature(signature)
            regenerated = False

            if changed:
                existing = store.get_program()
                if existing is not None:
                    library = ensure_library(store.get_habit_library())
                    program = regenerate_program(
                        existing, patterns, library, signature, self.config.program
                    )
                    store.create_program(program)
                    regenerated = True
        except ValueError as e:
            return {"success": False, "error": str(e)}
        except sqlite3.Error:
            logger.exception("Failed to refresh program")
            return _failure("refresh program")

        return {
            "success": True,
            "signature": signature.to_dict(),
            "changed": changed,
            "regenerated": regenerated,
        }
