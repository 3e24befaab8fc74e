"""
Tool: HabitLoop Store
Purpose: Persist entries, patterns, the habit library, the program and check-ins

Tables:
    entries         logged activity (image kept as a BLOB)
    patterns        append-only pattern detections, duplicates allowed
    habits          habit library, in seed order
    program         single row holding program metadata
    program_days    one row per generated day, task stored as JSON
    check_ins       one row per day, upserted
    signature_state last insight signature seen by the program coordinator

There is at most one program. create_program replaces it wholesale,
check-ins included.

Functions raise sqlite3.Error on failure; callers decide how to report it.

Dependencies:
    - sqlite3 (stdlib)
    - json (stdlib)
"""

import json
import logging
import sqlite3
from datetime import datetime

from habitloop.models import (
    ActivityEntry,
    DailyCheckIn,
    DailyProgramEntry,
    Habit,
    InsightSignature,
    Pattern,
    Program,
)
from habitloop.storage import DB_PATH

logger = logging.getLogger(__name__)


def get_connection() -> sqlite3.Connection:
    """Get database connection, creating tables if needed."""
    DB_PATH.parent.mkdir(parents=True, exist_ok=True)
    conn = sqlite3.connect(str(DB_PATH))
    conn.row_factory = sqlite3.Row

    cursor = conn.cursor()

    cursor.execute("""
        CREATE TABLE IF NOT EXISTS entries (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            timestamp INTEGER NOT NULL,
            source_label TEXT NOT NULL,
            notes TEXT NOT NULL DEFAULT '',
            image BLOB,
            external_blob TEXT
        )
    """)

    cursor.execute("""
        CREATE TABLE IF NOT EXISTS patterns (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            pattern_type TEXT NOT NULL,
            snippet TEXT NOT NULL DEFAULT '',
            confidence_score INTEGER NOT NULL,
            created_at DATETIME DEFAULT CURRENT_TIMESTAMP
        )
    """)

    cursor.execute("""
        CREATE TABLE IF NOT EXISTS habits (
            id TEXT PRIMARY KEY,
            action TEXT NOT NULL,
            duration INTEGER NOT NULL,
            difficulty INTEGER NOT NULL CHECK(difficulty BETWEEN 1 AND 3),
            when_to_cue TEXT,
            rationale TEXT,
            category TEXT NOT NULL
        )
    """)

    cursor.execute("""
        CREATE TABLE IF NOT EXISTS program (
            id INTEGER PRIMARY KEY CHECK(id = 1),
            skipped_days TEXT NOT NULL DEFAULT '[]',
            created_at DATETIME NOT NULL
        )
    """)

    cursor.execute("""
        CREATE TABLE IF NOT EXISTS program_days (
            day INTEGER PRIMARY KEY,
            task TEXT NOT NULL,
            explanation TEXT NOT NULL,
            reflection_prompt TEXT
        )
    """)

    cursor.execute("""
        CREATE TABLE IF NOT EXISTS check_ins (
            day INTEGER PRIMARY KEY,
            task_completed INTEGER NOT NULL DEFAULT 0,
            mood_rating INTEGER CHECK(mood_rating BETWEEN 1 AND 5 OR mood_rating IS NULL),
            notes TEXT NOT NULL DEFAULT '',
            reduced_behavior INTEGER NOT NULL DEFAULT 0
        )
    """)

    cursor.execute("""
        CREATE TABLE IF NOT EXISTS signature_state (
            id INTEGER PRIMARY KEY CHECK(id = 1),
            signature TEXT NOT NULL,
            observed_at DATETIME NOT NULL
        )
    """)

    cursor.execute("CREATE INDEX IF NOT EXISTS idx_entries_timestamp ON entries(timestamp)")
    cursor.execute("CREATE INDEX IF NOT EXISTS idx_habits_category ON habits(category)")

    conn.commit()
    return conn


def _row_to_entry(row: sqlite3.Row) -> ActivityEntry:
    return ActivityEntry(
        id=row["id"],
        timestamp=row["timestamp"],
        source_label=row["source_label"],
        notes=row["notes"],
        image=row["image"],
        external_blob=row["external_blob"],
    )


def _row_to_check_in(row: sqlite3.Row) -> DailyCheckIn:
    return DailyCheckIn(
        day=row["day"],
        task_completed=bool(row["task_completed"]),
        notes=row["notes"],
        reduced_behavior=bool(row["reduced_behavior"]),
        mood_rating=row["mood_rating"],
    )


# =============================================================================
# Activity entries
# =============================================================================


def add_activity_entry(
    timestamp: int,
    source_label: str,
    notes: str,
    image: bytes | None = None,
    external_blob: str | None = None,
) -> ActivityEntry:
    """Insert an entry and return it with its assigned id."""
    conn = get_connection()
    try:
        cursor = conn.cursor()
        cursor.execute(
            """
            INSERT INTO entries (timestamp, source_label, notes, image, external_blob)
            VALUES (?, ?, ?, ?, ?)
            """,
            (timestamp, source_label, notes, image, external_blob),
        )
        conn.commit()
        entry_id = cursor.lastrowid
    finally:
        conn.close()

    return ActivityEntry(
        id=entry_id,
        timestamp=timestamp,
        source_label=source_label,
        notes=notes,
        image=image,
        external_blob=external_blob,
    )


def get_activity_entries() -> list[ActivityEntry]:
    """All entries, oldest first."""
    conn = get_connection()
    try:
        rows = conn.execute("SELECT * FROM entries ORDER BY timestamp, id").fetchall()
    finally:
        conn.close()
    return [_row_to_entry(row) for row in rows]


def get_activity_entry(entry_id: int) -> ActivityEntry | None:
    conn = get_connection()
    try:
        row = conn.execute("SELECT * FROM entries WHERE id = ?", (entry_id,)).fetchone()
    finally:
        conn.close()
    return _row_to_entry(row) if row else None


# =============================================================================
# Patterns
# =============================================================================


def add_pattern(pattern: Pattern) -> Pattern:
    conn = get_connection()
    try:
        conn.execute(
            "INSERT INTO patterns (pattern_type, snippet, confidence_score) VALUES (?, ?, ?)",
            (pattern.pattern_type, pattern.snippet, pattern.confidence_score),
        )
        conn.commit()
    finally:
        conn.close()
    return pattern


def get_patterns() -> list[Pattern]:
    """All stored patterns in insertion order."""
    conn = get_connection()
    try:
        rows = conn.execute(
            "SELECT pattern_type, snippet, confidence_score FROM patterns ORDER BY id"
        ).fetchall()
    finally:
        conn.close()
    return [Pattern.from_dict(dict(row)) for row in rows]


# =============================================================================
# Habit library
# =============================================================================


def get_habit_library() -> list[Habit]:
    """All habits in the order they were seeded."""
    conn = get_connection()
    try:
        rows = conn.execute("SELECT * FROM habits ORDER BY rowid").fetchall()
    finally:
        conn.close()
    return [Habit.from_dict(dict(row)) for row in rows]


def seed_habit_library(habits: list[Habit]) -> int:
    """Insert habits that are not stored yet. Returns how many were added."""
    conn = get_connection()
    try:
        cursor = conn.cursor()
        added = 0
        for habit in habits:
            cursor.execute(
                """
                INSERT OR IGNORE INTO habits
                    (id, action, duration, difficulty, when_to_cue, rationale, category)
                VALUES (?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    habit.id,
                    habit.action,
                    habit.duration,
                    habit.difficulty,
                    habit.when_to_cue,
                    habit.rationale,
                    habit.category,
                ),
            )
            added += cursor.rowcount
        conn.commit()
    finally:
        conn.close()

    if added:
        logger.info(f"Seeded habit library with {added} habits")
    return added


# =============================================================================
# Program and check-ins
# =============================================================================


def get_program() -> Program | None:
    """The current program, or None when none has been created."""
    conn = get_connection()
    try:
        meta = conn.execute("SELECT skipped_days FROM program WHERE id = 1").fetchone()
        if meta is None:
            return None

        day_rows = conn.execute("SELECT * FROM program_days ORDER BY day").fetchall()
        check_in_rows = conn.execute("SELECT * FROM check_ins ORDER BY day").fetchall()
    finally:
        conn.close()

    days = [
        DailyProgramEntry(
            day=row["day"],
            task=Habit.from_dict(json.loads(row["task"])),
            explanation=row["explanation"],
            reflection_prompt=row["reflection_prompt"],
        )
        for row in day_rows
    ]

    return Program(
        days=days,
        check_ins=[_row_to_check_in(row) for row in check_in_rows],
        skipped_days=json.loads(meta["skipped_days"]),
    )


def create_program(program: Program) -> Program:
    """Replace any stored program with this one, check-ins included."""
    conn = get_connection()
    try:
        cursor = conn.cursor()
        cursor.execute("DELETE FROM program_days")
        cursor.execute("DELETE FROM check_ins")
        cursor.execute("DELETE FROM program")

        cursor.execute(
            "INSERT INTO program (id, skipped_days, created_at) VALUES (1, ?, ?)",
            (json.dumps(program.skipped_days), datetime.now().isoformat()),
        )
        cursor.executemany(
            "INSERT INTO program_days (day, task, explanation, reflection_prompt) VALUES (?, ?, ?, ?)",
            [
                (d.day, json.dumps(d.task.to_dict()), d.explanation, d.reflection_prompt)
                for d in program.days
            ],
        )
        cursor.executemany(
            """
            INSERT INTO check_ins (day, task_completed, mood_rating, notes, reduced_behavior)
            VALUES (?, ?, ?, ?, ?)
            """,
            [
                (c.day, int(c.task_completed), c.mood_rating, c.notes, int(c.reduced_behavior))
                for c in program.check_ins
            ],
        )
        conn.commit()
    except sqlite3.Error:
        conn.rollback()
        raise
    finally:
        conn.close()

    return program


def add_check_in(check_in: DailyCheckIn) -> DailyCheckIn:
    """Insert or replace the check-in for check_in.day."""
    conn = get_connection()
    try:
        conn.execute(
            """
            INSERT OR REPLACE INTO check_ins (day, task_completed, mood_rating, notes, reduced_behavior)
            VALUES (?, ?, ?, ?, ?)
            """,
            (
                check_in.day,
                int(check_in.task_completed),
                check_in.mood_rating,
                check_in.notes,
                int(check_in.reduced_behavior),
            ),
        )
        conn.commit()
    finally:
        conn.close()
    return check_in


# =============================================================================
# Insight signature baseline
# =============================================================================


def get_last_signature() -> InsightSignature | None:
    """The most recently observed insight signature, if any."""
    conn = get_connection()
    try:
        row = conn.execute("SELECT signature FROM signature_state WHERE id = 1").fetchone()
    finally:
        conn.close()
    return InsightSignature.from_dict(json.loads(row["signature"])) if row else None


def save_last_signature(signature: InsightSignature) -> None:
    conn = get_connection()
    try:
        conn.execute(
            "INSERT OR REPLACE INTO signature_state (id, signature, observed_at) VALUES (1, ?, ?)",
            (json.dumps(signature.to_dict()), datetime.now().isoformat()),
        )
        conn.commit()
    finally:
        conn.close()
