"""HabitLoop data models.

Defines the records exchanged between the analysis pipeline, the
program generator and the store:
    ActivityEntry → Pattern → Program(DailyProgramEntry, DailyCheckIn)

InsightSignature is derived on demand. Only the last one the program
coordinator observed is stored, as its change baseline.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class EmotionalBalance(str, Enum):
    """Overall emotional tone across a window."""

    POSITIVE = "positive"
    NEUTRAL = "neutral"
    NEGATIVE = "negative"


class SpendingFrequency(str, Enum):
    """Average spending-trigger entries per day."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class TimePreference(str, Enum):
    """Part of the day with the most logged activity."""

    MORNING = "morning"
    AFTERNOON = "afternoon"
    EVENING = "evening"
    NIGHT = "night"
    BALANCED = "balanced"


# =============================================================================
# Entries and patterns
# =============================================================================


@dataclass
class ActivityEntry:
    """One logged snippet of online activity."""

    id: int
    timestamp: int  # epoch millis
    source_label: str
    notes: str
    image: bytes | None = None
    external_blob: str | None = None

    @property
    def text(self) -> str:
        """Text the insight aggregator scans for keywords."""
        return f"{self.source_label} {self.notes}"

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "timestamp": self.timestamp,
            "source_label": self.source_label,
            "notes": self.notes,
            "has_image": self.image is not None,
            "external_blob": self.external_blob,
        }


@dataclass
class Pattern:
    """A stored pattern detection. Append-only, duplicates allowed."""

    pattern_type: str
    snippet: str
    confidence_score: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "pattern_type": self.pattern_type,
            "snippet": self.snippet,
            "confidence_score": self.confidence_score,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Pattern:
        return cls(
            pattern_type=data["pattern_type"],
            snippet=data.get("snippet", ""),
            confidence_score=int(data["confidence_score"]),
        )


@dataclass
class DetectedPattern:
    """Classifier output for a single category."""

    type: str
    confidence: int
    snippet: str

    def to_pattern(self) -> Pattern:
        return Pattern(pattern_type=self.type, snippet=self.snippet, confidence_score=self.confidence)

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.type, "confidence": self.confidence, "snippet": self.snippet}


# =============================================================================
# Habit library and program
# =============================================================================


@dataclass
class Habit:
    """A small actionable task from the habit library."""

    id: str
    action: str
    duration: int  # minutes
    difficulty: int  # 1 (easy) to 3 (hard)
    when_to_cue: str
    rationale: str
    category: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "action": self.action,
            "duration": self.duration,
            "difficulty": self.difficulty,
            "when_to_cue": self.when_to_cue,
            "rationale": self.rationale,
            "category": self.category,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Habit:
        return cls(
            id=data["id"],
            action=data["action"],
            duration=int(data["duration"]),
            difficulty=int(data["difficulty"]),
            when_to_cue=data.get("when_to_cue", ""),
            rationale=data.get("rationale", ""),
            category=data["category"],
        )


@dataclass
class DailyProgramEntry:
    """One day of the program. The habit is copied, not referenced."""

    day: int
    task: Habit
    explanation: str
    reflection_prompt: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "day": self.day,
            "task": self.task.to_dict(),
            "explanation": self.explanation,
            "reflection_prompt": self.reflection_prompt,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> DailyProgramEntry:
        return cls(
            day=int(data["day"]),
            task=Habit.from_dict(data["task"]),
            explanation=data.get("explanation", ""),
            reflection_prompt=data.get("reflection_prompt"),
        )


@dataclass
class DailyCheckIn:
    """The user's report for one program day."""

    day: int
    task_completed: bool
    notes: str = ""
    reduced_behavior: bool = False
    mood_rating: int | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "day": self.day,
            "task_completed": self.task_completed,
            "mood_rating": self.mood_rating,
            "notes": self.notes,
            "reduced_behavior": self.reduced_behavior,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> DailyCheckIn:
        mood = data.get("mood_rating")
        return cls(
            day=int(data["day"]),
            task_completed=bool(data.get("task_completed", False)),
            notes=data.get("notes") or "",
            reduced_behavior=bool(data.get("reduced_behavior", False)),
            mood_rating=int(mood) if mood is not None else None,
        )


@dataclass
class Program:
    """The generated day plan plus the user's check-ins."""

    days: list[DailyProgramEntry] = field(default_factory=list)
    check_ins: list[DailyCheckIn] = field(default_factory=list)
    skipped_days: list[int] = field(default_factory=list)

    def get_day(self, day: int) -> DailyProgramEntry | None:
        for entry in self.days:
            if entry.day == day:
                return entry
        return None

    def get_check_in(self, day: int) -> DailyCheckIn | None:
        for check_in in self.check_ins:
            if check_in.day == day:
                return check_in
        return None

    def to_dict(self) -> dict[str, Any]:
        return {
            "days": [d.to_dict() for d in self.days],
            "check_ins": [c.to_dict() for c in self.check_ins],
            "skipped_days": list(self.skipped_days),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Program:
        return cls(
            days=[DailyProgramEntry.from_dict(d) for d in data.get("days", [])],
            check_ins=[DailyCheckIn.from_dict(c) for c in data.get("check_ins", [])],
            skipped_days=[int(d) for d in data.get("skipped_days", [])],
        )


# =============================================================================
# Dashboard insights
# =============================================================================


@dataclass
class EmotionalTrend:
    date: str
    positive: int = 0
    negative: int = 0
    neutral: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "date": self.date,
            "positive": self.positive,
            "negative": self.negative,
            "neutral": self.neutral,
        }


@dataclass
class SpendingTrigger:
    date: str
    count: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {"date": self.date, "count": self.count}


@dataclass
class TimeDistribution:
    morning: int = 0  # 06:00-12:00
    afternoon: int = 0  # 12:00-18:00
    evening: int = 0  # 18:00-24:00
    night: int = 0  # 00:00-06:00

    @property
    def total(self) -> int:
        return self.morning + self.afternoon + self.evening + self.night

    def to_dict(self) -> dict[str, Any]:
        return {
            "morning": self.morning,
            "afternoon": self.afternoon,
            "evening": self.evening,
            "night": self.night,
        }


@dataclass(frozen=True)
class InsightSignature:
    """Compact snapshot of current behavior, used to decide regeneration."""

    emotional_balance: EmotionalBalance
    spending_frequency: SpendingFrequency
    time_preference: TimePreference
    pattern_count: int
    window: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "emotional_balance": self.emotional_balance.value,
            "spending_frequency": self.spending_frequency.value,
            "time_preference": self.time_preference.value,
            "pattern_count": self.pattern_count,
            "window": self.window,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> InsightSignature:
        return cls(
            emotional_balance=EmotionalBalance(data["emotional_balance"]),
            spending_frequency=SpendingFrequency(data["spending_frequency"]),
            time_preference=TimePreference(data["time_preference"]),
            pattern_count=int(data["pattern_count"]),
            window=int(data["window"]),
        )
