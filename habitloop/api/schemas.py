"""
Pydantic models for HabitLoop API request/response types.
"""

from datetime import datetime

from pydantic import BaseModel, Field

from habitloop import __version__


class HealthCheck(BaseModel):
    """Health check response."""

    status: str = Field(default="healthy", description="Overall system status")
    version: str = Field(default=__version__, description="API version")
    timestamp: datetime = Field(default_factory=datetime.now, description="Check timestamp")
    services: dict[str, str] = Field(
        default_factory=dict, description="Individual service statuses"
    )


class EntryCreate(BaseModel):
    """Request body for logging an activity entry."""

    source_label: str = Field(..., description="Where the activity happened")
    notes: str = Field(..., description="What you saw or did")
    timestamp: int | None = Field(None, description="Epoch millis (default: now)")
    image_base64: str | None = Field(None, description="Base64-encoded screenshot, max 5MB")
    external_blob: str | None = Field(None, description="Reference to externally stored media")


class DetectRequest(BaseModel):
    """Request body for ad-hoc pattern detection."""

    text: str = Field(..., description="Text to analyze")


class CheckInCreate(BaseModel):
    """Request body for the current day's check-in."""

    task_completed: bool = Field(..., description="Whether today's task was completed")
    mood_rating: int | None = Field(None, ge=1, le=5, description="Mood from 1 to 5")
    notes: str = Field(default="", description="Reflection notes")
    reduced_behavior: bool = Field(default=False, description="Target behavior was reduced")
