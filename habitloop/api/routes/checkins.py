"""
Check-ins Route - Daily check-in for the current program day
"""

from fastapi import APIRouter

from habitloop import service
from habitloop.api.errors import unwrap
from habitloop.api.schemas import CheckInCreate


router = APIRouter()


@router.post("")
async def submit_check_in(body: CheckInCreate):
    """Record the check-in for the current day. Resubmitting replaces it."""
    return unwrap(
        service.submit_check_in(
            task_completed=body.task_completed,
            mood_rating=body.mood_rating,
            notes=body.notes,
            reduced_behavior=body.reduced_behavior,
        )
    )
