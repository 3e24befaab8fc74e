"""
Habits Route - The habit library
"""

from fastapi import APIRouter

from habitloop import service
from habitloop.api.errors import unwrap


router = APIRouter()


@router.get("")
async def get_habit_library():
    """The habit library, seeded on first request."""
    return unwrap(service.get_habit_library())
