"""
Dashboard Route - Pattern summary, trends and insight signature
"""

from fastapi import APIRouter, Query

from habitloop import service
from habitloop.api.errors import unwrap


router = APIRouter()


@router.get("")
async def get_dashboard(
    window: int | None = Query(None, description="Window in days (7 or 30)"),
):
    return unwrap(service.get_dashboard(window))
