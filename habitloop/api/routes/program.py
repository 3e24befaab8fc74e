"""
Program Route - The 30-day program, progress and regeneration

Provides endpoints for:
- Viewing the current program
- Generating a new program (replaces the current one)
- Progress summary
- Refreshing: regenerate when the insight signature has shifted
"""

from fastapi import APIRouter, Query

from habitloop import service
from habitloop.api.errors import unwrap


router = APIRouter()

_coordinator: service.ProgramCoordinator | None = None


def get_coordinator() -> service.ProgramCoordinator:
    """Get or create the shared program coordinator."""
    global _coordinator
    if _coordinator is None:
        _coordinator = service.ProgramCoordinator()
    return _coordinator


@router.get("")
async def get_program():
    return unwrap(service.get_program(), status_code=404)


@router.post("", status_code=201)
async def create_program(
    window: int | None = Query(None, description="Signature window in days (7 or 30)"),
):
    return unwrap(service.create_program(window))


@router.get("/progress")
async def get_progress():
    return unwrap(service.get_progress())


@router.post("/refresh")
async def refresh_program(
    window: int | None = Query(None, description="Window in days (7 or 30)"),
):
    """Regenerate the program if behavior has shifted since the last refresh."""
    return unwrap(get_coordinator().refresh(window))
