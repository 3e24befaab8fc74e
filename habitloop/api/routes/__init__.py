"""HabitLoop API Routes Package

This module aggregates all route handlers into a single router
that can be included in the main FastAPI application.
"""

from fastapi import APIRouter

from .checkins import router as checkins_router
from .dashboard import router as dashboard_router
from .entries import router as entries_router
from .habits import router as habits_router
from .patterns import router as patterns_router
from .program import router as program_router


# Create main API router
api_router = APIRouter(prefix="/api")

# Include all sub-routers
api_router.include_router(entries_router, prefix="/entries", tags=["entries"])
api_router.include_router(patterns_router, prefix="/patterns", tags=["patterns"])
api_router.include_router(dashboard_router, prefix="/dashboard", tags=["dashboard"])
api_router.include_router(habits_router, prefix="/habits", tags=["habits"])
api_router.include_router(program_router, prefix="/program", tags=["program"])
api_router.include_router(checkins_router, prefix="/checkins", tags=["checkins"])

__all__ = ["api_router"]
