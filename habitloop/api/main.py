"""
HabitLoop API - FastAPI Application

This is the main entry point for the HabitLoop REST API.

Usage:
    uvicorn habitloop.api.main:app --host 127.0.0.1 --port 8000 --reload

    Or through the CLI:
    habitloop serve --port 8000
"""

import logging
import sqlite3
from contextlib import asynccontextmanager

# Load .env file before anything else
from dotenv import load_dotenv
load_dotenv()

from fastapi import FastAPI

from habitloop import __version__
from habitloop.api.routes import api_router
from habitloop.api.schemas import HealthCheck
from habitloop.logging_config import setup_logging
from habitloop.storage import store


setup_logging()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events."""
    logger.info("Starting HabitLoop API...")

    # Create tables before serving
    conn = store.get_connection()
    conn.close()
    logger.info(f"Database ready at {store.DB_PATH}")

    yield

    logger.info("HabitLoop API stopped")


# Create FastAPI application
app = FastAPI(
    title="HabitLoop API",
    description="Log online activity, detect habit loops, follow a 30-day program",
    version=__version__,
    docs_url="/api/docs",
    redoc_url="/api/redoc",
    openapi_url="/api/openapi.json",
    lifespan=lifespan,
)

app.include_router(api_router)


@app.get("/health", response_model=HealthCheck, tags=["health"])
async def health_check():
    """Check database reachability."""
    services = {}

    try:
        conn = store.get_connection()
        conn.execute("SELECT 1")
        conn.close()
        services["database"] = "healthy"
    except sqlite3.Error as e:
        logger.error(f"Database health check failed: {e}")
        services["database"] = "unhealthy"

    status = "healthy" if all(s == "healthy" for s in services.values()) else "unhealthy"
    return HealthCheck(status=status, services=services)
