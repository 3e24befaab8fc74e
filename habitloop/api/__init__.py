"""HabitLoop HTTP API

FastAPI routes over habitloop.service.

Usage:
    uvicorn habitloop.api.main:app --host 127.0.0.1 --port 8000
"""
