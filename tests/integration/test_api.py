"""
Integration tests for the HabitLoop API.

Tests the FastAPI routes end to end against a temporary database,
covering entries, patterns, dashboard, habits, program and check-ins.
"""

import base64
from unittest.mock import patch

import pytest
from fastapi.testclient import TestClient

from habitloop.api.main import app
from habitloop.models import Pattern
from habitloop.storage import store

SCROLLING_NOTE = "I keep scrolling the feed for hours and can't stop"


@pytest.fixture
def client(store_db):
    """Test client with an isolated database and a fresh coordinator."""
    with patch("habitloop.api.routes.program._coordinator", None):
        with TestClient(app) as test_client:
            yield test_client


@pytest.fixture
def analyzed(client):
    """Log and analyze one entry so patterns exist."""
    entry = client.post("/api/entries", json={"source_label": "Social Feed", "notes": SCROLLING_NOTE})
    client.post(f"/api/entries/{entry.json()['entry']['id']}/analyze")
    return entry.json()["entry"]


# ─────────────────────────────────────────────────────────────────────────────
# Health
# ─────────────────────────────────────────────────────────────────────────────


class TestHealth:
    def test_health(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["services"]["database"] == "healthy"

    def test_docs_served_under_api(self, client):
        assert client.get("/api/openapi.json").status_code == 200


# ─────────────────────────────────────────────────────────────────────────────
# Entries and Patterns
# ─────────────────────────────────────────────────────────────────────────────


class TestEntries:
    """Tests for /api/entries."""

    def test_create(self, client):
        response = client.post(
            "/api/entries",
            json={"source_label": "Shopping", "notes": "Added three things to my cart", "timestamp": 5_000},
        )

        assert response.status_code == 201
        data = response.json()
        assert data["entry"]["id"] == 1
        assert data["entry"]["timestamp"] == 5_000

    def test_create_with_image(self, client):
        response = client.post(
            "/api/entries",
            json={
                "source_label": "Shopping",
                "notes": "Screenshot of the flash sale",
                "image_base64": base64.b64encode(b"\x89PNG").decode(),
            },
        )

        assert response.status_code == 201
        assert response.json()["entry"]["has_image"] is True

    def test_invalid_base64(self, client):
        response = client.post(
            "/api/entries",
            json={"source_label": "Shopping", "notes": "Some notes here", "image_base64": "not base64!!"},
        )

        assert response.status_code == 400
        assert response.json()["detail"] == "Image must be base64-encoded"

    def test_blank_notes(self, client):
        response = client.post("/api/entries", json={"source_label": "Shopping", "notes": "  "})

        assert response.status_code == 400
        assert response.json()["detail"] == "Please paste some text to analyze"

    def test_invalid_source(self, client):
        response = client.post("/api/entries", json={"source_label": "Radio", "notes": "Some notes here"})
        assert response.status_code == 400

    def test_missing_fields(self, client):
        assert client.post("/api/entries", json={"notes": "no source"}).status_code == 422

    def test_list_and_get(self, client):
        created = client.post(
            "/api/entries", json={"source_label": "News", "notes": "Read the headlines twice"}
        ).json()["entry"]

        listed = client.get("/api/entries").json()
        assert listed["count"] == 1

        fetched = client.get(f"/api/entries/{created['id']}")
        assert fetched.status_code == 200
        assert fetched.json()["entry"] == created

    def test_get_missing(self, client):
        response = client.get("/api/entries/404")

        assert response.status_code == 404
        assert response.json()["detail"] == "Entry 404 not found"

    def test_analyze(self, client):
        created = client.post(
            "/api/entries", json={"source_label": "Social Feed", "notes": SCROLLING_NOTE}
        ).json()["entry"]

        response = client.post(f"/api/entries/{created['id']}/analyze")

        assert response.status_code == 200
        assert response.json()["patterns"]
        assert client.get("/api/patterns").json()["count"] == len(response.json()["patterns"])

    def test_analyze_missing(self, client):
        assert client.post("/api/entries/9/analyze").status_code == 404


class TestPatterns:
    def test_detect_does_not_store(self, client):
        response = client.post("/api/patterns/detect", json={"text": SCROLLING_NOTE})

        assert response.status_code == 200
        assert response.json()["count"] > 0
        assert client.get("/api/patterns").json()["count"] == 0

    def test_detect_short_text(self, client):
        response = client.post("/api/patterns/detect", json={"text": "buy"})
        assert response.json() == {"success": True, "patterns": [], "count": 0}


# ─────────────────────────────────────────────────────────────────────────────
# Dashboard and Habits
# ─────────────────────────────────────────────────────────────────────────────


class TestDashboard:
    def test_default(self, client):
        response = client.get("/api/dashboard")

        assert response.status_code == 200
        assert response.json()["window_days"] == 7

    def test_thirty_days(self, client):
        assert client.get("/api/dashboard?window=30").json()["window_days"] == 30

    def test_invalid_window(self, client):
        response = client.get("/api/dashboard?window=14")

        assert response.status_code == 400
        assert "Invalid window" in response.json()["detail"]


class TestHabits:
    def test_library_seeded(self, client):
        response = client.get("/api/habits")

        assert response.status_code == 200
        assert response.json()["count"] == 23


# ─────────────────────────────────────────────────────────────────────────────
# Program, Check-ins and Refresh
# ─────────────────────────────────────────────────────────────────────────────


class TestProgram:
    """Tests for /api/program and /api/checkins."""

    def test_no_program(self, client):
        assert client.get("/api/program").status_code == 404

    def test_create_requires_patterns(self, client):
        response = client.post("/api/program")

        assert response.status_code == 400
        assert "analyze entries first" in response.json()["detail"]

    def test_create_and_get(self, client, analyzed):
        created = client.post("/api/program")

        assert created.status_code == 201
        assert len(created.json()["program"]["days"]) == 30

        fetched = client.get("/api/program").json()
        assert fetched["current_day"] == 1

    def test_check_in_and_progress(self, client, analyzed):
        client.post("/api/program")

        response = client.post("/api/checkins", json={"task_completed": True, "mood_rating": 4})
        assert response.status_code == 200
        assert response.json()["message"] == "Check-in saved!"

        progress = client.get("/api/program/progress").json()
        assert progress["completed_days"] == 1
        assert progress["current_day"] == 2
        assert progress["average_mood"] == 4.0

    def test_check_in_without_program(self, client):
        response = client.post("/api/checkins", json={"task_completed": True})
        assert response.status_code == 400

    def test_check_in_mood_validated(self, client, analyzed):
        client.post("/api/program")
        response = client.post("/api/checkins", json={"task_completed": True, "mood_rating": 9})
        assert response.status_code == 422

    def test_refresh_after_create_is_unchanged(self, client, analyzed):
        client.post("/api/program")
        response = client.post("/api/program/refresh")

        assert response.status_code == 200
        assert response.json()["changed"] is False
        assert response.json()["regenerated"] is False

    def test_refresh_invalid_window(self, client):
        assert client.post("/api/program/refresh?window=3").status_code == 400

    def test_refresh_after_regenerating_is_unchanged(self, client, analyzed):
        client.post("/api/program/refresh")
        for _ in range(6):
            store.add_pattern(Pattern("Shopping & Spending Triggers", "added to cart", 90))
        client.post("/api/program")
        client.post("/api/checkins", json={"task_completed": True})

        response = client.post("/api/program/refresh")

        assert response.json()["changed"] is False
        assert response.json()["regenerated"] is False
        assert len(client.get("/api/program").json()["program"]["check_ins"]) == 1
