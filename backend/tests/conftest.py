"""
MoodJournal Backend — Test Configuration (conftest.py)
=======================================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixtures:
    ├── wednesday_now: A fixed Wednesday noon (UTC) used as "now"
    ├── make_note: Factory for notes at a given timestamp
    ├── sample_note_payload: A note as served by the notes API
    └── test_client: HTTPX AsyncClient for API endpoint testing
"""

import os

# Override settings for testing BEFORE any application imports
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["WEEK_STARTS_ON"] = "sunday"
os.environ["DEFAULT_TIMEZONE"] = "UTC"

from datetime import datetime, timezone

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from moodjournal.models.note import Note


@pytest.fixture
def wednesday_now():
    """Wednesday 2025-10-15 12:00 UTC. Its Sunday-start week begins 2025-10-12."""
    return datetime(2025, 10, 15, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def make_note():
    """
    Factory for notes stamped at a given instant.

    Usage:
        def test_x(make_note):
            note = make_note(datetime(2025, 10, 1, tzinfo=timezone.utc))
    """
    counter = {"next_id": 1}

    def _make(timestamp: datetime, content: str = "entry", **kwargs) -> Note:
        note_id = counter["next_id"]
        counter["next_id"] += 1
        return Note(id=note_id, content=content, timestamp=timestamp, **kwargs)

    return _make


@pytest.fixture
def sample_note_payload():
    """A note exactly as the notes API serves it (flat emotion keys, string scores)."""
    return {
        "id": 42,
        "user_id": 7,
        "content": "Dear diary, today was great",
        "created_at": "2025-10-14T18:30:00Z",
        "formattings": [
            {"type": "HEADER", "location": 0, "length": 10},
            {"type": "italic", "location": 12, "length": 5},
            {"type": "underline", "location": 0, "length": 4},
        ],
        "anger_value": "0.01",
        "disgust_value": 0.0,
        "fear_value": "0.02",
        "joy_value": 0.91,
        "neutral_value": "0.04",
        "sadness_value": 0.01,
        "surprise_value": "not-a-number",
    }


@pytest_asyncio.fixture
async def test_client():
    """
    Provides an async HTTP test client for endpoint testing.

    Usage:
        async def test_health(test_client):
            response = await test_client.get("/health")
            assert response.status_code == 200
    """
    from moodjournal.main import app
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
