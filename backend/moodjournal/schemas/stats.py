"""
MoodJournal Backend — Statistics Request/Response Schemas
==========================================================

What:  API contract for the /api/stats endpoints.
How:   Every stats request carries the notes to analyse. Optional fields
       fall back to the configured defaults (see config.py).

Example request:
    {
        "notes": [{"id": 1, "content": "...", "created_at": "2025-10-14T08:00:00Z"}],
        "now": "2025-10-15T12:00:00Z",
        "timezone": "America/New_York",
        "week_starts_on": "sunday",
        "weeks_back": 5
    }
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from moodjournal.models.note import Note
from moodjournal.models.stats import WeekBucket, WeekStart


class StatsRequest(BaseModel):
    """Notes plus the parameters shared by all statistics."""
    notes: List[Note] = Field(default_factory=list, description="Notes in any order")
    now: Optional[datetime] = Field(
        default=None,
        description="Reference instant (ISO 8601). Defaults to the current time.",
    )
    timezone: Optional[str] = Field(
        default=None,
        description="IANA zone whose calendar weeks are used. Defaults to DEFAULT_TIMEZONE.",
    )
    week_starts_on: Optional[WeekStart] = Field(
        default=None, description="monday or sunday. Defaults to WEEK_STARTS_ON."
    )
    weeks_back: Optional[int] = Field(default=None, ge=1, le=52)
    lookback_days: Optional[int] = Field(default=None, ge=7, le=3650)


class WeeklyCountsResponse(BaseModel):
    weeks: List[WeekBucket] = Field(description="Trailing weeks, oldest first")


class StreakResponse(BaseModel):
    longest_streak: int = Field(ge=0)
    current_streak: int = Field(ge=0)
