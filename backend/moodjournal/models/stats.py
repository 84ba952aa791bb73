"""
MoodJournal Backend — Statistics Models
========================================

What:  Value types produced by the temporal analytics.
Who:   Returned by services/analytics.py and serialized as-is by the
       /api/stats routes.
"""

from datetime import datetime
from enum import Enum
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class WeekStart(str, Enum):
    """
    Which weekday opens a calendar week.

    Locales differ (Sunday in the US, Monday under ISO 8601), so every
    analytics function takes this explicitly instead of reading it from the
    process locale.
    """

    MONDAY = "monday"
    SUNDAY = "sunday"

    @classmethod
    def _missing_(cls, value: object) -> Optional["WeekStart"]:
        if isinstance(value, str):
            return cls.__members__.get(value.strip().upper())
        return None

    @property
    def weekday(self) -> int:
        """The weekday number as used by `datetime.weekday()` (Monday = 0)."""
        return 0 if self is WeekStart.MONDAY else 6


class WeekBucket(BaseModel):
    """Number of notes created in the half-open interval [week_start, week_end)."""

    model_config = ConfigDict(frozen=True)

    week_label: str = Field(description="ISO date of the first day of the week")
    week_start: datetime
    week_end: datetime
    count: int = Field(ge=0)


class JournalSummary(BaseModel):
    """Everything the profile screen shows about a user's writing habit."""

    total_notes: int = Field(ge=0)
    weeks: List[WeekBucket] = Field(description="Trailing weeks, oldest first")
    longest_streak: int = Field(ge=0, description="Longest run of weeks with notes")
    current_streak: int = Field(ge=0, description="Weeks with notes ending this week")
    average_notes_per_week: float = Field(
        ge=0.0, description="Mean of the weekly counts in `weeks`"
    )
    pending_notes: int = Field(ge=0, description="Notes not yet scored for emotion")
    dominant_emotions: Dict[str, int] = Field(
        default_factory=dict,
        description="How many scored notes each emotion dominates",
    )
