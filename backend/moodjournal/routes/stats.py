"""
MoodJournal Backend — Statistics Route Handlers
================================================

What:  Exposes the note analytics over HTTP.
Who:   Called by the profile screen (streaks, summary) and the home screen
       weekly overview.
How:   Resolves "now" in the requested time zone, then delegates to the
       `note_analytics` singleton.

"Now" Resolution:
    1. zone = request.timezone or settings.default_timezone
    2. now  = request.now (naive values are UTC) or the current time
    3. now is converted into zone; its calendar weeks are used for buckets
"""

import logging
from datetime import datetime, timezone, tzinfo

from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from fastapi import APIRouter

from moodjournal.config import settings
from moodjournal.exceptions import ValidationError
from moodjournal.models.stats import JournalSummary
from moodjournal.schemas.common import ErrorResponse
from moodjournal.schemas.stats import StatsRequest, StreakResponse, WeeklyCountsResponse
from moodjournal.services.analytics import note_analytics

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/stats", tags=["Statistics"])

_ERROR_RESPONSES = {
    400: {"description": "Unknown time zone", "model": ErrorResponse},
    500: {"description": "Server error", "model": ErrorResponse},
}


def _resolve_zone(name: str) -> tzinfo:
    if name.strip().upper() in {"UTC", "Z"}:
        return timezone.utc
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError) as e:
        raise ValidationError(
            message=f"Unknown time zone '{name}'",
            field="timezone",
        ) from e


def resolve_now(body: StatsRequest) -> datetime:
    """Reference instant for `body`, expressed in the requested zone."""
    zone = _resolve_zone(body.timezone or settings.default_timezone)
    now = body.now or datetime.now(timezone.utc)
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    return now.astimezone(zone)


@router.post(
    "/weekly",
    response_model=WeeklyCountsResponse,
    responses=_ERROR_RESPONSES,
    summary="Count notes per calendar week",
)
async def weekly(body: StatsRequest) -> WeeklyCountsResponse:
    """Note counts for the trailing weeks, oldest first, current week last."""
    weeks = note_analytics.weekly_counts(
        body.notes,
        resolve_now(body),
        weeks_back=body.weeks_back,
        week_starts_on=body.week_starts_on,
    )
    return WeeklyCountsResponse(weeks=weeks)


@router.post(
    "/streak",
    response_model=StreakResponse,
    responses=_ERROR_RESPONSES,
    summary="Longest and current weekly writing streak",
)
async def streak(body: StatsRequest) -> StreakResponse:
    now = resolve_now(body)
    return StreakResponse(
        longest_streak=note_analytics.longest_streak(
            body.notes, now, body.lookback_days, body.week_starts_on
        ),
        current_streak=note_analytics.current_streak(
            body.notes, now, body.lookback_days, body.week_starts_on
        ),
    )


@router.post(
    "/summary",
    response_model=JournalSummary,
    responses=_ERROR_RESPONSES,
    summary="All profile statistics",
)
async def summary(body: StatsRequest) -> JournalSummary:
    return note_analytics.summarize(
        body.notes,
        resolve_now(body),
        weeks_back=body.weeks_back,
        lookback_days=body.lookback_days,
        week_starts_on=body.week_starts_on,
    )
