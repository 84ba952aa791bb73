"""
MoodJournal Backend — Note Analytics
=====================================

What:  Calendar-week statistics over a collection of notes: per-week counts
       for the trailing weeks, the longest streak of consecutive weeks with
       notes, the current streak, and a combined summary.
How:   Pure functions of (notes, now, week_starts_on). Nothing reads the
       system clock or the process locale; callers pass both in.
Who:   Called by the /api/stats routes through `note_analytics`, or directly.

Time Zones:
    Weeks are calendar weeks in the time zone of `now` (UTC when `now` is
    naive). Note timestamps are instants and are compared as such.

Buckets:
    A bucket is the half-open interval [week_start, week_start + 7 days).
    A note stamped exactly at a week boundary belongs to the later week.

Streaks:
    longest_streak is the longest run of consecutive note weeks anywhere in
    the lookback window. It is not anchored to the present: an empty current
    week does not erase an earlier streak. current_streak is the separate
    statistic that counts back from this week and stops at the first gap.
"""

import logging
from bisect import bisect_left
from collections import Counter
from datetime import date, datetime, time, timedelta, timezone
from typing import Iterable, List, Optional, Set

from moodjournal.config import settings
from moodjournal.models.note import Note
from moodjournal.models.stats import JournalSummary, WeekBucket, WeekStart

logger = logging.getLogger(__name__)

ONE_WEEK = timedelta(weeks=1)


def _aware(moment: datetime) -> datetime:
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment


def start_of_week(moment: datetime, week_starts_on: WeekStart = WeekStart.SUNDAY) -> datetime:
    """
    Local midnight of the most recent week-start day on or before `moment`.

    The result is in `moment`'s time zone (UTC for naive input).
    """
    moment = _aware(moment)
    days_into_week = (moment.weekday() - week_starts_on.weekday) % 7
    first_day = moment.date() - timedelta(days=days_into_week)
    return datetime.combine(first_day, time.min, tzinfo=moment.tzinfo)


def _week_key(moment: datetime, now: datetime, week_starts_on: WeekStart) -> date:
    """Local start date of the week containing `moment`, in `now`'s zone."""
    return start_of_week(_aware(moment).astimezone(now.tzinfo), week_starts_on).date()


def _note_weeks(notes: Iterable[Note], now: datetime, week_starts_on: WeekStart) -> Set[date]:
    return {_week_key(note.timestamp, now, week_starts_on) for note in notes}


def weekly_counts(
    notes: Iterable[Note],
    now: datetime,
    weeks_back: int = 5,
    week_starts_on: WeekStart = WeekStart.SUNDAY,
) -> List[WeekBucket]:
    """
    Count notes per calendar week for the trailing `weeks_back` weeks.

    Args:
        notes: Notes in any order
        now: Reference instant; its week is the last bucket
        weeks_back: Number of buckets (≤ 0 gives an empty list)
        week_starts_on: Weekday that opens a week

    Returns:
        Buckets ordered oldest to newest. Empty `notes` gives all-zero counts.
    """
    now = _aware(now)
    stamps = sorted(_aware(note.timestamp).astimezone(timezone.utc) for note in notes)
    current_week = start_of_week(now, week_starts_on)

    buckets: List[WeekBucket] = []
    for weeks_ago in range(weeks_back - 1, -1, -1):
        # Wall-clock arithmetic keeps local midnight across DST changes
        week_start = current_week - weeks_ago * ONE_WEEK
        week_end = week_start + timedelta(days=7)
        count = (
            bisect_left(stamps, week_end.astimezone(timezone.utc))
            - bisect_left(stamps, week_start.astimezone(timezone.utc))
        )
        buckets.append(
            WeekBucket(
                week_label=week_start.date().isoformat(),
                week_start=week_start,
                week_end=week_end,
                count=count,
            )
        )
    return buckets


def longest_streak(
    notes: Iterable[Note],
    now: datetime,
    lookback_days: int = 365,
    week_starts_on: WeekStart = WeekStart.SUNDAY,
) -> int:
    """
    Longest run of consecutive weeks with at least one note.

    Walks back from `now` one week at a time while the cursor is no earlier
    than `now - lookback_days`.
    """
    now = _aware(now)
    note_weeks = _note_weeks(notes, now, week_starts_on)
    if not note_weeks:
        return 0

    horizon = now - timedelta(days=lookback_days)
    cursor = now
    current = longest = 0
    while cursor >= horizon:
        if start_of_week(cursor, week_starts_on).date() in note_weeks:
            current += 1
            longest = max(longest, current)
        else:
            current = 0
        cursor -= ONE_WEEK
    return longest


def current_streak(
    notes: Iterable[Note],
    now: datetime,
    lookback_days: int = 365,
    week_starts_on: WeekStart = WeekStart.SUNDAY,
) -> int:
    """Consecutive weeks with notes counting back from `now`'s week."""
    now = _aware(now)
    note_weeks = _note_weeks(notes, now, week_starts_on)

    horizon = now - timedelta(days=lookback_days)
    cursor = now
    streak = 0
    while cursor >= horizon and start_of_week(cursor, week_starts_on).date() in note_weeks:
        streak += 1
        cursor -= ONE_WEEK
    return streak


def summarize(
    notes: Iterable[Note],
    now: datetime,
    weeks_back: int = 5,
    lookback_days: int = 365,
    week_starts_on: WeekStart = WeekStart.SUNDAY,
) -> JournalSummary:
    """All profile statistics in one pass over `notes`."""
    notes = list(notes)
    weeks = weekly_counts(notes, now, weeks_back, week_starts_on)

    scored = [note for note in notes if not note.is_pending]
    dominant = Counter(note.dominant_emotion[0] for note in scored)
    average = sum(bucket.count for bucket in weeks) / len(weeks) if weeks else 0.0

    return JournalSummary(
        total_notes=len(notes),
        weeks=weeks,
        longest_streak=longest_streak(notes, now, lookback_days, week_starts_on),
        current_streak=current_streak(notes, now, lookback_days, week_starts_on),
        average_notes_per_week=round(average, 2),
        pending_notes=len(notes) - len(scored),
        dominant_emotions=dict(dominant),
    )


class NoteAnalytics:
    """
    The analytics functions with configured defaults filled in.

    Any argument left as None falls back to the value given at construction;
    the module-level `note_analytics` instance takes those from settings.
    """

    def __init__(
        self,
        week_starts_on: WeekStart = WeekStart.SUNDAY,
        weeks_back: int = 5,
        lookback_days: int = 365,
    ):
        self.week_starts_on = week_starts_on
        self.weeks_back = weeks_back
        self.lookback_days = lookback_days

    def weekly_counts(
        self,
        notes: Iterable[Note],
        now: datetime,
        weeks_back: Optional[int] = None,
        week_starts_on: Optional[WeekStart] = None,
    ) -> List[WeekBucket]:
        return weekly_counts(
            notes,
            now,
            weeks_back if weeks_back is not None else self.weeks_back,
            week_starts_on or self.week_starts_on,
        )

    def longest_streak(
        self,
        notes: Iterable[Note],
        now: datetime,
        lookback_days: Optional[int] = None,
        week_starts_on: Optional[WeekStart] = None,
    ) -> int:
        return longest_streak(
            notes,
            now,
            lookback_days if lookback_days is not None else self.lookback_days,
            week_starts_on or self.week_starts_on,
        )

    def current_streak(
        self,
        notes: Iterable[Note],
        now: datetime,
        lookback_days: Optional[int] = None,
        week_starts_on: Optional[WeekStart] = None,
    ) -> int:
        return current_streak(
            notes,
            now,
            lookback_days if lookback_days is not None else self.lookback_days,
            week_starts_on or self.week_starts_on,
        )

    def summarize(
        self,
        notes: Iterable[Note],
        now: datetime,
        weeks_back: Optional[int] = None,
        lookback_days: Optional[int] = None,
        week_starts_on: Optional[WeekStart] = None,
    ) -> JournalSummary:
        summary = summarize(
            notes,
            now,
            weeks_back if weeks_back is not None else self.weeks_back,
            lookback_days if lookback_days is not None else self.lookback_days,
            week_starts_on or self.week_starts_on,
        )
        logger.debug(
            "Summary: %d notes, longest streak %d, current streak %d",
            summary.total_notes,
            summary.longest_streak,
            summary.current_streak,
        )
        return summary


# ── Singleton Instance ────────────────────────────────────────────────────
note_analytics = NoteAnalytics(
    week_starts_on=settings.week_starts_on,
    weeks_back=settings.weeks_back,
    lookback_days=settings.streak_lookback_days,
)
