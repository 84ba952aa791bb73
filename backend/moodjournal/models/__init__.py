"""
MoodJournal Backend — Domain Models
====================================

What:  Immutable pydantic models shared by the span codec and the analytics.

Model Inventory:
    - note.py:        Note, FormattingSpan, FormattingType, EmotionValues
    - styled_text.py: StyledText, StyleRun, TextStyle, UTF-16 helpers
    - stats.py:       WeekStart, WeekBucket, JournalSummary
"""

from moodjournal.models.note import (
    EMOTION_NAMES,
    EmotionValues,
    FormattingSpan,
    FormattingType,
    Note,
)
from moodjournal.models.stats import JournalSummary, WeekBucket, WeekStart
from moodjournal.models.styled_text import (
    BODY_POINT_SIZE,
    HEADER_POINT_SIZE,
    StyledText,
    StyleRun,
    TextStyle,
    utf16_length,
    utf16_slice,
)

__all__ = [
    "BODY_POINT_SIZE",
    "EMOTION_NAMES",
    "EmotionValues",
    "FormattingSpan",
    "FormattingType",
    "HEADER_POINT_SIZE",
    "JournalSummary",
    "Note",
    "StyleRun",
    "StyledText",
    "TextStyle",
    "WeekBucket",
    "WeekStart",
    "utf16_length",
    "utf16_slice",
]
