"""
MoodJournal Backend — Note Model
=================================

What:  The journal note record and its formatting spans and emotion scores.
How:   Frozen pydantic models. Parsing is lenient in the same places the
       notes API has historically been inconsistent (see below); once built,
       a Note is never mutated by this package.
Who:   Read by SpanCodec (content + formattings) and by the analytics
       functions (timestamp + emotion values).

Wire Format (as served by the notes API):
    {
        "id": 12,
        "user_id": 3,
        "content": "Today was good",
        "created_at": "2025-10-14T18:30:00Z",
        "formattings": [{"type": "BOLD", "location": 0, "length": 5}],
        "anger_value": "0.01",
        "joy_value": 0.93,
        ...
    }

Lenient Parsing:
    - Emotion scores may be numbers or numeric strings; an unparsable string
      counts as 0.0.
    - When none of the seven `*_value` keys is present the note has not been
      scored by the server yet and gets the neutral default (neutral = 1.0).
    - Formatting types are case-insensitive ("header" == "HEADER").
    - Formatting entries with an unknown type (e.g. the retired "underline")
      are dropped instead of failing the whole note.
    - Naive timestamps are treated as UTC; a missing timestamp means "now".
"""

import logging
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Iterable, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from moodjournal.models.styled_text import utf16_length

logger = logging.getLogger(__name__)

# Fixed order of the emotion vector; ties in `dominant` resolve to the first name
EMOTION_NAMES: Tuple[str, ...] = (
    "anger",
    "disgust",
    "fear",
    "joy",
    "neutral",
    "sadness",
    "surprise",
)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _coerce_score(value: Any) -> float:
    """Number or numeric string → float. Anything unparsable → 0.0."""
    if value is None:
        return 0.0
    if isinstance(value, str):
        try:
            return float(value.strip())
        except ValueError:
            return 0.0
    return value


class FormattingType(str, Enum):
    """Kinds of formatting a span can carry."""

    HEADER = "HEADER"
    BOLD = "BOLD"
    ITALIC = "ITALIC"

    @classmethod
    def _missing_(cls, value: object) -> Optional["FormattingType"]:
        # Older clients stored the lower-case raw values
        if isinstance(value, str):
            return cls.__members__.get(value.strip().upper())
        return None


class FormattingSpan(BaseModel):
    """
    One formatting instruction over a range of a note's content.

    `location` and `length` are UTF-16 code units. They are not range-checked
    here: a span can legitimately point past the end of content that has been
    edited since the span was stored. Use `is_valid_for` before applying it.
    """

    model_config = ConfigDict(frozen=True)

    type: FormattingType
    location: int = Field(description="Start offset in UTF-16 code units")
    length: int = Field(description="Length in UTF-16 code units")

    @field_validator("type", mode="before")
    @classmethod
    def normalize_type(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.strip().upper()
        return value

    @property
    def end(self) -> int:
        return self.location + self.length

    def is_valid_for_length(self, total: int) -> bool:
        return self.location >= 0 and self.length >= 0 and self.end <= total

    def is_valid_for(self, content: str) -> bool:
        """True iff the span lies entirely within `content`."""
        return self.is_valid_for_length(utf16_length(content))


def drop_unknown_formattings(value: Any) -> Any:
    """
    Raw formatting list with entries of unknown type removed.

    None becomes an empty list. Anything that is not a list is returned
    unchanged for the field validation to reject.
    """
    if value is None:
        return []
    if not isinstance(value, (list, tuple)):
        return value

    kept = []
    for entry in value:
        if isinstance(entry, dict):
            try:
                FormattingType(entry.get("type"))
            except ValueError:
                logger.debug("Dropping formatting with unknown type: %r", entry.get("type"))
                continue
        kept.append(entry)
    return kept


class EmotionValues(BaseModel):
    """Seven emotion scores in [0, 1], as computed by the scoring service."""

    model_config = ConfigDict(frozen=True)

    anger: float = Field(default=0.0, ge=0.0, le=1.0)
    disgust: float = Field(default=0.0, ge=0.0, le=1.0)
    fear: float = Field(default=0.0, ge=0.0, le=1.0)
    joy: float = Field(default=0.0, ge=0.0, le=1.0)
    neutral: float = Field(default=0.0, ge=0.0, le=1.0)
    sadness: float = Field(default=0.0, ge=0.0, le=1.0)
    surprise: float = Field(default=0.0, ge=0.0, le=1.0)

    @classmethod
    def neutral_default(cls) -> "EmotionValues":
        return cls(neutral=1.0)

    def as_tuple(self) -> Tuple[float, ...]:
        return tuple(getattr(self, name) for name in EMOTION_NAMES)

    @property
    def is_pending(self) -> bool:
        """All-zero scores mean the server has not scored the note yet."""
        return all(value == 0.0 for value in self.as_tuple())

    @property
    def dominant(self) -> Tuple[str, float]:
        """(name, value) of the highest score; the earliest name wins ties."""
        best_name, best_value = EMOTION_NAMES[0], self.anger
        for name, value in zip(EMOTION_NAMES, self.as_tuple()):
            if value > best_value:
                best_name, best_value = name, value
        return best_name, best_value


class Note(BaseModel):
    """
    A journal note.

    The core only ever reads notes. `id` and `user_id` are opaque and carried
    through untouched.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: Optional[int] = None
    user_id: Optional[int] = None
    content: str = ""
    formattings: List[FormattingSpan] = Field(default_factory=list)
    timestamp: datetime = Field(default_factory=_utc_now, alias="created_at")
    emotion_values: EmotionValues = Field(default_factory=EmotionValues.neutral_default)

    @model_validator(mode="before")
    @classmethod
    def lift_flat_emotion_values(cls, data: Any) -> Any:
        """Fold the API's flat `<emotion>_value` keys into `emotion_values`."""
        if not isinstance(data, dict):
            return data

        data = dict(data)
        flat = {
            name: data.pop(f"{name}_value")
            for name in EMOTION_NAMES
            if f"{name}_value" in data
        }
        if flat and "emotion_values" not in data:
            data["emotion_values"] = {
                name: _coerce_score(flat.get(name)) for name in EMOTION_NAMES
            }
        return data

    @field_validator("formattings", mode="before")
    @classmethod
    def drop_unknown_formatting_types(cls, value: Any) -> Any:
        return drop_unknown_formattings(value)

    @field_validator("timestamp")
    @classmethod
    def assume_utc(cls, value: datetime) -> datetime:
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value

    @classmethod
    def new(
        cls,
        content: str,
        formattings: Iterable[FormattingSpan] = (),
        user_id: Optional[int] = None,
    ) -> "Note":
        """A fresh, not yet persisted note as created by the editor."""
        return cls(content=content, formattings=list(formattings), user_id=user_id)

    @property
    def is_pending(self) -> bool:
        return self.emotion_values.is_pending

    @property
    def dominant_emotion(self) -> Tuple[str, float]:
        return self.emotion_values.dominant
