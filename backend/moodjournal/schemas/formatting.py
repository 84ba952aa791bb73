"""
MoodJournal Backend — Formatting Request/Response Schemas
==========================================================

What:  API contract for the span codec endpoints.
How:   The request for encode is the StyledText model itself; these schemas
       cover the remaining bodies.

Example decode request:
    {
        "content": "Dear diary",
        "formattings": [
            {"type": "HEADER", "location": 0, "length": 4},
            {"type": "ITALIC", "location": 50, "length": 2}
        ]
    }
"""

from typing import Any, List

from pydantic import BaseModel, Field, field_validator

from moodjournal.models.note import FormattingSpan, drop_unknown_formattings
from moodjournal.models.styled_text import StyleRun


class EncodeResponse(BaseModel):
    """Spans to submit along with the note content."""
    formattings: List[FormattingSpan] = Field(description="Spans in run order")


class DecodeRequest(BaseModel):
    """Stored note content and its spans, as loaded for editing."""
    content: str = Field(description="Plain note content")
    formattings: List[FormattingSpan] = Field(
        default_factory=list,
        description="Spans applied in list order; out-of-range spans are ignored",
    )

    @field_validator("formattings", mode="before")
    @classmethod
    def drop_unknown_formatting_types(cls, value: Any) -> Any:
        return drop_unknown_formattings(value)


class DecodeResponse(BaseModel):
    """
    Reconstructed styled text.

    `dropped` reports how many spans did not fit the content. It is
    informational only; dropping is not an error.
    """
    content: str
    runs: List[StyleRun]
    dropped: int = Field(ge=0, description="Spans ignored because they fell outside the content")
