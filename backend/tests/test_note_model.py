"""
MoodJournal Backend — Note Model Tests
=======================================

What we test:
    ✅ Parsing the notes API payload (flat emotion keys, string scores, created_at)
    ✅ Neutral default when the server has not scored a note
    ✅ Pending predicate and dominant emotion
    ✅ Tolerant formatting parsing (case, unknown types)
    ✅ Span validity against content (UTF-16 units)
"""

from datetime import datetime, timezone

import pytest
from pydantic import ValidationError as PydanticValidationError

from moodjournal.models.note import (
    EmotionValues,
    FormattingSpan,
    FormattingType,
    Note,
)


class TestNoteParsing:

    def test_parse_api_payload(self, sample_note_payload):
        note = Note.model_validate(sample_note_payload)

        assert note.id == 42
        assert note.user_id == 7
        assert note.timestamp == datetime(2025, 10, 14, 18, 30, tzinfo=timezone.utc)
        assert note.emotion_values.anger == pytest.approx(0.01)
        assert note.emotion_values.joy == pytest.approx(0.91)
        # Unparsable string scores count as zero
        assert note.emotion_values.surprise == 0.0

    def test_unknown_formatting_types_dropped(self, sample_note_payload):
        note = Note.model_validate(sample_note_payload)
        assert [span.type for span in note.formattings] == [
            FormattingType.HEADER,
            FormattingType.ITALIC,
        ]

    def test_lowercase_formatting_type_accepted(self):
        span = FormattingSpan.model_validate({"type": "bold", "location": 0, "length": 1})
        assert span.type is FormattingType.BOLD

    def test_bogus_type_on_bare_span_rejected(self):
        with pytest.raises(PydanticValidationError):
            FormattingSpan.model_validate({"type": "strike", "location": 0, "length": 1})

    def test_span_serializes_upper_case(self):
        span = FormattingSpan(type=FormattingType.HEADER, location=3, length=4)
        assert span.model_dump(mode="json") == {"type": "HEADER", "location": 3, "length": 4}

    def test_missing_emotions_default_to_neutral(self):
        note = Note.model_validate({"content": "x", "created_at": "2025-10-14T00:00:00Z"})
        assert note.emotion_values == EmotionValues(neutral=1.0)
        assert not note.is_pending

    def test_partial_emotions_fill_zero(self):
        note = Note.model_validate({"content": "x", "joy_value": 0.5})
        assert note.emotion_values.joy == 0.5
        assert note.emotion_values.neutral == 0.0

    def test_naive_timestamp_is_utc(self):
        note = Note(content="x", timestamp=datetime(2025, 1, 1, 9, 0))
        assert note.timestamp.tzinfo == timezone.utc

    def test_missing_timestamp_defaults_to_now(self):
        before = datetime.now(timezone.utc)
        note = Note.new("fresh")
        assert note.timestamp >= before
        assert note.formattings == []

    def test_null_formattings_become_empty(self):
        note = Note.model_validate({"content": "x", "formattings": None})
        assert note.formattings == []

    def test_note_is_immutable(self):
        note = Note.new("fresh")
        with pytest.raises(PydanticValidationError):
            note.content = "changed"


class TestEmotionValues:

    def test_all_zero_is_pending(self):
        assert EmotionValues().is_pending
        assert Note(content="x", emotion_values=EmotionValues()).is_pending

    def test_dominant(self):
        values = EmotionValues(joy=0.7, sadness=0.2, neutral=0.1)
        assert values.dominant == ("joy", 0.7)

    def test_dominant_tie_prefers_first(self):
        values = EmotionValues(fear=0.5, surprise=0.5)
        assert values.dominant == ("fear", 0.5)

    def test_scores_bounded(self):
        with pytest.raises(PydanticValidationError):
            EmotionValues(joy=1.5)

    def test_as_tuple_order(self):
        values = EmotionValues(anger=0.1, surprise=0.7)
        assert values.as_tuple() == (0.1, 0.0, 0.0, 0.0, 0.0, 0.0, 0.7)


class TestSpanValidity:

    def test_span_within_content(self):
        span = FormattingSpan(type=FormattingType.BOLD, location=0, length=2)
        assert span.is_valid_for("hi")

    def test_span_past_end(self):
        span = FormattingSpan(type=FormattingType.BOLD, location=5, length=2)
        assert not span.is_valid_for("hi")

    def test_negative_location(self):
        span = FormattingSpan(type=FormattingType.BOLD, location=-1, length=1)
        assert not span.is_valid_for("hi")

    def test_emoji_counts_two_units(self):
        span = FormattingSpan(type=FormattingType.ITALIC, location=0, length=2)
        assert span.is_valid_for("😀")
        assert not span.is_valid_for("a")
