"""
MoodJournal Backend — Span Codec Unit Tests
============================================

What we test:
    ✅ encode: per-run span emission and ordering
    ✅ decode: default style, full-descriptor replacement, last span wins
    ✅ decode: out-of-range spans are dropped without raising
    ✅ Round trip, headers included
    ✅ UTF-16 offsets around emoji and lone surrogates
"""

import pytest

from moodjournal.models.note import FormattingSpan, FormattingType, Note
from moodjournal.models.styled_text import StyledText, TextStyle
from moodjournal.services.span_codec import SpanCodec, decode, encode

HEADER = FormattingType.HEADER
BOLD = FormattingType.BOLD
ITALIC = FormattingType.ITALIC


def span(kind: FormattingType, location: int, length: int) -> FormattingSpan:
    return FormattingSpan(type=kind, location=location, length=length)


def per_unit_styles(styled: StyledText):
    return [styled.style_at(offset) for offset in range(styled.length)]


class TestEncode:

    def setup_method(self):
        self.codec = SpanCodec()

    def test_empty_document(self):
        assert self.codec.encode(StyledText.plain("")) == []

    def test_unstyled_text_emits_nothing(self):
        assert self.codec.encode(StyledText.plain("just words")) == []

    def test_one_span_per_trait_in_run_order(self):
        styled = StyledText.from_segments([
            ("Big", TextStyle.header()),
            (" ", TextStyle.default()),
            ("loud", TextStyle.bold_only()),
            ("soft", TextStyle.italic_only()),
        ])
        assert self.codec.encode(styled) == [
            span(BOLD, 0, 3),
            span(HEADER, 0, 3),
            span(BOLD, 4, 4),
            span(ITALIC, 8, 4),
        ]

    def test_bold_italic_run_emits_both(self):
        styled = StyledText.plain("both", TextStyle(bold=True, italic=True))
        assert self.codec.encode(styled) == [span(BOLD, 0, 4), span(ITALIC, 0, 4)]

    def test_large_non_bold_run_is_header(self):
        styled = StyledText.plain("big", TextStyle(size_pt=30))
        assert self.codec.encode(styled) == [span(HEADER, 0, 3)]

    def test_just_below_header_size(self):
        styled = StyledText.plain("big", TextStyle(size_pt=23.5))
        assert self.codec.encode(styled) == []

    def test_encode_is_deterministic(self):
        styled = StyledText.from_segments([
            ("a", TextStyle.bold_only()),
            ("b", TextStyle(bold=True, italic=True, size_pt=24)),
        ])
        assert self.codec.encode(styled) == self.codec.encode(styled)

    def test_offsets_in_utf16_units(self):
        styled = StyledText.from_segments([
            ("😀", TextStyle.default()),
            ("ok", TextStyle.bold_only()),
        ])
        assert self.codec.encode(styled) == [span(BOLD, 2, 2)]


class TestDecode:

    def setup_method(self):
        self.codec = SpanCodec()

    def test_no_spans_gives_default_run(self):
        styled = self.codec.decode("hello", [])
        assert styled == StyledText.plain("hello", TextStyle(bold=False, italic=False, size_pt=17))

    def test_empty_content(self):
        styled = self.codec.decode("", [span(BOLD, 0, 0)])
        assert styled.runs == []

    @pytest.mark.parametrize(
        "kind, expected",
        [
            (HEADER, TextStyle(bold=True, italic=False, size_pt=24)),
            (BOLD, TextStyle(bold=True, italic=False, size_pt=17)),
            (ITALIC, TextStyle(bold=False, italic=True, size_pt=17)),
        ],
    )
    def test_each_type_sets_full_descriptor(self, kind, expected):
        styled = self.codec.decode("abc", [span(kind, 1, 1)])
        assert per_unit_styles(styled) == [TextStyle.default(), expected, TextStyle.default()]

    def test_bold_then_italic_is_italic_only(self):
        styled = self.codec.decode("ab", [span(BOLD, 0, 2), span(ITALIC, 0, 2)])
        assert len(styled.runs) == 1
        assert styled.runs[0].style == TextStyle(bold=False, italic=True, size_pt=17)

    def test_italic_then_bold_is_bold_only(self):
        styled = self.codec.decode("ab", [span(ITALIC, 0, 2), span(BOLD, 0, 2)])
        assert styled.runs[0].style == TextStyle.bold_only()

    def test_partial_overlap_last_wins_on_overlap_only(self):
        styled = self.codec.decode("abcdef", [span(BOLD, 0, 4), span(ITALIC, 2, 4)])
        assert [(r.start, r.length, r.style) for r in styled.runs] == [
            (0, 2, TextStyle.bold_only()),
            (2, 4, TextStyle.italic_only()),
        ]

    def test_inner_span_splits_outer(self):
        styled = self.codec.decode("abcdef", [span(HEADER, 0, 6), span(ITALIC, 2, 2)])
        assert [(r.start, r.length, r.style) for r in styled.runs] == [
            (0, 2, TextStyle.header()),
            (2, 2, TextStyle.italic_only()),
            (4, 2, TextStyle.header()),
        ]

    def test_out_of_range_span_ignored(self):
        styled = self.codec.decode("hi", [span(BOLD, 5, 2)])
        assert styled == StyledText.plain("hi")

    def test_span_ending_past_content_ignored(self):
        styled = self.codec.decode("hi", [span(BOLD, 1, 2)])
        assert styled == StyledText.plain("hi")

    def test_negative_location_ignored(self):
        styled = self.codec.decode("hi", [span(ITALIC, -1, 2)])
        assert styled == StyledText.plain("hi")

    def test_invalid_spans_do_not_block_valid_ones(self):
        styled, dropped = self.codec.decode_with_report(
            "hello", [span(BOLD, 10, 1), span(ITALIC, 0, 5), span(HEADER, 4, 9)]
        )
        assert dropped == 2
        assert styled.runs[0].style == TextStyle.italic_only()

    def test_adjacent_equal_spans_coalesce(self):
        styled = self.codec.decode("abcd", [span(BOLD, 0, 2), span(BOLD, 2, 2)])
        assert len(styled.runs) == 1
        assert styled.runs[0].length == 4

    def test_span_covering_emoji(self):
        styled = self.codec.decode("a😀b", [span(BOLD, 1, 2)])
        assert [styled.text_of(r) for r in styled.runs] == ["a", "😀", "b"]
        assert styled.runs[1].style == TextStyle.bold_only()

    def test_decode_note(self):
        note = Note(content="Hi there", formattings=[span(HEADER, 0, 2)])
        styled = self.codec.decode_note(note)
        assert styled.style_at(0) == TextStyle.header()
        assert styled.style_at(3) == TextStyle.default()

    def test_lone_surrogate_content(self):
        styled, dropped = self.codec.decode_with_report("a\ud800b", [span(BOLD, 1, 1)])
        assert dropped == 0
        assert styled.length == 3
        assert [(r.start, r.length, r.style) for r in styled.runs] == [
            (0, 1, TextStyle.default()),
            (1, 1, TextStyle.bold_only()),
            (2, 1, TextStyle.default()),
        ]
        assert styled.text_of(styled.runs[1]) == "\ud800"

    def test_custom_point_sizes(self):
        codec = SpanCodec(header_point_size=30, body_point_size=15)
        styled = codec.decode("ab", [span(HEADER, 0, 1)])
        assert styled.style_at(0) == TextStyle(bold=True, size_pt=30)
        assert styled.style_at(1) == TextStyle(size_pt=15)


class TestRoundTrip:

    def setup_method(self):
        self.codec = SpanCodec()

    def test_bold_and_italic_runs_survive(self):
        original = StyledText.from_segments([
            ("Plain ", TextStyle.default()),
            ("bold", TextStyle.bold_only()),
            (" then ", TextStyle.default()),
            ("slanted 😀", TextStyle.italic_only()),
        ])
        decoded = self.codec.decode(original.content, self.codec.encode(original))
        assert per_unit_styles(decoded) == per_unit_styles(original)

    def test_header_run_survives(self):
        original = StyledText.plain("Title", TextStyle.header())
        spans = self.codec.encode(original)
        assert spans == [span(BOLD, 0, 5), span(HEADER, 0, 5)]

        decoded = self.codec.decode(original.content, spans)
        assert decoded.runs[0].style == TextStyle.header()

    def test_mixed_document_with_header_survives(self):
        original = StyledText.from_segments([
            ("Today", TextStyle.header()),
            (" was ", TextStyle.default()),
            ("good", TextStyle.bold_only()),
        ])
        decoded = self.codec.decode(original.content, self.codec.encode(original))
        assert decoded == original

    def test_module_functions_use_configured_codec(self):
        original = StyledText.plain("Title", TextStyle.header())
        assert decode(original.content, encode(original)) == original
