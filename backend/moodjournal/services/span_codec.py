"""
MoodJournal Backend — Span Codec
=================================

What:  Converts between the editor's run-based StyledText and the flat list
       of FormattingSpan records stored with a note.
How:   encode() walks the runs and emits one span per style trait a run
       exhibits. decode() starts from unstyled content and paints each valid
       span's style over its range, in list order.
Who:   Called by the note editor before submitting a note (encode) and after
       loading one for editing (decode), via /api/formatting or in-process.

Mapping:
    encode, per run in run order (0-3 spans per run):
        bold                   → BOLD
        italic                 → ITALIC
        size_pt ≥ header size  → HEADER

    decode, per valid span in list order:
        HEADER → {bold: true,  italic: false, size_pt: header size}
        BOLD   → {bold: true,  italic: false, size_pt: body size}
        ITALIC → {bold: false, italic: true,  size_pt: body size}

Overwrite Semantics:
    decode replaces the whole style descriptor over a span's range; it does
    not merge traits. Where spans overlap, the last one applied wins
    outright:

        decode("ab", [BOLD 0..2, ITALIC 0..2])  → "ab" italic only

    A header run encodes as BOLD followed by HEADER over the same range, so
    the header descriptor is applied last and survives a round trip.

Failure Semantics:
    Neither direction raises. Spans that do not fit the content (negative
    offsets, or ending past the content) are dropped: stored spans may
    describe an older version of the content.
"""

import logging
from typing import Dict, Iterable, List, Tuple

from moodjournal.config import settings
from moodjournal.models.note import FormattingSpan, FormattingType, Note
from moodjournal.models.styled_text import (
    BODY_POINT_SIZE,
    HEADER_POINT_SIZE,
    StyledText,
    StyleRun,
    TextStyle,
    utf16_length,
)

logger = logging.getLogger(__name__)

# (start, end, style) with end exclusive
_Segment = Tuple[int, int, TextStyle]


def _paint(segments: List[_Segment], start: int, end: int, style: TextStyle) -> List[_Segment]:
    """Return `segments` with [start, end) replaced by a single `style` segment."""
    painted: List[_Segment] = []
    inserted = False
    for seg_start, seg_end, seg_style in segments:
        if seg_end <= start or seg_start >= end:
            painted.append((seg_start, seg_end, seg_style))
            continue
        if seg_start < start:
            painted.append((seg_start, start, seg_style))
        if not inserted:
            painted.append((start, end, style))
            inserted = True
        if seg_end > end:
            painted.append((end, seg_end, seg_style))
    return painted


class SpanCodec:
    """
    Stateless converter between StyledText and FormattingSpan lists.

    The point sizes are the only parameters; the module-level `span_codec`
    instance takes them from settings.
    """

    def __init__(
        self,
        header_point_size: float = HEADER_POINT_SIZE,
        body_point_size: float = BODY_POINT_SIZE,
    ):
        self.header_point_size = header_point_size
        self.body_point_size = body_point_size
        self._styles: Dict[FormattingType, TextStyle] = {
            FormattingType.HEADER: TextStyle.header(header_point_size),
            FormattingType.BOLD: TextStyle.bold_only(body_point_size),
            FormattingType.ITALIC: TextStyle.italic_only(body_point_size),
        }

    def style_for(self, formatting_type: FormattingType) -> TextStyle:
        """The full descriptor a span of this type paints over its range."""
        return self._styles[formatting_type]

    def encode(self, styled_text: StyledText) -> List[FormattingSpan]:
        """
        Flatten a styled text into formatting spans.

        Args:
            styled_text: Runs covering the whole content

        Returns:
            Spans in run order; BOLD, ITALIC, HEADER order within a run.
            Empty for empty or entirely unstyled text.
        """
        spans: List[FormattingSpan] = []
        for run in styled_text.runs:
            style = run.style
            if style.bold:
                spans.append(self._span(FormattingType.BOLD, run))
            if style.italic:
                spans.append(self._span(FormattingType.ITALIC, run))
            if style.size_pt >= self.header_point_size:
                spans.append(self._span(FormattingType.HEADER, run))
        return spans

    def decode(self, content: str, spans: Iterable[FormattingSpan]) -> StyledText:
        """
        Rebuild a styled text from content and its stored spans.

        Args:
            content: Plain note content
            spans: Formatting spans, applied in iteration order

        Returns:
            StyledText with adjacent equal-style runs coalesced
        """
        styled_text, _ = self.decode_with_report(content, spans)
        return styled_text

    def decode_with_report(
        self, content: str, spans: Iterable[FormattingSpan]
    ) -> Tuple[StyledText, int]:
        """Like decode(), also returning how many spans were dropped as invalid."""
        total = utf16_length(content)
        default_style = TextStyle.default(self.body_point_size)
        segments: List[_Segment] = [(0, total, default_style)] if total else []

        dropped = 0
        for span in spans:
            if not span.is_valid_for_length(total):
                dropped += 1
                logger.debug(
                    "Dropping %s span %d+%d outside content of length %d",
                    span.type.value,
                    span.location,
                    span.length,
                    total,
                )
                continue
            if span.length == 0:
                continue
            segments = _paint(segments, span.location, span.end, self.style_for(span.type))

        runs = [
            StyleRun(start=start, length=end - start, style=style)
            for start, end, style in segments
        ]
        return StyledText(content=content, runs=runs).coalesced(), dropped

    def decode_note(self, note: Note) -> StyledText:
        """Styled text for loading `note` into the editor."""
        return self.decode(note.content, note.formattings)

    @staticmethod
    def _span(formatting_type: FormattingType, run: StyleRun) -> FormattingSpan:
        return FormattingSpan(type=formatting_type, location=run.start, length=run.length)


# ── Singleton Instance ────────────────────────────────────────────────────
span_codec = SpanCodec(
    header_point_size=settings.header_point_size,
    body_point_size=settings.body_point_size,
)


def encode(styled_text: StyledText) -> List[FormattingSpan]:
    return span_codec.encode(styled_text)


def decode(content: str, spans: Iterable[FormattingSpan]) -> StyledText:
    return span_codec.decode(content, spans)
