"""
MoodJournal Backend — Styled Text Model
========================================

What:  Run-based representation of rich text, as held by the note editor.
How:   A StyledText is the plain content plus an ordered list of StyleRun
       records. Runs are contiguous, never overlap, and together cover the
       whole content. Each run carries exactly one TextStyle descriptor.
Who:   Produced by the editor client and by SpanCodec.decode; consumed by
       SpanCodec.encode.

Offset Unit:
    Every offset and length in this module is measured in UTF-16 code units,
    the unit the mobile editor uses for its attribute ranges. Characters
    outside the Basic Multilingual Plane (most emoji) occupy two units:

        utf16_length("hi")   == 2
        utf16_length("hi😀") == 4

    The same unit is used by FormattingSpan, so span data exchanged with the
    editor stays consistent in both directions.

Style Descriptor:
    TextStyle is a single tagged descriptor {bold, italic, size_pt}. It is
    replaced as a whole, never merged attribute by attribute; see
    services/span_codec.py for the consequences on overlapping spans.
"""

from bisect import bisect_right
from typing import Iterable, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, model_validator

# Point sizes used by the editor for body text and headers
BODY_POINT_SIZE = 17.0
HEADER_POINT_SIZE = 24.0


def utf16_length(text: str) -> int:
    """Length of `text` in UTF-16 code units. A lone surrogate counts as one."""
    return len(text.encode("utf-16-le", errors="surrogatepass")) // 2


def utf16_slice(text: str, start: int, end: int) -> str:
    """
    Slice `text` by UTF-16 code unit offsets.

    A boundary falling inside a surrogate pair yields the broken half as a
    lone surrogate instead of raising.
    """
    encoded = text.encode("utf-16-le", errors="surrogatepass")
    return encoded[start * 2:end * 2].decode("utf-16-le", errors="surrogatepass")


class TextStyle(BaseModel):
    """
    Exclusive style descriptor carried by one run.

    Frozen, so two styles compare (and hash) equal when all three
    attributes match. Run coalescing relies on that equality.
    """

    model_config = ConfigDict(frozen=True)

    bold: bool = False
    italic: bool = False
    size_pt: float = Field(default=BODY_POINT_SIZE, gt=0)

    @classmethod
    def default(cls, size_pt: float = BODY_POINT_SIZE) -> "TextStyle":
        return cls(bold=False, italic=False, size_pt=size_pt)

    @classmethod
    def header(cls, size_pt: float = HEADER_POINT_SIZE) -> "TextStyle":
        """Header text is always bold and never italic."""
        return cls(bold=True, italic=False, size_pt=size_pt)

    @classmethod
    def bold_only(cls, size_pt: float = BODY_POINT_SIZE) -> "TextStyle":
        return cls(bold=True, italic=False, size_pt=size_pt)

    @classmethod
    def italic_only(cls, size_pt: float = BODY_POINT_SIZE) -> "TextStyle":
        return cls(bold=False, italic=True, size_pt=size_pt)


class StyleRun(BaseModel):
    """A contiguous range of content sharing one TextStyle."""

    model_config = ConfigDict(frozen=True)

    start: int = Field(ge=0, description="Offset of the first code unit (UTF-16)")
    length: int = Field(gt=0, description="Number of UTF-16 code units covered")
    style: TextStyle = Field(default_factory=TextStyle.default)

    @property
    def end(self) -> int:
        return self.start + self.length


class StyledText(BaseModel):
    """
    Plain content plus the runs that style it.

    Invariant (checked on construction):
        - the first run starts at 0,
        - each run starts where the previous one ended,
        - the last run ends at utf16_length(content),
        - empty content has no runs.

    A violation raises ValueError, which pydantic reports as a
    ValidationError (422 when it arrives in a request body).
    """

    model_config = ConfigDict(frozen=True)

    content: str = ""
    runs: List[StyleRun] = Field(default_factory=list)

    @model_validator(mode="after")
    def check_runs_cover_content(self) -> "StyledText":
        expected_start = 0
        for index, run in enumerate(self.runs):
            if run.start != expected_start:
                raise ValueError(
                    f"Run {index} starts at {run.start}, expected {expected_start} "
                    "(runs must be contiguous and non-overlapping)"
                )
            expected_start = run.end

        total = utf16_length(self.content)
        if expected_start != total:
            raise ValueError(
                f"Runs cover {expected_start} code units but content has {total}"
            )
        return self

    # ── Constructors ──────────────────────────────────────────────────────

    @classmethod
    def plain(cls, content: str, style: Optional[TextStyle] = None) -> "StyledText":
        """One run over the whole content (no runs for empty content)."""
        total = utf16_length(content)
        if total == 0:
            return cls(content=content, runs=[])
        return cls(
            content=content,
            runs=[StyleRun(start=0, length=total, style=style or TextStyle.default())],
        )

    @classmethod
    def from_segments(cls, segments: Iterable[Tuple[str, TextStyle]]) -> "StyledText":
        """
        Build a styled text by concatenating (text, style) segments.

        Empty segments are skipped. Adjacent segments are NOT coalesced, so
        the resulting runs mirror the segments one to one.

        Example:
            StyledText.from_segments([
                ("Title", TextStyle.header()),
                (" body", TextStyle.default()),
            ])
        """
        content_parts: List[str] = []
        runs: List[StyleRun] = []
        offset = 0
        for text, style in segments:
            length = utf16_length(text)
            if length == 0:
                continue
            content_parts.append(text)
            runs.append(StyleRun(start=offset, length=length, style=style))
            offset += length
        return cls(content="".join(content_parts), runs=runs)

    # ── Queries ───────────────────────────────────────────────────────────

    @property
    def length(self) -> int:
        return utf16_length(self.content)

    def style_at(self, offset: int) -> TextStyle:
        """
        Style of the code unit at `offset`.

        Raises:
            IndexError: offset is outside the content
        """
        if offset < 0 or offset >= self.length:
            raise IndexError(f"Offset {offset} outside content of length {self.length}")
        starts = [run.start for run in self.runs]
        return self.runs[bisect_right(starts, offset) - 1].style

    def text_of(self, run: StyleRun) -> str:
        return utf16_slice(self.content, run.start, run.end)

    def coalesced(self) -> "StyledText":
        """Merge adjacent runs whose styles are equal."""
        merged: List[StyleRun] = []
        for run in self.runs:
            if merged and merged[-1].style == run.style:
                previous = merged.pop()
                run = StyleRun(
                    start=previous.start,
                    length=previous.length + run.length,
                    style=run.style,
                )
            merged.append(run)
        return StyledText(content=self.content, runs=merged)
