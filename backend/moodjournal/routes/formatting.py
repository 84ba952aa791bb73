"""
MoodJournal Backend — Formatting Route Handlers
================================================

What:  Exposes the span codec over HTTP.
Who:   Called by the note editor: encode before submitting a note, decode
       after loading one for editing.
How:   Delegates straight to the `span_codec` singleton. Both endpoints are
       total: any schema-valid body gets a 200.
"""

import json
import logging
from typing import Any

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from moodjournal.models.styled_text import StyledText
from moodjournal.schemas.common import ErrorResponse
from moodjournal.schemas.formatting import DecodeRequest, DecodeResponse, EncodeResponse
from moodjournal.services.span_codec import span_codec

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/formatting", tags=["Formatting"])


class AsciiJSONResponse(JSONResponse):
    """JSON with non-ASCII escaped, so lone surrogates in note content survive encoding."""

    def render(self, content: Any) -> bytes:
        return json.dumps(
            content,
            ensure_ascii=True,
            allow_nan=False,
            indent=None,
            separators=(",", ":"),
        ).encode("ascii")


@router.post(
    "/encode",
    response_model=EncodeResponse,
    responses={
        422: {"description": "Runs do not cover the content"},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Flatten styled text into formatting spans",
)
async def encode_formatting(styled_text: StyledText) -> EncodeResponse:
    """
    Convert editor runs into the span list stored with a note.

    A run emits BOLD, ITALIC and HEADER spans (in that order) for each trait
    it carries; unstyled runs emit nothing.
    """
    return EncodeResponse(formattings=span_codec.encode(styled_text))


@router.post(
    "/decode",
    response_model=DecodeResponse,
    response_class=AsciiJSONResponse,
    responses={500: {"description": "Server error", "model": ErrorResponse}},
    summary="Rebuild styled text from content and formatting spans",
)
async def decode_formatting(body: DecodeRequest) -> DecodeResponse:
    """
    Apply stored spans to content, in list order.

    Spans falling outside the content are ignored and counted in `dropped`.
    Overlapping spans do not combine: the later span's style replaces the
    earlier one over the overlap.
    """
    styled_text, dropped = span_codec.decode_with_report(body.content, body.formattings)
    if dropped:
        logger.info(
            "Ignored %d of %d spans outside content of length %d",
            dropped,
            len(body.formattings),
            styled_text.length,
        )
    return DecodeResponse(content=styled_text.content, runs=styled_text.runs, dropped=dropped)
