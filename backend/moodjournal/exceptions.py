"""
MoodJournal Backend — Custom Exception Hierarchy
=================================================

What:  Application-specific exceptions for the service layer.
How:   Each exception carries a user-facing message and an optional context
       dict. Global handlers registered in main.py turn them into structured
       JSON error responses.
Who:   Raised by routes and startup code. The span codec and the analytics
       functions never raise: malformed spans are dropped and empty input
       yields zero-valued results.

Exception Hierarchy:
    MoodJournalError (base)     → 500 Internal Server Error
    ├── ValidationError         → 400 Bad Request (client can fix)
    └── ConfigurationError      → raised at startup, never reaches a client
"""

from typing import Any, Dict, Optional


class MoodJournalError(Exception):
    """
    Base exception for all MoodJournal application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged, returned only by 400 handlers)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(MoodJournalError):
    """
    Raised when a request is well-formed but cannot be answered.

    Schema problems (wrong types, missing fields) are already rejected by
    FastAPI with 422. This covers the rest, e.g. an unknown time zone name.

    Example response:
        {
            "error": "validation_error",
            "message": "Unknown time zone 'Mars/Olympus'",
            "details": {"field": "timezone"}
        }
    """

    def __init__(
        self,
        message: str = "Validation failed",
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message=message, context=ctx)
        self.field = field


class ConfigurationError(MoodJournalError):
    """Raised when settings fail the startup checks."""

    def __init__(
        self,
        message: str = "Invalid configuration",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
