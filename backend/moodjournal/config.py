"""
MoodJournal Backend — Application Configuration
================================================

What:  Centralized configuration management using Pydantic Settings.
How:   Pydantic Settings reads from environment variables (or a .env file),
       validates types/ranges, and provides a singleton `settings` object.
Who:   Imported by the services (codec point sizes, analytics defaults),
       the routes and the application factory.
When:  Loaded once at module import time; cross-field checks run at startup
       through `validate_required_for_production()`.

Example .env:
    LOG_LEVEL=DEBUG
    WEEK_STARTS_ON=monday
    DEFAULT_TIMEZONE=Europe/Berlin
"""

from typing import List
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings

from moodjournal.models.stats import WeekStart
from moodjournal.models.styled_text import BODY_POINT_SIZE, HEADER_POINT_SIZE


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All settings have defaults suitable for development.
    Attributes are grouped by concern.
    """

    # ── Analytics ─────────────────────────────────────────────────────────
    # Weekday that opens a calendar week for bucketing and streaks
    week_starts_on: WeekStart = Field(default=WeekStart.SUNDAY)

    # Number of trailing weeks reported by the weekly overview
    weeks_back: int = Field(default=5, ge=1, le=52)

    # How far back streaks are searched
    streak_lookback_days: int = Field(default=365, ge=7, le=3650)

    # IANA zone used for "now" and week boundaries when a request names none
    default_timezone: str = Field(default="UTC")

    # ── Span Codec ────────────────────────────────────────────────────────
    # Runs at or above this size are headers; decoded headers get this size
    header_point_size: float = Field(default=HEADER_POINT_SIZE, gt=0)
    body_point_size: float = Field(default=BODY_POINT_SIZE, gt=0)

    # ── CORS ──────────────────────────────────────────────────────────────
    # Comma-separated list of allowed origins
    cors_origins: str = Field(default="http://localhost:3000")

    @property
    def cors_origins_list(self) -> List[str]:
        """Splits comma-separated CORS origins into a list."""
        return [origin.strip() for origin in self.cors_origins.split(",")]

    # ── Server ────────────────────────────────────────────────────────────
    backend_host: str = Field(default="0.0.0.0")
    backend_port: int = Field(default=8000, ge=1024, le=65535)

    # Valid: DEBUG, INFO, WARNING, ERROR, CRITICAL
    log_level: str = Field(default="INFO")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Ensures log level is a valid Python logging level name."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper = v.upper()
        if upper not in valid_levels:
            raise ValueError(f"Invalid log_level '{v}'. Must be one of: {valid_levels}")
        return upper

    # ── Pydantic Settings Config ──────────────────────────────────────────
    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
    }

    def validate_required_for_production(self) -> None:
        """
        Cross-field and environment checks that field validators cannot do.

        Raises:
            ValueError: listing every problem found
        """
        errors = []
        try:
            ZoneInfo(self.default_timezone)
        except (ZoneInfoNotFoundError, ValueError):
            errors.append(
                f"DEFAULT_TIMEZONE '{self.default_timezone}' is not a known IANA time zone."
            )
        if self.header_point_size <= self.body_point_size:
            errors.append(
                "HEADER_POINT_SIZE must be larger than BODY_POINT_SIZE, "
                "otherwise every body run would be encoded as a header."
            )
        if errors:
            raise ValueError(
                "Configuration validation failed:\n" + "\n".join(f"  - {e}" for e in errors)
            )


# Singleton instance — imported throughout the application
settings = Settings()
