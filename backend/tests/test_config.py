"""
MoodJournal Backend — Configuration Tests
==========================================

What we test:
    ✅ Field validation (log level, week start, ranges)
    ✅ Startup checks in validate_required_for_production
    ✅ Lifespan turns a bad configuration into ConfigurationError
"""

import pytest
from unittest.mock import patch
from pydantic import ValidationError as PydanticValidationError

from moodjournal.config import Settings
from moodjournal.exceptions import ConfigurationError
from moodjournal.models.stats import WeekStart


class TestSettingsFields:

    def test_defaults(self):
        settings = Settings(_env_file=None)
        assert settings.weeks_back == 5
        assert settings.streak_lookback_days == 365
        assert settings.header_point_size == 24
        assert settings.body_point_size == 17

    def test_log_level_normalized(self):
        assert Settings(_env_file=None, log_level="debug").log_level == "DEBUG"

    def test_invalid_log_level(self):
        with pytest.raises(PydanticValidationError):
            Settings(_env_file=None, log_level="LOUD")

    def test_week_start_from_environment(self, monkeypatch):
        monkeypatch.setenv("WEEK_STARTS_ON", "Monday")
        assert Settings(_env_file=None).week_starts_on is WeekStart.MONDAY

    def test_weeks_back_range(self):
        with pytest.raises(PydanticValidationError):
            Settings(_env_file=None, weeks_back=0)

    def test_cors_origins_list(self):
        settings = Settings(_env_file=None, cors_origins="http://a.test, http://b.test")
        assert settings.cors_origins_list == ["http://a.test", "http://b.test"]


class TestStartupChecks:

    def test_valid_configuration_passes(self):
        Settings(_env_file=None, default_timezone="Europe/Berlin").validate_required_for_production()

    def test_unknown_time_zone(self):
        settings = Settings(_env_file=None, default_timezone="Nowhere/Special")
        with pytest.raises(ValueError, match="DEFAULT_TIMEZONE"):
            settings.validate_required_for_production()

    def test_header_must_be_larger_than_body(self):
        settings = Settings(_env_file=None, header_point_size=17, body_point_size=17)
        with pytest.raises(ValueError, match="HEADER_POINT_SIZE"):
            settings.validate_required_for_production()

    @pytest.mark.asyncio
    async def test_lifespan_rejects_bad_configuration(self):
        from moodjournal.main import app, lifespan

        with patch.object(
            Settings, "validate_required_for_production", side_effect=ValueError("bad zone")
        ):
            with pytest.raises(ConfigurationError, match="bad zone"):
                async with lifespan(app):
                    pass
