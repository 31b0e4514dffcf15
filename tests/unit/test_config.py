"""Unit tests for configuration module."""

from pathlib import Path

import pytest

from family_calendar.config import Settings, get_settings


class TestSettings:
    """Test suite for Settings class."""

    def test_default_settings(self) -> None:
        """Test that default settings are properly initialized."""
        settings = Settings()

        assert settings.product_name == "ChoreGami"
        assert settings.product_domain == "choregami.app"
        assert settings.default_timezone == "UTC"
        assert settings.events_path == Path("events.json")
        assert settings.log_level == "INFO"
        assert settings.debug is False

    def test_settings_from_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test loading settings from environment variables."""
        monkeypatch.setenv("FAMILY_CALENDAR_PRODUCT_DOMAIN", "calendar.example")
        monkeypatch.setenv("FAMILY_CALENDAR_DEFAULT_TIMEZONE", "Africa/Nairobi")
        monkeypatch.setenv("FAMILY_CALENDAR_DEBUG", "true")

        # Clear the cache to ensure fresh settings
        get_settings.cache_clear()

        settings = get_settings()

        assert settings.product_domain == "calendar.example"
        assert settings.default_timezone == "Africa/Nairobi"
        assert settings.debug is True

    def test_get_settings_returns_cached_instance(self) -> None:
        """Test that get_settings returns the same cached instance."""
        get_settings.cache_clear()

        settings1 = get_settings()
        settings2 = get_settings()

        assert settings1 is settings2
