"""Pytest configuration and shared fixtures."""

import json

import pytest


@pytest.fixture
def mock_settings(tmp_path):
    """Provide mock settings for testing."""
    from family_calendar.config import Settings

    return Settings(
        product_name="TestProduct",
        product_domain="test.example",
        default_timezone="UTC",
        events_path=tmp_path / "events.json",
        log_level="DEBUG",
        debug=True,
    )


@pytest.fixture
def generator():
    """Provide a generator with the production constants."""
    from family_calendar.ics import IcsGenerator

    return IcsGenerator(product_name="ChoreGami", product_domain="choregami.app")


@pytest.fixture
def sample_event_record() -> dict:
    """Provide a stored family_events row."""
    return {
        "id": "evt-42",
        "family_id": "fam-1",
        "title": "Basketball Practice",
        "event_date": "2026-01-27",
        "schedule_data": {"start_time": "18:30", "end_time": "19:30", "all_day": False},
        "recurrence_data": {"is_recurring": True, "pattern": "weekly", "until_date": "2026-03-31"},
        "participants": ["Julia", "Ciku"],
        "metadata": {"emoji": "🏀", "source": "manual"},
        "created_at": "2026-01-20T10:00:00Z",
    }


@pytest.fixture
def events_file(tmp_path, sample_event_record):
    """Write a small events file and return its path."""
    path = tmp_path / "events.json"
    rows = [
        sample_event_record,
        {
            "id": "evt-43",
            "title": "Family Trip!",
            "event_date": "2026-04-10",
            "schedule_data": {"all_day": True, "duration_days": 3},
            "recurrence_data": None,
            "participants": None,
            "metadata": None,
        },
        {
            "id": "evt-bad",
            "title": "Broken",
            "event_date": "27/01/2026",
        },
    ]
    path.write_text(json.dumps(rows), encoding="utf-8")
    return path


@pytest.fixture(autouse=True)
def _reset_global_state():
    """Undo logging configuration and cached settings between tests."""
    import structlog

    from family_calendar.config import get_settings

    yield
    structlog.reset_defaults()
    get_settings.cache_clear()
