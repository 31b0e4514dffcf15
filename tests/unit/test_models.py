"""Unit tests for data models."""

import pytest

from family_calendar.models import (
    EventInput,
    EventMetadata,
    EventRecurrence,
    EventSchedule,
    RecurrencePattern,
)


class TestEventInput:
    """Test suite for EventInput model."""

    def test_event_input_creation(self) -> None:
        """Test creating an EventInput instance."""
        event = EventInput(
            id="evt-1",
            title="Swim Lesson",
            event_date="2026-02-03",
            schedule=EventSchedule(start_time="16:00", end_time="16:45"),
            recurrence=EventRecurrence(is_recurring=True, pattern="weekly"),
            metadata=EventMetadata(emoji="🏊"),
            participants=["Julia"],
        )

        assert event.id == "evt-1"
        assert event.schedule is not None
        assert event.schedule.start_time == "16:00"
        assert event.participants == ("Julia",)

    def test_stored_row_aliases(self) -> None:
        """Test that schedule_data/recurrence_data populate the short fields."""
        event = EventInput.model_validate(
            {
                "id": "evt-2",
                "title": "Trip",
                "event_date": "2026-04-10",
                "schedule_data": {"all_day": True, "duration_days": 3},
                "recurrence_data": {"is_recurring": False},
            }
        )

        assert event.schedule == EventSchedule(all_day=True, duration_days=3)
        assert event.recurrence == EventRecurrence(is_recurring=False)

    def test_null_participants_become_empty(self) -> None:
        event = EventInput(id="evt-3", title="Quiet Day", event_date="2026-01-01", participants=None)

        assert event.participants == ()

    def test_integer_id_is_coerced(self) -> None:
        event = EventInput.model_validate({"id": 17, "title": "Bake Sale", "event_date": "2026-05-02"})

        assert event.id == "17"

    def test_empty_id_is_rejected(self) -> None:
        with pytest.raises(Exception):  # Pydantic ValidationError
            EventInput(id="", title="Nameless", event_date="2026-01-01")

    def test_event_is_immutable(self) -> None:
        event = EventInput(id="evt-4", title="Dentist", event_date="2026-01-01")

        with pytest.raises(Exception):  # Pydantic ValidationError
            event.title = "Orthodontist"

    @pytest.mark.parametrize(
        ("schedule", "timed"),
        [
            (None, False),
            ({}, False),
            ({"all_day": True}, False),
            ({"start_time": ""}, False),
            ({"start_time": "09:00"}, True),
            ({"start_time": "09:00", "all_day": False}, True),
            ({"start_time": "09:00", "all_day": None}, True),
            ({"start_time": "09:00", "all_day": True}, False),
        ],
    )
    def test_is_timed(self, schedule, timed: bool) -> None:
        event = EventInput.model_validate(
            {"id": "evt-5", "title": "Check", "event_date": "2026-01-01", "schedule": schedule}
        )

        assert event.is_timed is timed


class TestRecurrencePattern:
    """Test suite for RecurrencePattern enum."""

    def test_values(self) -> None:
        assert [p.value for p in RecurrencePattern] == ["weekly", "biweekly", "monthly"]
        assert RecurrencePattern("biweekly") is RecurrencePattern.BIWEEKLY
