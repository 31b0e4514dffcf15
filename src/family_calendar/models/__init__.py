"""Data models for Family Calendar.

This module contains Pydantic models describing a family event as the
calendar export sees it. Field aliases accept the stored row names
(``schedule_data``, ``recurrence_data``) as well as the short ones.
"""

from enum import Enum
from typing import Any, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator


class RecurrencePattern(str, Enum):
    """Supported repeat patterns for recurring events."""

    WEEKLY = "weekly"
    BIWEEKLY = "biweekly"
    MONTHLY = "monthly"


class EventSchedule(BaseModel):
    """Clock times and day span of an event."""

    model_config = ConfigDict(frozen=True)

    all_day: Optional[bool] = Field(default=None, description="Whether the event is all-day")
    start_time: Optional[str] = Field(default=None, description="Local start time, HH:MM")
    end_time: Optional[str] = Field(default=None, description="Local end time, HH:MM")
    duration_days: Optional[int] = Field(
        default=None,
        description="Number of days an all-day event spans",
    )


class EventRecurrence(BaseModel):
    """Repeat settings of an event."""

    model_config = ConfigDict(frozen=True)

    is_recurring: Optional[bool] = Field(default=None, description="Whether the event repeats")
    pattern: Optional[str] = Field(
        default=None,
        description="Repeat pattern (weekly, biweekly, monthly)",
    )
    until_date: Optional[str] = Field(
        default=None,
        description="Last date of the series, YYYY-MM-DD",
    )


class EventMetadata(BaseModel):
    """Display extras attached to an event."""

    model_config = ConfigDict(frozen=True)

    emoji: Optional[str] = Field(default=None, description="Emoji shown before the title")


class EventInput(BaseModel):
    """A family event ready to be exported as a calendar file."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(min_length=1, description="Event ID, used in the calendar UID")
    title: str = Field(description="Event title")
    event_date: str = Field(description="Local calendar date, YYYY-MM-DD")
    schedule: Optional[EventSchedule] = Field(
        default=None,
        validation_alias=AliasChoices("schedule", "schedule_data"),
        description="Clock times and day span",
    )
    recurrence: Optional[EventRecurrence] = Field(
        default=None,
        validation_alias=AliasChoices("recurrence", "recurrence_data"),
        description="Repeat settings",
    )
    metadata: Optional[EventMetadata] = Field(default=None, description="Display extras")
    participants: tuple[str, ...] = Field(
        default=(),
        description="Display names of the family members taking part",
    )

    @field_validator("id", mode="before")
    @classmethod
    def _coerce_id(cls, v: Any) -> Any:
        # Stored rows may carry integer or UUID ids.
        if v is None or isinstance(v, str):
            return v
        return str(v)

    @field_validator("participants", mode="before")
    @classmethod
    def _none_participants(cls, v: Any) -> Any:
        return () if v is None else v

    @property
    def is_timed(self) -> bool:
        """Whether the event renders with clock times rather than as all-day."""
        schedule = self.schedule
        if schedule is None or not schedule.start_time:
            return False
        return schedule.all_day is not True
