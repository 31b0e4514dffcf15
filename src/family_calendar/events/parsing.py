"""Helpers for parsing stored family event rows into internal models."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import ValidationError

from family_calendar.exceptions import InvalidEventError
from family_calendar.models import EventInput


def _describe(error: ValidationError) -> str:
    problems = []
    for item in error.errors():
        location = ".".join(str(part) for part in item.get("loc", ())) or "event"
        problems.append(f"{location}: {item.get('msg', 'invalid value')}")
    return "; ".join(problems)


def event_from_record(record: Mapping[str, Any]) -> EventInput:
    """Convert a stored event row to EventInput.

    Rows carry ``schedule_data``/``recurrence_data`` JSON columns, a nullable
    ``participants`` list and any number of unrelated columns, which are
    ignored.

    Args:
        record: Event row as loaded by the data layer.

    Returns:
        EventInput: Validated event.

    Raises:
        InvalidEventError: If the row does not have the expected shape.
    """
    try:
        return EventInput.model_validate(dict(record))
    except ValidationError as e:
        raise InvalidEventError(f"Invalid event record: {_describe(e)}") from e
