"""JSON-file backed, read-only source of family events.

The file holds the exported ``family_events`` rows, either as a top-level
list or under an ``"events"`` key. Rows are validated lazily on lookup so a
single bad row does not hide the rest of the file.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import structlog

from family_calendar.events.parsing import event_from_record
from family_calendar.exceptions import ConfigurationError
from family_calendar.models import EventInput

logger = structlog.get_logger()


class JsonEventStore:
    """Repository for looking up family events by id."""

    def __init__(self, path: Path) -> None:
        """Create a store.

        Args:
            path: Path to the JSON events file.
        """

        self._path = path
        self._rows: dict[str, Mapping[str, Any]] | None = None

    @property
    def path(self) -> Path:
        return self._path

    def _load(self) -> dict[str, Mapping[str, Any]]:
        if self._rows is not None:
            return self._rows

        if not self._path.exists():
            raise ConfigurationError(f"Events file not found: {self._path}")
        try:
            payload = json.loads(self._path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
            raise ConfigurationError(f"Could not read events file {self._path}: {e}") from e

        if isinstance(payload, dict):
            payload = payload.get("events")
        if not isinstance(payload, list):
            raise ConfigurationError(
                f"Events file {self._path} must contain a list of events"
            )

        rows: dict[str, Mapping[str, Any]] = {}
        for row in payload:
            if not isinstance(row, dict) or row.get("id") in (None, ""):
                logger.warning("event_row_skipped", path=str(self._path), reason="missing id")
                continue
            rows.setdefault(str(row["id"]), row)

        logger.debug("events_loaded", path=str(self._path), event_count=len(rows))
        self._rows = rows
        return rows

    def ids(self) -> list[str]:
        """Return the ids of all stored events, in file order."""
        return list(self._load())

    def get(self, event_id: str) -> EventInput | None:
        """Look up one event.

        Args:
            event_id: Event id.

        Returns:
            The event, or None if no row has that id.

        Raises:
            InvalidEventError: If the stored row is malformed.
        """
        row = self._load().get(event_id)
        if row is None:
            return None
        return event_from_record(row)
