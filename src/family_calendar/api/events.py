"""Events API.

Serves a single family event as a downloadable .ics file.
"""

from __future__ import annotations

import re

import structlog
from fastapi import APIRouter, Depends, HTTPException, Query, Response

from family_calendar.config import Settings, get_settings
from family_calendar.events import JsonEventStore
from family_calendar.exceptions import InvalidEventError
from family_calendar.ics import IcsGenerator

logger = structlog.get_logger()

router = APIRouter(prefix="/api/events", tags=["events"])

_FILENAME_UNSAFE = re.compile(r"[^a-zA-Z0-9 ]")


def get_event_store(settings: Settings = Depends(get_settings)) -> JsonEventStore:
    return JsonEventStore(settings.events_path)


def calendar_filename(title: str) -> str:
    """Download filename for an event: the title reduced to ASCII letters, digits and spaces."""
    cleaned = _FILENAME_UNSAFE.sub("", title).strip()
    return f"{cleaned or 'event'}.ics"


@router.get("/{event_id}/calendar")
def download_calendar(
    event_id: str,
    tz: str | None = Query(default=None, description="IANA timezone of the event"),
    store: JsonEventStore = Depends(get_event_store),
    settings: Settings = Depends(get_settings),
) -> Response:
    try:
        event = store.get(event_id)
        if event is None:
            raise HTTPException(status_code=404, detail="Event not found")
        timezone = tz or settings.default_timezone
        ics = IcsGenerator.from_settings(settings).generate(event, timezone)
    except InvalidEventError as e:
        logger.warning("calendar_export_failed", event_id=event_id, timezone=tz, error=str(e))
        raise HTTPException(status_code=400, detail=f"Could not build calendar file: {e}") from e

    logger.info("calendar_export_served", event_id=event_id, timezone=timezone)
    return Response(
        content=ics,
        media_type="text/calendar; charset=utf-8",
        headers={"Content-Disposition": f'attachment; filename="{calendar_filename(event.title)}"'},
    )
