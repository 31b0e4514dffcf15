"""iCalendar (RFC 5545) generation for family events.

The generator is a pure transform: one event plus a timezone name in, one
CRLF-terminated calendar document out. It does no I/O and keeps no state, so
the same input always produces byte-identical output.
"""

from __future__ import annotations

import re
from datetime import date, datetime, time, timedelta
from zoneinfo import ZoneInfo

from family_calendar.config import Settings, get_settings
from family_calendar.exceptions import InvalidEventError
from family_calendar.ics.timezones import (
    DEFAULT_TIMEZONE,
    OffsetTransition,
    dst_transitions,
    format_offset,
    resolve_timezone,
    utc_offset_minutes,
    zone_abbreviation,
)
from family_calendar.models import EventInput, EventSchedule, RecurrencePattern

CRLF = "\r\n"

_MAX_LINE_OCTETS = 75
_DEFAULT_DURATION = timedelta(minutes=60)
_ALARM_TRIGGER = "-PT60M"
_RULE_ANCHOR_YEAR = 1970
_WEEKDAY_CODES = ("MO", "TU", "WE", "TH", "FR", "SA", "SU")

_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")
_TIME_RE = re.compile(r"^\d{2}:\d{2}$")
_CONTROL_RE = re.compile(r"[\x00-\x1f\x7f]")

_FREQUENCIES = {
    RecurrencePattern.WEEKLY: "FREQ=WEEKLY",
    RecurrencePattern.BIWEEKLY: "FREQ=WEEKLY;INTERVAL=2",
    RecurrencePattern.MONTHLY: "FREQ=MONTHLY",
}


def _parse_date(value: str | None, field: str) -> date:
    if not value or not _DATE_RE.match(value):
        raise InvalidEventError(f"{field} must be a YYYY-MM-DD date, got {value!r}")
    try:
        return date.fromisoformat(value)
    except ValueError as e:
        raise InvalidEventError(f"{field} is not a valid date: {value!r}") from e


def _parse_time(value: str, field: str) -> time:
    if not _TIME_RE.match(value):
        raise InvalidEventError(f"{field} must be an HH:MM time, got {value!r}")
    try:
        return time.fromisoformat(value)
    except ValueError as e:
        raise InvalidEventError(f"{field} is not a valid time: {value!r}") from e


def _format_date(value: date) -> str:
    return value.strftime("%Y%m%d")


def _format_local(value: datetime) -> str:
    return value.strftime("%Y%m%dT%H%M%S")


def escape_text(value: str) -> str:
    """Escape an iCalendar TEXT value.

    Backslashes, semicolons and line breaks are escaped. Commas are kept
    literal so participant lists read naturally in every client.
    """
    return (
        value.replace("\\", "\\\\")
        .replace(";", "\\;")
        .replace("\r\n", "\\n")
        .replace("\n", "\\n")
        .replace("\r", "\\n")
    )


def fold_line(line: str) -> str:
    """Fold a content line at 75 octets without splitting UTF-8 sequences."""
    if len(line.encode("utf-8")) <= _MAX_LINE_OCTETS:
        return line

    parts: list[str] = []
    current = ""
    current_octets = 0
    limit = _MAX_LINE_OCTETS
    for char in line:
        size = len(char.encode("utf-8"))
        if current_octets + size > limit:
            parts.append(current)
            current = ""
            current_octets = 0
            # Continuation lines start with a space that counts toward the limit.
            limit = _MAX_LINE_OCTETS - 1
        current += char
        current_octets += size
    parts.append(current)
    return (CRLF + " ").join(parts)


class IcsGenerator:
    """Builds calendar documents for family events.

    The product name and domain are deployment constants: the name goes into
    PRODID and the domain into every UID (``<event id>@<domain>``).
    """

    def __init__(self, product_name: str = "ChoreGami", product_domain: str = "choregami.app") -> None:
        """Create a generator.

        Args:
            product_name: Name written into the PRODID property.
            product_domain: Domain appended to event ids to form UIDs.
        """
        self.product_name = product_name
        self.product_domain = product_domain

    @classmethod
    def from_settings(cls, settings: Settings | None = None) -> IcsGenerator:
        """Create a generator from application settings."""
        settings = settings or get_settings()
        return cls(product_name=settings.product_name, product_domain=settings.product_domain)

    def generate(self, event: EventInput, timezone: str | None = DEFAULT_TIMEZONE) -> str:
        """Render ``event`` as a complete iCalendar document.

        Args:
            event: The event to export.
            timezone: IANA zone the event's date and times are local to.
                Blank or None means UTC.

        Returns:
            The calendar text, every line terminated by CRLF.

        Raises:
            InvalidEventError: If a date, time, span or recurrence pattern is
                malformed, or the timezone is unknown.
        """
        if _CONTROL_RE.search(event.id):
            raise InvalidEventError(f"Event id must not contain control characters: {event.id!r}")
        tz_name = (timezone or "").strip() or DEFAULT_TIMEZONE
        zone = resolve_timezone(tz_name)
        event_date = _parse_date(event.event_date, "event_date")

        if event.is_timed:
            start, end = self._timed_span(event.schedule, event_date)
            timing = [
                f"DTSTART;TZID={tz_name}:{_format_local(start)}",
                f"DTEND;TZID={tz_name}:{_format_local(end)}",
            ]
        else:
            timing = [
                f"DTSTART;VALUE=DATE:{_format_date(event_date)}",
                f"DTEND;VALUE=DATE:{_format_date(self._all_day_end(event, event_date))}",
            ]
        rrule = self._rrule(event)

        lines = [
            "BEGIN:VCALENDAR",
            "VERSION:2.0",
            f"PRODID:-//{self.product_name}//Events//EN",
            "CALSCALE:GREGORIAN",
            "METHOD:PUBLISH",
            f"X-WR-TIMEZONE:{tz_name}",
        ]
        if event.is_timed:
            lines.extend(self._vtimezone(tz_name, zone, event_date))

        lines.append("BEGIN:VEVENT")
        lines.append(f"UID:{event.id}@{self.product_domain}")
        lines.extend(timing)
        lines.append(f"SUMMARY:{escape_text(self._summary(event))}")
        if event.participants:
            lines.append(f"DESCRIPTION:{escape_text('Participants: ' + ', '.join(event.participants))}")
        if rrule:
            lines.append(f"RRULE:{rrule}")
        if event.is_timed:
            lines.extend(
                [
                    "BEGIN:VALARM",
                    f"TRIGGER:{_ALARM_TRIGGER}",
                    "ACTION:DISPLAY",
                    "DESCRIPTION:Event reminder",
                    "END:VALARM",
                ]
            )
        lines.append("END:VEVENT")
        lines.append("END:VCALENDAR")

        return CRLF.join(fold_line(line) for line in lines) + CRLF

    @staticmethod
    def _summary(event: EventInput) -> str:
        emoji = event.metadata.emoji if event.metadata else None
        if emoji:
            return f"{emoji} {event.title}"
        return event.title

    @staticmethod
    def _timed_span(schedule: EventSchedule | None, event_date: date) -> tuple[datetime, datetime]:
        if schedule is None or not schedule.start_time:
            raise InvalidEventError("start_time is required for a timed event")

        start = datetime.combine(event_date, _parse_time(schedule.start_time, "start_time"))
        if not schedule.end_time:
            return start, start + _DEFAULT_DURATION

        end = datetime.combine(event_date, _parse_time(schedule.end_time, "end_time"))
        if end <= start:
            raise InvalidEventError(
                f"end_time {schedule.end_time!r} must be after start_time {schedule.start_time!r}"
            )
        return start, end

    @staticmethod
    def _all_day_end(event: EventInput, event_date: date) -> date:
        days = event.schedule.duration_days if event.schedule else None
        if days is None:
            days = 1
        if days < 1:
            raise InvalidEventError(f"duration_days must be at least 1, got {days}")
        # DTEND of an all-day event is exclusive.
        return event_date + timedelta(days=days)

    @staticmethod
    def _rrule(event: EventInput) -> str | None:
        recurrence = event.recurrence
        if recurrence is None or recurrence.is_recurring is not True or not recurrence.pattern:
            return None

        try:
            pattern = RecurrencePattern(recurrence.pattern)
        except ValueError as e:
            raise InvalidEventError(f"Unsupported recurrence pattern: {recurrence.pattern!r}") from e

        rule = _FREQUENCIES[pattern]
        if recurrence.until_date:
            until = _parse_date(recurrence.until_date, "until_date")
            rule += f";UNTIL={_format_date(until)}T235959Z"
        return rule

    @staticmethod
    def _vtimezone(tz_name: str, zone: ZoneInfo, on: date) -> list[str]:
        lines = ["BEGIN:VTIMEZONE", f"TZID:{tz_name}"]

        pair = dst_transitions(zone, on.year, on)
        if pair is not None:
            into_standard, into_daylight = pair
            lines.extend(_observance("STANDARD", into_standard))
            lines.extend(_observance("DAYLIGHT", into_daylight))
        else:
            noon = datetime.combine(on, time(12))
            offset = format_offset(utc_offset_minutes(zone, noon))
            lines.extend(
                [
                    "BEGIN:STANDARD",
                    f"DTSTART:{_RULE_ANCHOR_YEAR}0101T000000",
                    f"TZOFFSETFROM:{offset}",
                    f"TZOFFSETTO:{offset}",
                    f"TZNAME:{zone_abbreviation(zone, noon)}",
                    "END:STANDARD",
                ]
            )

        lines.append("END:VTIMEZONE")
        return lines


def _observance(kind: str, transition: OffsetTransition) -> list[str]:
    # Anchor the yearly rule in 1970 so it covers every date a client may expand.
    rule = transition.annual_rule()
    onset = datetime.combine(rule.occurrence(_RULE_ANCHOR_YEAR), transition.local_onset.time())
    return [
        f"BEGIN:{kind}",
        f"DTSTART:{_format_local(onset)}",
        f"TZOFFSETFROM:{format_offset(transition.offset_from)}",
        f"TZOFFSETTO:{format_offset(transition.offset_to)}",
        f"RRULE:FREQ=YEARLY;BYMONTH={rule.month};BYDAY={rule.ordinal}{_WEEKDAY_CODES[rule.weekday]}",
        f"TZNAME:{transition.abbreviation}",
        f"END:{kind}",
    ]


def generate_ics(event: EventInput, timezone: str | None = DEFAULT_TIMEZONE) -> str:
    """Render ``event`` with the configured product name and domain.

    See :meth:`IcsGenerator.generate`.
    """
    return IcsGenerator.from_settings().generate(event, timezone)
