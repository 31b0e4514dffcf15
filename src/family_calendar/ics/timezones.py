"""UTC offset and DST lookup for IANA timezones.

Everything here reads the tz database through :mod:`zoneinfo`; no transition
rules are parsed by hand. The VTIMEZONE text itself is produced by the
generator, this module only answers questions about offsets.
"""

from __future__ import annotations

import calendar
from dataclasses import dataclass
from datetime import date, datetime, timedelta, timezone
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from family_calendar.exceptions import InvalidTimezoneError

DEFAULT_TIMEZONE = "UTC"

_DAY = timedelta(days=1)
_MINUTE = timedelta(minutes=1)


@dataclass(frozen=True)
class AnnualRule:
    """A yearly "nth weekday of a month" rule, as used by RRULE BYDAY."""

    month: int
    weekday: int  # Monday == 0
    ordinal: int  # 1..4, or -1 for the last one in the month

    @classmethod
    def from_date(cls, day: date) -> AnnualRule:
        """Describe ``day`` as an nth-weekday rule (last week becomes -1)."""
        days_in_month = calendar.monthrange(day.year, day.month)[1]
        if day.day + 7 > days_in_month:
            ordinal = -1
        else:
            ordinal = (day.day - 1) // 7 + 1
        return cls(month=day.month, weekday=day.weekday(), ordinal=ordinal)

    def occurrence(self, year: int) -> date:
        """Return the date this rule falls on in ``year``."""
        if self.ordinal > 0:
            first = date(year, self.month, 1)
            shift = (self.weekday - first.weekday()) % 7
            return first + timedelta(days=shift + 7 * (self.ordinal - 1))
        last = date(year, self.month, calendar.monthrange(year, self.month)[1])
        return last - timedelta(days=(last.weekday() - self.weekday) % 7)


@dataclass(frozen=True)
class OffsetTransition:
    """A change of UTC offset observed by a zone."""

    at_utc: datetime
    offset_from: int
    offset_to: int
    abbreviation: str

    @property
    def is_forward(self) -> bool:
        """Whether clocks move forward (into the larger offset)."""
        return self.offset_to > self.offset_from

    @property
    def local_onset(self) -> datetime:
        """Naive wall-clock time of the change, read in the old offset."""
        return (self.at_utc + timedelta(minutes=self.offset_from)).replace(tzinfo=None)

    def annual_rule(self) -> AnnualRule:
        return AnnualRule.from_date(self.local_onset.date())


def resolve_timezone(name: str | None) -> ZoneInfo:
    """Look up an IANA zone, defaulting blank names to UTC.

    Args:
        name: IANA timezone identifier such as ``America/New_York``.

    Returns:
        ZoneInfo: The zone from the tz database.

    Raises:
        InvalidTimezoneError: If the tz database has no such zone.
    """
    key = (name or "").strip() or DEFAULT_TIMEZONE
    try:
        return ZoneInfo(key)
    except (ZoneInfoNotFoundError, ValueError, OSError) as e:
        raise InvalidTimezoneError(f"Unknown timezone: {key!r}") from e


def utc_offset_minutes(zone: ZoneInfo, when: datetime) -> int:
    """UTC offset of ``zone`` at ``when`` in minutes (east of UTC is positive).

    A naive ``when`` is read as wall-clock time in ``zone``.
    """
    local = when.replace(tzinfo=zone) if when.tzinfo is None else when.astimezone(zone)
    offset = local.utcoffset()
    if offset is None:
        return 0
    return int(offset.total_seconds()) // 60


def format_offset(minutes: int) -> str:
    """Format an offset in minutes as an iCalendar UTC-OFFSET (+0300, -0500)."""
    sign = "+" if minutes >= 0 else "-"
    hours, mins = divmod(abs(minutes), 60)
    return f"{sign}{hours:02d}{mins:02d}"


def zone_abbreviation(zone: ZoneInfo, when: datetime) -> str:
    """Short zone name in effect at ``when`` (EST, PDT, EAT, ...)."""
    local = when.replace(tzinfo=zone) if when.tzinfo is None else when.astimezone(zone)
    return local.tzname() or zone.key


def _offset_at(zone: ZoneInfo, instant: datetime) -> int:
    return utc_offset_minutes(zone, instant)


def _first_change(zone: ZoneInfo, lo: datetime, hi: datetime, before: int) -> datetime:
    # Offset at lo is ``before`` and differs at hi; find the first minute it differs.
    lo_i, hi_i = 0, int((hi - lo) / _MINUTE)
    while hi_i - lo_i > 1:
        mid = (lo_i + hi_i) // 2
        if _offset_at(zone, lo + mid * _MINUTE) == before:
            lo_i = mid
        else:
            hi_i = mid
    return lo + hi_i * _MINUTE


def year_transitions(zone: ZoneInfo, year: int) -> list[OffsetTransition]:
    """List every UTC offset change of ``zone`` during ``year``.

    The year is sampled once per day and each change is narrowed down to the
    minute, so only the tz database decides where transitions fall.

    Args:
        zone: Zone to inspect.
        year: Calendar year (transition instants are compared in UTC).

    Returns:
        Transitions in chronological order; empty for fixed-offset zones.
    """
    start = datetime(year, 1, 1, tzinfo=timezone.utc)
    end = datetime(year + 1, 1, 1, tzinfo=timezone.utc)

    transitions: list[OffsetTransition] = []
    cursor = start
    offset = _offset_at(zone, cursor)
    while cursor < end:
        nxt = min(cursor + _DAY, end)
        nxt_offset = _offset_at(zone, nxt)
        if nxt_offset != offset:
            at = _first_change(zone, cursor, nxt, offset)
            if at < end:
                transitions.append(
                    OffsetTransition(
                        at_utc=at,
                        offset_from=offset,
                        offset_to=_offset_at(zone, at),
                        abbreviation=zone_abbreviation(zone, at),
                    )
                )
            offset = nxt_offset
        cursor = nxt
    return transitions


def dst_transitions(
    zone: ZoneInfo, year: int, on: date | None = None
) -> tuple[OffsetTransition, OffsetTransition] | None:
    """The (into standard, into daylight) transitions of ``year``, if the zone has both.

    Zones that only change offset one way during the year (a permanent switch)
    return None.

    Some years change offset more than twice (Ramadan suspensions in Morocco
    and Egypt). Given ``on``, the pair returned is the one that brackets that
    date: the last change on or before it and the nearest change the other way,
    so a yearly expansion of the pair gives the offset in force on ``on``.
    Without ``on`` the last change of each direction is used.

    Args:
        zone: Zone to inspect.
        year: Calendar year.
        on: Local date the pair must be correct for.
    """
    transitions = year_transitions(zone, year)
    forward = [t for t in transitions if t.is_forward]
    backward = [t for t in transitions if not t.is_forward]
    if not forward or not backward:
        return None
    if on is None:
        return backward[-1], forward[-1]

    started = [i for i, t in enumerate(transitions) if t.local_onset.date() <= on]
    # Before the year's first change the offset in force leads into it, so pair
    # that change with the first one going the other way.
    index = started[-1] if started else 0
    current = transitions[index]
    later = [t for t in transitions[index + 1 :] if t.is_forward != current.is_forward]
    earlier = [t for t in transitions[:index] if t.is_forward != current.is_forward]
    partner = later[0] if later else earlier[-1]

    if current.is_forward:
        return partner, current
    return current, partner


def observes_dst(zone: ZoneInfo, year: int) -> bool:
    """Whether ``zone`` moves its clocks both forward and back during ``year``."""
    return dst_transitions(zone, year) is not None
