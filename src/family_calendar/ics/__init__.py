"""iCalendar export for family events."""

from .generator import IcsGenerator, generate_ics

__all__ = ["IcsGenerator", "generate_ics"]
