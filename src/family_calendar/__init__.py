"""Family Calendar - calendar file export for family events.

This package turns family event records into RFC 5545 iCalendar documents
and serves them as downloadable .ics files.
"""

__version__ = "0.1.0"
__author__ = "Trickl"

from family_calendar.config import Settings, get_settings
from family_calendar.ics import IcsGenerator, generate_ics
from family_calendar.models import EventInput

__all__ = [
    "EventInput",
    "IcsGenerator",
    "Settings",
    "generate_ics",
    "get_settings",
    "__version__",
    "__author__",
]
