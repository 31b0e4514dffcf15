"""Family event records.

This package reads stored family event rows and turns them into
:class:`~family_calendar.models.EventInput` values for export.
"""

from .parsing import event_from_record
from .repository import JsonEventStore

__all__ = ["JsonEventStore", "event_from_record"]
