"""
Domain layer - Pure availability logic without external dependencies.
"""

from .date_range import DateRangeResolver
from .models import BookableSlot, DateRange, DaySummary, EventType, Period, RawInterval, TimeContext
from .slot_enumerator import SlotEnumerator
from .summarizer import summarize_availability
from .time_context import resolve_time_context

__all__ = [
    "BookableSlot",
    "DateRange",
    "DateRangeResolver",
    "DaySummary",
    "EventType",
    "Period",
    "RawInterval",
    "SlotEnumerator",
    "TimeContext",
    "resolve_time_context",
    "summarize_availability",
]
