"""
Domain models for availability ranges, summaries and bookable slots.

All of these are value objects rebuilt for every request; nothing here is
persisted or shared between requests.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional

from pendulum import DateTime

READABLE_DATE_FORMAT = "dddd, MMMM D, YYYY"
READABLE_TIME_FORMAT = "h:mm A"


class Period(str, Enum):
    """Half-day bucket a caller can ask for."""

    MORNING = "morning"
    AFTERNOON = "afternoon"

    @property
    def hours(self) -> tuple[int, int]:
        """Return the ``[first, last)`` start hours covered by this period."""
        if self is Period.MORNING:
            return (5, 12)
        return (12, 17)

    def contains_hour(self, hour: int) -> bool:
        first, last = self.hours
        return first <= hour < last


@dataclass(frozen=True)
class TimeContext:
    """
    "Now" as seen from the caller's zone, in both machine and spoken form.
    """
    date: str
    time: str
    timezone: str
    raw: DateTime

    def to_dict(self) -> Dict[str, Any]:
        return {
            "date": self.date,
            "time": self.time,
            "timezone": self.timezone,
            "timestamp": self.raw.in_timezone("UTC").to_iso8601_string(),
        }


@dataclass(frozen=True)
class DateRange:
    """
    Represents an immutable query window ``[start_time, end_time]``.

    Invariant: start must not be after end. A zero-width range is valid and
    means there is nothing left to offer.
    """
    start_time: DateTime
    end_time: DateTime

    def __post_init__(self):
        if self.start_time > self.end_time:
            raise ValueError(
                f"Start time {self.start_time} must not be after end time {self.end_time}"
            )

    @property
    def is_empty(self) -> bool:
        return self.start_time == self.end_time

    def describe(self) -> Dict[str, str]:
        """Return ISO bounds plus readable labels for the voice layer."""
        return {
            "start": self.start_time.in_timezone("UTC").to_iso8601_string(),
            "end": self.end_time.in_timezone("UTC").to_iso8601_string(),
            "start_readable": self.start_time.format(READABLE_DATE_FORMAT, locale="en"),
            "end_readable": self.end_time.format(READABLE_DATE_FORMAT, locale="en"),
        }

    def __str__(self) -> str:
        return f"{self.start_time.format('YYYY-MM-DD HH:mm')} - {self.end_time.format('YYYY-MM-DD HH:mm')}"


@dataclass(frozen=True)
class RawInterval:
    """One availability entry as returned by the calendar provider."""
    start_time: DateTime
    scheduling_url: str
    end_time: Optional[DateTime] = None


@dataclass
class DaySummary:
    """Morning/afternoon availability flags for a single calendar day."""
    date: str  # YYYY-MM-DD in the caller's zone
    morning_available: bool = False
    afternoon_available: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "date": self.date,
            "morning": self.morning_available,
            "afternoon": self.afternoon_available,
        }


@dataclass(frozen=True)
class BookableSlot:
    """
    A discrete start time a caller may pick.
    """
    display_time: str
    timestamp: DateTime
    scheduling_url: str

    def to_dict(self) -> Dict[str, str]:
        return {
            "time": self.display_time,
            "timestamp": self.timestamp.in_timezone("UTC").to_iso8601_string(),
            "scheduling_url": self.scheduling_url,
        }


@dataclass(frozen=True)
class EventType:
    """A bookable meeting template offered by the calendar provider."""
    uri: str
    name: str
    duration: int
    description: str = ""
    scheduling_url: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.uri,
            "name": self.name,
            "duration": self.duration,
            "description": self.description,
            "url": self.scheduling_url,
        }
