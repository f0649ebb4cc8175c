"""
Application service answering the two questions a voice agent asks:
"which days have openings in week N?" and "which times are open on day D?".

The service validates input, resolves the caller's time context and query
window via the domain layer, fetches intervals through a calendar client
adapter and hands them to the summarizer or the slot enumerator. The client
is reached through a small protocol so tests can plug in a stub.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from datetime import date
from typing import Any, Callable, Dict, List, Optional, Protocol, Union

import pendulum
from pendulum import DateTime

from ..adapters.timezone_lookup import lookup_timezone
from ..config import AppConfig, SchedulingConfig
from ..domain.date_range import DateRangeResolver
from ..domain.exceptions import InputValidationError
from ..domain.models import BookableSlot, DateRange, DaySummary, Period, RawInterval, TimeContext
from ..domain.slot_enumerator import SlotEnumerator
from ..domain.summarizer import summarize_availability
from ..domain.time_context import TimezoneLookup, resolve_time_context

logger = logging.getLogger(__name__)

Clock = Callable[[], DateTime]


class AvailabilityClientProtocol(Protocol):
    """Protocol describing the calendar client behaviour needed by the service."""

    def get_available_times(self, event_type: str, date_range: DateRange) -> List[RawInterval]:
        """Return open intervals for an event type inside the window."""


@dataclass(frozen=True)
class WeekSummaryResult:
    current_time: TimeContext
    event_type: str
    date_range: DateRange
    availability: Dict[str, DaySummary]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "success": True,
            "current_time": self.current_time.to_dict(),
            "event_type": self.event_type,
            "date_range": self.date_range.describe(),
            "availability": {day: summary.to_dict() for day, summary in self.availability.items()},
        }


@dataclass(frozen=True)
class DaySlotsResult:
    current_time: TimeContext
    event_type: str
    period: Period
    date_range: DateRange
    availability: List[BookableSlot]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "success": True,
            "current_time": self.current_time.to_dict(),
            "event_type": self.event_type,
            "period": self.period.value,
            "date_range": self.date_range.describe(),
            "availability": [slot.to_dict() for slot in self.availability],
        }


class SchedulingService:
    """
    Orchestrates window resolution, availability retrieval and shaping.

    Each call works on fresh inputs only; the service holds no per-request
    state, so one instance can serve concurrent requests.
    """

    def __init__(
        self,
        client: AvailabilityClientProtocol,
        scheduling: Optional[SchedulingConfig] = None,
        default_timezone: str = "UTC",
        clock: Optional[Clock] = None,
        timezone_lookup: Optional[TimezoneLookup] = lookup_timezone,
    ) -> None:
        self._client = client
        self._scheduling = scheduling or SchedulingConfig()
        self._default_timezone = default_timezone
        self._clock = clock or (lambda: pendulum.now("UTC"))
        self._timezone_lookup = timezone_lookup
        self._resolver = DateRangeResolver(
            workday_start=self._scheduling.get_workday_start(),
            workday_end=self._scheduling.get_workday_end(),
            safety_buffer_minutes=self._scheduling.safety_buffer_minutes,
            lead_time_hours=self._scheduling.lead_time_hours,
            rollover_hours=self._scheduling.weekend_rollover_hours,
        )

    @classmethod
    def from_config(
        cls,
        client: AvailabilityClientProtocol,
        config: AppConfig,
        clock: Optional[Clock] = None,
    ) -> "SchedulingService":
        return cls(
            client=client,
            scheduling=config.scheduling,
            default_timezone=config.default_timezone,
            clock=clock,
        )

    def time_context(self, caller_id: Optional[str] = None) -> TimeContext:
        """Current time as the caller experiences it."""
        return resolve_time_context(
            caller_id,
            now=self._clock(),
            default_timezone=self._default_timezone,
            lookup=self._timezone_lookup,
        )

    async def resolve_week_summary(
        self,
        event_type: str,
        week_offset: Union[int, str] = 0,
        caller_id: Optional[str] = None,
    ) -> WeekSummaryResult:
        """
        Summarise morning/afternoon availability per day for a week.

        Raises:
            InputValidationError: If the event type or offset is invalid
            ProviderQueryError: If the calendar provider call fails
        """
        event_type = _validate_event_type(event_type)
        offset = _validate_week_offset(week_offset)

        context = self.time_context(caller_id)
        date_range = self._resolver.for_week(offset, context.raw)

        intervals = await self._fetch(event_type, date_range)
        availability = summarize_availability(intervals, context.timezone)

        return WeekSummaryResult(
            current_time=context,
            event_type=event_type,
            date_range=date_range,
            availability=availability,
        )

    async def resolve_day_slots(
        self,
        event_type: str,
        requested_date: Union[str, date],
        period: Union[Period, str] = Period.MORNING,
        caller_id: Optional[str] = None,
        event_duration_minutes: Optional[int] = None,
    ) -> DaySlotsResult:
        """
        List bookable start times on one day for a half-day period.

        Raises:
            InputValidationError: If event type, date, period or duration is invalid
            ProviderQueryError: If the calendar provider call fails
        """
        event_type = _validate_event_type(event_type)
        selected_period = _validate_period(period)
        duration = _validate_duration(event_duration_minutes)

        context = self.time_context(caller_id)
        day = _parse_requested_date(requested_date, context.timezone)
        date_range = self._resolver.for_date(day, context.raw)

        intervals = await self._fetch(event_type, date_range)

        slot_minutes = duration or self._scheduling.slot_duration_minutes
        enumerator = SlotEnumerator(
            slot_duration_minutes=slot_minutes,
            event_duration_minutes=duration,
        )
        slots = enumerator.enumerate(intervals, selected_period, context.timezone)

        return DaySlotsResult(
            current_time=context,
            event_type=event_type,
            period=selected_period,
            date_range=date_range,
            availability=slots,
        )

    async def _fetch(self, event_type: str, date_range: DateRange) -> List[RawInterval]:
        if date_range.is_empty:
            logger.info("Window %s is empty, skipping provider query", date_range)
            return []

        return await asyncio.to_thread(self._client.get_available_times, event_type, date_range)


def _validate_event_type(event_type: Optional[str]) -> str:
    if not isinstance(event_type, str) or not event_type.strip():
        raise InputValidationError("Missing required parameter: event_type")
    return event_type.strip()


def _validate_week_offset(week_offset: Union[int, str, None]) -> int:
    if week_offset is None or week_offset == "":
        return 0

    if isinstance(week_offset, bool) or (isinstance(week_offset, float) and not week_offset.is_integer()):
        raise InputValidationError("week_offset must be a whole number")

    try:
        offset = int(week_offset)
    except (TypeError, ValueError) as e:
        raise InputValidationError(f"week_offset must be a whole number, got {week_offset!r}") from e

    if offset < 0:
        raise InputValidationError("week_offset must not be negative")
    return offset


def _validate_period(period: Union[Period, str, None]) -> Period:
    if isinstance(period, Period):
        return period

    try:
        return Period((period or "").strip().lower())
    except (AttributeError, ValueError) as e:
        raise InputValidationError(
            'Invalid parameter: period. Valid values are "morning" or "afternoon"'
        ) from e


def _validate_duration(minutes: Optional[int]) -> Optional[int]:
    if minutes is None:
        return None

    if isinstance(minutes, bool) or not isinstance(minutes, int) or minutes <= 0:
        raise InputValidationError("Event duration must be a positive number of minutes")
    return minutes


def _parse_requested_date(value: Union[str, date, None], timezone: str) -> date:
    """Interpret the requested day as a calendar day in the caller's zone."""
    if isinstance(value, DateTime):
        return value.in_timezone(timezone).date()
    if isinstance(value, date):
        return value

    if not isinstance(value, str) or not value.strip():
        raise InputValidationError("Missing required parameter: date")

    try:
        parsed = pendulum.parse(value.strip(), tz=timezone)
    except ValueError as e:
        raise InputValidationError(
            "Invalid date format. Please provide a valid date (e.g., YYYY-MM-DD)"
        ) from e

    if not isinstance(parsed, DateTime):
        raise InputValidationError(
            "Invalid date format. Please provide a valid date (e.g., YYYY-MM-DD)"
        )

    return parsed.in_timezone(timezone).date()
