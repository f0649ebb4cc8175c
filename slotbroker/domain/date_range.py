"""
Date range resolution: turns "now" plus a week offset or a specific day into
the bounded window that is sent to the calendar provider.

Pure domain logic - no API calls, no I/O. Every branch returns a valid
``DateRange``; impossible windows collapse to a zero-width range instead of
raising.
"""

from __future__ import annotations

from datetime import date, time
from typing import Optional

import pendulum
from pendulum import DateTime

from .models import DateRange

WEEKEND_DAYS = (pendulum.SATURDAY, pendulum.SUNDAY)


def end_of_day(dt: DateTime) -> DateTime:
    """Last millisecond of the calendar day containing ``dt``."""
    return dt.set(hour=23, minute=59, second=59, microsecond=999000)


class DateRangeResolver:
    """
    Computes query windows for week and specific-day requests.

    Specific day:
    - today: ``max(now + safety buffer, workday start)`` until workday end
    - any other day: the full calendar day

    Week offset 0: from ``max(now + lead time, week start)`` until Sunday
    night, unless it is the weekend and fewer than ``rollover_hours`` remain,
    in which case the whole next week is used.

    Week offset N >= 1: the Nth following Monday-Sunday week.
    """

    def __init__(
        self,
        workday_start: time = time(9, 0),
        workday_end: time = time(17, 0),
        safety_buffer_minutes: int = 5,
        lead_time_hours: int = 3,
        rollover_hours: int = 12,
    ):
        self.workday_start = workday_start
        self.workday_end = workday_end
        self.safety_buffer_minutes = safety_buffer_minutes
        self.lead_time_hours = lead_time_hours
        self.rollover_hours = rollover_hours

    def resolve(
        self,
        now: DateTime,
        week_offset: int = 0,
        specific_date: Optional[date] = None,
    ) -> DateRange:
        """
        Resolve the window for either request shape.

        Args:
            now: Current instant, already in the caller's zone
            week_offset: Weeks ahead of the current week (ignored with a date)
            specific_date: Calendar day requested by the caller

        Returns:
            DateRange whose bounds are in the caller's zone
        """
        if specific_date is not None:
            return self.for_date(specific_date, now)
        return self.for_week(week_offset, now)

    # Specific-date mode

    def for_date(self, requested: date, now: DateTime) -> DateRange:
        """Window for a single calendar day in the caller's zone."""
        day_start = pendulum.datetime(
            requested.year, requested.month, requested.day, tz=now.timezone
        )

        if day_start.date() == now.date():
            return self._today_range(day_start, now)

        return DateRange(start_time=day_start, end_time=end_of_day(day_start))

    def _today_range(self, day_start: DateTime, now: DateTime) -> DateRange:
        opening = day_start.set(
            hour=self.workday_start.hour, minute=self.workday_start.minute
        )
        closing = day_start.set(
            hour=self.workday_end.hour, minute=self.workday_end.minute
        )

        earliest = now.add(minutes=self.safety_buffer_minutes)
        start = max(earliest, opening)

        if start > closing:
            # After hours: nothing left to offer today.
            return DateRange(start_time=closing, end_time=closing)

        return DateRange(start_time=start, end_time=closing)

    # Week mode

    def for_week(self, week_offset: int, now: DateTime) -> DateRange:
        """Window for the current week (offset 0) or a following week."""
        if week_offset < 1:
            return self._current_week_range(now)
        return self._future_week_range(week_offset, now)

    def _current_week_range(self, now: DateTime) -> DateRange:
        week_start = now.start_of("week")
        week_end = end_of_day(week_start.add(days=6))

        if self._should_roll_over(now, week_end):
            return self._week_starting(now.next(pendulum.MONDAY))

        start = max(now, week_start)
        start = max(start, now.add(hours=self.lead_time_hours))

        if start > week_end:
            # Lead time runs past Sunday night.
            return DateRange(start_time=week_end, end_time=week_end)

        return DateRange(start_time=start, end_time=week_end)

    def _future_week_range(self, week_offset: int, now: DateTime) -> DateRange:
        next_monday = now.next(pendulum.MONDAY)
        return self._week_starting(next_monday.add(weeks=week_offset - 1))

    def _should_roll_over(self, now: DateTime, week_end: DateTime) -> bool:
        """A nearly exhausted weekend counts as a request for next week."""
        if now.day_of_week not in WEEKEND_DAYS:
            return False

        hours_left = (week_end - now).total_seconds() / 3600
        return hours_left < self.rollover_hours

    @staticmethod
    def _week_starting(monday: DateTime) -> DateRange:
        start = monday.start_of("day")
        return DateRange(start_time=start, end_time=end_of_day(start.add(days=6)))
