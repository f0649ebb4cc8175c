"""
Folds provider intervals into a per-day morning/afternoon availability map.
"""

from __future__ import annotations

from typing import Dict, Iterable

from .models import DaySummary, Period, RawInterval


def summarize_availability(
    intervals: Iterable[RawInterval],
    timezone: str = "UTC",
) -> Dict[str, DaySummary]:
    """
    Build a day-name keyed summary of which half-days have openings.

    Each interval is placed on its calendar day in ``timezone``. Days without
    any interval are absent from the result; flags only ever flip from False
    to True, so the input order does not matter.

    Args:
        intervals: Availability entries from the provider
        timezone: Zone the caller thinks in

    Returns:
        Mapping such as ``{"Monday": DaySummary(...)}`` in chronological order
    """
    summary: Dict[str, DaySummary] = {}

    for interval in sorted(intervals, key=lambda i: i.start_time):
        local_start = interval.start_time.in_timezone(timezone)
        day_name = local_start.format("dddd", locale="en")

        day = summary.get(day_name)
        if day is None:
            day = DaySummary(date=local_start.to_date_string())
            summary[day_name] = day

        if Period.MORNING.contains_hour(local_start.hour):
            day.morning_available = True
        elif Period.AFTERNOON.contains_hour(local_start.hour):
            day.afternoon_available = True

    return summary
