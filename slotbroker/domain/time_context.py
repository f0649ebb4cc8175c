"""
Time Context Resolver: "now" in the caller's zone.
"""

from __future__ import annotations

from typing import Callable, Optional

import pendulum
from pendulum import DateTime

from .models import READABLE_DATE_FORMAT, READABLE_TIME_FORMAT, TimeContext

TimezoneLookup = Callable[[Optional[str]], Optional[str]]

FALLBACK_TIMEZONE = "UTC"


def detect_timezone(
    caller_id: Optional[str],
    default_timezone: Optional[str] = None,
    lookup: Optional[TimezoneLookup] = None,
) -> str:
    """
    Pick the zone to present times in.

    Falls back to ``default_timezone`` (and then UTC) when there is no caller
    id, no lookup, or the lookup does not recognise the caller.
    """
    fallback = default_timezone or FALLBACK_TIMEZONE

    if not caller_id or lookup is None:
        return fallback

    return lookup(caller_id) or fallback


def resolve_time_context(
    caller_id: Optional[str] = None,
    *,
    now: Optional[DateTime] = None,
    default_timezone: Optional[str] = None,
    lookup: Optional[TimezoneLookup] = None,
) -> TimeContext:
    """
    Build the caller's time context.

    Args:
        caller_id: Caller phone number, if known
        now: Clock reading; defaults to the system clock
        default_timezone: Configured fallback zone
        lookup: Callable mapping a caller id to a zone name or None

    Returns:
        TimeContext with spoken date/time strings and the zone-adjusted instant
    """
    timezone = detect_timezone(caller_id, default_timezone, lookup)
    instant = (now or pendulum.now("UTC")).in_timezone(timezone)

    return TimeContext(
        date=instant.format(READABLE_DATE_FORMAT, locale="en"),
        time=instant.format(READABLE_TIME_FORMAT, locale="en"),
        timezone=timezone,
        raw=instant,
    )
