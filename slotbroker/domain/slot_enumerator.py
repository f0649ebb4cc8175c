"""
Expands provider intervals into discrete, fixed-duration bookable slots.

Algorithm:
1. Keep intervals whose local start hour falls in the requested period
2. Take each interval's end, or start + default block when the provider
   omitted it (60 minutes for one-hour events, 30 otherwise)
3. Step from the start in ``slot_duration_minutes`` increments, emitting a
   slot for every step strictly before the end; when the provider supplied
   the end, a slot must also fit completely inside it
4. Sort all slots by timestamp
"""

from __future__ import annotations

from typing import Iterable, List, Optional

from pendulum import DateTime

from .models import READABLE_TIME_FORMAT, BookableSlot, Period, RawInterval


class SlotEnumerator:
    """
    Turns availability intervals into slots a caller can choose from.
    """

    def __init__(self, slot_duration_minutes: int = 30, event_duration_minutes: Optional[int] = None):
        self.slot_duration_minutes = slot_duration_minutes
        # The slot length doubles as the event length unless told otherwise.
        self.event_duration_minutes = event_duration_minutes or slot_duration_minutes

    @property
    def default_block_minutes(self) -> int:
        return 60 if self.event_duration_minutes == 60 else 30

    def enumerate(
        self,
        intervals: Iterable[RawInterval],
        period: Period,
        timezone: str = "UTC",
    ) -> List[BookableSlot]:
        """
        List bookable slots for one half-day period.

        Args:
            intervals: Availability entries from the provider
            period: Morning or afternoon
            timezone: Zone used for the period filter and display times

        Returns:
            Slots sorted by timestamp; empty if nothing fits
        """
        if self.slot_duration_minutes <= 0:
            return []

        slots: List[BookableSlot] = []

        for interval in intervals:
            local_start = interval.start_time.in_timezone(timezone)
            if not period.contains_hour(local_start.hour):
                continue

            slots.extend(self._expand_interval(interval, local_start))

        slots.sort(key=lambda slot: slot.timestamp)
        return slots

    def effective_end(self, interval: RawInterval) -> DateTime:
        """End of the interval, assuming a default block when none was given."""
        if interval.end_time is not None:
            return interval.end_time
        return interval.start_time.add(minutes=self.default_block_minutes)

    def _expand_interval(self, interval: RawInterval, local_start: DateTime) -> List[BookableSlot]:
        end = self.effective_end(interval)
        # A synthesized end only bounds the start times, it says nothing about fit.
        must_fit = interval.end_time is not None
        slots: List[BookableSlot] = []

        current = local_start
        while current < end:
            # No partial slots at the tail of a provider interval.
            if must_fit and current.add(minutes=self.slot_duration_minutes) > end:
                break

            slots.append(
                BookableSlot(
                    display_time=current.format(READABLE_TIME_FORMAT, locale="en"),
                    timestamp=current,
                    scheduling_url=interval.scheduling_url,
                )
            )
            current = current.add(minutes=self.slot_duration_minutes)

        return slots
