"""
Mock Calendly client for running without an API token.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Sequence

from ..domain.models import DateRange, EventType, RawInterval

MOCK_SCHEDULING_URL = "https://calendly.com/mock-user/consultation"


class MockCalendlyClient:
    """
    Mock client that simulates Calendly availability responses.

    Every working day gets one open start time per hour between
    ``open_hour`` and ``close_hour`` (local to ``timezone``), clipped to the
    requested window. Weekdays listed in ``exclude_weekdays`` stay closed.
    """

    def __init__(
        self,
        timezone: str = "UTC",
        open_hour: int = 9,
        close_hour: int = 17,
        exclude_weekdays: Sequence[int] = (5, 6),
        event_types: Optional[List[EventType]] = None,
    ):
        self.timezone = timezone
        self.open_hour = open_hour
        self.close_hour = close_hour
        self.exclude_weekdays = list(exclude_weekdays)
        self.event_types = event_types if event_types is not None else [
            EventType(
                uri="https://api.calendly.com/event_types/MOCK30",
                name="30 Minute Consultation",
                duration=30,
                description="Mock consultation",
                scheduling_url=MOCK_SCHEDULING_URL,
            ),
        ]

    def get_available_times(self, event_type: str, date_range: DateRange) -> List[RawInterval]:
        """Synthesize hourly openings inside the window."""
        intervals: List[RawInterval] = []

        start = date_range.start_time.in_timezone(self.timezone)
        end = date_range.end_time.in_timezone(self.timezone)
        current_day = start.start_of("day")

        while current_day <= end:
            if current_day.day_of_week not in self.exclude_weekdays:
                for hour in range(self.open_hour, self.close_hour):
                    opening = current_day.set(hour=hour)
                    if start <= opening < end:
                        intervals.append(
                            RawInterval(start_time=opening, scheduling_url=MOCK_SCHEDULING_URL)
                        )
            current_day = current_day.add(days=1)

        return intervals

    def get_current_user(self) -> str:
        return "https://api.calendly.com/users/MOCKUSER"

    def get_event_types(self, user_uri: Optional[str] = None) -> List[EventType]:
        return list(self.event_types)

    def test_connection(self) -> Dict[str, Any]:
        """
        Mock connection test.

        Returns:
            Mock user resource
        """
        return {
            "uri": self.get_current_user(),
            "name": "Mock User",
            "email": "mock.user@example.com",
        }
