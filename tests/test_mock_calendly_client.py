"""
Tests for the mock Calendly client.
"""

import pendulum

from slotbroker.adapters.mock_calendly_client import MockCalendlyClient
from slotbroker.domain.models import DateRange

TZ = "Europe/Berlin"


def test_synthesizes_hourly_openings_on_working_days():
    client = MockCalendlyClient(timezone=TZ, open_hour=9, close_hour=12)
    date_range = DateRange(
        start_time=pendulum.parse("2026-10-23 10:30", tz=TZ),  # Friday
        end_time=pendulum.parse("2026-10-26 23:59", tz=TZ),  # Monday
    )

    intervals = client.get_available_times("mock", date_range)

    starts = [i.start_time.format("ddd HH:mm") for i in intervals]
    assert starts == ["Fri 11:00", "Mon 09:00", "Mon 10:00", "Mon 11:00"]


def test_empty_window_has_no_openings():
    client = MockCalendlyClient(timezone=TZ)
    instant = pendulum.parse("2026-10-21 17:00", tz=TZ)

    assert client.get_available_times("mock", DateRange(start_time=instant, end_time=instant)) == []


def test_event_types_and_connection():
    client = MockCalendlyClient()

    assert client.get_event_types()[0].duration == 30
    assert client.test_connection()["name"] == "Mock User"
