"""
Tests for time context resolution and caller-id timezone lookup.
"""

import pendulum

from slotbroker.adapters.timezone_lookup import is_valid_phone_number, lookup_timezone
from slotbroker.domain.time_context import detect_timezone, resolve_time_context

NOW = pendulum.datetime(2026, 10, 19, 18, 5, tz="UTC")  # Monday


class TestLookupTimezone:
    """Tests for phone number based zone detection."""

    def test_us_number(self):
        assert lookup_timezone("+16502530000") == "America/New_York"

    def test_uk_number(self):
        assert lookup_timezone("+442070313000") == "Europe/London"

    def test_missing_number(self):
        assert lookup_timezone(None) is None
        assert lookup_timezone("") is None

    def test_unparsable_number(self):
        assert lookup_timezone("not-a-number") is None

    def test_number_without_country_code(self):
        """Local numbers carry no region and cannot be mapped."""
        assert lookup_timezone("6502530000") is None

    def test_region_without_mapping(self):
        assert lookup_timezone("+5511987654321") is None

    def test_is_valid_phone_number(self):
        assert is_valid_phone_number("+16502530000")
        assert not is_valid_phone_number("12345")
        assert not is_valid_phone_number(None)


class TestResolveTimeContext:
    """Tests for resolve_time_context."""

    def test_no_caller_uses_default_zone(self):
        context = resolve_time_context(now=NOW, default_timezone="America/New_York")

        assert context.timezone == "America/New_York"
        assert context.date == "Monday, October 19, 2026"
        assert context.time == "2:05 PM"
        assert context.raw.hour == 14

    def test_no_default_falls_back_to_utc(self):
        context = resolve_time_context(now=NOW)

        assert context.timezone == "UTC"
        assert context.time == "6:05 PM"

    def test_caller_zone_wins_over_default(self):
        context = resolve_time_context(
            "+442070313000",
            now=NOW,
            default_timezone="America/New_York",
            lookup=lookup_timezone,
        )

        assert context.timezone == "Europe/London"
        assert context.time == "7:05 PM"

    def test_unrecognised_caller_degrades_to_default(self):
        context = resolve_time_context(
            "garbage",
            now=NOW,
            default_timezone="Europe/Berlin",
            lookup=lookup_timezone,
        )

        assert context.timezone == "Europe/Berlin"

    def test_to_dict_reports_utc_timestamp(self):
        context = resolve_time_context(now=NOW, default_timezone="Asia/Tokyo")

        assert context.to_dict() == {
            "date": "Tuesday, October 20, 2026",
            "time": "3:05 AM",
            "timezone": "Asia/Tokyo",
            "timestamp": "2026-10-19T18:05:00Z",
        }

    def test_detect_timezone_without_lookup(self):
        assert detect_timezone("+16502530000", "Europe/Paris") == "Europe/Paris"
