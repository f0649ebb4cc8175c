"""
Tests for the availability summarizer.
"""

import pendulum

from slotbroker.domain.models import RawInterval
from slotbroker.domain.summarizer import summarize_availability


def interval(start: str, tz: str = "UTC") -> RawInterval:
    return RawInterval(start_time=pendulum.parse(start, tz=tz), scheduling_url="https://calendly.com/x")


class TestSummarizeAvailability:
    """Tests for summarize_availability."""

    def test_flags_morning_and_afternoon_per_day(self):
        intervals = [
            interval("2026-10-19 09:00"),  # Monday morning
            interval("2026-10-19 14:00"),  # Monday afternoon
            interval("2026-10-20 13:30"),  # Tuesday afternoon
        ]

        summary = summarize_availability(intervals)

        assert list(summary) == ["Monday", "Tuesday"]
        assert summary["Monday"].morning_available
        assert summary["Monday"].afternoon_available
        assert summary["Monday"].date == "2026-10-19"
        assert not summary["Tuesday"].morning_available
        assert summary["Tuesday"].afternoon_available

    def test_days_without_intervals_are_absent(self):
        summary = summarize_availability([interval("2026-10-21 10:00")])

        assert set(summary) == {"Wednesday"}

    def test_empty_input_gives_empty_summary(self):
        assert summarize_availability([]) == {}

    def test_flags_never_downgrade_regardless_of_order(self):
        """A later evening interval does not clear an earlier morning flag."""
        intervals = [
            interval("2026-10-19 08:00"),
            interval("2026-10-19 19:00"),
            interval("2026-10-19 15:00"),
        ]

        forward = summarize_availability(intervals)
        backward = summarize_availability(list(reversed(intervals)))

        for summary in (forward, backward):
            assert summary["Monday"].morning_available
            assert summary["Monday"].afternoon_available

    def test_evening_only_day_is_present_with_no_flags(self):
        summary = summarize_availability([interval("2026-10-19 18:00")])

        assert summary["Monday"].to_dict() == {
            "date": "2026-10-19",
            "morning": False,
            "afternoon": False,
        }

    def test_day_and_hour_follow_caller_timezone(self):
        """02:00 UTC on Tuesday is still Monday evening in New York."""
        summary = summarize_availability(
            [interval("2026-10-20 02:00"), interval("2026-10-20 13:00")],
            timezone="America/New_York",
        )

        assert summary["Monday"].date == "2026-10-19"
        assert not summary["Monday"].morning_available
        assert summary["Tuesday"].morning_available  # 09:00 local
