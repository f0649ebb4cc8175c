"""
Tests for the date range resolver.
"""

from datetime import date

import pendulum
import pytest

from slotbroker.domain.date_range import DateRangeResolver, end_of_day

TZ = "America/New_York"


def at(text: str):
    return pendulum.parse(text, tz=TZ)


@pytest.fixture
def resolver():
    return DateRangeResolver()


class TestSpecificDate:
    """Tests for specific-date requests."""

    def test_other_day_spans_full_calendar_day(self, resolver):
        """A day other than today covers 00:00 to 23:59:59.999."""
        now = at("2026-10-19 10:00")  # Monday

        date_range = resolver.for_date(date(2026, 10, 21), now)

        assert date_range.start_time == at("2026-10-21 00:00")
        assert date_range.end_time == at("2026-10-21 23:59:59.999")

    def test_today_before_opening_starts_at_workday_start(self, resolver):
        """Early callers are offered the day from 09:00."""
        now = at("2026-10-19 07:00")

        date_range = resolver.for_date(date(2026, 10, 19), now)

        assert date_range.start_time == at("2026-10-19 09:00")
        assert date_range.end_time == at("2026-10-19 17:00")

    def test_today_during_hours_clamps_to_now_plus_buffer(self, resolver):
        """Mid-afternoon the window opens five minutes from now."""
        now = at("2026-10-19 16:40")

        date_range = resolver.for_date(date(2026, 10, 19), now)

        assert date_range.start_time == at("2026-10-19 16:45")
        assert date_range.end_time == at("2026-10-19 17:00")

    def test_today_after_hours_is_zero_width(self, resolver):
        """After closing time the range collapses to the workday end."""
        now = at("2026-10-19 17:30")

        date_range = resolver.for_date(date(2026, 10, 19), now)

        assert date_range.start_time == date_range.end_time == at("2026-10-19 17:00")
        assert date_range.is_empty

    def test_today_buffer_past_closing_is_zero_width(self, resolver):
        """Two minutes before closing the buffer already runs past 17:00."""
        now = at("2026-10-19 16:58")

        date_range = resolver.for_date(date(2026, 10, 19), now)

        assert date_range.is_empty
        assert date_range.end_time == at("2026-10-19 17:00")

    def test_custom_workday_hours(self):
        """Workday bounds come from the resolver configuration."""
        from datetime import time

        resolver = DateRangeResolver(workday_start=time(8, 0), workday_end=time(12, 0))
        now = at("2026-10-19 06:00")

        date_range = resolver.for_date(date(2026, 10, 19), now)

        assert date_range.start_time == at("2026-10-19 08:00")
        assert date_range.end_time == at("2026-10-19 12:00")


class TestCurrentWeek:
    """Tests for week offset 0."""

    def test_weekday_applies_lead_time(self, resolver):
        """Midweek the window starts three hours from now and ends Sunday night."""
        now = at("2026-10-21 10:00")  # Wednesday

        date_range = resolver.for_week(0, now)

        assert date_range.start_time == at("2026-10-21 13:00")
        assert date_range.end_time == at("2026-10-25 23:59:59.999")

    def test_monday_morning_still_applies_lead_time(self, resolver):
        """Lead time wins over the week start."""
        now = at("2026-10-19 00:30")

        date_range = resolver.for_week(0, now)

        assert date_range.start_time == at("2026-10-19 03:30")

    def test_late_sunday_rolls_over_to_next_week(self, resolver):
        """Under twelve hours left on a weekend means next week."""
        now = at("2026-10-18 14:00")  # Sunday

        date_range = resolver.for_week(0, now)

        assert date_range.start_time == at("2026-10-19 00:00")
        assert date_range.end_time == at("2026-10-25 23:59:59.999")

    def test_saturday_morning_does_not_roll_over(self, resolver):
        """Saturday always has more than twelve hours left."""
        now = at("2026-10-17 10:00")

        date_range = resolver.for_week(0, now)

        assert date_range.start_time == at("2026-10-17 13:00")
        assert date_range.end_time == at("2026-10-18 23:59:59.999")

    def test_sunday_morning_just_above_threshold(self, resolver):
        """Thirteen hours left keeps the current week."""
        now = at("2026-10-18 11:00")

        date_range = resolver.for_week(0, now)

        assert date_range.start_time == at("2026-10-18 14:00")
        assert date_range.end_time == at("2026-10-18 23:59:59.999")

    def test_lead_time_past_week_end_collapses(self):
        """Without rollover, a late Sunday yields a zero-width range."""
        resolver = DateRangeResolver(rollover_hours=0)
        now = at("2026-10-18 22:00")

        date_range = resolver.for_week(0, now)

        assert date_range.is_empty
        assert date_range.start_time == at("2026-10-18 23:59:59.999")


class TestFutureWeeks:
    """Tests for week offsets of one or more."""

    def test_next_week_from_wednesday(self, resolver):
        now = at("2026-10-21 10:00")

        date_range = resolver.for_week(1, now)

        assert date_range.start_time == at("2026-10-26 00:00")
        assert date_range.end_time == at("2026-11-01 23:59:59.999")

    def test_next_week_from_monday_skips_current_week(self, resolver):
        """On a Monday, "next week" starts seven days later."""
        now = at("2026-10-19 09:00")

        date_range = resolver.for_week(1, now)

        assert date_range.start_time == at("2026-10-26 00:00")

    def test_next_week_from_sunday_starts_tomorrow(self, resolver):
        now = at("2026-10-18 09:00")

        date_range = resolver.for_week(1, now)

        assert date_range.start_time == at("2026-10-19 00:00")

    def test_third_week_ahead_crosses_dst_change(self, resolver):
        """Week bounds stay at local midnight across the November DST switch."""
        now = at("2026-10-21 10:00")

        date_range = resolver.for_week(3, now)

        assert date_range.start_time == at("2026-11-09 00:00")
        assert date_range.end_time == at("2026-11-15 23:59:59.999")
        assert date_range.start_time.hour == 0


class TestInvariants:
    """Properties that hold for every branch."""

    def test_start_never_after_end(self, resolver):
        """Sweep a whole week hour by hour across offsets."""
        base = at("2026-10-12 00:00")  # Monday

        for hour in range(7 * 24):
            now = base.add(hours=hour)
            for offset in range(3):
                date_range = resolver.for_week(offset, now)
                assert date_range.start_time <= date_range.end_time

            today = resolver.for_date(now.date(), now)
            assert today.start_time <= today.end_time

    def test_resolve_prefers_specific_date(self, resolver):
        """A specific date wins over the week offset."""
        now = at("2026-10-19 10:00")

        date_range = resolver.resolve(now, week_offset=2, specific_date=date(2026, 10, 20))

        assert date_range.start_time == at("2026-10-20 00:00")

    def test_end_of_day_millisecond_precision(self):
        assert end_of_day(at("2026-10-19 08:15")).microsecond == 999000
