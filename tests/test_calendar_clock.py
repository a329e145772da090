"""
Tests for the calendar clock: Monday weeks, calendar arithmetic, date
serialization and timezone-projected "today".
"""
from datetime import date, datetime, timezone
from zoneinfo import ZoneInfo

import pytest

from habit_progress.services.calendar_clock import (
    Clock,
    add_days,
    add_months,
    add_weeks,
    add_years,
    days_between,
    format_date,
    month_bounds,
    parse_date,
    resolve_timezone,
    week_bounds,
    week_end,
    week_start,
    year_bounds,
)


class TestWeekStart:
    @pytest.mark.parametrize("day", [add_days(date(2026, 3, 2), i) for i in range(7)])
    def test_every_day_of_week_maps_to_monday(self, day):
        assert week_start(day) == date(2026, 3, 2)

    def test_sunday_belongs_to_preceding_monday(self):
        assert week_start(date(2026, 3, 8)) == date(2026, 3, 2)

    def test_monday_is_its_own_week_start(self):
        assert week_start(date(2026, 3, 9)) == date(2026, 3, 9)

    def test_week_crossing_year_boundary(self):
        # 2026-01-01 is a Thursday
        assert week_start(date(2026, 1, 1)) == date(2025, 12, 29)
        assert week_end(date(2026, 1, 1)) == date(2026, 1, 4)

    def test_week_start_is_monday_and_within_six_days(self):
        d = date(2024, 1, 1)
        for i in range(400):
            day = add_days(d, i)
            start = week_start(day)
            assert start.isoweekday() == 1
            assert 0 <= (day - start).days <= 6

    def test_week_bounds(self):
        assert week_bounds(date(2026, 3, 4)) == (date(2026, 3, 2), date(2026, 3, 8))


class TestArithmetic:
    def test_add_days_and_weeks(self):
        assert add_days(date(2026, 2, 28), 1) == date(2026, 3, 1)
        assert add_days(date(2026, 3, 1), -1) == date(2026, 2, 28)
        assert add_weeks(date(2026, 3, 4), -1) == date(2026, 2, 25)

    def test_add_months_clamps_day(self):
        assert add_months(date(2026, 1, 31), 1) == date(2026, 2, 28)
        assert add_months(date(2024, 1, 31), 1) == date(2024, 2, 29)

    def test_add_months_crosses_year(self):
        assert add_months(date(2026, 12, 15), 1) == date(2027, 1, 15)
        assert add_months(date(2026, 1, 15), -1) == date(2025, 12, 15)

    def test_add_years_from_leap_day(self):
        assert add_years(date(2024, 2, 29), 1) == date(2025, 2, 28)

    def test_month_and_year_bounds(self):
        assert month_bounds(date(2024, 2, 10)) == (date(2024, 2, 1), date(2024, 2, 29))
        assert year_bounds(date(2026, 7, 1)) == (date(2026, 1, 1), date(2026, 12, 31))

    def test_days_between_inclusive(self):
        days = days_between(date(2026, 3, 1), date(2026, 3, 3))
        assert days == [date(2026, 3, 1), date(2026, 3, 2), date(2026, 3, 3)]

    def test_days_between_empty_when_reversed(self):
        assert days_between(date(2026, 3, 3), date(2026, 3, 1)) == []


class TestSerialization:
    def test_format_date(self):
        assert format_date(date(2026, 3, 4)) == "2026-03-04"

    def test_parse_date(self):
        assert parse_date("2026-03-04") == date(2026, 3, 4)

    def test_round_trip_over_a_leap_year(self):
        for day in days_between(date(2024, 1, 1), date(2024, 12, 31)):
            assert parse_date(format_date(day)) == day

    @pytest.mark.parametrize("text", ["2026-13-01", "04/03/2026", "", "2026-02-30"])
    def test_parse_date_rejects_bad_input(self, text):
        with pytest.raises(ValueError):
            parse_date(text)


class TestResolveTimezone:
    def test_known_zone(self):
        assert resolve_timezone("America/New_York") == ZoneInfo("America/New_York")

    def test_tzinfo_passes_through(self):
        assert resolve_timezone(timezone.utc) is timezone.utc

    @pytest.mark.parametrize("name", [None, "", "   ", "Mars/Olympus_Mons"])
    def test_empty_or_unknown_falls_back_to_default(self, name):
        assert resolve_timezone(name) == ZoneInfo("UTC")

    def test_unknown_zone_is_logged(self, caplog):
        with caplog.at_level("WARNING"):
            resolve_timezone("Mars/Olympus_Mons")
        assert "Mars/Olympus_Mons" in caplog.text

    def test_explicit_default(self):
        assert resolve_timezone("nope", default="Europe/Madrid") == ZoneInfo("Europe/Madrid")

    def test_unusable_default_uses_utc(self):
        assert resolve_timezone("nope", default="Also/Not_A_Zone") == timezone.utc


class TestClock:
    def test_today_follows_timezone(self):
        # 02:00 UTC on Mar 4 is still Mar 3 in New York
        clock = Clock.fixed(datetime(2026, 3, 4, 2, 0, tzinfo=timezone.utc))
        assert clock.today("UTC") == date(2026, 3, 4)
        assert clock.today("America/New_York") == date(2026, 3, 3)
        assert clock.today("Asia/Tokyo") == date(2026, 3, 4)

    def test_naive_instant_is_utc(self):
        clock = Clock.fixed(datetime(2026, 3, 4, 23, 30))
        assert clock.today("UTC") == date(2026, 3, 4)
        assert clock.today("Asia/Tokyo") == date(2026, 3, 5)

    def test_yesterday_and_current_week(self):
        clock = Clock.fixed(datetime(2026, 3, 2, 9, 0, tzinfo=timezone.utc))
        assert clock.yesterday("UTC") == date(2026, 3, 1)
        assert clock.current_week("UTC") == (date(2026, 3, 2), date(2026, 3, 8))

    def test_system_clock_returns_aware_now(self):
        assert Clock().now("UTC").tzinfo is not None
