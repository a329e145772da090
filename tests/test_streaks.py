"""
Tests for the streak calculator.

Reference day: Wednesday 2026-03-04 (week Mon 2026-03-02 .. Sun 2026-03-08).
"""
from datetime import date, timedelta

from habit_progress.services.streaks import (
    EMPTY_STREAK,
    calculate_streaks,
    daily_streak,
    weekly_streak,
)

TODAY = date(2026, 3, 4)


def _days_back(*offsets: int) -> list[date]:
    return sorted({TODAY - timedelta(days=o) for o in offsets}, reverse=True)


class TestDailyStreak:
    def test_no_checkins(self):
        assert daily_streak([], TODAY) == 0

    def test_today_only(self):
        assert daily_streak(_days_back(0), TODAY) == 1

    def test_yesterday_only_is_grace(self):
        assert daily_streak(_days_back(1), TODAY) == 1

    def test_two_days_ago_breaks(self):
        assert daily_streak(_days_back(2), TODAY) == 0

    def test_three_consecutive_days(self):
        assert daily_streak(_days_back(0, 1, 2), TODAY) == 3

    def test_run_ending_yesterday(self):
        assert daily_streak(_days_back(1, 2, 3), TODAY) == 3

    def test_gap_stops_count(self):
        # today, yesterday, then a gap; the older run of 5 is ignored
        assert daily_streak(_days_back(0, 1, 3, 4, 5, 6, 7), TODAY) == 2

    def test_month_boundary(self):
        today = date(2026, 3, 1)
        dates = [date(2026, 3, 1), date(2026, 2, 28), date(2026, 2, 27)]
        assert daily_streak(dates, today) == 3


class TestWeeklyStreak:
    def test_no_checkins(self):
        assert weekly_streak([], TODAY) == 0

    def test_current_week(self):
        assert weekly_streak([date(2026, 3, 2)], TODAY) == 1

    def test_previous_week_is_grace(self):
        assert weekly_streak([date(2026, 2, 26)], TODAY) == 1

    def test_two_weeks_ago_breaks(self):
        assert weekly_streak([date(2026, 2, 22)], TODAY) == 0

    def test_several_checkins_in_one_week_count_once(self):
        dates = [date(2026, 3, 4), date(2026, 3, 3), date(2026, 3, 2)]
        assert weekly_streak(dates, TODAY) == 1

    def test_consecutive_weeks(self):
        dates = [date(2026, 3, 3), date(2026, 2, 24), date(2026, 2, 16)]
        assert weekly_streak(dates, TODAY) == 3

    def test_gap_week_stops_count(self):
        dates = [date(2026, 3, 3), date(2026, 2, 24), date(2026, 2, 10), date(2026, 2, 3)]
        assert weekly_streak(dates, TODAY) == 2

    def test_sunday_today_uses_its_monday_week(self):
        sunday = date(2026, 3, 8)
        assert weekly_streak([date(2026, 3, 2)], sunday) == 1
        assert weekly_streak([date(2026, 3, 1)], sunday) == 1  # previous week (Sunday Mar 1)

    def test_across_year_boundary(self):
        today = date(2026, 1, 7)
        dates = [date(2026, 1, 5), date(2025, 12, 31), date(2025, 12, 22)]
        assert weekly_streak(dates, today) == 3


class TestCalculateStreaks:
    def test_empty(self):
        assert calculate_streaks([], TODAY) == EMPTY_STREAK
        assert EMPTY_STREAK.last_checkin_date is None

    def test_last_checkin_date_is_most_recent(self):
        data = calculate_streaks(_days_back(0, 1, 2), TODAY)
        assert data.daily_streak == 3
        assert data.weekly_streak == 1
        assert data.last_checkin_date == "2026-03-04"

    def test_stale_history_is_zero_but_keeps_last_date(self):
        dates = [date(2026, 1, 10), date(2026, 1, 9)]
        data = calculate_streaks(dates, TODAY)
        assert data.daily_streak == 0
        assert data.weekly_streak == 0
        assert data.last_checkin_date == "2026-01-10"

    def test_daily_streak_never_exceeds_distinct_days(self):
        dates = _days_back(0, 1, 2, 3)
        assert calculate_streaks(dates, TODAY).daily_streak <= len(dates)


class TestGapsAfterToday:
    def test_today_and_two_days_ago(self):
        assert daily_streak(_days_back(0, 2), TODAY) == 1

    def test_run_of_three_ending_yesterday_with_older_gap(self):
        assert daily_streak(_days_back(1, 2, 3, 5), TODAY) == 3
