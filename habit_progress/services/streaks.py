"""
Streak Calculator — current daily and weekly streaks.

Daily streak
------------
Consecutive calendar days, across all habits, that have at least one
check-in, counted backwards from the most recent check-in date. The run is
only "current" if that date is today or yesterday (one day of grace);
otherwise the streak is 0.

Weekly streak
-------------
Same walk at Monday-week granularity: the most recent week bucket must be
this week or last week, and each earlier bucket must be exactly 7 days
before the previous one.

Both are single-pass, most-recent-first scans. They measure the run that is
still alive now, not the longest run in history: the first gap ends the
scan even if older dates form a longer run of their own.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import date, timedelta
from typing import Optional, Sequence

from habit_progress.services.calendar_clock import format_date, week_start

_ONE_DAY = timedelta(days=1)
_ONE_WEEK = timedelta(days=7)


@dataclass(frozen=True)
class StreakData:
    daily_streak: int
    weekly_streak: int
    last_checkin_date: Optional[str]   # YYYY-MM-DD, None when no check-ins


EMPTY_STREAK = StreakData(daily_streak=0, weekly_streak=0, last_checkin_date=None)


def _consecutive_run(buckets_desc: Sequence[date], step: timedelta) -> int:
    """Length of the run at the head of `buckets_desc` where each bucket is `step` before the last."""
    if not buckets_desc:
        return 0
    streak = 1
    cursor = buckets_desc[0]
    for bucket in buckets_desc[1:]:
        if bucket != cursor - step:
            break
        streak += 1
        cursor = bucket
    return streak


def daily_streak(dates_desc: Sequence[date], today: date) -> int:
    """`dates_desc` must be distinct and sorted most recent first."""
    if not dates_desc:
        return 0
    yesterday = today - _ONE_DAY
    if dates_desc[0] not in (today, yesterday):
        return 0
    return _consecutive_run(dates_desc, _ONE_DAY)


def weekly_streak(dates_desc: Sequence[date], today: date) -> int:
    if not dates_desc:
        return 0
    weeks_desc = sorted({week_start(d) for d in dates_desc}, reverse=True)
    current_week = week_start(today)
    if weeks_desc[0] not in (current_week, current_week - _ONE_WEEK):
        return 0
    return _consecutive_run(weeks_desc, _ONE_WEEK)


def calculate_streaks(dates_desc: Sequence[date], today: date) -> StreakData:
    """Daily and weekly streaks plus the most recent check-in date."""
    if not dates_desc:
        return EMPTY_STREAK
    return StreakData(
        daily_streak=daily_streak(dates_desc, today),
        weekly_streak=weekly_streak(dates_desc, today),
        last_checkin_date=format_date(dates_desc[0]),
    )
