"""
Progress engine — the read/write operations exposed to API callers.

Public API
----------
get_quota_stats(store, user_id, timezone)                          -> QuotaStats
get_streak_data(store, user_id, timezone)                          -> StreakData
get_calendar_view(store, user_id, view_mode, reference_date, tz)   -> CalendarBucket
check_in(store, user_id, habit_id, timezone)                       -> CheckInRecord
list_habits_with_progress(store, user_id, timezone)                -> list[HabitWithProgress]
get_day_checkins(store, user_id, day)                              -> list[DayCheckIn]

Every call takes the store explicitly and rebuilds its view from a fresh
ledger snapshot; nothing is cached between calls. `clock` defaults to the
system clock and exists so tests can pin "now".
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional, Union

from habit_progress.services.calendar_clock import (
    Clock,
    TimezoneLike,
    parse_date,
    resolve_timezone,
    system_clock,
)
from habit_progress.services.calendar_view import CalendarBucket, ViewMode, bucket, view_window
from habit_progress.services.habits import require_habit
from habit_progress.services.ledger import CheckInLedger, record_check_in
from habit_progress.services.quota import QuotaStats, evaluate
from habit_progress.services.streaks import StreakData, calculate_streaks
from habit_progress.store.base import CheckInRecord, HabitRecord, HabitStore


@dataclass
class HabitWithProgress:
    habit: HabitRecord
    done_today: bool
    done_this_week: int


@dataclass
class DayCheckIn:
    id: str
    habit_id: str
    habit_name: str
    checkin_date: date
    created_at: Optional[datetime]


# ---------------------------------------------------------------------------
# Reads
# ---------------------------------------------------------------------------

def get_quota_stats(
    store: HabitStore,
    user_id: str,
    timezone: TimezoneLike = None,
    clock: Clock = system_clock,
) -> QuotaStats:
    """Weekly quota progress for every habit, in the current Monday..Sunday week."""
    start, end = clock.current_week(resolve_timezone(timezone))
    habits = store.list_habits(user_id)
    if not habits:
        return evaluate([], {}, total_checkins=0)

    habit_ids = [h.id for h in habits]
    ledger = CheckInLedger.load(store, user_id, habit_ids=habit_ids, start=start, end=end)
    return evaluate(
        habits,
        ledger.week_counts(habit_ids, start, end),
        total_checkins=store.count_all_checkins(user_id),
    )


def get_streak_data(
    store: HabitStore,
    user_id: str,
    timezone: TimezoneLike = None,
    clock: Clock = system_clock,
) -> StreakData:
    ledger = CheckInLedger.load(store, user_id)
    today = clock.today(resolve_timezone(timezone))
    return calculate_streaks(ledger.dates_descending(), today)


def get_calendar_view(
    store: HabitStore,
    user_id: str,
    view_mode: Union[ViewMode, str] = ViewMode.month,
    reference_date: Union[date, str, None] = None,
    timezone: TimezoneLike = None,
    clock: Clock = system_clock,
) -> CalendarBucket:
    """Heatmap counts for the week/month/year containing reference_date (default: today)."""
    mode = ViewMode(view_mode)
    if isinstance(reference_date, str):
        reference = parse_date(reference_date)
    else:
        reference = reference_date or clock.today(resolve_timezone(timezone))

    start, end = view_window(mode, reference)
    ledger = CheckInLedger.load(store, user_id, start=start, end=end)
    return bucket(mode, reference, ledger)


def list_habits_with_progress(
    store: HabitStore,
    user_id: str,
    timezone: TimezoneLike = None,
    clock: Clock = system_clock,
) -> list[HabitWithProgress]:
    """Habits in creation order with today's and this week's check-in state."""
    tz = resolve_timezone(timezone)
    today = clock.today(tz)
    start, end = clock.current_week(tz)

    habits = store.list_habits(user_id)
    if not habits:
        return []

    habit_ids = [h.id for h in habits]
    ledger = CheckInLedger.load(store, user_id, habit_ids=habit_ids, start=start, end=end)
    week_counts = ledger.week_counts(habit_ids, start, end)
    done_today = ledger.habits_on(habit_ids, today)
    return [
        HabitWithProgress(
            habit=h,
            done_today=h.id in done_today,
            done_this_week=week_counts.get(h.id, 0),
        )
        for h in habits
    ]


def get_day_checkins(store: HabitStore, user_id: str, day: date) -> list[DayCheckIn]:
    """Check-ins recorded on one calendar date, labelled with their habit names."""
    names = {h.id: h.name for h in store.list_habits(user_id)}
    ledger = CheckInLedger.load(store, user_id, start=day, end=day)
    return [
        DayCheckIn(
            id=c.id,
            habit_id=c.habit_id,
            habit_name=names[c.habit_id],
            checkin_date=c.checkin_date,
            created_at=c.created_at,
        )
        for c in ledger.on(day)
        if c.habit_id in names
    ]


# ---------------------------------------------------------------------------
# Writes
# ---------------------------------------------------------------------------

def check_in(
    store: HabitStore,
    user_id: str,
    habit_id: str,
    timezone: TimezoneLike = None,
    clock: Clock = system_clock,
) -> CheckInRecord:
    """
    Mark a habit as done today.

    "Today" is resolved from `timezone` exactly as the read operations
    resolve it, so a check-in always lands on the day they report. Raises
    HabitNotFoundError for a habit the user does not own and
    DuplicateCheckInError if it is already checked in today.
    """
    require_habit(store, user_id, habit_id)
    return record_check_in(store, user_id, habit_id, clock.today(resolve_timezone(timezone)))
