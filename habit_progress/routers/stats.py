"""
Stats router — weekly quotas and streaks.

GET /stats/quota     — per-habit weekly quota progress
GET /stats/streaks   — current daily and weekly streaks
"""
from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends

from habit_progress.routers.deps import get_clock, get_timezone, get_user_id
from habit_progress.schemas.stats import (
    HabitProgressResponse,
    QuotaStatsResponse,
    StreakDataResponse,
)
from habit_progress.services.calendar_clock import Clock, format_date, resolve_timezone
from habit_progress.services.progress import get_quota_stats, get_streak_data
from habit_progress.services.quota import QuotaStats
from habit_progress.store import HabitStore, get_store

router = APIRouter(prefix="/stats", tags=["stats"])


def _quota_to_response(q: QuotaStats, week: tuple) -> QuotaStatsResponse:
    start, end = week
    return QuotaStatsResponse(
        week_start=format_date(start),
        week_end=format_date(end),
        weekly_quotas_met=q.weekly_quotas_met,
        total_checkins=q.total_checkins,
        total_habits=q.total_habits,
        completion_percent=q.completion_percent,
        current_week_progress=[
            HabitProgressResponse(
                habit_id=p.habit_id,
                habit_name=p.habit_name,
                target=p.target,
                completed=p.completed,
                is_met=p.is_met,
            )
            for p in q.current_week_progress
        ],
    )


@router.get(
    "/quota",
    response_model=QuotaStatsResponse,
    summary="Weekly quota progress",
)
def quota_stats(
    user_id: str = Depends(get_user_id),
    tz: Optional[str] = Depends(get_timezone),
    store: HabitStore = Depends(get_store),
    clock: Clock = Depends(get_clock),
):
    """
    For every habit, how many check-ins it has in the current Monday..Sunday
    week (in `tz`) and whether that meets its weekly target.
    """
    stats = get_quota_stats(store, user_id, timezone=tz, clock=clock)
    return _quota_to_response(stats, clock.current_week(resolve_timezone(tz)))


@router.get(
    "/streaks",
    response_model=StreakDataResponse,
    summary="Current daily and weekly streaks",
)
def streaks(
    user_id: str = Depends(get_user_id),
    tz: Optional[str] = Depends(get_timezone),
    store: HabitStore = Depends(get_store),
    clock: Clock = Depends(get_clock),
):
    """
    ### Rules
    | Streak | Counts | Still alive if the latest bucket is |
    |---|---|---|
    | daily  | consecutive days with ≥1 check-in  | today or yesterday |
    | weekly | consecutive Monday weeks with ≥1 check-in | this week or last week |
    """
    data = get_streak_data(store, user_id, timezone=tz, clock=clock)
    return StreakDataResponse(
        daily_streak=data.daily_streak,
        weekly_streak=data.weekly_streak,
        last_checkin_date=data.last_checkin_date,
    )
