"""
Calendar router — activity heatmap.

GET /calendar       — counts per day for a week / month / year window
GET /calendar/day   — check-ins recorded on one date
"""
from __future__ import annotations

from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query

from habit_progress.routers.deps import get_clock, get_timezone, get_user_id
from habit_progress.schemas.calendar import (
    CalendarDayResponse,
    CalendarResponse,
    DayCheckInResponse,
    DayCheckInsResponse,
)
from habit_progress.services.calendar_clock import Clock, format_date
from habit_progress.services.calendar_view import (
    CalendarBucket,
    Direction,
    ViewMode,
    shift_reference,
    view_title,
)
from habit_progress.services.progress import get_calendar_view, get_day_checkins
from habit_progress.store import HabitStore, get_store

router = APIRouter(prefix="/calendar", tags=["calendar"])


def _bucket_to_response(b: CalendarBucket) -> CalendarResponse:
    return CalendarResponse(
        view_mode=b.view_mode.value,
        title=view_title(b.view_mode, b.reference_date),
        reference_date=format_date(b.reference_date),
        window_start=format_date(b.window_start),
        window_end=format_date(b.window_end),
        previous_reference_date=format_date(
            shift_reference(b.view_mode, b.reference_date, Direction.previous)
        ),
        next_reference_date=format_date(
            shift_reference(b.view_mode, b.reference_date, Direction.next)
        ),
        total=b.total,
        counts_by_date={format_date(d): n for d, n in b.counts_by_date.items() if n},
        days=[
            CalendarDayResponse(
                date=format_date(d.day),
                count=d.count,
                in_period=d.in_period,
                intensity=d.intensity,
            )
            for d in b.days
        ],
    )


@router.get(
    "",
    response_model=CalendarResponse,
    summary="Check-in heatmap for a week, month or year",
)
def calendar_view(
    view: ViewMode = Query(default=ViewMode.month, description='"week" | "month" | "year"'),
    reference_date: Optional[date] = Query(
        default=None,
        description="Any date inside the wanted period (YYYY-MM-DD). Defaults to today in `tz`.",
        examples=["2026-03-04"],
    ),
    user_id: str = Depends(get_user_id),
    tz: Optional[str] = Depends(get_timezone),
    store: HabitStore = Depends(get_store),
    clock: Clock = Depends(get_clock),
):
    """
    ### Windows
    | View | Days |
    |---|---|
    | `week`  | Monday..Sunday containing `reference_date` |
    | `month` | the month, padded to whole Monday..Sunday weeks (`in_period=false` on padding) |
    | `year`  | January 1 .. December 31 |

    `previous_reference_date` / `next_reference_date` page to the adjacent period.
    """
    result = get_calendar_view(
        store, user_id, view_mode=view, reference_date=reference_date, timezone=tz, clock=clock,
    )
    return _bucket_to_response(result)


@router.get(
    "/day",
    response_model=DayCheckInsResponse,
    summary="Check-ins on a single date",
)
def calendar_day(
    day: date = Query(description="Calendar date (YYYY-MM-DD).", examples=["2026-03-04"]),
    user_id: str = Depends(get_user_id),
    store: HabitStore = Depends(get_store),
):
    items = get_day_checkins(store, user_id, day)
    return DayCheckInsResponse(
        date=format_date(day),
        total=len(items),
        items=[
            DayCheckInResponse(
                id=c.id,
                habit_id=c.habit_id,
                habit_name=c.habit_name,
                checkin_date=format_date(c.checkin_date),
                created_at=c.created_at.isoformat() if c.created_at else None,
            )
            for c in items
        ],
    )
