"""
Habits router.

GET    /habits                       — habits with today's / this week's progress
POST   /habits                       — create
PATCH  /habits/{habit_id}            — rename / re-target
DELETE /habits/{habit_id}            — delete (check-ins cascade)
POST   /habits/{habit_id}/check-in   — mark done today
"""
from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Response, status

from habit_progress.routers.deps import get_clock, get_timezone, get_user_id
from habit_progress.schemas.common import ErrorResponse
from habit_progress.schemas.habit import (
    CheckInResponse,
    HabitCreate,
    HabitListResponse,
    HabitResponse,
    HabitUpdate,
    HabitWithProgressResponse,
)
from habit_progress.services import habits as habit_service
from habit_progress.services.calendar_clock import Clock, format_date
from habit_progress.services.progress import HabitWithProgress, check_in, list_habits_with_progress
from habit_progress.store import HabitStore, get_store
from habit_progress.store.base import CheckInRecord, HabitRecord

router = APIRouter(prefix="/habits", tags=["habits"])


# ---------------------------------------------------------------------------
# Serialization helpers
# ---------------------------------------------------------------------------

def _habit_fields(h: HabitRecord) -> dict:
    return {
        "id": h.id,
        "name": h.name,
        "target_per_week": h.target_per_week,
        "schedule": h.schedule,
        "timezone": h.timezone,
        "created_at": h.created_at.isoformat() if h.created_at else None,
    }


def _habit_to_response(h: HabitRecord) -> HabitResponse:
    return HabitResponse(**_habit_fields(h))


def _progress_to_response(p: HabitWithProgress) -> HabitWithProgressResponse:
    return HabitWithProgressResponse(
        **_habit_fields(p.habit),
        done_today=p.done_today,
        done_this_week=p.done_this_week,
    )


def _checkin_to_response(c: CheckInRecord) -> CheckInResponse:
    return CheckInResponse(
        id=c.id,
        habit_id=c.habit_id,
        checkin_date=format_date(c.checkin_date),
        created_at=c.created_at.isoformat() if c.created_at else None,
    )


# ---------------------------------------------------------------------------
# Routes
# ---------------------------------------------------------------------------

@router.get(
    "",
    response_model=HabitListResponse,
    summary="List habits with progress",
)
def list_habits(
    user_id: str = Depends(get_user_id),
    tz: Optional[str] = Depends(get_timezone),
    store: HabitStore = Depends(get_store),
    clock: Clock = Depends(get_clock),
):
    """Habits in creation order, each with `done_today` and `done_this_week`."""
    items = list_habits_with_progress(store, user_id, timezone=tz, clock=clock)
    return HabitListResponse(
        total=len(items),
        items=[_progress_to_response(p) for p in items],
    )


@router.post(
    "",
    response_model=HabitResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a habit",
    responses={422: {"model": ErrorResponse, "description": "Empty name or target outside 1–7."}},
)
def create_habit(
    payload: HabitCreate,
    user_id: str = Depends(get_user_id),
    store: HabitStore = Depends(get_store),
):
    habit = habit_service.create_habit(
        store,
        user_id,
        name=payload.name,
        target_per_week=payload.target_per_week,
        timezone=payload.timezone,
    )
    return _habit_to_response(habit)


@router.patch(
    "/{habit_id}",
    response_model=HabitResponse,
    summary="Rename or re-target a habit",
    responses={
        404: {"model": ErrorResponse, "description": "Habit not found for this user."},
        422: {"model": ErrorResponse, "description": "Empty name or target outside 1–7."},
    },
)
def update_habit(
    habit_id: str,
    payload: HabitUpdate,
    user_id: str = Depends(get_user_id),
    store: HabitStore = Depends(get_store),
):
    habit = habit_service.update_habit(
        store,
        user_id,
        habit_id,
        name=payload.name,
        target_per_week=payload.target_per_week,
        timezone=payload.timezone,
    )
    return _habit_to_response(habit)


@router.delete(
    "/{habit_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a habit and its check-ins",
    responses={404: {"model": ErrorResponse, "description": "Habit not found for this user."}},
)
def delete_habit(
    habit_id: str,
    user_id: str = Depends(get_user_id),
    store: HabitStore = Depends(get_store),
):
    habit_service.delete_habit(store, user_id, habit_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post(
    "/{habit_id}/check-in",
    response_model=CheckInResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Check in a habit for today",
    responses={
        404: {"model": ErrorResponse, "description": "Habit not found for this user."},
        409: {"model": ErrorResponse, "description": "Already checked in for today."},
        503: {"model": ErrorResponse, "description": "Data store unavailable."},
    },
)
def check_in_habit(
    habit_id: str,
    user_id: str = Depends(get_user_id),
    tz: Optional[str] = Depends(get_timezone),
    store: HabitStore = Depends(get_store),
    clock: Clock = Depends(get_clock),
):
    """
    Record a check-in for the local calendar day in `tz` (or the server
    default timezone when omitted), the same day every read endpoint uses.

    Returns **409 ALREADY_CHECKED_IN** if the habit already has a check-in
    for that day, including when a concurrent request from another device
    inserted it first. Not retried.
    """
    record = check_in(store, user_id, habit_id, timezone=tz, clock=clock)
    return _checkin_to_response(record)
