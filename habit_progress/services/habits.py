"""
Habit management service.
Validates input before any store mutation, then delegates to the store.
"""
from __future__ import annotations

import logging
from typing import Optional

from habit_progress.core.errors import HabitNotFoundError, HabitValidationError
from habit_progress.services.calendar_clock import resolve_timezone
from habit_progress.store.base import HabitRecord, HabitStore

logger = logging.getLogger(__name__)

MIN_TARGET_PER_WEEK = 1
MAX_TARGET_PER_WEEK = 7
DEFAULT_SCHEDULE = "daily"


def validate_name(name: Optional[str]) -> str:
    """Return the trimmed name, or raise if nothing is left."""
    trimmed = name.strip() if isinstance(name, str) else ""
    if not trimmed:
        raise HabitValidationError("name", "must not be empty")
    return trimmed


def validate_target(target: object) -> int:
    if isinstance(target, bool) or not isinstance(target, int):
        raise HabitValidationError("target_per_week", "must be an integer")
    if not MIN_TARGET_PER_WEEK <= target <= MAX_TARGET_PER_WEEK:
        raise HabitValidationError(
            "target_per_week",
            f"must be between {MIN_TARGET_PER_WEEK} and {MAX_TARGET_PER_WEEK}",
        )
    return target


def normalize_timezone(name: Optional[str]) -> str:
    """IANA key to store on the habit; unknown names become the default zone."""
    zone = resolve_timezone(name)
    return getattr(zone, "key", "UTC")


def require_habit(store: HabitStore, user_id: str, habit_id: str) -> HabitRecord:
    habit = store.get_habit(user_id, habit_id)
    if habit is None:
        raise HabitNotFoundError(habit_id)
    return habit


def create_habit(
    store: HabitStore,
    user_id: str,
    name: str,
    target_per_week: int,
    timezone: Optional[str] = None,
) -> HabitRecord:
    clean_name = validate_name(name)
    target = validate_target(target_per_week)
    habit = store.create_habit(
        user_id=user_id,
        name=clean_name,
        target_per_week=target,
        timezone=normalize_timezone(timezone),
        schedule=DEFAULT_SCHEDULE,
    )
    logger.info("Created habit %s for user %s", habit.id, user_id)
    return habit


def update_habit(
    store: HabitStore,
    user_id: str,
    habit_id: str,
    name: Optional[str] = None,
    target_per_week: Optional[int] = None,
    timezone: Optional[str] = None,
) -> HabitRecord:
    """Rename and/or re-target a habit. Omitted fields are left unchanged."""
    clean_name = validate_name(name) if name is not None else None
    target = validate_target(target_per_week) if target_per_week is not None else None
    zone = normalize_timezone(timezone) if timezone is not None else None

    habit = store.update_habit(
        user_id,
        habit_id,
        name=clean_name,
        target_per_week=target,
        timezone=zone,
    )
    if habit is None:
        raise HabitNotFoundError(habit_id)
    logger.info("Updated habit %s", habit_id)
    return habit


def delete_habit(store: HabitStore, user_id: str, habit_id: str) -> None:
    """Delete a habit; its check-ins go with it."""
    if not store.delete_habit(user_id, habit_id):
        raise HabitNotFoundError(habit_id)
    logger.info("Deleted habit %s", habit_id)
