"""
In-memory fixture store.

Same contract as SqlAlchemyStore, backed by dicts. Selected with
DATA_STORE=memory for local runs, and used directly by the engine tests.
Uniqueness of (user, habit, date) is enforced by a keyed index under a lock,
mirroring the database constraint.
"""
from __future__ import annotations

import threading
import uuid
from datetime import date, datetime, timezone as dt_timezone
from typing import Iterable, Optional

from habit_progress.core.errors import DuplicateCheckInError
from habit_progress.store.base import CheckInRecord, HabitRecord


def _new_id() -> str:
    return str(uuid.uuid4())


class InMemoryStore:

    def __init__(self):
        self._lock = threading.Lock()
        self._habits: dict[str, HabitRecord] = {}  # insertion order == creation order
        self._checkins: dict[tuple[str, str, date], CheckInRecord] = {}

    def ping(self) -> bool:
        return True

    # --- habits ---

    def list_habits(self, user_id: str) -> list[HabitRecord]:
        return [h for h in self._habits.values() if h.user_id == user_id]

    def get_habit(self, user_id: str, habit_id: str) -> Optional[HabitRecord]:
        habit = self._habits.get(habit_id)
        if habit is None or habit.user_id != user_id:
            return None
        return habit

    def create_habit(
        self,
        user_id: str,
        name: str,
        target_per_week: int,
        timezone: str,
        schedule: str = "daily",
    ) -> HabitRecord:
        habit = HabitRecord(
            id=_new_id(),
            user_id=user_id,
            name=name,
            target_per_week=target_per_week,
            timezone=timezone,
            schedule=schedule,
            created_at=datetime.now(tz=dt_timezone.utc),
        )
        with self._lock:
            self._habits[habit.id] = habit
        return habit

    def update_habit(
        self,
        user_id: str,
        habit_id: str,
        *,
        name: Optional[str] = None,
        target_per_week: Optional[int] = None,
        timezone: Optional[str] = None,
    ) -> Optional[HabitRecord]:
        with self._lock:
            habit = self.get_habit(user_id, habit_id)
            if habit is None:
                return None
            updated = HabitRecord(
                id=habit.id,
                user_id=habit.user_id,
                name=name if name is not None else habit.name,
                target_per_week=target_per_week if target_per_week is not None else habit.target_per_week,
                timezone=timezone if timezone is not None else habit.timezone,
                schedule=habit.schedule,
                created_at=habit.created_at,
            )
            self._habits[habit.id] = updated
        return updated

    def delete_habit(self, user_id: str, habit_id: str) -> bool:
        with self._lock:
            if self.get_habit(user_id, habit_id) is None:
                return False
            del self._habits[habit_id]
            for key in [k for k in self._checkins if k[1] == habit_id]:
                del self._checkins[key]
        return True

    # --- check-ins ---

    def list_checkins(
        self,
        user_id: str,
        habit_ids: Optional[Iterable[str]] = None,
        start: Optional[date] = None,
        end: Optional[date] = None,
    ) -> list[CheckInRecord]:
        wanted = set(habit_ids) if habit_ids is not None else None
        rows = [
            c for c in self._checkins.values()
            if c.user_id == user_id
            and (wanted is None or c.habit_id in wanted)
            and (start is None or c.checkin_date >= start)
            and (end is None or c.checkin_date <= end)
        ]
        return sorted(rows, key=lambda c: c.checkin_date, reverse=True)

    def insert_checkin(self, user_id: str, habit_id: str, day: date) -> CheckInRecord:
        key = (user_id, habit_id, day)
        with self._lock:
            if key in self._checkins:
                raise DuplicateCheckInError(habit_id=habit_id, day=day)
            record = CheckInRecord(
                id=_new_id(),
                user_id=user_id,
                habit_id=habit_id,
                checkin_date=day,
                created_at=datetime.now(tz=dt_timezone.utc),
            )
            self._checkins[key] = record
        return record

    def count_all_checkins(self, user_id: str) -> int:
        return sum(1 for c in self._checkins.values() if c.user_id == user_id)
