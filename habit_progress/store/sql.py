"""
SQLAlchemy-backed store.

Wraps one ORM Session. Database failures are translated at this boundary:

  IntegrityError on checkins insert -> DuplicateCheckInError
  any other SQLAlchemyError         -> StoreUnavailableError

so the engine sees typed outcomes only. Nothing is retried here.
"""
from __future__ import annotations

import logging
import uuid
from contextlib import contextmanager
from datetime import date, datetime, timezone as dt_timezone
from typing import Iterable, Iterator, Optional

from sqlalchemy import func, text
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from habit_progress.core.errors import DuplicateCheckInError, StoreUnavailableError
from habit_progress.models.checkin import CheckIn
from habit_progress.models.habit import Habit
from habit_progress.store.base import CheckInRecord, HabitRecord

logger = logging.getLogger(__name__)


def _habit_record(h: Habit) -> HabitRecord:
    return HabitRecord(
        id=h.id,
        user_id=h.user_id,
        name=h.name,
        target_per_week=h.target_per_week,
        timezone=h.timezone,
        schedule=h.schedule,
        created_at=h.created_at,
    )


def _checkin_record(c: CheckIn) -> CheckInRecord:
    return CheckInRecord(
        id=c.id,
        user_id=c.user_id,
        habit_id=c.habit_id,
        checkin_date=c.checkin_date,
        created_at=c.created_at,
    )


class SqlAlchemyStore:

    def __init__(self, db: Session):
        self.db = db

    @contextmanager
    def _guard(self, operation: str) -> Iterator[None]:
        try:
            yield
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.error("Store operation %s failed: %s", operation, exc)
            raise StoreUnavailableError(operation=operation, reason=type(exc).__name__) from exc

    def ping(self) -> bool:
        try:
            self.db.execute(text("SELECT 1"))
        except SQLAlchemyError:
            return False
        return True

    # --- habits ---

    def list_habits(self, user_id: str) -> list[HabitRecord]:
        with self._guard("list_habits"):
            rows = (
                self.db.query(Habit)
                .filter(Habit.user_id == user_id)
                .order_by(Habit.created_at.asc(), Habit.id.asc())
                .all()
            )
        return [_habit_record(h) for h in rows]

    def _load_habit(self, user_id: str, habit_id: str) -> Optional[Habit]:
        return (
            self.db.query(Habit)
            .filter(Habit.id == habit_id, Habit.user_id == user_id)
            .first()
        )

    def get_habit(self, user_id: str, habit_id: str) -> Optional[HabitRecord]:
        with self._guard("get_habit"):
            habit = self._load_habit(user_id, habit_id)
        return _habit_record(habit) if habit is not None else None

    def create_habit(
        self,
        user_id: str,
        name: str,
        target_per_week: int,
        timezone: str,
        schedule: str = "daily",
    ) -> HabitRecord:
        habit = Habit(
            id=str(uuid.uuid4()),
            user_id=user_id,
            name=name,
            target_per_week=target_per_week,
            timezone=timezone,
            schedule=schedule,
            # Set here rather than by the server default: list_habits orders
            # on it and CURRENT_TIMESTAMP has one-second resolution on SQLite.
            created_at=datetime.now(tz=dt_timezone.utc),
        )
        with self._guard("create_habit"):
            self.db.add(habit)
            self.db.commit()
            self.db.refresh(habit)
        return _habit_record(habit)

    def update_habit(
        self,
        user_id: str,
        habit_id: str,
        *,
        name: Optional[str] = None,
        target_per_week: Optional[int] = None,
        timezone: Optional[str] = None,
    ) -> Optional[HabitRecord]:
        with self._guard("update_habit"):
            habit = self._load_habit(user_id, habit_id)
            if habit is None:
                return None
            if name is not None:
                habit.name = name
            if target_per_week is not None:
                habit.target_per_week = target_per_week
            if timezone is not None:
                habit.timezone = timezone
            self.db.commit()
            self.db.refresh(habit)
        return _habit_record(habit)

    def delete_habit(self, user_id: str, habit_id: str) -> bool:
        with self._guard("delete_habit"):
            habit = self._load_habit(user_id, habit_id)
            if habit is None:
                return False
            self.db.delete(habit)
            self.db.commit()
        return True

    # --- check-ins ---

    def list_checkins(
        self,
        user_id: str,
        habit_ids: Optional[Iterable[str]] = None,
        start: Optional[date] = None,
        end: Optional[date] = None,
    ) -> list[CheckInRecord]:
        q = self.db.query(CheckIn).filter(CheckIn.user_id == user_id)
        if habit_ids is not None:
            q = q.filter(CheckIn.habit_id.in_(list(habit_ids)))
        if start is not None:
            q = q.filter(CheckIn.checkin_date >= start)
        if end is not None:
            q = q.filter(CheckIn.checkin_date <= end)
        with self._guard("list_checkins"):
            rows = q.order_by(CheckIn.checkin_date.desc()).all()
        return [_checkin_record(c) for c in rows]

    def insert_checkin(self, user_id: str, habit_id: str, day: date) -> CheckInRecord:
        checkin = CheckIn(
            id=str(uuid.uuid4()),
            user_id=user_id,
            habit_id=habit_id,
            checkin_date=day,
        )
        self.db.add(checkin)
        try:
            self.db.commit()
        except IntegrityError as exc:
            # Another device inserted the same (user, habit, date) first
            self.db.rollback()
            raise DuplicateCheckInError(habit_id=habit_id, day=day) from exc
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.error("Store operation insert_checkin failed: %s", exc)
            raise StoreUnavailableError(operation="insert_checkin", reason=type(exc).__name__) from exc
        self.db.refresh(checkin)
        return _checkin_record(checkin)

    def count_all_checkins(self, user_id: str) -> int:
        with self._guard("count_all_checkins"):
            total = (
                self.db.query(func.count(CheckIn.id))
                .filter(CheckIn.user_id == user_id)
                .scalar()
            )
        return total or 0
