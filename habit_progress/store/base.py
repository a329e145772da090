"""
Data-access contract consumed by the progress engine.

The engine never talks to a database directly: every operation receives a
store instance. Two implementations ship with the package:

  SqlAlchemyStore  — ORM session against the `habits` / `checkins` tables
  InMemoryStore    — fixture store for tests and local runs (DATA_STORE=memory)

Records are plain dataclasses so the engine works on immutable snapshots
regardless of where the rows came from.

Error contract
--------------
insert_checkin raises DuplicateCheckInError when (user, habit, date) already
exists, and StoreUnavailableError for transport/backend failures. Callers
branch on the exception type, never on message text.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Iterable, Optional, Protocol


@dataclass(frozen=True)
class HabitRecord:
    id: str
    user_id: str
    name: str
    target_per_week: int
    timezone: str
    schedule: str = "daily"
    created_at: Optional[datetime] = None


@dataclass(frozen=True)
class CheckInRecord:
    id: str
    user_id: str
    habit_id: str
    checkin_date: date
    created_at: Optional[datetime] = None


class HabitStore(Protocol):

    def ping(self) -> bool:
        ...

    def list_habits(self, user_id: str) -> list[HabitRecord]:
        """All habits of the user, in creation order."""
        ...

    def get_habit(self, user_id: str, habit_id: str) -> Optional[HabitRecord]:
        ...

    def create_habit(
        self,
        user_id: str,
        name: str,
        target_per_week: int,
        timezone: str,
        schedule: str = "daily",
    ) -> HabitRecord:
        ...

    def update_habit(
        self,
        user_id: str,
        habit_id: str,
        *,
        name: Optional[str] = None,
        target_per_week: Optional[int] = None,
        timezone: Optional[str] = None,
    ) -> Optional[HabitRecord]:
        ...

    def delete_habit(self, user_id: str, habit_id: str) -> bool:
        """Delete the habit and its check-ins. False when it did not exist."""
        ...

    def list_checkins(
        self,
        user_id: str,
        habit_ids: Optional[Iterable[str]] = None,
        start: Optional[date] = None,
        end: Optional[date] = None,
    ) -> list[CheckInRecord]:
        """Check-ins ordered by date descending; start/end are inclusive."""
        ...

    def insert_checkin(self, user_id: str, habit_id: str, day: date) -> CheckInRecord:
        ...

    def count_all_checkins(self, user_id: str) -> int:
        ...
