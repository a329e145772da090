"""
Check-in Ledger — per-user snapshot of (habit, date) check-in facts.

The ledger is built once per request from records the store returned and is
never mutated afterwards; every view (quota, streaks, heatmap) reads from
it. Writes go through `record_check_in`, which is the only place that
inserts.
"""
from __future__ import annotations

import logging
from collections import Counter
from datetime import date
from typing import Iterable, Optional

from habit_progress.core.errors import DuplicateCheckInError
from habit_progress.store.base import CheckInRecord, HabitStore

logger = logging.getLogger(__name__)


class CheckInLedger:

    def __init__(self, records: Iterable[CheckInRecord]):
        self._records: tuple[CheckInRecord, ...] = tuple(records)

    @classmethod
    def load(
        cls,
        store: HabitStore,
        user_id: str,
        habit_ids: Optional[Iterable[str]] = None,
        start: Optional[date] = None,
        end: Optional[date] = None,
    ) -> "CheckInLedger":
        return cls(store.list_checkins(user_id, habit_ids=habit_ids, start=start, end=end))

    def __len__(self) -> int:
        return len(self._records)

    @property
    def records(self) -> tuple[CheckInRecord, ...]:
        return self._records

    def _in_range(self, start: Optional[date], end: Optional[date]) -> Iterable[CheckInRecord]:
        for r in self._records:
            if start is not None and r.checkin_date < start:
                continue
            if end is not None and r.checkin_date > end:
                continue
            yield r

    def week_counts(
        self,
        habit_ids: Iterable[str],
        week_start: date,
        week_end: date,
    ) -> dict[str, int]:
        """Check-ins per habit between week_start and week_end inclusive."""
        wanted = set(habit_ids)
        counts = Counter(
            r.habit_id for r in self._in_range(week_start, week_end) if r.habit_id in wanted
        )
        return dict(counts)

    def habits_on(self, habit_ids: Iterable[str], day: date) -> set[str]:
        wanted = set(habit_ids)
        return {r.habit_id for r in self._records if r.checkin_date == day and r.habit_id in wanted}

    def dates_descending(self) -> list[date]:
        """Distinct check-in dates across all habits, most recent first."""
        return sorted({r.checkin_date for r in self._records}, reverse=True)

    def counts_by_date(
        self,
        start: Optional[date] = None,
        end: Optional[date] = None,
    ) -> dict[date, int]:
        return dict(Counter(r.checkin_date for r in self._in_range(start, end)))

    def on(self, day: date) -> list[CheckInRecord]:
        return [r for r in self._records if r.checkin_date == day]


def record_check_in(store: HabitStore, user_id: str, habit_id: str, day: date) -> CheckInRecord:
    """
    Insert a check-in for (user, habit, day).

    Raises DuplicateCheckInError if one already exists. The pre-check and a
    duplicate rejected by the store at insert time (a concurrent insert won
    the race) produce the same error.
    """
    existing = store.list_checkins(user_id, habit_ids=[habit_id], start=day, end=day)
    if existing:
        logger.info("Duplicate check-in for habit %s on %s", habit_id, day)
        raise DuplicateCheckInError(habit_id=habit_id, day=day)

    try:
        record = store.insert_checkin(user_id, habit_id, day)
    except DuplicateCheckInError:
        logger.info("Duplicate check-in for habit %s on %s rejected by store", habit_id, day)
        raise

    logger.info("Recorded check-in %s for habit %s on %s", record.id, habit_id, day)
    return record
