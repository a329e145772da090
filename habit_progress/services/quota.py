"""
Quota Evaluator — weekly target progress per habit.

A habit's quota is met when its check-ins inside the Monday..Sunday window
reach its weekly target. Extra check-ins after the target is reached still
count toward `completed`.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Mapping

from habit_progress.store.base import HabitRecord


@dataclass
class HabitProgress:
    habit_id: str
    habit_name: str
    target: int
    completed: int
    is_met: bool


@dataclass
class QuotaStats:
    weekly_quotas_met: int
    total_checkins: int          # all time, not just this week
    total_habits: int
    current_week_progress: list[HabitProgress] = field(default_factory=list)

    @property
    def completion_percent(self) -> int:
        """Share of habits meeting quota, 0-100. Zero when there are no habits."""
        if self.total_habits == 0:
            return 0
        return int(self.weekly_quotas_met / self.total_habits * 100)


def evaluate(
    habits: Iterable[HabitRecord],
    week_counts: Mapping[str, int],
    total_checkins: int = 0,
) -> QuotaStats:
    progress: list[HabitProgress] = []
    for habit in habits:
        completed = week_counts.get(habit.id, 0)
        progress.append(HabitProgress(
            habit_id=habit.id,
            habit_name=habit.name,
            target=habit.target_per_week,
            completed=completed,
            is_met=completed >= habit.target_per_week,
        ))

    return QuotaStats(
        weekly_quotas_met=sum(1 for p in progress if p.is_met),
        total_checkins=total_checkins,
        total_habits=len(progress),
        current_week_progress=progress,
    )
