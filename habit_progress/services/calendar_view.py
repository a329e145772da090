"""
Calendar Aggregator — date -> check-in count over a week, month or year.

Windows
-------
  week   7 days, Monday..Sunday, containing the reference date
  month  the reference date's month, padded back to a Monday and forward to
         a Sunday; padding days are flagged in_period=False but still counted
  year   January 1 .. December 31 of the reference year (365 or 366 days),
         not padded

Counts are the number of check-in records on each date, across all habits.
The result is for rendering only and is never persisted.
"""
from __future__ import annotations

import enum
from dataclasses import dataclass, field
from datetime import date
from typing import Iterable, Union

from habit_progress.services.calendar_clock import (
    add_months,
    add_weeks,
    add_years,
    days_between,
    month_bounds,
    week_bounds,
    week_end,
    week_start,
    year_bounds,
)
from habit_progress.services.ledger import CheckInLedger
from habit_progress.store.base import CheckInRecord


class ViewMode(str, enum.Enum):
    week = "week"
    month = "month"
    year = "year"


class Direction(str, enum.Enum):
    previous = "previous"
    next = "next"


# Heatmap thresholds: (minimum count, level)
_INTENSITY_STEPS = ((6, 4), (4, 3), (2, 2), (1, 1))


@dataclass
class CalendarDay:
    day: date
    count: int
    in_period: bool
    intensity: int


@dataclass
class CalendarBucket:
    view_mode: ViewMode
    reference_date: date
    window_start: date
    window_end: date
    days: list[CalendarDay] = field(default_factory=list)

    @property
    def counts_by_date(self) -> dict[date, int]:
        return {d.day: d.count for d in self.days}

    @property
    def total(self) -> int:
        return sum(d.count for d in self.days)


def intensity_level(count: int) -> int:
    """Heatmap shade 0-4: 0, 1, 2-3, 4-5, 6+."""
    for minimum, level in _INTENSITY_STEPS:
        if count >= minimum:
            return level
    return 0


def view_window(view_mode: ViewMode, reference_date: date) -> tuple[date, date]:
    """Inclusive (start, end) grid range for the view."""
    if view_mode == ViewMode.week:
        return week_bounds(reference_date)
    if view_mode == ViewMode.month:
        first, last = month_bounds(reference_date)
        return week_start(first), week_end(last)
    return year_bounds(reference_date)


def _in_period(view_mode: ViewMode, day: date, reference_date: date) -> bool:
    if view_mode == ViewMode.month:
        return (day.year, day.month) == (reference_date.year, reference_date.month)
    return True


def bucket(
    view_mode: ViewMode,
    reference_date: date,
    checkins: Union[CheckInLedger, Iterable[CheckInRecord]],
) -> CalendarBucket:
    view_mode = ViewMode(view_mode)
    start, end = view_window(view_mode, reference_date)

    ledger = checkins if isinstance(checkins, CheckInLedger) else CheckInLedger(checkins)
    counts = ledger.counts_by_date(start, end)

    days = []
    for d in days_between(start, end):
        count = counts.get(d, 0)
        days.append(CalendarDay(
            day=d,
            count=count,
            in_period=_in_period(view_mode, d, reference_date),
            intensity=intensity_level(count),
        ))

    return CalendarBucket(
        view_mode=view_mode,
        reference_date=reference_date,
        window_start=start,
        window_end=end,
        days=days,
    )


def shift_reference(view_mode: ViewMode, reference_date: date, direction: Direction) -> date:
    """Reference date of the previous or next period."""
    step = 1 if Direction(direction) == Direction.next else -1
    view_mode = ViewMode(view_mode)
    if view_mode == ViewMode.week:
        return add_weeks(reference_date, step)
    if view_mode == ViewMode.month:
        return add_months(reference_date, step)
    return add_years(reference_date, step)


def view_title(view_mode: ViewMode, reference_date: date) -> str:
    """Header label: "Mar 2 - Mar 8", "March 2026" or "2026"."""
    view_mode = ViewMode(view_mode)
    if view_mode == ViewMode.week:
        start, end = week_bounds(reference_date)
        return f"{start.strftime('%b')} {start.day} - {end.strftime('%b')} {end.day}"
    if view_mode == ViewMode.month:
        return reference_date.strftime("%B %Y")
    return str(reference_date.year)
