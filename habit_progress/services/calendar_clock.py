"""
Calendar Clock — "today", day boundaries and Monday-anchored weeks.

Every downstream computation (quota windows, streak buckets, heatmap grids)
goes through this module, so there is exactly one week-anchoring rule and one
date serialization format in the codebase:

  * weeks start on Monday and end on Sunday;
  * dates cross every boundary as "YYYY-MM-DD" strings, and comparisons are
    done on calendar dates, never on raw instants.

Timezone handling
-----------------
`resolve_timezone` maps an IANA identifier to a ZoneInfo. Empty or unknown
identifiers fall back to settings.DEFAULT_TIMEZONE (then UTC). The fallback is
logged, never raised.

"Now" comes from a `Clock` so tests can pin the instant.
"""
from __future__ import annotations

import calendar
import logging
from datetime import date, datetime, timedelta, timezone, tzinfo
from typing import Callable, Optional, Union
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from habit_progress.core.config import settings

logger = logging.getLogger(__name__)

DATE_FORMAT = "%Y-%m-%d"

TimezoneLike = Union[str, tzinfo, None]


# ---------------------------------------------------------------------------
# Timezone resolution
# ---------------------------------------------------------------------------

def _load_zone(name: str) -> Optional[ZoneInfo]:
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError, OSError):
        return None


def resolve_timezone(name: TimezoneLike, default: Optional[str] = None) -> tzinfo:
    """
    Return the tzinfo for an IANA identifier such as "America/New_York".

    tzinfo instances pass through unchanged. Empty or unrecognised names
    resolve to `default` (settings.DEFAULT_TIMEZONE when omitted), and to
    UTC if the default itself is unusable.
    """
    if isinstance(name, tzinfo):
        return name

    candidate = (name or "").strip()
    if candidate:
        zone = _load_zone(candidate)
        if zone is not None:
            return zone
        logger.warning("Unknown timezone %r, falling back to default", candidate)

    fallback_name = default or settings.DEFAULT_TIMEZONE
    zone = _load_zone(fallback_name)
    if zone is None:
        logger.warning("Default timezone %r is not valid, using UTC", fallback_name)
        return timezone.utc
    return zone


# ---------------------------------------------------------------------------
# Pure calendar arithmetic
# ---------------------------------------------------------------------------

def add_days(day: date, n: int) -> date:
    return day + timedelta(days=n)


def add_weeks(day: date, n: int) -> date:
    return day + timedelta(weeks=n)


def add_months(day: date, n: int) -> date:
    """Shift by n calendar months, clamping the day to the target month's length."""
    month_index = day.month - 1 + n
    year = day.year + month_index // 12
    month = month_index % 12 + 1
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, min(day.day, last_day))


def add_years(day: date, n: int) -> date:
    """Shift by n years; Feb 29 lands on Feb 28 in non-leap years."""
    return add_months(day, 12 * n)


def week_start(day: date) -> date:
    """Monday on or before `day`."""
    weekday = day.isoweekday()  # Monday=1 ... Sunday=7
    days_from_monday = 6 if weekday == 7 else weekday - 1
    return day - timedelta(days=days_from_monday)


def week_end(day: date) -> date:
    """Sunday on or after `day`."""
    return week_start(day) + timedelta(days=6)


def week_bounds(day: date) -> tuple[date, date]:
    start = week_start(day)
    return start, start + timedelta(days=6)


def month_bounds(day: date) -> tuple[date, date]:
    last_day = calendar.monthrange(day.year, day.month)[1]
    return date(day.year, day.month, 1), date(day.year, day.month, last_day)


def year_bounds(day: date) -> tuple[date, date]:
    return date(day.year, 1, 1), date(day.year, 12, 31)


def days_between(start: date, end: date) -> list[date]:
    """Every date from start to end, inclusive. Empty when end < start."""
    return [start + timedelta(days=i) for i in range((end - start).days + 1)]


# ---------------------------------------------------------------------------
# Serialization
# ---------------------------------------------------------------------------

def format_date(day: date) -> str:
    return day.strftime(DATE_FORMAT)


def parse_date(text: str) -> date:
    """Parse a strict YYYY-MM-DD string. Raises ValueError otherwise."""
    return datetime.strptime(text.strip(), DATE_FORMAT).date()


# ---------------------------------------------------------------------------
# Clock
# ---------------------------------------------------------------------------

def _utc_now() -> datetime:
    return datetime.now(tz=timezone.utc)


class Clock:
    """Source of the current instant, projected onto a timezone's calendar."""

    def __init__(self, now: Optional[Callable[[], datetime]] = None):
        self._now = now or _utc_now

    @classmethod
    def fixed(cls, instant: datetime) -> "Clock":
        """A clock frozen at `instant` (naive values are taken as UTC)."""
        return cls(now=lambda: instant)

    def now(self, tz: TimezoneLike = None) -> datetime:
        instant = self._now()
        if instant.tzinfo is None:
            instant = instant.replace(tzinfo=timezone.utc)
        return instant.astimezone(resolve_timezone(tz))

    def today(self, tz: TimezoneLike = None) -> date:
        return self.now(tz).date()

    def yesterday(self, tz: TimezoneLike = None) -> date:
        return add_days(self.today(tz), -1)

    def current_week(self, tz: TimezoneLike = None) -> tuple[date, date]:
        return week_bounds(self.today(tz))


system_clock = Clock()
