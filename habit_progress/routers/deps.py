"""
Request-scoped parameters shared by every router.

Authentication lives outside this service: the gateway in front of it
resolves the session and forwards the user id in X-User-Id.
"""
from typing import Optional

from fastapi import Header, Query

from habit_progress.services.calendar_clock import Clock, system_clock


def get_user_id(
    x_user_id: str = Header(
        ...,
        alias="X-User-Id",
        min_length=1,
        max_length=64,
        description="Authenticated user id, set by the auth gateway.",
    ),
) -> str:
    return x_user_id.strip()


def get_timezone(
    tz: Optional[str] = Query(
        default=None,
        description="IANA timezone, e.g. America/New_York. Empty or unknown values use the server default.",
        examples=["America/New_York"],
    ),
) -> Optional[str]:
    return tz


def get_clock() -> Clock:
    """Overridden in tests to pin "now"."""
    return system_clock
