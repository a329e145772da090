"""
Habit request / response schemas.

POST  /habits                      → HabitCreate → HabitResponse
PATCH /habits/{habit_id}           → HabitUpdate → HabitResponse
GET   /habits                      → HabitListResponse
POST  /habits/{habit_id}/check-in  → CheckInResponse
"""
from __future__ import annotations

from typing import Annotated, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _strip_name(v):
    stripped = v.strip() if isinstance(v, str) else v
    if isinstance(stripped, str) and not stripped:
        raise ValueError("name must not be empty after stripping whitespace")
    return stripped


class HabitCreate(BaseModel):
    name: Annotated[str, Field(
        min_length=1,
        max_length=256,
        description="Habit name. Stripped of leading/trailing whitespace.",
        examples=["Morning run"],
    )]
    target_per_week: int = Field(
        default=3, ge=1, le=7,
        description="Check-ins per Monday..Sunday week needed to meet the quota.",
    )
    timezone: Optional[str] = Field(
        default=None,
        description="IANA timezone. Unknown or empty values use the server default.",
        examples=["America/New_York"],
    )

    @field_validator("name", mode="before")
    @classmethod
    def strip_and_check_empty(cls, v: str) -> str:
        return _strip_name(v)


class HabitUpdate(BaseModel):
    name: Optional[Annotated[str, Field(min_length=1, max_length=256)]] = None
    target_per_week: Optional[int] = Field(default=None, ge=1, le=7)
    timezone: Optional[str] = None

    @field_validator("name", mode="before")
    @classmethod
    def strip_and_check_empty(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        return _strip_name(v)


class HabitResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    target_per_week: int
    schedule: str
    timezone: str
    created_at: Optional[str] = Field(default=None, description="UTC timestamp of creation.")


class HabitWithProgressResponse(HabitResponse):
    done_today: bool
    done_this_week: int = Field(description="Check-ins in the current Monday..Sunday week.")


class HabitListResponse(BaseModel):
    total: int
    items: list[HabitWithProgressResponse]


class CheckInResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    habit_id: str
    checkin_date: str = Field(description="Local calendar date, YYYY-MM-DD.")
    created_at: Optional[str] = None
