"""
Calendar heatmap schemas.

GET /calendar     → CalendarResponse
GET /calendar/day → DayCheckInsResponse
"""
from typing import Optional
from pydantic import BaseModel, Field


class CalendarDayResponse(BaseModel):
    date: str
    count: int
    in_period: bool = Field(description="False for month-view padding days from adjacent months.")
    intensity: int = Field(description="Heatmap shade 0–4.")


class CalendarResponse(BaseModel):
    view_mode: str = Field(description='"week" | "month" | "year"')
    title: str
    reference_date: str
    window_start: str
    window_end: str
    previous_reference_date: str
    next_reference_date: str
    total: int = Field(description="Check-ins inside the window.")
    counts_by_date: dict[str, int] = Field(description="Only dates with at least one check-in.")
    days: list[CalendarDayResponse]


class DayCheckInResponse(BaseModel):
    id: str
    habit_id: str
    habit_name: str
    checkin_date: str
    created_at: Optional[str] = None


class DayCheckInsResponse(BaseModel):
    date: str
    total: int
    items: list[DayCheckInResponse]
