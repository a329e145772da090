"""
Progress statistics schemas.

GET /stats/quota   → QuotaStatsResponse
GET /stats/streaks → StreakDataResponse
"""
from typing import Optional
from pydantic import BaseModel, Field


class HabitProgressResponse(BaseModel):
    habit_id: str
    habit_name: str
    target: int
    completed: int = Field(description="Check-ins this week, including any beyond the target.")
    is_met: bool


class QuotaStatsResponse(BaseModel):
    week_start: str = Field(description="Monday of the evaluated week.")
    week_end: str = Field(description="Sunday of the evaluated week.")
    weekly_quotas_met: int
    total_checkins: int = Field(description="All-time check-ins, not limited to this week.")
    total_habits: int
    completion_percent: int = Field(description="Share of habits meeting quota. Range: 0–100.")
    current_week_progress: list[HabitProgressResponse]


class StreakDataResponse(BaseModel):
    daily_streak: int = Field(description="Consecutive days ending today or yesterday.")
    weekly_streak: int = Field(description="Consecutive weeks ending this week or last week.")
    last_checkin_date: Optional[str] = Field(
        default=None,
        description="Most recent check-in date across all habits.",
    )
