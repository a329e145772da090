"""
CheckIn — one fact that a habit was performed on a local calendar day.

Immutable. One row per (user_id, habit_id, checkin_date): the unique
constraint is what makes concurrent check-ins from several devices safe.
"""
from datetime import datetime, date
from sqlalchemy import String, DateTime, Date, ForeignKey, func, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from habit_progress.db.base import Base


class CheckIn(Base):
    __tablename__ = "checkins"
    __table_args__ = (
        UniqueConstraint("user_id", "habit_id", "checkin_date", name="uq_checkin_user_habit_date"),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    user_id: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
    habit_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("habits.id", ondelete="CASCADE"), nullable=False, index=True
    )
    checkin_date: Mapped[date] = mapped_column(Date, nullable=False, index=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )

    habit: Mapped["Habit"] = relationship(back_populates="checkins")  # noqa: F821
