from datetime import datetime
from sqlalchemy import Integer, String, DateTime, CheckConstraint, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from habit_progress.db.base import Base


class Habit(Base):
    """A habit owned by one user, with a weekly check-in target."""

    __tablename__ = "habits"
    __table_args__ = (
        CheckConstraint("target_per_week BETWEEN 1 AND 7", name="ck_habit_target_range"),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    user_id: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
    name: Mapped[str] = mapped_column(String(256), nullable=False)
    target_per_week: Mapped[int] = mapped_column(Integer, nullable=False, default=3)
    schedule: Mapped[str] = mapped_column(String(32), nullable=False, default="daily")
    timezone: Mapped[str] = mapped_column(String(64), nullable=False, default="UTC")
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )

    checkins: Mapped[list["CheckIn"]] = relationship(
        back_populates="habit",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
