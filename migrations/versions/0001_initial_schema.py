"""initial schema

Revision ID: 0001
Revises:
Create Date: 2026-10-19 00:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "0001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # --- habits ---
    op.create_table(
        "habits",
        sa.Column("id", sa.String(36), nullable=False),
        sa.Column("user_id", sa.String(64), nullable=False),
        sa.Column("name", sa.String(256), nullable=False),
        sa.Column("target_per_week", sa.Integer(), nullable=False, server_default="3"),
        sa.Column("schedule", sa.String(32), nullable=False, server_default="daily"),
        sa.Column("timezone", sa.String(64), nullable=False, server_default="UTC"),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.CheckConstraint("target_per_week BETWEEN 1 AND 7", name="ck_habit_target_range"),
    )
    op.create_index("ix_habits_user_id", "habits", ["user_id"])

    # --- checkins ---
    op.create_table(
        "checkins",
        sa.Column("id", sa.String(36), nullable=False),
        sa.Column("user_id", sa.String(64), nullable=False),
        sa.Column("habit_id", sa.String(36), nullable=False),
        sa.Column("checkin_date", sa.Date(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["habit_id"], ["habits.id"], ondelete="CASCADE"),
        sa.UniqueConstraint("user_id", "habit_id", "checkin_date", name="uq_checkin_user_habit_date"),
    )
    op.create_index("ix_checkins_user_id", "checkins", ["user_id"])
    op.create_index("ix_checkins_habit_id", "checkins", ["habit_id"])
    op.create_index("ix_checkins_checkin_date", "checkins", ["checkin_date"])


def downgrade() -> None:
    op.drop_index("ix_checkins_checkin_date", table_name="checkins")
    op.drop_index("ix_checkins_habit_id", table_name="checkins")
    op.drop_index("ix_checkins_user_id", table_name="checkins")
    op.drop_table("checkins")

    op.drop_index("ix_habits_user_id", table_name="habits")
    op.drop_table("habits")
