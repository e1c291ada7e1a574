"""swap board initial schema

Revision ID: 0001_swap_board
Revises:
Create Date: 2025-06-01 10:12:44.318201

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '0001_swap_board'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


want_type = sa.Enum("SAME_DAY", "DATE_LIST", name="want_type")
time_rule = sa.Enum("ANY", "EXACT_START", "END_NOT_AFTER", name="time_rule")


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("employee_id", sa.String(length=32), nullable=True),
        sa.Column("email", sa.String(length=255), nullable=False, unique=True),
        sa.Column("full_name", sa.String(length=100), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    )
    op.create_index("ix_users_employee_id", "users", ["employee_id"])

    op.create_table(
        "shifts",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("user_id", sa.Integer(), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        sa.Column("date", sa.String(length=10), nullable=False),
        sa.Column("start", sa.String(length=5), nullable=False),
        sa.Column("end", sa.String(length=5), nullable=False),
        sa.Column("duration_hours", sa.Integer(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    )
    op.create_index("ix_shifts_user_id", "shifts", ["user_id"])
    op.create_index("ix_shifts_user_date", "shifts", ["user_id", "date"])
    op.create_index("ix_shifts_date", "shifts", ["date"])

    op.create_table(
        "swap_requests",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("requester_user_id", sa.Integer(), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        sa.Column("have_shift_id", sa.Integer(), sa.ForeignKey("shifts.id", ondelete="CASCADE"), nullable=False),
        sa.Column("want_type", want_type, nullable=False),
        sa.Column("want_dates", sa.JSON(), nullable=True),
        sa.Column("time_rule", time_rule, nullable=False),
        sa.Column("time_value", sa.String(length=5), nullable=True),
        sa.Column("note", sa.Text(), nullable=True),
        sa.Column("is_active", sa.Boolean(), server_default=sa.true(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    )
    op.create_index("ix_swap_requests_requester_user_id", "swap_requests", ["requester_user_id"])
    op.create_index("ix_swap_requests_have_shift_id", "swap_requests", ["have_shift_id"])
    op.create_index("ix_swap_requests_active_created", "swap_requests", ["is_active", "created_at"])
    op.create_index(
        "uq_swap_requests_active_shift",
        "swap_requests",
        ["have_shift_id"],
        unique=True,
        sqlite_where=sa.text("is_active"),
        postgresql_where=sa.text("is_active"),
    )

    op.create_table(
        "interests",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("swap_request_id", sa.Integer(), sa.ForeignKey("swap_requests.id", ondelete="CASCADE"), nullable=False),
        sa.Column("interested_user_id", sa.Integer(), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        sa.Column("offered_shift_id", sa.Integer(), sa.ForeignKey("shifts.id", ondelete="CASCADE"), nullable=False),
        sa.Column("is_active", sa.Boolean(), server_default=sa.true(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    )
    op.create_index("ix_interests_swap_request_id", "interests", ["swap_request_id"])
    op.create_index("ix_interests_interested_user_id", "interests", ["interested_user_id"])
    op.create_index("ix_interests_offered_shift_id", "interests", ["offered_shift_id"])
    op.create_index(
        "uq_interests_active_request_user",
        "interests",
        ["swap_request_id", "interested_user_id"],
        unique=True,
        sqlite_where=sa.text("is_active"),
        postgresql_where=sa.text("is_active"),
    )


def downgrade() -> None:
    op.drop_table("interests")
    op.drop_table("swap_requests")
    op.drop_table("shifts")
    op.drop_table("users")
    time_rule.drop(op.get_bind(), checkfirst=True)
    want_type.drop(op.get_bind(), checkfirst=True)
