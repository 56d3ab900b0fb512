"""Accounts, booking types and sessions."""
from __future__ import annotations

from alembic import op
import sqlalchemy as sa


revision = "20260110_01"
down_revision = None
branch_labels = None
depends_on = None


ROLE = sa.Enum("USER", "COACH", "ADMIN", name="role")
SESSION_STATUS = sa.Enum(
    "SCHEDULED", "CONFIRMED", "COMPLETED", "CANCELLED", "NO_SHOW",
    name="session_status",
)


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column(
            "created_at",
            sa.DateTime(),
            nullable=False,
            server_default=sa.text("CURRENT_TIMESTAMP"),
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(),
            nullable=False,
            server_default=sa.text("CURRENT_TIMESTAMP"),
        ),
    ]


def upgrade() -> None:
    op.create_table(
        "accounts",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("email", sa.String(length=255), nullable=False, unique=True),
        sa.Column("name", sa.String(length=200), nullable=False),
        sa.Column("role", ROLE, nullable=False, server_default="USER"),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        *_timestamps(),
    )
    op.create_index("ix_accounts_email", "accounts", ["email"], unique=False)

    op.create_table(
        "booking_types",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("name", sa.String(length=200), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("base_price", sa.Numeric(10, 2), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("coach_id", sa.String(length=36), sa.ForeignKey("accounts.id"), nullable=False),
        *_timestamps(),
    )
    op.create_index("ix_booking_types_coach_id", "booking_types", ["coach_id"], unique=False)

    op.create_table(
        "sessions",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("date_time", sa.DateTime(), nullable=False),
        sa.Column("duration_min", sa.Integer(), nullable=False, server_default="60"),
        sa.Column("price", sa.Numeric(10, 2), nullable=False),
        sa.Column("is_paid", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("status", SESSION_STATUS, nullable=False, server_default="SCHEDULED"),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("user_id", sa.String(length=36), sa.ForeignKey("accounts.id"), nullable=False),
        sa.Column("coach_id", sa.String(length=36), sa.ForeignKey("accounts.id"), nullable=False),
        sa.Column(
            "booking_type_id",
            sa.String(length=36),
            sa.ForeignKey("booking_types.id"),
            nullable=False,
        ),
        *_timestamps(),
    )
    op.create_index("ix_sessions_date_time", "sessions", ["date_time"], unique=False)
    op.create_index("ix_sessions_user_id", "sessions", ["user_id"], unique=False)
    op.create_index("ix_sessions_coach_id", "sessions", ["coach_id"], unique=False)


def downgrade() -> None:
    op.drop_index("ix_sessions_coach_id", table_name="sessions")
    op.drop_index("ix_sessions_user_id", table_name="sessions")
    op.drop_index("ix_sessions_date_time", table_name="sessions")
    op.drop_table("sessions")
    op.drop_index("ix_booking_types_coach_id", table_name="booking_types")
    op.drop_table("booking_types")
    op.drop_index("ix_accounts_email", table_name="accounts")
    op.drop_table("accounts")
    SESSION_STATUS.drop(op.get_bind(), checkfirst=True)
    ROLE.drop(op.get_bind(), checkfirst=True)
