"""add notification read state table

Revision ID: 0001_notification_read_state
Revises:
Create Date: 2026-10-19 00:00:00.000000
"""

from __future__ import annotations

from alembic import op
import sqlalchemy as sa


revision = "0001_notification_read_state"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "notification_read_state",
        sa.Column("storage_key", sa.String(length=128), nullable=False),
        sa.Column("user_id", sa.String(length=64), nullable=False),
        sa.Column("notification_ids", sa.JSON(), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("storage_key", name=op.f("pk_notification_read_state")),
    )
    op.create_index(op.f("ix_notification_read_state_user_id"), "notification_read_state", ["user_id"], unique=False)


def downgrade() -> None:
    op.drop_index(op.f("ix_notification_read_state_user_id"), table_name="notification_read_state")
    op.drop_table("notification_read_state")
