"""add proposal and manager response fields"""
from __future__ import annotations

from alembic import op
import sqlalchemy as sa

revision = "0002_add_proposals"
down_revision = "0001_create_tasks"
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.add_column("tasks", sa.Column("proposal", sa.Text(), nullable=True))
    op.add_column(
        "tasks",
        sa.Column("is_proposal_read", sa.Boolean(), nullable=False, server_default=sa.text("false")),
    )
    op.add_column("tasks", sa.Column("response_type", sa.String(length=20), nullable=True))
    op.add_column("tasks", sa.Column("response_content", sa.Text(), nullable=True))
    op.add_column("tasks", sa.Column("responded_at", sa.DateTime(timezone=True), nullable=True))


def downgrade() -> None:
    op.drop_column("tasks", "responded_at")
    op.drop_column("tasks", "response_content")
    op.drop_column("tasks", "response_type")
    op.drop_column("tasks", "is_proposal_read")
    op.drop_column("tasks", "proposal")
