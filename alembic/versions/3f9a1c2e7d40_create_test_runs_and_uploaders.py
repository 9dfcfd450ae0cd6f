"""create test_runs and uploaders tables

Revision ID: 3f9a1c2e7d40
Revises:
Create Date: 2026-10-19 12:00:00.000000
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

revision: str = "3f9a1c2e7d40"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "test_runs",
        sa.Column("id", sa.BigInteger(), autoincrement=True, nullable=False),
        sa.Column("browser_name", sa.Text(), nullable=False),
        sa.Column("browser_version", sa.Text(), nullable=True),
        sa.Column("os_name", sa.Text(), nullable=True),
        sa.Column("os_version", sa.Text(), nullable=True),
        sa.Column("revision", sa.Text(), nullable=False),
        sa.Column("full_revision_hash", sa.Text(), nullable=False),
        sa.Column("results_url", sa.Text(), nullable=True),
        sa.Column("raw_results_url", sa.Text(), nullable=True),
        sa.Column("labels", postgresql.ARRAY(sa.Text()), nullable=True),
        sa.Column("time_start", sa.TIMESTAMP(timezone=True), nullable=False),
        sa.Column("time_end", sa.TIMESTAMP(timezone=True), nullable=False),
        sa.Column("created_at", sa.TIMESTAMP(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("idx_test_runs_revision", "test_runs", ["revision"])
    op.create_index("idx_test_runs_browser_time", "test_runs", ["browser_name", "time_start"])

    op.create_table(
        "uploaders",
        sa.Column("username", sa.Text(), nullable=False),
        sa.Column("password_hash", sa.Text(), nullable=False),
        sa.Column("created_at", sa.TIMESTAMP(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.PrimaryKeyConstraint("username"),
    )


def downgrade() -> None:
    op.drop_table("uploaders")
    op.drop_index("idx_test_runs_browser_time", table_name="test_runs")
    op.drop_index("idx_test_runs_revision", table_name="test_runs")
    op.drop_table("test_runs")
