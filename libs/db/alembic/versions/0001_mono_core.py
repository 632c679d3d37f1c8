# ruff: noqa: I001
"""Statement table with a natural-key uniqueness constraint.

Revision ID: 0001_mono_core
Revises: None
Create Date: 2026-10-18
"""

from __future__ import annotations  # ruff: noqa: I001

from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op


# revision identifiers, used by Alembic.
revision: str = "0001_mono_core"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    op.create_table(
        "mono",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("title", sa.Text(), nullable=False),
        sa.Column("mcc", sa.Integer(), nullable=False),
        sa.Column("amount", sa.Numeric(10, 2), nullable=False),
        sa.Column("amount_orig", sa.Numeric(10, 2), nullable=False),
        sa.Column("currency", sa.Text(), nullable=False),
        sa.Column("exchange", sa.Numeric(10, 5), nullable=False),
        sa.Column("commission", sa.Numeric(10, 2), nullable=False),
        sa.Column("cashback", sa.Numeric(10, 2), nullable=False),
        sa.Column("rest", sa.Numeric(10, 2), nullable=False),
        # Natural key used by ON CONFLICT DO NOTHING inserts
        sa.UniqueConstraint("created_at", "title", "amount", name="uq_mono_natural_key"),
    )

    # Lightweight lookup index for date-range queries
    op.create_index("ix_mono_created_at", "mono", ["created_at"], unique=False)


def downgrade() -> None:
    op.drop_index("ix_mono_created_at", table_name="mono")
    op.drop_table("mono")
