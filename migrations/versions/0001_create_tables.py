"""create sites, groups and clocks

Revision ID: 0001_create_tables
Revises:
Create Date: 2026-10-19 09:12:41.503118

"""
from __future__ import annotations

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "0001_create_tables"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create the three relations unless a pre-Alembic database already has them."""
    existing = set(sa.inspect(op.get_bind()).get_table_names())

    if "sites" not in existing:
        op.create_table(
            "sites",
            sa.Column("id", sa.Text(), nullable=False),
            sa.Column("name", sa.Text(), nullable=False),
            sa.PrimaryKeyConstraint("id"),
        )
    if "groups" not in existing:
        op.create_table(
            "groups",
            sa.Column("id", sa.Text(), nullable=False),
            sa.Column("site_id", sa.Text(), nullable=True),
            sa.Column("title", sa.Text(), nullable=False),
            sa.PrimaryKeyConstraint("id"),
        )
        op.create_index("ix_groups_site_id", "groups", ["site_id"])
    if "clocks" not in existing:
        # color arrives in 0002 so that legacy databases take the same path.
        op.create_table(
            "clocks",
            sa.Column("id", sa.Text(), nullable=False),
            sa.Column("group_id", sa.Text(), nullable=True),
            sa.Column("title", sa.Text(), nullable=False),
            sa.Column("total_segments", sa.Integer(), nullable=True),
            sa.Column("filled_segments", sa.Integer(), nullable=True),
            sa.PrimaryKeyConstraint("id"),
        )
        op.create_index("ix_clocks_group_id", "clocks", ["group_id"])


def downgrade() -> None:
    """Drop all three relations."""
    op.drop_index("ix_clocks_group_id", table_name="clocks")
    op.drop_table("clocks")
    op.drop_index("ix_groups_site_id", table_name="groups")
    op.drop_table("groups")
    op.drop_table("sites")
