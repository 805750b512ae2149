"""add clock color

Revision ID: 0002_clock_color
Revises: 0001_create_tables
Create Date: 2026-10-19 09:20:07.118264

"""
from __future__ import annotations

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "0002_clock_color"
down_revision: Union[str, Sequence[str], None] = "0001_create_tables"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

LEGACY_COLOR = "green"


def upgrade() -> None:
    """Add clocks.color if missing and backfill existing rows."""
    bind = op.get_bind()
    columns = {column["name"] for column in sa.inspect(bind).get_columns("clocks")}
    if "color" not in columns:
        op.add_column(
            "clocks",
            sa.Column("color", sa.Text(), nullable=True, server_default=LEGACY_COLOR),
        )

    clocks = sa.table("clocks", sa.column("color", sa.Text()))
    op.execute(
        clocks.update().where(clocks.c.color.is_(None)).values(color=LEGACY_COLOR)
    )


def downgrade() -> None:
    """Remove clocks.color."""
    with op.batch_alter_table("clocks") as batch_op:
        batch_op.drop_column("color")
