"""SQLAlchemy models for sites, clock groups and clocks.

Linkage columns are plain indexed text columns. There are no foreign key
constraints; the reconciler keeps the hierarchy consistent and deletes
children before their parent.
"""
from sqlalchemy import Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from siteclocks.db.session import Base

DEFAULT_CLOCK_COLOR = "green"


class Site(Base):
    """A website that embeds clock widgets."""

    __tablename__ = "sites"

    id: Mapped[str] = mapped_column(Text, primary_key=True)
    name: Mapped[str] = mapped_column(Text, nullable=False)


class ClockGroup(Base):
    """A titled group of clocks owned by one site."""

    __tablename__ = "groups"

    id: Mapped[str] = mapped_column(Text, primary_key=True)
    # Overwritten on every reconciliation of the owning site.
    site_id: Mapped[str | None] = mapped_column(Text, index=True, nullable=True)
    title: Mapped[str] = mapped_column(Text, nullable=False)


class Clock(Base):
    """A segmented progress clock."""

    __tablename__ = "clocks"

    id: Mapped[str] = mapped_column(Text, primary_key=True)
    group_id: Mapped[str | None] = mapped_column(Text, index=True, nullable=True)
    title: Mapped[str] = mapped_column(Text, nullable=False)
    total_segments: Mapped[int | None] = mapped_column(Integer, nullable=True)
    filled_segments: Mapped[int | None] = mapped_column(Integer, nullable=True)
    color: Mapped[str | None] = mapped_column(
        Text, nullable=True, default=DEFAULT_CLOCK_COLOR, server_default=DEFAULT_CLOCK_COLOR
    )
