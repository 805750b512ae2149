"""Data access helpers for sites, clock groups and clocks."""
from __future__ import annotations

from typing import Any

from sqlalchemy import delete, insert, select, update
from sqlalchemy.orm import Session

from siteclocks.models import Clock, ClockGroup, Site

__all__ = ["ClockRepository"]


class ClockRepository:
    """Thin wrapper around database access for the site/group/clock relations.

    Reads return ORM instances. Writes are issued as explicit INSERT, UPDATE
    and DELETE statements keyed on equality conditions, so the caller decides
    exactly which statements reach the database.
    """

    def __init__(self, session: Session) -> None:
        """Initialize the repository with a SQLAlchemy session."""
        self.session = session

    # --- sites -----------------------------------------------------------------
    def get_site(self, site_id: str) -> Site | None:
        """Return a site by identifier."""
        return self.session.scalars(select(Site).where(Site.id == site_id)).first()

    def list_sites(self) -> list[Site]:
        """Return every stored site."""
        return list(self.session.scalars(select(Site)))

    def insert_site(self, site_id: str, name: str) -> None:
        self.session.execute(insert(Site).values(id=site_id, name=name))

    def update_site(self, site_id: str, **values: Any) -> None:
        self.session.execute(update(Site).where(Site.id == site_id).values(**values))

    # --- groups ----------------------------------------------------------------
    def get_group(self, group_id: str) -> ClockGroup | None:
        """Return a clock group by identifier, regardless of its site."""
        return self.session.scalars(select(ClockGroup).where(ClockGroup.id == group_id)).first()

    def list_groups(self, site_id: str) -> list[ClockGroup]:
        """Return the groups linked to a site in storage order."""
        return list(self.session.scalars(select(ClockGroup).where(ClockGroup.site_id == site_id)))

    def insert_group(self, group_id: str, site_id: str, title: str) -> None:
        self.session.execute(
            insert(ClockGroup).values(id=group_id, site_id=site_id, title=title)
        )

    def update_group(self, group_id: str, **values: Any) -> None:
        self.session.execute(
            update(ClockGroup).where(ClockGroup.id == group_id).values(**values)
        )

    def delete_group(self, group_id: str) -> int:
        """Delete a group and its clocks, children first.

        Returns:
            Number of clock rows removed alongside the group.
        """
        removed = self.session.execute(delete(Clock).where(Clock.group_id == group_id))
        self.session.execute(delete(ClockGroup).where(ClockGroup.id == group_id))
        return int(removed.rowcount or 0)

    # --- clocks ----------------------------------------------------------------
    def get_clock(self, clock_id: str) -> Clock | None:
        """Return a clock by identifier, regardless of its group."""
        return self.session.scalars(select(Clock).where(Clock.id == clock_id)).first()

    def list_clocks(self, group_id: str) -> list[Clock]:
        """Return the clocks linked to a group in storage order."""
        return list(self.session.scalars(select(Clock).where(Clock.group_id == group_id)))

    def insert_clock(self, **values: Any) -> None:
        self.session.execute(insert(Clock).values(**values))

    def update_clock(self, clock_id: str, **values: Any) -> None:
        self.session.execute(update(Clock).where(Clock.id == clock_id).values(**values))

    def delete_clock(self, clock_id: str) -> None:
        self.session.execute(delete(Clock).where(Clock.id == clock_id))
