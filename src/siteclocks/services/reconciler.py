"""Tree reconciliation between nested site documents and stored rows.

A site document describes the complete desired state of one site: its
groups and, per group, its clocks. ``reconcile`` converges storage to that
state level by level (site, then groups, then clocks) inside a single
transaction, touching only rows that actually differ:

- rows whose id is absent from the document are deleted (clocks before
  their group, since nothing cascades in the database),
- rows whose id is new are inserted,
- rows whose compared fields differ are updated.

Ids are lowercased before any comparison or write. ``fetch`` reads the tree
back and strips the internal ``site_id``/``group_id`` linkage.

Reads are not transactional. A ``fetch`` racing a ``reconcile`` sees
whatever the engine's isolation level exposes (best-effort read-committed,
no snapshot isolation guaranteed).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from siteclocks.models import Clock, ClockGroup
from siteclocks.models.clock import DEFAULT_CLOCK_COLOR
from siteclocks.repositories.clock_repo import ClockRepository
from siteclocks.schemas.clock import (
    ClockDocument,
    GroupDocument,
    SiteDocument,
    SiteSummary,
)
from siteclocks.services.errors import InvalidDocumentError, StorageFailure

# Configure logger for this module
logger = logging.getLogger(__name__)

# Clock fields that gate an update; all of them are written when any differs.
CLOCK_COMPARED_FIELDS = ("title", "filled_segments", "total_segments", "color")


@dataclass
class LevelChanges:
    """Write counters for one level of the hierarchy."""

    inserted: int = 0
    updated: int = 0
    deleted: int = 0

    @property
    def total(self) -> int:
        return self.inserted + self.updated + self.deleted


@dataclass
class ReconcileSummary:
    """Statements issued by a single ``reconcile`` call."""

    site_id: str
    sites: LevelChanges = field(default_factory=LevelChanges)
    groups: LevelChanges = field(default_factory=LevelChanges)
    clocks: LevelChanges = field(default_factory=LevelChanges)

    @property
    def writes(self) -> int:
        """Total number of rows inserted, updated or deleted."""
        return self.sites.total + self.groups.total + self.clocks.total


def normalize_document(document: SiteDocument) -> SiteDocument:
    """Return a copy of ``document`` with every id lowercased.

    Raises:
        InvalidDocumentError: If the site id is missing, a group id repeats
            within the site, or a clock id repeats anywhere in the document.
    """
    if not document.id:
        raise InvalidDocumentError("Site document requires an id")

    groups: list[GroupDocument] = []
    for group in document.clock_groups:
        clocks = [
            clock.model_copy(update={"id": clock.id.lower()}) for clock in group.clocks
        ]
        groups.append(group.model_copy(update={"id": group.id.lower(), "clocks": clocks}))
    _ensure_unique([group.id for group in groups], "group")
    # Clock ids share one table, so uniqueness spans every group.
    _ensure_unique([clock.id for group in groups for clock in group.clocks], "clock")

    # Always hand back the base document type so callers get a required id.
    return SiteDocument(id=document.id.lower(), name=document.name, clock_groups=groups)


def _ensure_unique(ids: list[str], kind: str) -> None:
    seen: set[str] = set()
    for item_id in ids:
        if item_id in seen:
            raise InvalidDocumentError(f"Duplicate {kind} id {item_id!r}")
        seen.add(item_id)


class TreeReconciler:
    """Reads and writes complete site trees through a ``ClockRepository``."""

    def __init__(self, session: Session) -> None:
        self.session = session
        self.repo = ClockRepository(session)

    # --- read path ---------------------------------------------------------------
    def list_sites(self) -> list[SiteSummary]:
        """Return every site without nested data."""
        return [SiteSummary(id=site.id, name=site.name) for site in self.repo.list_sites()]

    def fetch(self, site_id: str) -> SiteDocument | None:
        """Compose the nested document for a site.

        Args:
            site_id: Site identifier, matched case-insensitively.

        Returns:
            The site with its groups and clocks, or ``None`` if no such site
            is stored.
        """
        site = self.repo.get_site(site_id.lower())
        if site is None:
            return None

        groups = [
            GroupDocument(
                id=group.id,
                title=group.title,
                clocks=[_clock_document(clock) for clock in self.repo.list_clocks(group.id)],
            )
            for group in self.repo.list_groups(site.id)
        ]
        return SiteDocument(id=site.id, name=site.name, clock_groups=groups)

    # --- write path --------------------------------------------------------------
    def reconcile(self, document: SiteDocument) -> ReconcileSummary:
        """Converge storage to ``document`` in one transaction.

        Args:
            document: Complete desired state of one site.

        Returns:
            Counters of the rows inserted, updated and deleted per level.

        Raises:
            InvalidDocumentError: If the document fails normalization. Nothing
                is written in that case.
            StorageFailure: If the database rejects a statement. The
                transaction is rolled back before this is raised.
        """
        document = normalize_document(document)
        summary = ReconcileSummary(site_id=document.id)

        try:
            self._reconcile_site(document, summary)
            self._reconcile_groups(document, summary)
            for group in document.clock_groups:
                self._reconcile_clocks(group, summary)
            self.session.commit()
        except SQLAlchemyError as exc:
            self.session.rollback()
            logger.error("Reconciliation of site %s rolled back", document.id, exc_info=True)
            raise StorageFailure(f"Could not store site {document.id!r}: {exc}") from exc
        except Exception:
            self.session.rollback()
            raise

        logger.info(
            "Reconciled site %s: sites=%s groups=%s clocks=%s",
            document.id,
            summary.sites,
            summary.groups,
            summary.clocks,
        )
        return summary

    def _reconcile_site(self, document: SiteDocument, summary: ReconcileSummary) -> None:
        stored = self.repo.get_site(document.id)
        if stored is None:
            self.repo.insert_site(document.id, document.name)
            summary.sites.inserted += 1
        elif stored.name != document.name:
            self.repo.update_site(document.id, name=document.name)
            summary.sites.updated += 1

    def _reconcile_groups(self, document: SiteDocument, summary: ReconcileSummary) -> None:
        stored: dict[str, ClockGroup] = {
            group.id: group for group in self.repo.list_groups(document.id)
        }
        incoming_ids = {group.id for group in document.clock_groups}

        for group_id in stored.keys() - incoming_ids:
            summary.clocks.deleted += self.repo.delete_group(group_id)
            summary.groups.deleted += 1
            logger.debug("Deleted group %s from site %s", group_id, document.id)

        for group in document.clock_groups:
            existing = stored.get(group.id)
            if existing is None:
                elsewhere = self.repo.get_group(group.id)
                if elsewhere is None:
                    self.repo.insert_group(group.id, document.id, group.title)
                    summary.groups.inserted += 1
                else:
                    # Group last written through another site; move it here.
                    previous_site = elsewhere.site_id
                    self.repo.update_group(group.id, site_id=document.id, title=group.title)
                    summary.groups.updated += 1
                    logger.debug(
                        "Moved group %s from site %s to %s", group.id, previous_site, document.id
                    )
            elif existing.title != group.title:
                self.repo.update_group(group.id, title=group.title)
                summary.groups.updated += 1

    def _reconcile_clocks(self, group: GroupDocument, summary: ReconcileSummary) -> None:
        stored: dict[str, Clock] = {clock.id: clock for clock in self.repo.list_clocks(group.id)}
        incoming_ids = {clock.id for clock in group.clocks}

        for clock_id in stored.keys() - incoming_ids:
            self.repo.delete_clock(clock_id)
            summary.clocks.deleted += 1

        for clock in group.clocks:
            values = {
                "title": clock.title,
                "total_segments": clock.total_segments,
                "filled_segments": clock.filled_segments,
                "color": clock.color,
            }
            existing = stored.get(clock.id)
            if existing is None:
                if self.repo.get_clock(clock.id) is None:
                    self.repo.insert_clock(id=clock.id, group_id=group.id, **values)
                    summary.clocks.inserted += 1
                else:
                    self.repo.update_clock(clock.id, group_id=group.id, **values)
                    summary.clocks.updated += 1
                    logger.debug("Moved clock %s into group %s", clock.id, group.id)
            elif any(getattr(existing, name) != values[name] for name in CLOCK_COMPARED_FIELDS):
                self.repo.update_clock(clock.id, **values)
                summary.clocks.updated += 1


def _clock_document(clock: Clock) -> ClockDocument:
    return ClockDocument(
        id=clock.id,
        title=clock.title,
        total_segments=clock.total_segments or 0,
        filled_segments=clock.filled_segments or 0,
        color=clock.color or DEFAULT_CLOCK_COLOR,
    )

