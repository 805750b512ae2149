# src/siteclocks/api/v1/endpoints/data.py
"""Site document endpoints for the SiteClocks API."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, status

from siteclocks.api.v1.dependencies import EventBrokerDep, ReconcilerDep, require_auth_header
from siteclocks.schemas.clock import SiteDocument, SiteSubmission, SiteSummary
from siteclocks.services.errors import InvalidDocumentError, StorageFailure

router = APIRouter(prefix="/data", tags=["data"])


@router.get("", response_model=list[SiteSummary])
async def list_sites(reconciler: ReconcilerDep) -> list[SiteSummary]:
    """List all sites without their groups and clocks."""
    return reconciler.list_sites()


@router.get("/{key}", response_model=SiteDocument)
async def get_site(key: str, reconciler: ReconcilerDep) -> SiteDocument:
    """Get the full nested document for a site."""
    document = reconciler.fetch(key)
    if document is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Site not found"
        )
    return document


@router.post(
    "",
    response_model=SiteDocument,
    dependencies=[Depends(require_auth_header)],
)
async def submit_site(
    payload: SiteSubmission,
    reconciler: ReconcilerDep,
    broker: EventBrokerDep,
) -> SiteDocument:
    """Store a complete site document and notify event stream subscribers.

    Groups and clocks missing from the document are deleted, new ones are
    inserted and changed ones are updated, all in one transaction.
    """
    try:
        summary = reconciler.reconcile(payload)
    except InvalidDocumentError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(exc),
        ) from exc
    except StorageFailure as exc:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Could not store site document",
        ) from exc

    document = reconciler.fetch(summary.site_id)
    broker.publish(summary.site_id, document.model_dump_json(by_alias=True))
    return document
