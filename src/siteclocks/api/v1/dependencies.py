"""Shared API dependencies for authentication and common functionality."""

import logging
from typing import Annotated

from fastapi import Depends, HTTPException, Security, status
from fastapi.security import APIKeyHeader
from sqlalchemy.orm import Session, sessionmaker

from siteclocks.core.security import AUTH_HEADER_NAME, verify_shared_secret
from siteclocks.core.settings import settings
from siteclocks.db.session import get_db, get_session_factory
from siteclocks.services.events import EventBroker, get_event_broker
from siteclocks.services.reconciler import TreeReconciler

logger = logging.getLogger(__name__)

# Shared-secret header scheme; missing headers are reported as 401 below.
auth_header_scheme = APIKeyHeader(name=AUTH_HEADER_NAME, auto_error=False)

# Type alias for database session dependency
SessionDep = Annotated[Session, Depends(get_db)]
SessionFactoryDep = Annotated[sessionmaker[Session], Depends(get_session_factory)]


def get_reconciler(db: SessionDep) -> TreeReconciler:
    """Build a reconciler bound to the request's session."""
    return TreeReconciler(db)


def require_auth_header(
    provided: Annotated[str | None, Security(auth_header_scheme)],
) -> None:
    """Reject the request unless it carries the configured shared secret.

    Raises:
        HTTPException: 401 when the header is missing or does not match.
    """
    if not verify_shared_secret(provided, settings.auth_secret):
        logger.warning("Rejected write with missing or invalid %s", AUTH_HEADER_NAME)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or missing auth header",
        )


# Type aliases for service dependencies
ReconcilerDep = Annotated[TreeReconciler, Depends(get_reconciler)]
EventBrokerDep = Annotated[EventBroker, Depends(get_event_broker)]
