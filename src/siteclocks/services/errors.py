"""Exceptions raised by the SiteClocks service layer."""

from __future__ import annotations


class SiteClocksError(RuntimeError):
    """Base exception for service-layer failures."""


class InvalidDocumentError(SiteClocksError, ValueError):
    """Raised when a submitted site document cannot be reconciled.

    Covers a missing site id and ids that collide within one level once
    lowercased.
    """


class StorageFailure(SiteClocksError):
    """Raised when the underlying store rejects an operation.

    The transaction has already been rolled back when this is raised.
    """
