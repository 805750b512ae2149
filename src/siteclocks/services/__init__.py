# src/siteclocks/services/__init__.py
"""Business logic services for the SiteClocks application."""

from .errors import InvalidDocumentError, SiteClocksError, StorageFailure
from .events import EventBroker, Subscription, get_event_broker
from .reconciler import ReconcileSummary, TreeReconciler

__all__ = [
    "EventBroker",
    "Subscription",
    "get_event_broker",
    "ReconcileSummary",
    "TreeReconciler",
    "SiteClocksError",
    "InvalidDocumentError",
    "StorageFailure",
]
