# src/siteclocks/schemas/__init__.py
"""Pydantic schemas for the SiteClocks API."""

from .clock import ClockDocument, GroupDocument, SiteDocument, SiteSubmission, SiteSummary

__all__ = [
    "ClockDocument",
    "GroupDocument",
    "SiteDocument",
    "SiteSubmission",
    "SiteSummary",
]
