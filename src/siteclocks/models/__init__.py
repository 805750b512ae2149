# src/siteclocks/models/__init__.py
"""SQLAlchemy models for the SiteClocks service."""

from .clock import Clock, ClockGroup, Site

__all__ = ["Site", "ClockGroup", "Clock"]
