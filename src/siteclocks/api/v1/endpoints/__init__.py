# src/siteclocks/api/v1/endpoints/__init__.py
"""API endpoint modules for version 1."""

from .data import router as data_router
from .events import router as events_router

__all__ = [
    "data_router",
    "events_router",
]
