# src/siteclocks/db/__init__.py
"""Database configuration and utilities."""

from .session import SessionLocal, build_engine, get_db, get_session_factory

__all__ = ["build_engine", "get_db", "get_session_factory", "SessionLocal"]
