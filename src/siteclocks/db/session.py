"""Engine and session factory for the clock store."""

from __future__ import annotations

from collections.abc import Generator
from typing import Any

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

from siteclocks.core.settings import settings


class Base(DeclarativeBase):
    """Declarative base shared by all ORM models."""


# Register the tables on Base.metadata for Alembic and test setup.
import siteclocks.models  # noqa: E402,F401


def build_engine(database_url: str, **kwargs: Any) -> Engine:
    """Create an engine for ``database_url``.

    SQLite connections are opened in the threadpool and used on the event
    loop thread, so the same-thread check is disabled for them.
    """
    if database_url.startswith("sqlite"):
        kwargs.setdefault("connect_args", {"check_same_thread": False})
    return create_engine(database_url, echo=settings.sql_debug, **kwargs)


engine = build_engine(settings.database_url, pool_pre_ping=True)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_session_factory() -> sessionmaker[Session]:
    """Return the factory for callers that scope their own short-lived sessions."""
    return SessionLocal


def get_db() -> Generator[Session, None, None]:
    """Yield a request-scoped session and close it afterwards."""
    with SessionLocal() as db:
        yield db
