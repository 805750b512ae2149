# tests/conftest.py
from __future__ import annotations

import os
from collections.abc import Generator, Iterator
from typing import Any

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

os.environ.setdefault("RUN_MIGRATIONS_ON_STARTUP", "false")
os.environ.setdefault("DATABASE_URL", "sqlite://")

from siteclocks.core.settings import settings
from siteclocks.db.session import Base, build_engine, get_session_factory
from siteclocks.db.session import get_db as app_get_session
from siteclocks.main import app as fastapi_app
from siteclocks.services.events import EventBroker, get_event_broker
from siteclocks.services.reconciler import TreeReconciler

TEST_DB_URL = "sqlite://"
TEST_AUTH_SECRET = "test-shared-secret"


@pytest.fixture(scope="session")
def engine() -> Generator[Engine, None, None]:
    engine = build_engine(TEST_DB_URL, poolclass=StaticPool)
    Base.metadata.create_all(bind=engine)
    try:
        yield engine
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture()
def session_factory(engine: Engine) -> Iterator[sessionmaker[Session]]:
    factory = sessionmaker(bind=engine, autocommit=False, autoflush=False)
    try:
        yield factory
    finally:
        # Ensure each test sees a clean database; the reconciler commits.
        with engine.begin() as cleanup_conn:
            for table in reversed(Base.metadata.sorted_tables):
                cleanup_conn.execute(table.delete())


@pytest.fixture()
def db_session(session_factory: sessionmaker[Session]) -> Iterator[Session]:
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def reconciler(db_session: Session) -> TreeReconciler:
    return TreeReconciler(db_session)


@pytest.fixture()
def broker() -> EventBroker:
    return EventBroker()


@pytest.fixture(scope="session")
def app() -> FastAPI:
    return fastapi_app


@pytest.fixture(autouse=True)
def override_dependencies(
    app: FastAPI,
    session_factory: sessionmaker[Session],
    broker: EventBroker,
) -> Iterator[None]:
    # One session per request, as in production.
    def _get_session_override() -> Generator[Session, None, None]:
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[app_get_session] = _get_session_override
    app.dependency_overrides[get_session_factory] = lambda: session_factory
    app.dependency_overrides[get_event_broker] = lambda: broker
    try:
        yield
    finally:
        app.dependency_overrides.pop(app_get_session, None)
        app.dependency_overrides.pop(get_session_factory, None)
        app.dependency_overrides.pop(get_event_broker, None)


@pytest.fixture(autouse=True)
def auth_secret(monkeypatch: pytest.MonkeyPatch) -> str:
    monkeypatch.setattr(settings, "auth_secret", TEST_AUTH_SECRET)
    return TEST_AUTH_SECRET


@pytest.fixture()
def auth_headers(auth_secret: str) -> dict[str, str]:
    """Return headers carrying the shared write secret."""
    return {"X-Auth-Header": auth_secret}


@pytest.fixture()
def client(app: FastAPI) -> Iterator[TestClient]:
    with TestClient(app, base_url="http://test") as test_client:
        yield test_client


def build_site_document(
    site_id: str = "s1",
    *,
    name: str = "Site",
    groups: list[dict[str, Any]] | None = None,
) -> dict[str, Any]:
    """Return a wire-format site document with one group and one clock by default."""
    if groups is None:
        groups = [
            {
                "id": "g1",
                "title": "Grp",
                "clocks": [
                    {
                        "id": "c1",
                        "title": "Timer",
                        "totalSegments": 8,
                        "filledSegments": 2,
                        "color": "blue",
                    }
                ],
            }
        ]
    return {"id": site_id, "name": name, "clockGroups": groups}


@pytest.fixture()
def site_document() -> dict[str, Any]:
    return build_site_document()
