# src/siteclocks/main.py
"""Main entry point for the SiteClocks application."""

from __future__ import annotations

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from siteclocks.api.v1 import data_router, events_router
from siteclocks.core.settings import settings
from siteclocks.scripts.migrate import run_upgrade_head

logger = logging.getLogger(__name__)

# Initialize FastAPI app
app = FastAPI(
    title="SiteClocks API",
    description="Persistence and live sync for site clock widgets",
    version=settings.app_version,
)

# Add CORS middleware so embedded widgets can read and subscribe cross-origin
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=settings.cors_allow_credentials,
    allow_methods=settings.cors_allow_methods,
    allow_headers=settings.cors_allow_headers,
)

# Include API routers
app.include_router(data_router)
app.include_router(events_router)


@app.on_event("startup")
async def on_startup() -> None:
    logging.basicConfig(level=settings.log_level)
    if settings.run_migrations_on_startup:
        # Failures propagate and abort startup.
        run_upgrade_head()
    logger.info("%s %s started", settings.app_name, settings.app_version)


@app.get("/check")
async def check() -> dict[str, str]:
    """Liveness check."""
    return {"status": "ok"}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "siteclocks.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.debug,
        log_level=settings.log_level.lower(),
    )
