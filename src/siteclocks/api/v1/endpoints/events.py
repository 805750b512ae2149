# src/siteclocks/api/v1/endpoints/events.py
"""Server-sent event stream of site document updates."""

from __future__ import annotations

from collections.abc import AsyncIterator

from fastapi import APIRouter
from fastapi.responses import StreamingResponse

from siteclocks.api.v1.dependencies import EventBrokerDep, SessionFactoryDep
from siteclocks.services.events import EventBroker, Subscription
from siteclocks.services.reconciler import TreeReconciler

router = APIRouter(prefix="/events", tags=["events"])

EVENT_STREAM_HEADERS = {
    "Cache-Control": "no-cache",
    "Connection": "keep-alive",
    "X-Accel-Buffering": "no",
}


def format_event(data: str) -> str:
    """Frame a payload as a single server-sent ``data:`` event."""
    lines = data.splitlines() or [""]
    return "".join(f"data: {line}\n" for line in lines) + "\n"


async def stream_site_events(
    subscription: Subscription,
    initial: str,
    broker: EventBroker,
) -> AsyncIterator[str]:
    """Yield the initial document, then every published update.

    The subscription is released when the generator closes, which happens
    when the client disconnects.
    """
    try:
        yield format_event(initial)
        while True:
            payload = await subscription.get()
            yield format_event(payload)
    finally:
        broker.unsubscribe(subscription)


@router.get("/{key}")
async def site_events(
    key: str,
    session_factory: SessionFactoryDep,
    broker: EventBrokerDep,
) -> StreamingResponse:
    """Open a live stream for a site.

    The current document is pushed immediately (``null`` when the site does
    not exist yet), followed by the full document after each stored update.
    The initial read uses its own session, closed before streaming starts, so
    open streams hold no database connection.
    """
    # Subscribe before reading so no update slips between the two.
    subscription = broker.subscribe(key)
    try:
        with session_factory() as session:
            document = TreeReconciler(session).fetch(key)
    except BaseException:
        broker.unsubscribe(subscription)
        raise
    initial = document.model_dump_json(by_alias=True) if document is not None else "null"
    return StreamingResponse(
        stream_site_events(subscription, initial, broker),
        media_type="text/event-stream",
        headers=EVENT_STREAM_HEADERS,
    )
