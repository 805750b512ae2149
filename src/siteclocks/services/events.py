"""In-process broadcast registry for server-sent event subscribers."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from functools import lru_cache
from threading import Lock
from typing import Any

from siteclocks.core.settings import settings

# Configure logger for this module
logger = logging.getLogger(__name__)


@dataclass(eq=False)
class Subscription:
    """One open event stream.

    The queue is unbounded; a subscriber that stops reading keeps
    accumulating payloads until its connection closes.
    """

    site_id: str
    loop: asyncio.AbstractEventLoop
    queue: asyncio.Queue[Any] = field(default_factory=asyncio.Queue)

    async def get(self) -> Any:
        """Wait for the next published payload."""
        return await self.queue.get()


class EventBroker:
    """Thread-safe set of subscriptions with explicit add/remove lifecycle.

    Payloads published for a site reach only the subscribers of that site,
    unless ``broadcast_all`` is set, in which case every subscriber receives
    every payload.
    """

    def __init__(self, *, broadcast_all: bool = False) -> None:
        self.broadcast_all = broadcast_all
        self._subscriptions: set[Subscription] = set()
        self._lock = Lock()

    @property
    def subscriber_count(self) -> int:
        with self._lock:
            return len(self._subscriptions)

    def subscribe(self, site_id: str) -> Subscription:
        """Register a new subscription bound to the running event loop."""
        subscription = Subscription(site_id=site_id.lower(), loop=asyncio.get_running_loop())
        with self._lock:
            self._subscriptions.add(subscription)
        logger.info("Subscribed to site %s (%d open)", subscription.site_id, self.subscriber_count)
        return subscription

    def unsubscribe(self, subscription: Subscription) -> None:
        """Remove a subscription; unknown subscriptions are ignored."""
        with self._lock:
            self._subscriptions.discard(subscription)
        logger.info(
            "Unsubscribed from site %s (%d open)", subscription.site_id, self.subscriber_count
        )

    def publish(self, site_id: str, payload: Any) -> int:
        """Queue ``payload`` for every matching subscriber.

        Safe to call from any thread; delivery is scheduled on each
        subscriber's own event loop.

        Returns:
            Number of subscriptions the payload was queued for.
        """
        site_id = site_id.lower()
        with self._lock:
            targets = [
                subscription
                for subscription in self._subscriptions
                if self.broadcast_all or subscription.site_id == site_id
            ]

        delivered = 0
        for subscription in targets:
            try:
                subscription.loop.call_soon_threadsafe(subscription.queue.put_nowait, payload)
            except RuntimeError:
                # Loop already closed: the stream is gone.
                self.unsubscribe(subscription)
                continue
            delivered += 1
        logger.debug("Published site %s to %d subscriber(s)", site_id, delivered)
        return delivered


@lru_cache(maxsize=1)
def get_event_broker() -> EventBroker:
    """Return the process-wide event broker."""
    return EventBroker(broadcast_all=settings.events_broadcast_all)
