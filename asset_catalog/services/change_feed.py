"""In-process publish/subscribe channel for catalog change events."""

import asyncio
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional, Set

from asset_catalog.schemas.events import CatalogEvent, CatalogEventType
from asset_catalog.utils.logging import get_logger

LOGGER = get_logger(__name__)


class Subscription:
    """One subscriber's bounded event queue."""

    def __init__(self, max_size: int):
        self.queue: "asyncio.Queue[CatalogEvent]" = asyncio.Queue(maxsize=max_size)
        self.dropped = 0

    def offer(self, event: CatalogEvent) -> None:
        if self.queue.full():
            # Oldest event is the least useful for a client that will re-fetch anyway
            self.queue.get_nowait()
            self.dropped += 1
            LOGGER.warning(
                "Change feed subscriber is lagging, dropped oldest event",
                extra={"dropped": self.dropped},
            )
        self.queue.put_nowait(event)

    async def get(self, timeout: Optional[float] = None) -> Optional[CatalogEvent]:
        """Wait for the next event; None when ``timeout`` elapses first."""
        try:
            return await asyncio.wait_for(self.queue.get(), timeout=timeout)
        except asyncio.TimeoutError:
            return None

    def __aiter__(self) -> "Subscription":
        return self

    async def __anext__(self) -> CatalogEvent:
        return await self.queue.get()


class ChangeFeed:
    """Fan-out of catalog change events to every live subscriber.

    ``version`` counts published writes, so clients can tell whether the
    snapshot they hold is stale.
    """

    def __init__(self, queue_size: int = 100):
        self.queue_size = queue_size
        self._subscriptions: Set[Subscription] = set()
        self._version = 0

    @property
    def version(self) -> int:
        return self._version

    @property
    def subscriber_count(self) -> int:
        return len(self._subscriptions)

    def publish(
        self,
        event_type: CatalogEventType,
        asset_id: Optional[str] = None,
        asset_type: Optional[str] = None,
    ) -> CatalogEvent:
        """Record a write and deliver it to all current subscribers."""
        self._version += 1
        event = CatalogEvent(
            event_type=event_type,
            version=self._version,
            asset_id=asset_id,
            asset_type=asset_type,
        )
        for subscription in list(self._subscriptions):
            subscription.offer(event)

        LOGGER.debug(
            f"Published {event_type.value} v{self._version}",
            extra={"asset_id": asset_id, "subscribers": len(self._subscriptions)},
        )
        return event

    @asynccontextmanager
    async def subscribe(self) -> AsyncIterator[Subscription]:
        """Register a subscriber for the lifetime of the context."""
        subscription = Subscription(self.queue_size)
        self._subscriptions.add(subscription)
        try:
            yield subscription
        finally:
            self._subscriptions.discard(subscription)
