import asyncio
import json
from typing import AsyncGenerator, Optional

from asset_catalog.schemas.events import CatalogEvent, CatalogEventType
from asset_catalog.services.change_feed import ChangeFeed
from asset_catalog.utils.logging import get_logger

LOGGER = get_logger(__name__)


class SSEManager:
    """Streams catalog change events to one client as Server-Sent Events."""

    def __init__(self, change_feed: ChangeFeed, heartbeat_interval: float = 15.0):
        self.change_feed = change_feed
        self.heartbeat_interval = heartbeat_interval

    async def stream_catalog_events(
        self, max_events: Optional[int] = None
    ) -> AsyncGenerator[str, None]:
        """Yield change events, with a heartbeat whenever the feed is quiet.

        Args:
            max_events: Stop after this many non-heartbeat events (None streams forever)
        """
        delivered = 0
        async with self.change_feed.subscribe() as subscription:
            # Initial heartbeat carries the current version so clients can fetch a baseline
            yield self._format_sse(self._heartbeat())

            try:
                while max_events is None or delivered < max_events:
                    event = await subscription.get(timeout=self.heartbeat_interval)
                    if event is None:
                        yield self._format_sse(self._heartbeat())
                        continue

                    yield self._format_sse(event)
                    delivered += 1

            except asyncio.CancelledError:
                LOGGER.info("SSE connection cancelled for catalog stream")
                raise

    def _heartbeat(self) -> CatalogEvent:
        return CatalogEvent(
            event_type=CatalogEventType.HEARTBEAT,
            version=self.change_feed.version,
        )

    def _format_sse(self, event: CatalogEvent) -> str:
        """Format a CatalogEvent as a raw SSE message."""
        data = event.model_dump(mode="json")
        return f"event: {data['event_type']}\ndata: {json.dumps(data)}\n\n"
