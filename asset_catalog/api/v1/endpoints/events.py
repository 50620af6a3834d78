"""Catalog change stream over Server-Sent Events."""

from typing import Annotated

from fastapi import APIRouter, Depends
from fastapi.responses import StreamingResponse

from asset_catalog.core.auth import get_current_user
from asset_catalog.core.config import settings
from asset_catalog.core.dependencies import get_change_feed
from asset_catalog.schemas.auth import CurrentUser
from asset_catalog.services.change_feed import ChangeFeed
from asset_catalog.services.sse_manager import SSEManager
from asset_catalog.utils.logging import get_logger

LOGGER = get_logger(__name__)

router = APIRouter()


@router.get(
    "/stream",
    summary="Stream catalog changes",
    description="Server-Sent Events announcing every asset write; clients re-fetch on each event",
    operation_id="stream_catalog_events",
)
async def stream_catalog_events(
    user: Annotated[CurrentUser, Depends(get_current_user)],
    feed: Annotated[ChangeFeed, Depends(get_change_feed)],
) -> StreamingResponse:
    LOGGER.info(f"Opening catalog event stream for user: {user.id}")
    sse_manager = SSEManager(feed, heartbeat_interval=settings.catalog.heartbeat_interval)
    return StreamingResponse(
        sse_manager.stream_catalog_events(),
        media_type="text/event-stream",
        headers={
            "Cache-Control": "no-cache",
            "Connection": "keep-alive",
            "X-Accel-Buffering": "no",  # Disable proxy buffering (Nginx)
        },
    )
