from datetime import datetime, timezone
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class CatalogEventType(str, Enum):
    ASSET_CREATED = "asset:created"
    ASSET_UPDATED = "asset:updated"
    ASSET_DELETED = "asset:deleted"
    HEARTBEAT = "heartbeat"


class CatalogEvent(BaseModel):
    event_type: CatalogEventType
    version: int = 0
    asset_id: Optional[str] = None
    asset_type: Optional[str] = None
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
