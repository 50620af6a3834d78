"""Process-local asset store for development and tests."""

import asyncio
import uuid
from typing import Any, Dict, List, Optional

from asset_catalog.repositories.asset_store import AssetStore
from asset_catalog.schemas.assets import Asset, asset_adapter
from asset_catalog.utils.logging import get_logger

LOGGER = get_logger(__name__)


class InMemoryAssetRepository(AssetStore):
    """Asset store kept in an insertion-ordered dict.

    Writes go through an ``asyncio.Lock`` so concurrent handlers never see a
    partially applied update. Returned assets are copies.
    """

    backend_name = "memory"

    def __init__(self, assets: Optional[List[Asset]] = None):
        self._assets: Dict[str, Asset] = {}
        self._lock = asyncio.Lock()
        for asset in assets or []:
            self._assets[asset.id] = asset

    async def list_assets(self) -> List[Asset]:
        return [asset.model_copy(deep=True) for asset in self._assets.values()]

    async def get_asset(self, asset_id: str) -> Optional[Asset]:
        asset = self._assets.get(asset_id)
        return asset.model_copy(deep=True) if asset else None

    async def create_asset(self, fields: Dict[str, Any]) -> Asset:
        async with self._lock:
            asset_id = str(uuid.uuid4())
            while asset_id in self._assets:
                asset_id = str(uuid.uuid4())

            asset = asset_adapter.validate_python({**fields, "id": asset_id})
            self._assets[asset_id] = asset

        LOGGER.info(f"Created {asset.asset_type} asset: {asset_id}")
        return asset.model_copy(deep=True)

    async def update_asset(self, asset_id: str, fields: Dict[str, Any]) -> Optional[Asset]:
        async with self._lock:
            current = self._assets.get(asset_id)
            if current is None:
                return None

            # Re-validate the merged record so a bad field never lands in the store
            merged = {**current.model_dump(), **fields, "id": asset_id}
            updated = asset_adapter.validate_python(merged)
            self._assets[asset_id] = updated

        LOGGER.info(f"Updated asset: {asset_id}")
        return updated.model_copy(deep=True)

    async def delete_asset(self, asset_id: str) -> bool:
        async with self._lock:
            if self._assets.pop(asset_id, None) is None:
                return False

        LOGGER.info(f"Deleted asset: {asset_id}")
        return True

    async def clear(self) -> None:
        async with self._lock:
            self._assets.clear()
