"""Catalog service for asset CRUD and filtered listing."""

from typing import Any, Dict, List, Optional

from asset_catalog.core.exceptions import (
    AppError,
    AssetNotFoundError,
    ImmutableFieldError,
    ReadOnlyCatalogError,
)
from asset_catalog.repositories.asset_store import AssetStore
from asset_catalog.schemas.assets import (
    COMMON_UPDATE_FIELDS,
    VARIANT_FIELDS,
    Asset,
    AssetCreate,
    AssetType,
    AssetUpdate,
    CatalogFilter,
)
from asset_catalog.schemas.events import CatalogEventType
from asset_catalog.services.base_service import BaseService
from asset_catalog.services.change_feed import ChangeFeed
from asset_catalog.utils.logging import get_logger
from asset_catalog.utils.timestamps import utc_now_iso

LOGGER = get_logger(__name__)

WRITE_ACTIONS = frozenset({"create_asset", "update_asset", "delete_asset"})

# Fields that may be explicitly cleared with null
NULLABLE_FIELDS = frozenset({"description"})

FIXED_DATA_TYPES = {
    AssetType.POLICY: "Record",
    AssetType.MODEL: "Result",
}


class AssetCatalogService(BaseService):
    """Service for catalog listing and asset writes.

    Every successful write is published on the change feed so that open
    streams can tell clients to re-fetch their snapshot.
    """

    def __init__(self, store: AssetStore, change_feed: ChangeFeed, read_only: bool = False):
        """Initialize catalog service.

        Args:
            store: Asset persistence backend
            change_feed: Channel notified after each write
            read_only: Reject every write when True
        """
        super().__init__()
        self.store = store
        self.change_feed = change_feed
        self.read_only = read_only

    def validate(self, *args, **kwargs):
        if self.read_only and kwargs.get("action") in WRITE_ACTIONS:
            raise ReadOnlyCatalogError("Catalog is in read-only mode")

    async def run(self, *args, **kwargs) -> Any:
        """Route to the handler for ``action``."""
        action = kwargs.get("action")

        if action == "list_assets":
            return await self._list_assets_logic(kwargs.get("filters"))
        elif action == "get_asset":
            return await self._get_asset_logic(kwargs["asset_id"])
        elif action == "create_asset":
            return await self._create_asset_logic(kwargs["payload"], kwargs["owner_id"])
        elif action == "update_asset":
            return await self._update_asset_logic(kwargs["asset_id"], kwargs["payload"])
        elif action == "delete_asset":
            return await self._delete_asset_logic(kwargs["asset_id"])
        elif action == "snapshot":
            return await self.store.list_assets()
        else:
            raise AppError(f"Unknown action: {action}")

    async def snapshot(self) -> List[Asset]:
        """Read the full collection as one snapshot."""
        return await self.execute(action="snapshot")

    async def list_assets(self, filters: Optional[CatalogFilter] = None) -> List[Asset]:
        """List assets matching the catalog filters, in store order."""
        return await self.execute(action="list_assets", filters=filters)

    async def get_asset(self, asset_id: str) -> Asset:
        """Fetch one asset.

        Raises:
            AssetNotFoundError: If the id does not exist
        """
        return await self.execute(action="get_asset", asset_id=asset_id)

    async def create_asset(self, payload: AssetCreate, owner_id: str) -> Asset:
        """Create an asset owned by ``owner_id``."""
        return await self.execute(action="create_asset", payload=payload, owner_id=owner_id)

    async def update_asset(self, asset_id: str, payload: AssetUpdate) -> Asset:
        """Apply a partial update.

        Raises:
            AssetNotFoundError: If the id does not exist
            ImmutableFieldError: If the update tries to change the asset type
        """
        return await self.execute(action="update_asset", asset_id=asset_id, payload=payload)

    async def delete_asset(self, asset_id: str) -> None:
        """Delete an asset.

        Raises:
            AssetNotFoundError: If the id does not exist
        """
        return await self.execute(action="delete_asset", asset_id=asset_id)

    async def _list_assets_logic(self, filters: Optional[CatalogFilter]) -> List[Asset]:
        assets = await self.store.list_assets()
        if filters is None:
            return assets
        return [asset for asset in assets if filters.matches(asset)]

    async def _get_asset_logic(self, asset_id: str) -> Asset:
        asset = await self.store.get_asset(asset_id)
        if asset is None:
            raise AssetNotFoundError(asset_id)
        return asset

    async def _create_asset_logic(self, payload: AssetCreate, owner_id: str) -> Asset:
        fields: Dict[str, Any] = payload.model_dump(mode="json")
        fields["owner_id"] = owner_id
        fields["creation_date"] = payload.creation_date or utc_now_iso()

        asset_type = AssetType(payload.asset_type)
        if asset_type in FIXED_DATA_TYPES:
            fields["data_type"] = FIXED_DATA_TYPES[asset_type]

        asset = await self.store.create_asset(fields)

        LOGGER.info(
            f"Asset created: id={asset.id}, type={asset.asset_type}",
            extra={"owner_id": owner_id},
        )
        self.change_feed.publish(CatalogEventType.ASSET_CREATED, asset.id, asset.asset_type)
        return asset

    async def _update_asset_logic(self, asset_id: str, payload: AssetUpdate) -> Asset:
        current = await self._get_asset_logic(asset_id)
        current_type = AssetType(current.asset_type)

        changes = payload.model_dump(exclude_unset=True, mode="json")

        requested_type = changes.pop("asset_type", None)
        if requested_type is not None and requested_type != current_type.value:
            raise ImmutableFieldError(
                "asset_type",
                f"Asset {asset_id} is a {current_type.value} and cannot become a {requested_type}",
            )

        allowed = COMMON_UPDATE_FIELDS | VARIANT_FIELDS[current_type]
        ignored = sorted(set(changes) - allowed)
        if ignored:
            LOGGER.debug(
                f"Ignoring fields not applicable to {current_type.value}: {', '.join(ignored)}"
            )

        fields = {
            key: value
            for key, value in changes.items()
            if key in allowed and (value is not None or key in NULLABLE_FIELDS)
        }
        if not fields:
            return current

        updated = await self.store.update_asset(asset_id, fields)
        if updated is None:
            # Deleted between the read and the write
            raise AssetNotFoundError(asset_id)

        LOGGER.info(f"Asset updated: id={asset_id}, fields={sorted(fields)}")
        self.change_feed.publish(CatalogEventType.ASSET_UPDATED, asset_id, updated.asset_type)
        return updated

    async def _delete_asset_logic(self, asset_id: str) -> None:
        current = await self._get_asset_logic(asset_id)

        if not await self.store.delete_asset(asset_id):
            raise AssetNotFoundError(asset_id)

        LOGGER.info(f"Asset deleted: id={asset_id}")
        self.change_feed.publish(CatalogEventType.ASSET_DELETED, asset_id, current.asset_type)
