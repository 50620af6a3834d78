"""Relational asset store backed by the ``catalog_assets`` table."""

import uuid
from decimal import Decimal
from typing import Any, Dict, List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from asset_catalog.database.models import AssetRecord
from asset_catalog.repositories.asset_store import AssetStore
from asset_catalog.repositories.base_repository import BaseRepository
from asset_catalog.schemas.assets import Asset, AssetType, asset_adapter
from asset_catalog.utils.logging import get_logger

LOGGER = get_logger(__name__)


def record_to_asset(record: AssetRecord) -> Asset:
    """Convert a table row into the matching asset variant."""
    data: Dict[str, Any] = {
        "id": record.id,
        "asset_type": record.asset_type,
        "name": record.name,
        "description": record.description,
        "owner_id": record.owner_id,
        "creation_date": record.creation_date,
        "pii_tag": bool(record.pii_tag),
        "reg_tag": record.reg_tag or "None",
    }

    if record.asset_type == AssetType.CLAIM:
        data["claim_amount"] = float(record.claim_amount or 0)
        data["status"] = record.status or "New"
        data["policy_id"] = record.policy_id or ""
    elif record.asset_type == AssetType.MODEL:
        data["source_claim_ids"] = list(record.source_claim_ids or [])

    return asset_adapter.validate_python(data)


def fields_to_columns(fields: Dict[str, Any]) -> Dict[str, Any]:
    """Adapt asset field values to column types."""
    columns = {}
    for key, value in fields.items():
        if not hasattr(AssetRecord, key):
            continue
        if key == "claim_amount" and value is not None:
            value = Decimal(str(value))
        elif key in ("reg_tag", "status", "asset_type") and hasattr(value, "value"):
            value = value.value
        columns[key] = value
    return columns


class SqlAssetRepository(BaseRepository[AssetRecord], AssetStore):
    """Asset store over PostgreSQL through SQLAlchemy's async session."""

    backend_name = "sql"

    def __init__(self, session: AsyncSession):
        super().__init__(session, AssetRecord)

    async def list_assets(self) -> List[Asset]:
        records = await self.get_all(order_by=[AssetRecord.created_at, AssetRecord.id])
        return [record_to_asset(record) for record in records]

    async def get_asset(self, asset_id: str) -> Optional[Asset]:
        record = await self.get_by_id(asset_id)
        return record_to_asset(record) if record else None

    async def create_asset(self, fields: Dict[str, Any]) -> Asset:
        columns = fields_to_columns(fields)
        columns.setdefault("id", str(uuid.uuid4()))
        record = await self.create(**columns)
        LOGGER.info(f"Created {record.asset_type} asset: {record.id}")
        return record_to_asset(record)

    async def update_asset(self, asset_id: str, fields: Dict[str, Any]) -> Optional[Asset]:
        record = await self.update(asset_id, **fields_to_columns(fields))
        if record is None:
            return None
        LOGGER.info(f"Updated asset: {asset_id}")
        return record_to_asset(record)

    async def delete_asset(self, asset_id: str) -> bool:
        deleted = await self.delete(asset_id)
        if deleted:
            LOGGER.info(f"Deleted asset: {asset_id}")
        return deleted

    async def health_check(self) -> Dict[str, Any]:
        from asset_catalog.core.database import db_client

        health = await db_client.health_check()
        return {**health, "backend": self.backend_name}
