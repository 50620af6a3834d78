"""Repository layer modules."""

from asset_catalog.repositories.asset_repository import SqlAssetRepository
from asset_catalog.repositories.asset_store import AssetStore
from asset_catalog.repositories.memory_asset_repository import InMemoryAssetRepository

__all__ = [
    "AssetStore",
    "InMemoryAssetRepository",
    "SqlAssetRepository",
]
