"""Database module for SQLAlchemy models."""

from asset_catalog.database.models import AssetRecord

__all__ = ["AssetRecord"]
