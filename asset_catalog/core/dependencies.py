"""Centralized dependency injection for the FastAPI application.

The change feed and the in-memory store are process-wide singletons; the
SQL store is created per request around its own session.
"""

from collections.abc import AsyncGenerator
from typing import Annotated

from fastapi import Depends

from asset_catalog.core.config import settings
from asset_catalog.core.database import async_session_maker
from asset_catalog.repositories.asset_repository import SqlAssetRepository
from asset_catalog.repositories.asset_store import AssetStore
from asset_catalog.repositories.memory_asset_repository import InMemoryAssetRepository
from asset_catalog.services.catalog_service import AssetCatalogService
from asset_catalog.services.change_feed import ChangeFeed
from asset_catalog.services.fraud.evaluator import FraudHeuristicEvaluator

change_feed = ChangeFeed(queue_size=settings.catalog.change_feed_queue_size)
memory_store = InMemoryAssetRepository()
fraud_evaluator = FraudHeuristicEvaluator()


async def get_asset_store() -> AsyncGenerator[AssetStore, None]:
    """Get the configured asset store.

    Yields:
        AssetStore: SQL store bound to a fresh session, or the shared in-memory store
    """
    if settings.uses_sql_store:
        async with async_session_maker() as session:
            yield SqlAssetRepository(session)
    else:
        yield memory_store


def get_change_feed() -> ChangeFeed:
    return change_feed


def get_fraud_evaluator() -> FraudHeuristicEvaluator:
    return fraud_evaluator


async def get_catalog_service(
    store: Annotated[AssetStore, Depends(get_asset_store)],
    feed: Annotated[ChangeFeed, Depends(get_change_feed)],
) -> AssetCatalogService:
    """Get catalog service instance.

    Args:
        store: Asset store from dependency injection
        feed: Shared change feed

    Returns:
        AssetCatalogService: Service for catalog reads and writes
    """
    return AssetCatalogService(store, feed, read_only=settings.catalog.read_only)
