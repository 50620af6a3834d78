"""Health check API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends

from asset_catalog.core.config import settings
from asset_catalog.core.dependencies import get_asset_store
from asset_catalog.repositories.asset_store import AssetStore
from asset_catalog.schemas.responses import HealthCheckResponse
from asset_catalog.utils.logging import get_logger

LOGGER = get_logger(__name__)

router = APIRouter()


@router.get(
    "/",
    response_model=HealthCheckResponse,
    summary="Health check endpoint",
    description="Check if the service and its asset store are healthy",
    operation_id="get_service_health_status",
)
async def health_check(
    store: Annotated[AssetStore, Depends(get_asset_store)],
) -> HealthCheckResponse:
    """Health check endpoint."""
    store_health = await store.health_check()
    if store_health.get("status") != "healthy":
        LOGGER.warning(f"Asset store unhealthy: {store_health}")

    return HealthCheckResponse(
        status="healthy" if store_health.get("status") == "healthy" else "degraded",
        version=settings.app_version,
        service=settings.app_name,
        storage_backend=store.backend_name,
    )
