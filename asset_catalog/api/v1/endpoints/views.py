"""Combined catalog views computed from one snapshot."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request

from asset_catalog.core.dependencies import (
    get_catalog_service,
    get_change_feed,
    get_fraud_evaluator,
)
from asset_catalog.schemas.responses import ApiResponse
from asset_catalog.services.catalog_service import AssetCatalogService
from asset_catalog.services.catalog_views import recompute
from asset_catalog.services.change_feed import ChangeFeed
from asset_catalog.services.fraud import FraudHeuristicEvaluator
from asset_catalog.utils.responses import create_api_response

router = APIRouter()


@router.get(
    "/",
    response_model=ApiResponse,
    summary="Get lineage and fraud views",
    description="Recompute the lineage graph and fraud report from the same snapshot",
    operation_id="get_catalog_views",
)
async def get_catalog_views(
    request: Request,
    catalog_service: Annotated[AssetCatalogService, Depends(get_catalog_service)],
    evaluator: Annotated[FraudHeuristicEvaluator, Depends(get_fraud_evaluator)],
    feed: Annotated[ChangeFeed, Depends(get_change_feed)],
) -> ApiResponse:
    # Read the version first so a write racing the snapshot shows up as stale
    version = feed.version
    snapshot = await catalog_service.snapshot()
    views = recompute(snapshot, evaluator, version=version)

    return create_api_response(data=views, message="Catalog views computed", request=request)
