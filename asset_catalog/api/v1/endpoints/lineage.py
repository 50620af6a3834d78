"""Lineage graph endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request

from asset_catalog.core.dependencies import get_catalog_service
from asset_catalog.core.exceptions import AssetNotFoundError
from asset_catalog.schemas.responses import ApiResponse
from asset_catalog.services.catalog_service import AssetCatalogService
from asset_catalog.services.lineage import build_lineage, find_asset
from asset_catalog.utils.logging import get_logger
from asset_catalog.utils.responses import create_api_response

LOGGER = get_logger(__name__)

router = APIRouter()


@router.get(
    "/",
    response_model=ApiResponse,
    summary="Get the lineage graph",
    description="Lay out Policy, Claim and Model assets as a three-column graph",
    operation_id="get_lineage_graph",
)
async def get_lineage_graph(
    request: Request,
    catalog_service: Annotated[AssetCatalogService, Depends(get_catalog_service)],
) -> ApiResponse:
    snapshot = await catalog_service.snapshot()
    graph = build_lineage(snapshot)

    return create_api_response(
        data=graph,
        message="No assets to display" if graph.is_empty else "Lineage graph built successfully",
        request=request,
    )


@router.get(
    "/nodes/{node_id}",
    response_model=ApiResponse,
    summary="Get lineage node detail",
    operation_id="get_lineage_node",
)
async def get_lineage_node(
    request: Request,
    node_id: str,
    catalog_service: Annotated[AssetCatalogService, Depends(get_catalog_service)],
) -> ApiResponse:
    """Return the full asset behind a selected graph node."""
    snapshot = await catalog_service.snapshot()
    asset = find_asset(snapshot, node_id)
    if asset is None:
        raise AssetNotFoundError(node_id)

    return create_api_response(data=asset, message="Node retrieved successfully", request=request)
