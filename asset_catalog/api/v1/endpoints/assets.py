"""Catalog asset endpoints: filtered listing and CRUD."""

from typing import Annotated, Optional, Union

from fastapi import APIRouter, Body, Depends, Query, Request, status

from asset_catalog.core.auth import get_current_user
from asset_catalog.core.dependencies import get_catalog_service
from asset_catalog.schemas.assets import (
    AssetListResponse,
    AssetType,
    AssetUpdate,
    CatalogFilter,
    ClaimCreate,
    ModelCreate,
    PolicyCreate,
    RegTag,
)
from asset_catalog.schemas.auth import CurrentUser
from asset_catalog.schemas.responses import ApiResponse
from asset_catalog.services.catalog_service import AssetCatalogService
from asset_catalog.utils.logging import get_logger
from asset_catalog.utils.responses import create_api_response

LOGGER = get_logger(__name__)

router = APIRouter()

ALL = "all"


def _optional_enum(enum_cls, value: Optional[str]):
    if value is None or value == ALL:
        return None
    return enum_cls(value)


@router.get(
    "/",
    response_model=ApiResponse,
    summary="List catalog assets",
    operation_id="list_assets",
)
async def list_assets(
    request: Request,
    catalog_service: Annotated[AssetCatalogService, Depends(get_catalog_service)],
    search: Optional[str] = Query(None, description="Case-insensitive substring of the asset name"),
    asset_type: Optional[str] = Query(
        None, pattern="^(all|Policy|Claim|Model)$", description="Asset type or 'all'"
    ),
    reg_tag: Optional[str] = Query(
        None, pattern="^(all|GDPR|HIPAA|CCPA|None)$", description="Regulatory tag or 'all'"
    ),
) -> ApiResponse:
    """List assets, optionally filtered by name, type and regulatory tag."""
    filters = CatalogFilter(
        search=search or None,
        asset_type=_optional_enum(AssetType, asset_type),
        reg_tag=_optional_enum(RegTag, reg_tag),
    )
    assets = await catalog_service.list_assets(filters)

    return create_api_response(
        data=AssetListResponse(total=len(assets), assets=assets),
        message="Assets retrieved successfully" if assets else "No assets found matching your filters",
        request=request,
    )


@router.post(
    "/",
    response_model=ApiResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create an asset",
    operation_id="create_asset",
)
async def create_asset(
    request: Request,
    payload: Annotated[
        Union[PolicyCreate, ClaimCreate, ModelCreate], Body(discriminator="asset_type")
    ],
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    catalog_service: Annotated[AssetCatalogService, Depends(get_catalog_service)],
) -> ApiResponse:
    """Create a Policy, Claim or Model owned by the caller."""
    asset = await catalog_service.create_asset(payload, owner_id=current_user.id)

    return create_api_response(
        data=asset,
        message="Asset created successfully",
        request=request,
    )


@router.get(
    "/{asset_id}",
    response_model=ApiResponse,
    summary="Get an asset",
    operation_id="get_asset",
)
async def get_asset(
    request: Request,
    asset_id: str,
    catalog_service: Annotated[AssetCatalogService, Depends(get_catalog_service)],
) -> ApiResponse:
    asset = await catalog_service.get_asset(asset_id)
    return create_api_response(data=asset, message="Asset retrieved successfully", request=request)


@router.patch(
    "/{asset_id}",
    response_model=ApiResponse,
    summary="Update an asset",
    operation_id="update_asset",
)
async def update_asset(
    request: Request,
    asset_id: str,
    payload: AssetUpdate,
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    catalog_service: Annotated[AssetCatalogService, Depends(get_catalog_service)],
) -> ApiResponse:
    """Partially update an asset. The asset type and creation date never change."""
    LOGGER.info(f"Updating asset {asset_id} for user: {current_user.id}")
    asset = await catalog_service.update_asset(asset_id, payload)

    return create_api_response(data=asset, message="Asset updated successfully", request=request)


@router.delete(
    "/{asset_id}",
    response_model=ApiResponse,
    summary="Delete an asset",
    operation_id="delete_asset",
)
async def delete_asset(
    request: Request,
    asset_id: str,
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    catalog_service: Annotated[AssetCatalogService, Depends(get_catalog_service)],
) -> ApiResponse:
    LOGGER.info(f"Deleting asset {asset_id} for user: {current_user.id}")
    await catalog_service.delete_asset(asset_id)

    return create_api_response(
        data={"id": asset_id, "deleted": True},
        message="Asset deleted successfully",
        request=request,
    )
