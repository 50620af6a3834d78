from datetime import datetime, timezone
from typing import Any, Dict, Optional
from uuid import uuid4

from fastapi import Request, status

from asset_catalog.core.exceptions import (
    AppError,
    AssetNotFoundError,
    ImmutableFieldError,
    ReadOnlyCatalogError,
    ValidationError,
)
from asset_catalog.schemas.responses import ApiResponse, ErrorDetail, ResponseMeta


def _request_id(request: Optional[Request]) -> str:
    if request is not None and hasattr(request.state, "request_id"):
        return request.state.request_id
    return str(uuid4())


def create_api_response(
    data: Any,
    message: str = "Operation successful",
    status: bool = True,
    request: Optional[Request] = None,
    api_version: str = "v1"
) -> Dict[str, Any]:
    """Create a standardized API response as a dictionary."""
    meta = ResponseMeta(
        timestamp=datetime.now(timezone.utc),
        request_id=_request_id(request),
        api_version=api_version
    )

    data_dict: Dict[str, Any] = {}
    if isinstance(data, dict):
        data_dict = data
    elif hasattr(data, "model_dump"):
        data_dict = data.model_dump(mode="json")
    elif isinstance(data, list):
        data_dict = {
            "items": [item.model_dump(mode="json") if hasattr(item, "model_dump") else item for item in data]
        }
    elif data is not None:
        data_dict = {"value": data}

    response = ApiResponse(
        status=status,
        message=message,
        data=data_dict,
        meta=meta
    )
    return response.model_dump(mode="json")


def create_error_detail(
    title: str,
    status: int,
    detail: str,
    request: Optional[Request] = None,
    instance: Optional[str] = None
) -> ErrorDetail:
    """Create a standardized error detail (RFC 7807)."""
    return ErrorDetail(
        title=title,
        status=status,
        detail=detail,
        instance=instance or (request.url.path if request else None),
        request_id=_request_id(request),
        timestamp=datetime.now(timezone.utc)
    )


def status_for_error(error: AppError) -> tuple[int, str]:
    """HTTP status code and problem title for an application error."""
    if isinstance(error, AssetNotFoundError):
        return status.HTTP_404_NOT_FOUND, "Asset Not Found"
    if isinstance(error, ImmutableFieldError):
        return status.HTTP_409_CONFLICT, "Immutable Field"
    if isinstance(error, ValidationError):
        return 422, "Validation Failed"
    if isinstance(error, ReadOnlyCatalogError):
        return status.HTTP_403_FORBIDDEN, "Catalog Is Read-Only"
    return status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal Error"
