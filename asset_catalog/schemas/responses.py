"""Standard API envelope and error detail models."""

from datetime import datetime
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field


class ResponseMeta(BaseModel):
    timestamp: datetime
    request_id: str
    api_version: str = "v1"


class ApiResponse(BaseModel):
    """Envelope wrapping every successful API payload."""

    status: bool = True
    message: str = "Operation successful"
    data: Dict[str, Any] = Field(default_factory=dict)
    meta: ResponseMeta


class ErrorDetail(BaseModel):
    """RFC 7807 problem detail."""

    title: str
    status: int
    detail: str
    instance: Optional[str] = None
    request_id: str
    timestamp: datetime


class HealthCheckResponse(BaseModel):
    status: str = Field(..., description="Health check status", examples=["healthy", "degraded"])
    version: str = Field(..., description="Running application version")
    service: str = Field(..., description="Service name")
    storage_backend: str = Field(..., description="Active asset store")
