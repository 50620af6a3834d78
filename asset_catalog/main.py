"""FastAPI application entry point."""

from contextlib import asynccontextmanager
from typing import AsyncGenerator
from uuid import uuid4

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from asset_catalog.api.v1.endpoints import health
from asset_catalog.api.v1.router import api_router
from asset_catalog.core.config import settings
from asset_catalog.core.database import close_database, init_database
from asset_catalog.core.exceptions import AppError
from asset_catalog.utils.logging import get_logger
from asset_catalog.utils.responses import create_error_detail, status_for_error

LOGGER = get_logger(__name__, level=settings.log_level)


class RootResponse(BaseModel):
    """Root endpoint response payload."""

    message: str = Field(..., description="Service status message")
    version: str = Field(..., description="Running application version")
    docs: str = Field(..., description="Path to the interactive API docs")
    health: str = Field(..., description="Path to the health check endpoint")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager."""
    # Startup
    LOGGER.info(
        "Starting application",
        extra={
            "app_name": settings.app_name,
            "version": settings.app_version,
            "environment": settings.environment,
            "storage_backend": settings.storage_backend,
        },
    )

    if settings.uses_sql_store:
        LOGGER.info("Starting database initialization...")
        try:
            await init_database(create_tables=True)
            LOGGER.info("Database initialized successfully")
        except Exception as e:
            LOGGER.error(f"Database initialization failed: {e}", exc_info=True)
    else:
        LOGGER.info("Using in-memory asset store, skipping database initialization")

    yield

    # Shutdown
    LOGGER.info("Shutting down application")
    if settings.uses_sql_store:
        await close_database()


# Create FastAPI application
app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description="Metadata catalog for insurance policies, claims and models with lineage and fraud views",
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
    lifespan=lifespan,
)


@app.middleware("http")
async def add_request_id(request: Request, call_next):
    request_id = request.headers.get("X-Request-ID", str(uuid4()))
    request.state.request_id = request_id
    response = await call_next(request)
    response.headers["X-Request-ID"] = request_id
    return response


app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "PATCH", "OPTIONS"],
    allow_headers=["*"],
    expose_headers=["X-Request-ID"],
)


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    status_code, title = status_for_error(exc)
    if status_code >= 500:
        LOGGER.error(f"{title}: {exc.message}", extra={"path": request.url.path})
    else:
        LOGGER.warning(f"{title}: {exc.message}", extra={"path": request.url.path})

    error_detail = create_error_detail(
        title=title,
        status=status_code,
        detail=exc.message,
        request=request,
    )
    return JSONResponse(
        status_code=status_code,
        content={"detail": error_detail.model_dump(mode="json")},
    )


# Include routers
app.include_router(api_router, prefix=settings.api_v1_prefix)
app.include_router(health.router, prefix="/health", tags=["Health"])


@app.get(
    "/",
    response_model=RootResponse,
    tags=["Root"],
    summary="Root endpoint",
    description="Get basic information about the API",
    operation_id="get_public_root_metadata",
)
async def root() -> RootResponse:
    """Root endpoint.

    Returns:
        RootResponse: Basic API information
    """
    return RootResponse(
        message="Server is running",
        version=settings.app_version,
        docs="/docs",
        health="/health",
    )


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "asset_catalog.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
        log_level=settings.log_level.lower(),
    )
