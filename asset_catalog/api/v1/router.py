from fastapi import APIRouter

from asset_catalog.api.v1.endpoints import assets, events, fraud, health, lineage, views

# Create API router
api_router = APIRouter()

# Include routers
api_router.include_router(assets.router, prefix="/assets", tags=["Assets"])
api_router.include_router(lineage.router, prefix="/lineage", tags=["Lineage"])
api_router.include_router(fraud.router, prefix="/fraud", tags=["Fraud"])
api_router.include_router(views.router, prefix="/views", tags=["Views"])
api_router.include_router(events.router, prefix="/events", tags=["Events"])
api_router.include_router(health.router, prefix="/health", tags=["Health"])

__all__ = ["api_router"]
