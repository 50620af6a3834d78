"""Fraud heuristic endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request

from asset_catalog.core.dependencies import get_catalog_service, get_fraud_evaluator
from asset_catalog.schemas.responses import ApiResponse
from asset_catalog.services.catalog_service import AssetCatalogService
from asset_catalog.services.fraud import FraudHeuristicEvaluator
from asset_catalog.utils.logging import get_logger
from asset_catalog.utils.responses import create_api_response

LOGGER = get_logger(__name__)

router = APIRouter()


@router.get(
    "/",
    response_model=ApiResponse,
    summary="Get the fraud report",
    description="Flag high-value claims filed soon after their policy was created",
    operation_id="get_fraud_report",
)
async def get_fraud_report(
    request: Request,
    catalog_service: Annotated[AssetCatalogService, Depends(get_catalog_service)],
    evaluator: Annotated[FraudHeuristicEvaluator, Depends(get_fraud_evaluator)],
) -> ApiResponse:
    snapshot = await catalog_service.snapshot()
    report = evaluator.evaluate_assets(snapshot)

    if report.summary.elevated:
        LOGGER.warning(
            f"Elevated fraud rate: {report.summary.fraud_rate}%",
            extra={"suspicious_claims": report.summary.suspicious_claims},
        )

    return create_api_response(data=report, message="Fraud report generated", request=request)
