"""Recompute every derived catalog view from one snapshot."""

from typing import Optional, Sequence

from pydantic import BaseModel

from asset_catalog.schemas.assets import Asset
from asset_catalog.schemas.fraud import FraudReport
from asset_catalog.schemas.lineage import LineageGraph
from asset_catalog.services.fraud.evaluator import FraudHeuristicEvaluator
from asset_catalog.services.lineage.builder import build_lineage


class CatalogViews(BaseModel):
    """Lineage graph and fraud report computed from the same snapshot."""

    asset_count: int
    version: Optional[int] = None
    lineage: LineageGraph
    fraud: FraudReport


def recompute(
    snapshot: Sequence[Asset],
    evaluator: Optional[FraudHeuristicEvaluator] = None,
    version: Optional[int] = None,
) -> CatalogViews:
    """Build both views for a fresh snapshot.

    Called whenever a new snapshot is available. The result depends only on
    ``snapshot``; nothing is cached between calls.

    Args:
        snapshot: Full asset collection in store order
        evaluator: Fraud evaluator to use, default thresholds when omitted
        version: Change-feed version the snapshot was read at, if known

    Returns:
        CatalogViews for the snapshot
    """
    evaluator = evaluator or FraudHeuristicEvaluator()
    return CatalogViews(
        asset_count=len(snapshot),
        version=version,
        lineage=build_lineage(snapshot),
        fraud=evaluator.evaluate_assets(snapshot),
    )
