"""Fraud heuristic evaluator."""

from asset_catalog.services.fraud.evaluator import (
    AMOUNT_THRESHOLD,
    WINDOW_DAYS,
    FraudHeuristicEvaluator,
    is_suspicious,
)

__all__ = ["AMOUNT_THRESHOLD", "WINDOW_DAYS", "FraudHeuristicEvaluator", "is_suspicious"]
