"""Fraud heuristic report schemas."""

from typing import List

from pydantic import BaseModel, Field

from asset_catalog.schemas.assets import ClaimAsset


class ClaimAssessment(BaseModel):
    """A claim annotated with the fraud heuristic result."""

    claim: ClaimAsset
    suspicious: bool


class FraudSummary(BaseModel):
    """Aggregate fraud statistics over a set of claims."""

    total_claims: int = Field(..., ge=0)
    suspicious_claims: int = Field(..., ge=0)
    fraud_rate: float = Field(..., description="Suspicious share in percent, one decimal place")
    elevated: bool = Field(..., description="Fraud rate is above the alert level")


class FraudRule(BaseModel):
    """Thresholds the heuristic was evaluated with."""

    amount_threshold: float
    window_days: int


class FraudReport(BaseModel):
    assessments: List[ClaimAssessment] = Field(default_factory=list)
    summary: FraudSummary
    rule: FraudRule
