"""Rule-based fraud heuristic for claims.

A claim is suspicious when both hold against its linked policy:

1. the claimed amount is strictly above ``AMOUNT_THRESHOLD``;
2. fewer than ``WINDOW_DAYS`` whole days passed between the policy's and
   the claim's creation timestamps.

Days are floored from the signed difference, so a claim dated before its
policy still falls inside the window. A claim whose policy does not resolve,
or whose timestamps cannot be parsed, is never suspicious. Nothing here
raises or performs I/O.
"""

import math
from decimal import ROUND_HALF_UP, Decimal
from typing import Dict, Iterable, List, Mapping, Optional, Sequence

from asset_catalog.schemas.assets import Asset, AssetType, ClaimAsset, PolicyAsset
from asset_catalog.schemas.fraud import ClaimAssessment, FraudReport, FraudRule, FraudSummary
from asset_catalog.utils.timestamps import parse_iso_timestamp

AMOUNT_THRESHOLD = 5000
WINDOW_DAYS = 90
ELEVATED_RATE_PERCENT = 20.0

SECONDS_PER_DAY = 24 * 60 * 60
ONE_DECIMAL = Decimal("0.1")


def days_between(start: str, end: str) -> Optional[int]:
    """Whole days from ``start`` to ``end``, floored; negative when ``end`` is earlier.

    Returns None if either timestamp is unparseable.
    """
    start_at = parse_iso_timestamp(start)
    end_at = parse_iso_timestamp(end)
    if start_at is None or end_at is None:
        return None
    return math.floor((end_at - start_at).total_seconds() / SECONDS_PER_DAY)


def index_policies(policies: Iterable[PolicyAsset]) -> Dict[str, PolicyAsset]:
    """Map policy id to policy, first occurrence wins."""
    by_id: Dict[str, PolicyAsset] = {}
    for policy in policies:
        by_id.setdefault(policy.id, policy)
    return by_id


def is_suspicious(
    claim: ClaimAsset,
    policies_by_id: Mapping[str, PolicyAsset],
    amount_threshold: float = AMOUNT_THRESHOLD,
    window_days: int = WINDOW_DAYS,
) -> bool:
    """Apply the two-condition rule to one claim."""
    if claim.claim_amount <= amount_threshold:
        return False

    policy = policies_by_id.get(claim.policy_id)
    if policy is None:
        return False

    elapsed = days_between(policy.creation_date, claim.creation_date)
    if elapsed is None:
        return False

    return elapsed < window_days


def fraud_rate(suspicious: int, total: int) -> float:
    """Suspicious share in percent rounded half up to one decimal; 0 for no claims."""
    if total <= 0:
        return 0.0
    # Decimal(float) keeps the exact binary value; exact ties round up
    percent = Decimal(suspicious / total * 100)
    return float(percent.quantize(ONE_DECIMAL, rounding=ROUND_HALF_UP))


class FraudHeuristicEvaluator:
    """Stateless evaluator of the fraud rule over claim and policy subsets.

    Instances only carry the rule thresholds, so one evaluator can be shared
    across requests and invoked on any number of snapshots.
    """

    def __init__(
        self,
        amount_threshold: float = AMOUNT_THRESHOLD,
        window_days: int = WINDOW_DAYS,
        elevated_rate: float = ELEVATED_RATE_PERCENT,
    ):
        self.amount_threshold = amount_threshold
        self.window_days = window_days
        self.elevated_rate = elevated_rate

    def assess(
        self, claims: Sequence[ClaimAsset], policies: Sequence[PolicyAsset]
    ) -> List[ClaimAssessment]:
        """Annotate each claim with its suspicious flag, keeping input order."""
        policies_by_id = index_policies(policies)
        return [
            ClaimAssessment(
                claim=claim,
                suspicious=is_suspicious(
                    claim,
                    policies_by_id,
                    amount_threshold=self.amount_threshold,
                    window_days=self.window_days,
                ),
            )
            for claim in claims
        ]

    def summarize(self, assessments: Sequence[ClaimAssessment]) -> FraudSummary:
        total = len(assessments)
        suspicious = sum(1 for item in assessments if item.suspicious)
        rate = fraud_rate(suspicious, total)
        return FraudSummary(
            total_claims=total,
            suspicious_claims=suspicious,
            fraud_rate=rate,
            elevated=rate > self.elevated_rate,
        )

    def evaluate(
        self, claims: Sequence[ClaimAsset], policies: Sequence[PolicyAsset]
    ) -> FraudReport:
        """Classify every claim and aggregate the totals.

        Args:
            claims: Claim subset of a snapshot
            policies: Policy subset of the same snapshot

        Returns:
            FraudReport with per-claim assessments and summary counts
        """
        assessments = self.assess(claims, policies)
        return FraudReport(
            assessments=assessments,
            summary=self.summarize(assessments),
            rule=FraudRule(amount_threshold=self.amount_threshold, window_days=self.window_days),
        )

    def evaluate_assets(self, assets: Iterable[Asset]) -> FraudReport:
        """Evaluate a full snapshot, ignoring Model assets."""
        claims: List[ClaimAsset] = []
        policies: List[PolicyAsset] = []
        for asset in assets:
            if asset.asset_type == AssetType.CLAIM:
                claims.append(asset)
            elif asset.asset_type == AssetType.POLICY:
                policies.append(asset)
        return self.evaluate(claims, policies)
