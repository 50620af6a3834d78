"""Unit tests for the claim fraud heuristic."""

import pytest

from asset_catalog.services.fraud import FraudHeuristicEvaluator, is_suspicious
from asset_catalog.services.fraud.evaluator import days_between, fraud_rate, index_policies


@pytest.fixture
def policy(policy_factory):
    return policy_factory("P1", creation_date="2024-01-01T00:00:00Z")


@pytest.fixture
def policies_by_id(policy):
    return index_policies([policy])


class TestIsSuspicious:
    """The two-condition rule applied to single claims."""

    @pytest.mark.parametrize(
        "claim_amount, claim_date, expected",
        [
            (6000, "2024-02-01", True),
            (4000, "2024-02-01", False),
            (6000, "2024-06-01", False),
        ],
        ids=["high-amount-inside-window", "low-amount", "outside-window"],
    )
    def test_reference_cases(self, claim_factory, policy_factory, claim_amount, claim_date, expected):
        policies = index_policies([policy_factory("P1", creation_date="2024-01-01")])
        claim = claim_factory("C1", "P1", claim_amount=claim_amount, creation_date=claim_date)

        assert is_suspicious(claim, policies) is expected

    def test_high_amount_inside_window(self, claim_factory, policies_by_id):
        claim = claim_factory("C1", "P1", claim_amount=10000, creation_date="2024-01-31T00:00:00Z")
        assert is_suspicious(claim, policies_by_id) is True

    def test_amount_at_threshold_is_not_suspicious(self, claim_factory, policies_by_id):
        claim = claim_factory("C1", "P1", claim_amount=5000, creation_date="2024-01-02T00:00:00Z")
        assert is_suspicious(claim, policies_by_id) is False

    def test_low_amount_is_not_suspicious(self, claim_factory, policies_by_id):
        claim = claim_factory("C1", "P1", claim_amount=1200, creation_date="2024-01-10T00:00:00Z")
        assert is_suspicious(claim, policies_by_id) is False

    def test_outside_window_is_not_suspicious(self, claim_factory, policies_by_id):
        claim = claim_factory("C1", "P1", claim_amount=20000, creation_date="2024-06-01T00:00:00Z")
        assert is_suspicious(claim, policies_by_id) is False

    def test_exactly_ninety_days_is_outside_window(self, claim_factory, policies_by_id):
        # 2024 is a leap year: Jan 1 + 90 days = Mar 31
        claim = claim_factory("C1", "P1", claim_amount=20000, creation_date="2024-03-31T00:00:00Z")
        assert is_suspicious(claim, policies_by_id) is False

    def test_eighty_nine_and_a_half_days_is_inside_window(self, claim_factory, policies_by_id):
        claim = claim_factory("C1", "P1", claim_amount=20000, creation_date="2024-03-30T12:00:00Z")
        assert is_suspicious(claim, policies_by_id) is True

    def test_dangling_policy_is_not_suspicious(self, claim_factory, policies_by_id):
        claim = claim_factory("C1", "P-missing", claim_amount=50000, creation_date="2024-01-02T00:00:00Z")
        assert is_suspicious(claim, policies_by_id) is False

    def test_claim_before_policy_is_inside_window(self, claim_factory, policies_by_id):
        claim = claim_factory("C1", "P1", claim_amount=8000, creation_date="2023-12-01T00:00:00Z")
        assert is_suspicious(claim, policies_by_id) is True

    def test_unparseable_timestamp_is_not_suspicious(self, claim_factory, policy_factory):
        policies = index_policies([policy_factory("P1", creation_date="not a date")])
        claim = claim_factory("C1", "P1", claim_amount=8000, creation_date="2024-01-02T00:00:00Z")
        assert is_suspicious(claim, policies) is False

    def test_custom_thresholds(self, claim_factory, policies_by_id):
        claim = claim_factory("C1", "P1", claim_amount=600, creation_date="2024-01-05T00:00:00Z")
        assert is_suspicious(claim, policies_by_id, amount_threshold=500, window_days=7) is True


class TestDaysBetween:
    def test_floors_partial_days(self):
        assert days_between("2024-01-01T00:00:00Z", "2024-01-02T23:59:00Z") == 1

    def test_negative_difference_floors_down(self):
        assert days_between("2024-01-02T00:00:00Z", "2024-01-01T12:00:00Z") == -1

    def test_date_only_values(self):
        assert days_between("2024-01-01", "2024-01-31") == 30

    def test_unparseable(self):
        assert days_between("yesterday", "2024-01-01") is None


class TestFraudRate:
    def test_rounds_to_one_decimal(self):
        assert fraud_rate(1, 3) == 33.3

    def test_no_claims(self):
        assert fraud_rate(0, 0) == 0

    @pytest.mark.parametrize("suspicious, total, expected", [(5, 400, 1.3), (1, 400, 0.3), (1, 8, 12.5)])
    def test_exact_ties_round_up(self, suspicious, total, expected):
        assert fraud_rate(suspicious, total) == expected


class TestFraudHeuristicEvaluator:
    """Aggregation over claim and policy subsets."""

    def test_three_of_ten_suspicious(self, policy, claim_factory):
        suspicious = [
            claim_factory(f"S{i}", "P1", claim_amount=9000, creation_date="2024-01-15T00:00:00Z")
            for i in range(3)
        ]
        benign = [
            claim_factory(f"B{i}", "P1", claim_amount=100, creation_date="2024-01-15T00:00:00Z")
            for i in range(7)
        ]

        report = FraudHeuristicEvaluator().evaluate(suspicious + benign, [policy])

        assert report.summary.total_claims == 10
        assert report.summary.suspicious_claims == 3
        assert report.summary.fraud_rate == 30.0
        assert report.summary.elevated is True

    def test_no_claims(self, policy):
        report = FraudHeuristicEvaluator().evaluate([], [policy])

        assert report.assessments == []
        assert report.summary.total_claims == 0
        assert report.summary.fraud_rate == 0
        assert report.summary.elevated is False

    def test_assessments_keep_input_order(self, policy, claim_factory):
        claims = [
            claim_factory("C2", "P1", claim_amount=100),
            claim_factory("C1", "P1", claim_amount=9000, creation_date="2024-01-05T00:00:00Z"),
        ]
        report = FraudHeuristicEvaluator().evaluate(claims, [policy])

        assert [item.claim.id for item in report.assessments] == ["C2", "C1"]
        assert [item.suspicious for item in report.assessments] == [False, True]

    def test_rate_at_alert_level_is_not_elevated(self, policy, claim_factory):
        claims = [claim_factory("S", "P1", claim_amount=9000, creation_date="2024-01-05T00:00:00Z")]
        claims += [claim_factory(f"B{i}", "P1", claim_amount=10) for i in range(4)]

        report = FraudHeuristicEvaluator().evaluate(claims, [policy])

        assert report.summary.fraud_rate == 20.0
        assert report.summary.elevated is False

    def test_evaluate_assets_partitions_snapshot(self, sample_assets):
        report = FraudHeuristicEvaluator().evaluate_assets(sample_assets)

        assert [item.claim.id for item in report.assessments] == ["C1", "C2"]
        assert [item.suspicious for item in report.assessments] == [True, False]
        assert report.summary.fraud_rate == 50.0
        assert report.rule.amount_threshold == 5000
        assert report.rule.window_days == 90

    def test_rate_tie_in_report_rounds_up(self, policy, claim_factory):
        claims = [
            claim_factory(f"S{i}", "P1", claim_amount=9000, creation_date="2024-01-15T00:00:00Z")
            for i in range(5)
        ]
        claims += [claim_factory(f"B{i}", "P1", claim_amount=10) for i in range(395)]

        report = FraudHeuristicEvaluator().evaluate(claims, [policy])

        assert report.summary.suspicious_claims == 5
        assert report.summary.fraud_rate == 1.3

    def test_evaluator_is_reusable(self, sample_assets):
        evaluator = FraudHeuristicEvaluator()

        assert evaluator.evaluate_assets(sample_assets) == evaluator.evaluate_assets(sample_assets)
