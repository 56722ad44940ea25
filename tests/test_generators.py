"""Tests for generators and simulated collaborators."""

from datetime import datetime
from decimal import Decimal

import pytest

from policy_flow.exceptions import InternalError, ValidationError
from policy_flow.generators import (
    PolicyRequestGenerator,
    SimulatedFraudAnalysisProvider,
    SimulatedPaymentProcessor,
    SimulatedSubscriptionIssuer,
    classify,
)
from policy_flow.models.policy import (
    EventType,
    InsuranceCategory,
    PolicyRequestStatus,
    RiskClassification,
)
from policy_flow.workflow.validation import validate_policy_request


class TestPolicyRequestGenerator:
    """Tests for PolicyRequestGenerator."""

    def test_generate_valid_request(self, seed: int) -> None:
        request = PolicyRequestGenerator(seed=seed).generate()

        validate_policy_request(request)
        assert request.status == PolicyRequestStatus.RECEIVED
        assert request.assistances
        assert request.total_monthly_premium_amount > 0

    def test_generate_with_overrides(self, seed: int) -> None:
        request = PolicyRequestGenerator(seed=seed).generate(
            customer_id="cust-1",
            category=InsuranceCategory.LIFE,
            insured_amount=Decimal("200000"),
        )

        assert request.customer_id == "cust-1"
        assert request.category == InsuranceCategory.LIFE
        assert request.insured_amount == Decimal("200000")
        assert set(request.coverages) == set(PolicyRequestGenerator.COVERAGES[InsuranceCategory.LIFE])
        assert request.total_coverage_amount() == Decimal("200000.00")

    def test_reproducible_with_seed(self, seed: int) -> None:
        first = PolicyRequestGenerator(seed=seed).generate()
        second = PolicyRequestGenerator(seed=seed).generate()

        assert first.policy_request_id == second.policy_request_id
        assert first.insured_amount == second.insured_amount
        assert first.category == second.category

    def test_generate_batch(self, seed: int) -> None:
        requests = list(PolicyRequestGenerator(seed=seed).generate_batch(10, customers=3))

        assert len(requests) == 10
        assert len({r.customer_id for r in requests}) <= 3
        assert len({r.policy_request_id for r in requests}) == 10


class TestClassify:
    """Tests for the amount-based fraud classification."""

    @pytest.mark.parametrize(
        "category,amount,expected",
        [
            (InsuranceCategory.AUTO, "149999.99", RiskClassification.REGULAR),
            (InsuranceCategory.AUTO, "150000", RiskClassification.PREFERRED),
            (InsuranceCategory.AUTO, "300000", RiskClassification.PREFERRED),
            (InsuranceCategory.AUTO, "300000.01", RiskClassification.HIGH_RISK),
            (InsuranceCategory.LIFE, "500000", RiskClassification.PREFERRED),
            (InsuranceCategory.LIFE, "500001", RiskClassification.HIGH_RISK),
            (InsuranceCategory.RESIDENTIAL, "400001", RiskClassification.HIGH_RISK),
            (InsuranceCategory.TRAVEL, "100000", RiskClassification.PREFERRED),
            (InsuranceCategory.HEALTH, "99999", RiskClassification.REGULAR),
        ],
    )
    def test_thresholds(self, category, amount: str, expected: RiskClassification) -> None:
        assert classify(category, Decimal(amount)) == expected


class TestSimulatedFraudAnalysisProvider:
    """Tests for SimulatedFraudAnalysisProvider."""

    def test_regular_has_no_occurrences(self, store, make_request) -> None:
        request = store.save(make_request(insured_amount=Decimal("50000")))
        provider = SimulatedFraudAnalysisProvider(store, clock=lambda: datetime(2025, 1, 1))

        response = provider.analyze(request.policy_request_id, request.customer_id)

        assert response.policy_request_id == request.policy_request_id
        assert response.classification == RiskClassification.REGULAR
        assert response.analyzed_at == datetime(2025, 1, 1)
        assert response.occurrences == []

    def test_extreme_value_occurrences(self, store, make_request) -> None:
        request = store.save(
            make_request(category=InsuranceCategory.AUTO, insured_amount=Decimal("1500000"))
        )
        provider = SimulatedFraudAnalysisProvider(store)

        response = provider.analyze(request.policy_request_id, request.customer_id)

        assert response.classification == RiskClassification.HIGH_RISK
        assert [o.type for o in response.occurrences] == ["HIGH_VALUE", "EXTREME_VALUE"]
        assert "AUTO" in response.occurrences[0].description


class TestSimulatedPaymentProcessor:
    """Tests for SimulatedPaymentProcessor."""

    def test_publishes_payment_requested(self, publisher, make_request) -> None:
        processor = SimulatedPaymentProcessor(publisher, approval_rate=1.0, seed=1)
        request = make_request(status=PolicyRequestStatus.VALIDATED)

        assert processor.process(request) is True
        assert publisher.event_types() == [EventType.PAYMENT_REQUESTED]
        assert publisher.routing_keys() == ["payment.requested"]

    def test_zero_approval_rate_declines(self, publisher, make_request) -> None:
        processor = SimulatedPaymentProcessor(publisher, approval_rate=0.0, seed=1)

        assert processor.process(make_request()) is False
        assert len(publisher.events) == 1

    def test_invalid_request(self, publisher, make_request) -> None:
        processor = SimulatedPaymentProcessor(publisher)

        with pytest.raises(ValidationError):
            processor.process(make_request(total_monthly_premium_amount=Decimal("-100.00")))
        with pytest.raises(ValidationError):
            processor.process(None)
        assert publisher.events == []

    def test_invalid_rate(self, publisher) -> None:
        with pytest.raises(ValueError):
            SimulatedPaymentProcessor(publisher, approval_rate=1.5)


class TestSimulatedSubscriptionIssuer:
    """Tests for SimulatedSubscriptionIssuer."""

    def test_issue_pending(self, make_request) -> None:
        SimulatedSubscriptionIssuer().issue(make_request(status=PolicyRequestStatus.PENDING))

    def test_failure_rate(self, make_request) -> None:
        issuer = SimulatedSubscriptionIssuer(failure_rate=1.0, seed=3)

        with pytest.raises(InternalError):
            issuer.issue(make_request(status=PolicyRequestStatus.PENDING))

    def test_invalid_insured_amount(self, make_request) -> None:
        with pytest.raises(ValidationError, match="insured_amount"):
            SimulatedSubscriptionIssuer().issue(
                make_request(status=PolicyRequestStatus.PENDING, insured_amount=Decimal("0"))
            )
