"""Pytest configuration and fixtures."""

from datetime import datetime, timedelta
from decimal import Decimal
from typing import Callable
from unittest.mock import MagicMock

import pytest

from policy_flow.models.policy import (
    InsuranceCategory,
    PaymentMethod,
    PolicyRequest,
    RiskClassification,
    SalesChannel,
)
from policy_flow.sinks.memory import InMemoryEventPublisher
from policy_flow.store import InMemoryPolicyRequestStore
from policy_flow.workflow import FraudAnalysisResponse, PolicyWorkflow

ANALYZED_AT = datetime(2024, 6, 1, 12, 0, 0)


class SteppingClock:
    """Deterministic clock that advances one second per call."""

    def __init__(self, start: datetime = datetime(2025, 1, 1, 9, 0, 0)) -> None:
        self.current = start

    def __call__(self) -> datetime:
        now = self.current
        self.current += timedelta(seconds=1)
        return now


@pytest.fixture
def seed() -> int:
    """Fixed seed for reproducible tests."""
    return 42


@pytest.fixture
def sample_customer_id() -> str:
    """Sample customer ID."""
    return "cust-test-001"


@pytest.fixture
def clock() -> SteppingClock:
    return SteppingClock()


@pytest.fixture
def make_request(sample_customer_id: str) -> Callable[..., PolicyRequest]:
    """Factory for valid, unsaved policy requests."""

    def _make(**overrides) -> PolicyRequest:
        values = {
            "customer_id": sample_customer_id,
            "product_id": "AUT-100",
            "category": InsuranceCategory.AUTO,
            "sales_channel": SalesChannel.MOBILE,
            "payment_method": PaymentMethod.CREDIT_CARD,
            "total_monthly_premium_amount": Decimal("150.00"),
            "insured_amount": Decimal("50000.00"),
            "coverages": {"Collision": Decimal("30000.00"), "Theft": Decimal("20000.00")},
            "assistances": ["Towing"],
        }
        values.update(overrides)
        return PolicyRequest(**values)

    return _make


@pytest.fixture
def store() -> InMemoryPolicyRequestStore:
    """Create a fresh store for each test."""
    return InMemoryPolicyRequestStore()


@pytest.fixture
def publisher() -> InMemoryEventPublisher:
    return InMemoryEventPublisher()


@pytest.fixture
def fraud_provider() -> MagicMock:
    """Fraud provider that classifies every request as REGULAR."""
    provider = MagicMock()
    provider.analyze.side_effect = lambda request_id, customer_id: FraudAnalysisResponse(
        policy_request_id=request_id,
        customer_id=customer_id,
        classification=RiskClassification.REGULAR,
        analyzed_at=ANALYZED_AT,
        occurrences=[],
    )
    return provider


@pytest.fixture
def payment_processor() -> MagicMock:
    processor = MagicMock()
    processor.process.return_value = True
    return processor


@pytest.fixture
def subscription_issuer() -> MagicMock:
    issuer = MagicMock()
    issuer.issue.return_value = None
    return issuer


@pytest.fixture
def workflow(
    store: InMemoryPolicyRequestStore,
    fraud_provider: MagicMock,
    payment_processor: MagicMock,
    subscription_issuer: MagicMock,
    publisher: InMemoryEventPublisher,
    clock: SteppingClock,
) -> PolicyWorkflow:
    """Workflow wired to in-memory store/publisher and mock collaborators."""
    return PolicyWorkflow(
        store=store,
        fraud_provider=fraud_provider,
        payment_processor=payment_processor,
        subscription_issuer=subscription_issuer,
        publisher=publisher,
        clock=clock,
    )
