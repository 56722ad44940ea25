"""Simulated external collaborators for local runs and scenarios.

They satisfy the workflow ports with deterministic, seedable behaviour:
fraud classification from category and amount, payment approval and
subscription failure at configurable rates.
"""

from __future__ import annotations

import logging
from datetime import datetime
from decimal import Decimal
from typing import Callable

from policy_flow.config import RoutingConfig
from policy_flow.exceptions import InternalError, ValidationError
from policy_flow.generators.base import BaseGenerator
from policy_flow.models.policy import (
    DomainEvent,
    EventType,
    InsuranceCategory,
    PolicyRequest,
    RiskClassification,
)
from policy_flow.workflow.ports import (
    EventPublisher,
    FraudAnalysisResponse,
    FraudOccurrenceResponse,
    PolicyRequestStore,
)
from policy_flow.workflow.validation import validate_positive_amount, validate_required_text

logger = logging.getLogger(__name__)

# Above this amount a category is HIGH_RISK
HIGH_RISK_THRESHOLDS = {
    InsuranceCategory.LIFE: Decimal("500000"),
    InsuranceCategory.AUTO: Decimal("300000"),
    InsuranceCategory.RESIDENTIAL: Decimal("400000"),
    InsuranceCategory.TRAVEL: Decimal("200000"),
    InsuranceCategory.HEALTH: Decimal("200000"),
}

# At or above this amount (and not HIGH_RISK) a category is PREFERRED
PREFERRED_THRESHOLDS = {
    InsuranceCategory.LIFE: Decimal("200000"),
    InsuranceCategory.AUTO: Decimal("150000"),
    InsuranceCategory.RESIDENTIAL: Decimal("200000"),
    InsuranceCategory.TRAVEL: Decimal("100000"),
    InsuranceCategory.HEALTH: Decimal("100000"),
}

EXTREME_VALUE_THRESHOLD = Decimal("1000000")


def classify(category: InsuranceCategory, insured_amount: Decimal) -> RiskClassification:
    """Risk classification from category and insured amount."""
    amount = Decimal(str(insured_amount))
    if amount > HIGH_RISK_THRESHOLDS[category]:
        return RiskClassification.HIGH_RISK
    if amount >= PREFERRED_THRESHOLDS[category]:
        return RiskClassification.PREFERRED
    return RiskClassification.REGULAR


class SimulatedFraudAnalysisProvider:
    """Fraud provider that classifies by category and insured amount.

    Parameters
    ----------
    store : PolicyRequestStore
        Used to look up the request being analysed.
    clock : Callable[[], datetime] | None
        Time source for ``analyzed_at`` and occurrence timestamps.
    """

    def __init__(
        self,
        store: PolicyRequestStore,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self.store = store
        self._clock = clock or datetime.now

    def analyze(self, policy_request_id: str, customer_id: str) -> FraudAnalysisResponse:
        request = self.store.find_by_id(policy_request_id)
        now = self._clock()
        classification = classify(request.category, request.insured_amount)

        occurrences = []
        if classification == RiskClassification.HIGH_RISK:
            occurrences.append(
                FraudOccurrenceResponse(
                    type="HIGH_VALUE",
                    description=f"High insured amount detected for category {request.category.value}",
                    created_at=now,
                    updated_at=now,
                )
            )
        if Decimal(str(request.insured_amount)) > EXTREME_VALUE_THRESHOLD:
            occurrences.append(
                FraudOccurrenceResponse(
                    type="EXTREME_VALUE",
                    description="Extremely high insured amount",
                    created_at=now,
                    updated_at=now,
                )
            )

        logger.debug(
            "Fraud analysis for %s: %s with %d occurrences",
            policy_request_id,
            classification.value,
            len(occurrences),
        )
        return FraudAnalysisResponse(
            policy_request_id=policy_request_id,
            customer_id=customer_id,
            classification=classification,
            analyzed_at=now,
            occurrences=occurrences,
        )


class SimulatedPaymentProcessor(BaseGenerator):
    """Payment processor that requests payment and approves at a fixed rate.

    Every accepted call publishes a ``PaymentRequested`` event before the
    decision is returned.
    """

    def __init__(
        self,
        publisher: EventPublisher,
        approval_rate: float = 1.0,
        routing: RoutingConfig | None = None,
        seed: int | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        super().__init__(seed)
        if not 0.0 <= approval_rate <= 1.0:
            raise ValueError("approval_rate must be between 0 and 1")
        self.publisher = publisher
        self.approval_rate = approval_rate
        self.routing = routing or RoutingConfig()
        self._clock = clock or datetime.now

    def process(self, request: PolicyRequest) -> bool:
        if request is None:
            raise ValidationError("Policy request cannot be empty")
        validate_required_text(request.policy_request_id, "policy_request_id")
        validate_required_text(request.customer_id, "customer_id")
        if request.payment_method is None:
            raise ValidationError("payment_method is required")
        validate_positive_amount(request.total_monthly_premium_amount, "total_monthly_premium_amount")

        logger.info("Processing payment for policy request: %s", request.policy_request_id)
        self.publisher.publish(
            self.routing.topic,
            self.routing.routing_key(EventType.PAYMENT_REQUESTED),
            DomainEvent.for_request(EventType.PAYMENT_REQUESTED, request, self._clock()),
        )
        return self.random.random() < self.approval_rate


class SimulatedSubscriptionIssuer(BaseGenerator):
    """Subscription issuer that fails at a fixed rate."""

    def __init__(self, failure_rate: float = 0.0, seed: int | None = None) -> None:
        super().__init__(seed)
        if not 0.0 <= failure_rate <= 1.0:
            raise ValueError("failure_rate must be between 0 and 1")
        self.failure_rate = failure_rate

    def issue(self, request: PolicyRequest) -> None:
        if request is None:
            raise ValidationError("Policy request cannot be empty")
        validate_required_text(request.policy_request_id, "policy_request_id")
        validate_required_text(request.customer_id, "customer_id")
        validate_positive_amount(request.insured_amount, "insured_amount")

        if self.random.random() < self.failure_rate:
            raise InternalError("Subscription service unavailable")
        logger.debug("Subscription issued for policy request: %s", request.policy_request_id)
