"""Port definitions for the workflow's external collaborators.

Responsibilities:
  - Define interface contracts for persistence, fraud analysis, payment,
    subscription issuance and event publishing.
Must not:
  - Implement logic; interfaces and response shapes only.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Protocol

from policy_flow.models.policy import DomainEvent, PolicyRequest, RiskClassification


@dataclass
class FraudOccurrenceResponse:
    """Occurrence as reported by the fraud provider, before validation."""

    type: str | None
    description: str | None
    created_at: datetime | None
    updated_at: datetime | None


@dataclass
class FraudAnalysisResponse:
    """Raw fraud provider response, before validation."""

    policy_request_id: str
    customer_id: str
    classification: RiskClassification | None
    analyzed_at: datetime | None
    occurrences: list[FraudOccurrenceResponse] = field(default_factory=list)


class PolicyRequestStore(Protocol):
    def save(self, request: PolicyRequest) -> PolicyRequest:
        ...

    def find_by_id(self, policy_request_id: str) -> PolicyRequest:
        ...

    def find_by_customer_id(self, customer_id: str) -> list[PolicyRequest]:
        ...


class FraudAnalysisProvider(Protocol):
    def analyze(self, policy_request_id: str, customer_id: str) -> FraudAnalysisResponse:
        ...


class PaymentProcessor(Protocol):
    def process(self, request: PolicyRequest) -> bool:
        ...


class SubscriptionIssuer(Protocol):
    def issue(self, request: PolicyRequest) -> None:
        ...


class EventPublisher(Protocol):
    def publish(self, topic: str, routing_key: str, event: DomainEvent) -> None:
        ...
