"""Policy-request domain models."""

from policy_flow.models.policy.enums import (
    EventType,
    InsuranceCategory,
    PaymentMethod,
    PolicyRequestStatus,
    RiskClassification,
    SalesChannel,
)
from policy_flow.models.policy.event import DomainEvent
from policy_flow.models.policy.history import StatusHistoryEntry
from policy_flow.models.policy.request import PolicyRequest
from policy_flow.models.policy.risk import RiskAnalysis, RiskOccurrence

__all__ = [
    "DomainEvent",
    "EventType",
    "InsuranceCategory",
    "PaymentMethod",
    "PolicyRequest",
    "PolicyRequestStatus",
    "RiskAnalysis",
    "RiskClassification",
    "RiskOccurrence",
    "SalesChannel",
    "StatusHistoryEntry",
]
