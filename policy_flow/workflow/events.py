"""Event-type and routing-key selection for status transitions."""

from __future__ import annotations

from policy_flow.models.policy.enums import EventType, PolicyRequestStatus

STATUS_EVENTS: dict[PolicyRequestStatus, EventType] = {
    PolicyRequestStatus.VALIDATED: EventType.POLICY_VALIDATED,
    PolicyRequestStatus.REJECTED: EventType.POLICY_REJECTED,
    PolicyRequestStatus.APPROVED: EventType.SUBSCRIPTION_APPROVED,
    PolicyRequestStatus.CANCELLED: EventType.POLICY_CANCELLED,
    PolicyRequestStatus.PENDING: EventType.PAYMENT_PROCESSED,
}


def event_type_for_status(status: PolicyRequestStatus) -> EventType:
    """Event announced when a request enters ``status``."""
    return STATUS_EVENTS.get(status, EventType.POLICY_STATUS_CHANGED)

