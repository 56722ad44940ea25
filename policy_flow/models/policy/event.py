"""Domain event envelope for the policy-request lifecycle."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime
from typing import TYPE_CHECKING

from policy_flow.models.policy.enums import EventType, PolicyRequestStatus

if TYPE_CHECKING:
    from policy_flow.models.policy.request import PolicyRequest


@dataclass(frozen=True)
class DomainEvent:
    """Standard event envelope for streaming.

    A single envelope covers every lifecycle event; ``event_type`` is the
    discriminator consumers switch on.
    """

    event_type: EventType
    policy_request_id: str
    customer_id: str
    status: PolicyRequestStatus
    timestamp: datetime
    event_id: str = field(default_factory=lambda: str(uuid.uuid4()))

    @classmethod
    def for_request(
        cls,
        event_type: EventType,
        request: PolicyRequest,
        timestamp: datetime,
    ) -> DomainEvent:
        """Build an event describing ``request`` as it is right now."""
        return cls(
            event_type=event_type,
            policy_request_id=request.policy_request_id,
            customer_id=request.customer_id,
            status=request.status,
            timestamp=timestamp,
        )
