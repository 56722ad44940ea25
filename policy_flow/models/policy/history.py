"""Status history entry model."""

from dataclasses import dataclass
from datetime import datetime

from policy_flow.models.policy.enums import PolicyRequestStatus


@dataclass(frozen=True)
class StatusHistoryEntry:
    """Immutable record of one status transition.

    ``previous_status`` is None only for the creation marker
    (``None -> RECEIVED``).
    """

    policy_request_id: str
    previous_status: PolicyRequestStatus | None
    new_status: PolicyRequestStatus
    changed_at: datetime
    reason: str | None = None

    @property
    def is_creation_marker(self) -> bool:
        return self.previous_status is None
