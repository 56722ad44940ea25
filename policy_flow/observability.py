"""Transition statistics collected through workflow listeners."""

import logging
from collections import Counter
from dataclasses import dataclass, field

from policy_flow.models.policy import PolicyRequest, PolicyRequestStatus, StatusHistoryEntry
from policy_flow.workflow.transitions import is_terminal

logger = logging.getLogger(__name__)


@dataclass
class TransitionStats:
    """Count status transitions as they happen.

    Register with ``PolicyWorkflow.add_listener(stats)``; the instance is
    callable with ``(request, entry)``.
    """

    transitions: int = 0
    by_status: Counter = field(default_factory=Counter)
    by_edge: Counter = field(default_factory=Counter)
    finished: int = 0

    def __call__(self, request: PolicyRequest, entry: StatusHistoryEntry) -> None:
        self.transitions += 1
        self.by_status[entry.new_status] += 1
        previous = entry.previous_status.value if entry.previous_status else "NONE"
        self.by_edge[(previous, entry.new_status.value)] += 1
        if is_terminal(entry.new_status):
            self.finished += 1
        logger.debug(
            "Transition recorded for %s: %s -> %s",
            request.policy_request_id,
            previous,
            entry.new_status.value,
        )

    def count(self, status: PolicyRequestStatus) -> int:
        return self.by_status.get(status, 0)

    @property
    def approval_rate(self) -> float:
        """Share of finished requests that ended APPROVED."""
        if self.finished == 0:
            return 0.0
        return self.count(PolicyRequestStatus.APPROVED) / self.finished

    def summary(self) -> dict[str, int]:
        """Transition counts keyed by target status name."""
        return {status.value: self.count(status) for status in PolicyRequestStatus}
