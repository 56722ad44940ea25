"""Allowed status transitions for the policy-request state machine.

Every layer (ledger, orchestrator, store checks) consults this table; it is
the only definition of the lifecycle graph.

Invariants:
  - No self-loops, including terminal -> same terminal.
  - APPROVED, REJECTED and CANCELLED have no outgoing transitions.
"""

from __future__ import annotations

from policy_flow.exceptions import InvalidStateTransition
from policy_flow.models.policy.enums import PolicyRequestStatus

ALLOWED_TRANSITIONS: dict[PolicyRequestStatus | None, frozenset[PolicyRequestStatus]] = {
    None: frozenset({PolicyRequestStatus.RECEIVED}),
    PolicyRequestStatus.RECEIVED: frozenset(
        {
            PolicyRequestStatus.VALIDATED,
            PolicyRequestStatus.REJECTED,
            PolicyRequestStatus.CANCELLED,
        }
    ),
    PolicyRequestStatus.VALIDATED: frozenset(
        {
            PolicyRequestStatus.PENDING,
            PolicyRequestStatus.REJECTED,
            PolicyRequestStatus.CANCELLED,
        }
    ),
    PolicyRequestStatus.PENDING: frozenset(
        {
            PolicyRequestStatus.APPROVED,
            PolicyRequestStatus.REJECTED,
            PolicyRequestStatus.CANCELLED,
        }
    ),
    PolicyRequestStatus.APPROVED: frozenset(),
    PolicyRequestStatus.REJECTED: frozenset(),
    PolicyRequestStatus.CANCELLED: frozenset(),
}

TERMINAL_STATUSES: frozenset[PolicyRequestStatus] = frozenset(
    status for status, targets in ALLOWED_TRANSITIONS.items() if status is not None and not targets
)


def can_transition(
    from_status: PolicyRequestStatus | None,
    to_status: PolicyRequestStatus,
) -> bool:
    """True if ``to_status`` may follow ``from_status``."""
    if to_status is None or to_status == from_status:
        return False
    return to_status in ALLOWED_TRANSITIONS.get(from_status, frozenset())


def ensure_transition(
    from_status: PolicyRequestStatus | None,
    to_status: PolicyRequestStatus,
) -> None:
    """Raise ``InvalidStateTransition`` unless the transition is allowed."""
    if not can_transition(from_status, to_status):
        raise InvalidStateTransition(from_status, to_status)


def is_terminal(status: PolicyRequestStatus) -> bool:
    return status in TERMINAL_STATUSES
