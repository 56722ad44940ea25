"""Append-only status history ledger.

The ledger only builds validated ``StatusHistoryEntry`` records; attaching
them to the owning request and persisting it is the orchestrator's job.
"""

from __future__ import annotations

from datetime import datetime
from typing import Callable

from policy_flow.exceptions import ValidationError
from policy_flow.models.policy.enums import PolicyRequestStatus
from policy_flow.models.policy.history import StatusHistoryEntry
from policy_flow.workflow.transitions import ensure_transition


class StatusHistoryLedger:
    """Builds one immutable history entry per legal status transition.

    Parameters
    ----------
    clock : Callable[[], datetime] | None
        Source of ``changed_at`` when the caller does not supply one
        (default: ``datetime.now``).
    """

    def __init__(self, clock: Callable[[], datetime] | None = None) -> None:
        self._clock = clock or datetime.now

    def append(
        self,
        policy_request_id: str,
        previous_status: PolicyRequestStatus | None,
        new_status: PolicyRequestStatus,
        reason: str | None = None,
        changed_at: datetime | None = None,
    ) -> StatusHistoryEntry:
        """Validate a transition and return its history entry.

        ``previous_status`` may be None only for the creation marker
        ``None -> RECEIVED``.

        Raises
        ------
        ValidationError
            If a required field is missing or the statuses are equal.
        InvalidStateTransition
            If the transition table forbids the change.
        """
        if not policy_request_id:
            raise ValidationError("policy_request_id is required")
        if new_status is None:
            raise ValidationError("new_status is required")
        if previous_status is None and new_status != PolicyRequestStatus.RECEIVED:
            raise ValidationError("previous_status is required")
        if new_status == previous_status:
            raise ValidationError("new_status cannot be the same as previous_status")

        ensure_transition(previous_status, new_status)

        return StatusHistoryEntry(
            policy_request_id=policy_request_id,
            previous_status=previous_status,
            new_status=new_status,
            changed_at=changed_at or self._clock(),
            reason=reason,
        )
