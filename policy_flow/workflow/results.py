"""Result payloads for workflow operations and collaborator calls."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Generic, TypeVar

from policy_flow.exceptions import ErrorCode
from policy_flow.models.policy import PolicyRequest, PolicyRequestStatus

T = TypeVar("T")


@dataclass(frozen=True)
class CollaboratorResult(Generic[T]):
    """Success or failure of one external collaborator call.

    Exactly one of ``value`` (on success) or ``reason`` (on failure) is
    meaningful; ``error`` keeps the original exception for logging.
    """

    ok: bool
    value: T | None = None
    reason: str | None = None
    error: Exception | None = None

    @classmethod
    def success(cls, value: T | None = None) -> CollaboratorResult[T]:
        return cls(ok=True, value=value)

    @classmethod
    def failure(cls, reason: str, error: Exception | None = None) -> CollaboratorResult[T]:
        return cls(ok=False, reason=reason, error=error)


def call_collaborator(name: str, fn: Callable[[], T]) -> CollaboratorResult[T]:
    """Run ``fn`` and fold any exception into a failure result."""
    try:
        return CollaboratorResult.success(fn())
    except Exception as exc:
        return CollaboratorResult.failure(f"{name} failed: {exc}", error=exc)


@dataclass
class WorkflowOutcome:
    """What a business action did to a policy request."""

    policy_request: PolicyRequest
    accepted: bool
    reason: str | None = None
    error_code: ErrorCode | None = None

    @property
    def status(self) -> PolicyRequestStatus:
        return self.policy_request.status
