"""Custom exception hierarchy for policy-flow."""

from __future__ import annotations

from enum import Enum
from typing import Any


class ErrorCode(str, Enum):
    MISSING_RISK_ANALYSIS = "MISSING_RISK_ANALYSIS"
    UNDERWRITING_LIMIT_EXCEEDED = "UNDERWRITING_LIMIT_EXCEEDED"
    CANNOT_CANCEL_APPROVED = "CANNOT_CANCEL_APPROVED"
    PAYMENT_FAILED = "PAYMENT_FAILED"
    SUBSCRIPTION_ERROR = "SUBSCRIPTION_ERROR"
    FRAUD_ANALYSIS_ERROR = "FRAUD_ANALYSIS_ERROR"


class PolicyFlowError(Exception):
    """Base exception for all policy-flow errors."""


class ValidationError(PolicyFlowError):
    """Raised when a required field is missing or malformed."""


class NotFoundError(PolicyFlowError):
    """Raised when a policy request id is unknown."""


class InvalidStateTransition(PolicyFlowError):
    """Raised when a status change is not in the transition table."""

    def __init__(self, from_status: Any, to_status: Any) -> None:
        self.from_status = from_status
        self.to_status = to_status
        super().__init__(
            f"Cannot transition from {_status_name(from_status)} to {_status_name(to_status)}"
        )


class BusinessRuleViolation(PolicyFlowError):
    """Raised when a named business rule rejects the operation."""

    def __init__(self, error_code: ErrorCode, message: str) -> None:
        self.error_code = error_code
        self.message = message
        super().__init__(f"[{error_code.value}] {message}")


class IntegrityViolation(PolicyFlowError):
    """Raised on duplicate inserts or stale optimistic-concurrency versions."""


class InternalError(PolicyFlowError):
    """Raised for unexpected, unclassified failures."""


class ConfigurationError(PolicyFlowError):
    """Raised when configuration is invalid or missing."""


class EventPublishError(PolicyFlowError):
    """Raised when a domain event could not be delivered."""


def _status_name(status: Any) -> str:
    if status is None:
        return "NONE"
    return getattr(status, "value", str(status))
