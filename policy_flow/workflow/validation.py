"""Input validation rules for policy requests and fraud provider responses."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from policy_flow.exceptions import ValidationError
from policy_flow.models.policy import PolicyRequest, RiskAnalysis, RiskOccurrence
from policy_flow.workflow.ports import FraudAnalysisResponse, FraudOccurrenceResponse


def validate_positive_amount(value: Decimal | None, field_name: str) -> Decimal:
    """Validate a required amount that must be greater than zero."""
    if value is None:
        raise ValidationError(f"{field_name} is required")
    if Decimal(str(value)) <= 0:
        raise ValidationError(f"{field_name} must be greater than zero")
    return value


def validate_required_text(value: str | None, field_name: str) -> str:
    """Validate non-empty text fields."""
    if value is None or not str(value).strip():
        raise ValidationError(f"{field_name} is required")
    return value


def validate_not_future(value: datetime | None, field_name: str, now: datetime) -> datetime:
    if value is None:
        raise ValidationError(f"{field_name} is required")
    if value > now:
        raise ValidationError(f"{field_name} cannot be in the future")
    return value


def validate_policy_request(request: PolicyRequest) -> None:
    """Full validation of a policy request before it enters the workflow."""
    validate_required_text(request.customer_id, "customer_id")
    validate_required_text(request.product_id, "product_id")
    for name in ("category", "sales_channel", "payment_method"):
        if getattr(request, name) is None:
            raise ValidationError(f"{name} is required")
    validate_positive_amount(request.total_monthly_premium_amount, "total_monthly_premium_amount")
    validate_positive_amount(request.insured_amount, "insured_amount")
    if not request.coverages:
        raise ValidationError("At least one coverage is required")


def validate_occurrence(occurrence: FraudOccurrenceResponse, now: datetime) -> RiskOccurrence:
    """Validate one reported occurrence and return the domain record."""
    validate_required_text(occurrence.type, "occurrence type")
    validate_required_text(occurrence.description, "occurrence description")
    created_at = validate_not_future(occurrence.created_at, "occurrence created_at", now)
    updated_at = validate_not_future(occurrence.updated_at, "occurrence updated_at", now)
    if updated_at < created_at:
        raise ValidationError("occurrence updated_at cannot be before created_at")

    return RiskOccurrence(
        type=occurrence.type.strip(),
        description=occurrence.description.strip(),
        created_at=created_at,
        updated_at=updated_at,
    )


def to_risk_analysis(response: FraudAnalysisResponse, now: datetime) -> RiskAnalysis:
    """Validate a fraud provider response and convert it to a ``RiskAnalysis``.

    Raises
    ------
    ValidationError
        If the classification is missing, ``analyzed_at`` is missing or in
        the future, or any occurrence is malformed.
    """
    if response is None:
        raise ValidationError("Fraud analysis response is empty")
    if response.classification is None:
        raise ValidationError("classification is required")
    analyzed_at = validate_not_future(response.analyzed_at, "analyzed_at", now)

    return RiskAnalysis(
        classification=response.classification,
        analyzed_at=analyzed_at,
        occurrences=[validate_occurrence(o, now) for o in response.occurrences or []],
    )
