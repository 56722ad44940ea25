"""Underwriting decision rule: is the insured amount acceptable for the risk?

Pure functions; limits come from ``UnderwritingConfig`` so deployments can
tune them without touching the rule itself.
"""

from __future__ import annotations

from decimal import Decimal

from policy_flow.config import UnderwritingConfig
from policy_flow.exceptions import ValidationError
from policy_flow.models.policy.enums import InsuranceCategory, RiskClassification

DEFAULT_LIMITS = UnderwritingConfig()


def amount_limit(
    category: InsuranceCategory,
    classification: RiskClassification,
    limits: UnderwritingConfig = DEFAULT_LIMITS,
) -> Decimal:
    """Highest acceptable insured amount for a category and classification."""
    if classification is None:
        raise ValidationError("Risk classification is required for underwriting")

    if classification == RiskClassification.REGULAR:
        return limits.regular_limit
    if classification == RiskClassification.HIGH_RISK:
        return limits.high_risk_limit
    if classification == RiskClassification.PREFERRED:
        return limits.preferred_limit
    if category == InsuranceCategory.LIFE:
        return limits.no_information_life_limit
    return limits.no_information_limit


def is_amount_acceptable(
    category: InsuranceCategory,
    insured_amount: Decimal,
    classification: RiskClassification,
    limits: UnderwritingConfig = DEFAULT_LIMITS,
) -> bool:
    """True if ``insured_amount`` is within the (inclusive) limit."""
    return Decimal(str(insured_amount)) <= amount_limit(category, classification, limits)


def rejection_reason(
    category: InsuranceCategory,
    insured_amount: Decimal,
    classification: RiskClassification,
    limits: UnderwritingConfig = DEFAULT_LIMITS,
) -> str:
    """Human-readable explanation of an exceeded limit."""
    limit = amount_limit(category, classification, limits)
    return (
        f"Insured amount {insured_amount} exceeds the limit of {limit} "
        f"for category {category.value} and risk classification {classification.value}"
    )


def acceptance_reason(
    category: InsuranceCategory,
    insured_amount: Decimal,
    classification: RiskClassification,
    limits: UnderwritingConfig = DEFAULT_LIMITS,
) -> str:
    limit = amount_limit(category, classification, limits)
    return (
        f"Insured amount {insured_amount} is within the limit of {limit} "
        f"for category {category.value} and risk classification {classification.value}"
    )
