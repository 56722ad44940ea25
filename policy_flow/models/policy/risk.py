"""Risk analysis models attached after fraud analysis."""

from dataclasses import dataclass, field
from datetime import datetime

from policy_flow.models.policy.enums import RiskClassification


@dataclass(frozen=True)
class RiskOccurrence:
    """One flagged signal within a risk analysis."""

    type: str  # e.g. HIGH_VALUE, EXTREME_VALUE
    description: str
    created_at: datetime
    updated_at: datetime


@dataclass
class RiskAnalysis:
    """Outcome of a fraud analysis for one policy request."""

    classification: RiskClassification
    analyzed_at: datetime
    occurrences: list[RiskOccurrence] = field(default_factory=list)
