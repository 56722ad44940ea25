"""Policy request aggregate."""

import uuid
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal

from policy_flow.models.base import AuditMetadata
from policy_flow.models.policy.enums import (
    InsuranceCategory,
    PaymentMethod,
    PolicyRequestStatus,
    SalesChannel,
)
from policy_flow.models.policy.history import StatusHistoryEntry
from policy_flow.models.policy.risk import RiskAnalysis


@dataclass
class PolicyRequest:
    """In-flight application for an insurance policy.

    Status changes go through ``PolicyWorkflow.update_status``; the entity
    itself holds no transition rules.
    """

    customer_id: str
    product_id: str
    category: InsuranceCategory
    sales_channel: SalesChannel
    payment_method: PaymentMethod
    total_monthly_premium_amount: Decimal
    insured_amount: Decimal
    coverages: dict[str, Decimal] = field(default_factory=dict)
    assistances: list[str] = field(default_factory=list)
    status: PolicyRequestStatus = PolicyRequestStatus.RECEIVED
    finished_at: datetime | None = None
    risk_analysis: RiskAnalysis | None = None
    status_history: list[StatusHistoryEntry] = field(default_factory=list)  # oldest first
    audit: AuditMetadata = field(default_factory=AuditMetadata)
    version: int = 0  # optimistic concurrency token, owned by the store
    policy_request_id: str = field(default_factory=lambda: str(uuid.uuid4()))

    def set_coverages(self, coverages: dict[str, Decimal]) -> None:
        """Replace the coverage mapping."""
        self.coverages = dict(coverages)

    def total_coverage_amount(self) -> Decimal:
        """Sum of all coverage amounts (zero when there are none)."""
        return sum(self.coverages.values(), Decimal("0"))

    def history_for_display(self) -> list[StatusHistoryEntry]:
        """Status history ordered newest first."""
        return sorted(self.status_history, key=lambda entry: entry.changed_at, reverse=True)
