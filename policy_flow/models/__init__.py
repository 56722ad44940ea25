"""Domain models for the policy-request workflow."""

from policy_flow.models.base import AuditMetadata

__all__ = ["AuditMetadata"]
