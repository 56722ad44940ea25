"""In-memory persistence for policy requests."""

from policy_flow.store.policy import InMemoryPolicyRequestStore

__all__ = ["InMemoryPolicyRequestStore"]
