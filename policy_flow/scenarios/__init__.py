"""Scenarios that drive generated requests through the workflow."""

from policy_flow.scenarios.lifecycle import PolicyLifecycleScenario

__all__ = ["PolicyLifecycleScenario"]
