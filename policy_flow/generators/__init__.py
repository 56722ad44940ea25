"""Synthetic policy requests and simulated collaborators."""

from policy_flow.generators.collaborators import (
    SimulatedFraudAnalysisProvider,
    SimulatedPaymentProcessor,
    SimulatedSubscriptionIssuer,
    classify,
)
from policy_flow.generators.policy import PolicyRequestGenerator

__all__ = [
    "PolicyRequestGenerator",
    "SimulatedFraudAnalysisProvider",
    "SimulatedPaymentProcessor",
    "SimulatedSubscriptionIssuer",
    "classify",
]
