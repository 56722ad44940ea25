"""Policy-request lifecycle: transition rules, underwriting and orchestration."""

from policy_flow.workflow.events import event_type_for_status
from policy_flow.workflow.ledger import StatusHistoryLedger
from policy_flow.workflow.orchestrator import PolicyWorkflow, TransitionListener
from policy_flow.workflow.ports import (
    EventPublisher,
    FraudAnalysisProvider,
    FraudAnalysisResponse,
    FraudOccurrenceResponse,
    PaymentProcessor,
    PolicyRequestStore,
    SubscriptionIssuer,
)
from policy_flow.workflow.results import CollaboratorResult, WorkflowOutcome, call_collaborator
from policy_flow.workflow.transitions import (
    ALLOWED_TRANSITIONS,
    TERMINAL_STATUSES,
    can_transition,
    ensure_transition,
    is_terminal,
)
from policy_flow.workflow.underwriting import amount_limit, is_amount_acceptable

__all__ = [
    "ALLOWED_TRANSITIONS",
    "TERMINAL_STATUSES",
    "CollaboratorResult",
    "EventPublisher",
    "FraudAnalysisProvider",
    "FraudAnalysisResponse",
    "FraudOccurrenceResponse",
    "PaymentProcessor",
    "PolicyRequestStore",
    "PolicyWorkflow",
    "StatusHistoryLedger",
    "SubscriptionIssuer",
    "TransitionListener",
    "WorkflowOutcome",
    "amount_limit",
    "call_collaborator",
    "can_transition",
    "ensure_transition",
    "event_type_for_status",
    "is_amount_acceptable",
    "is_terminal",
]
