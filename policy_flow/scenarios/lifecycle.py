"""End-to-end lifecycle scenario for generated policy requests."""

import logging
from typing import Any

from policy_flow.config import WorkflowConfig
from policy_flow.exceptions import BusinessRuleViolation, ErrorCode
from policy_flow.generators import (
    PolicyRequestGenerator,
    SimulatedFraudAnalysisProvider,
    SimulatedPaymentProcessor,
    SimulatedSubscriptionIssuer,
)
from policy_flow.generators.base import BaseGenerator
from policy_flow.models.policy import PolicyRequestStatus
from policy_flow.observability import TransitionStats
from policy_flow.sinks.memory import InMemoryEventPublisher
from policy_flow.store import InMemoryPolicyRequestStore
from policy_flow.workflow import PolicyWorkflow
from policy_flow.workflow.ports import EventPublisher

logger = logging.getLogger(__name__)


def _derived_seed(seed: int | None, offset: int) -> int | None:
    return None if seed is None else seed + offset


class PolicyLifecycleScenario(BaseGenerator):
    """Drive generated requests through the full policy lifecycle.

    Each request is created, analysed for fraud (which underwrites it), and,
    when validated, either cancelled or sent through payment and
    subscription. Simulated collaborators supply the decisions.
    """

    def __init__(
        self,
        num_requests: int = 100,
        num_customers: int | None = None,
        payment_approval_rate: float = 0.9,
        subscription_failure_rate: float = 0.05,
        cancel_rate: float = 0.05,
        seed: int | None = None,
        publisher: EventPublisher | None = None,
        config: WorkflowConfig | None = None,
    ) -> None:
        """Initialize lifecycle scenario.

        Parameters
        ----------
        num_requests : int
            Number of policy requests to generate.
        num_customers : int | None
            Size of the customer pool (one customer per request if None).
        payment_approval_rate : float
            Probability that a payment is approved (0.0 to 1.0).
        subscription_failure_rate : float
            Probability that subscription issuance fails (0.0 to 1.0).
        cancel_rate : float
            Probability that a validated request is cancelled before payment.
        seed : int | None
            Random seed for reproducibility.
        publisher : EventPublisher | None
            Destination for domain events (in-memory when omitted).
        config : WorkflowConfig | None
            Routing and underwriting configuration.
        """
        super().__init__(seed)
        if not 0.0 <= cancel_rate <= 1.0:
            raise ValueError("cancel_rate must be between 0 and 1")

        self.num_requests = num_requests
        self.num_customers = num_customers
        self.cancel_rate = cancel_rate
        self.seed = seed
        self.config = config or WorkflowConfig()

        self.store = InMemoryPolicyRequestStore()
        self.publisher = publisher or InMemoryEventPublisher()
        self.stats = TransitionStats()

        self._request_gen = PolicyRequestGenerator(seed=seed)
        self.workflow = PolicyWorkflow(
            store=self.store,
            fraud_provider=SimulatedFraudAnalysisProvider(self.store),
            payment_processor=SimulatedPaymentProcessor(
                self.publisher,
                approval_rate=payment_approval_rate,
                routing=self.config.routing,
                seed=_derived_seed(seed, 1),
            ),
            subscription_issuer=SimulatedSubscriptionIssuer(
                failure_rate=subscription_failure_rate,
                seed=_derived_seed(seed, 2),
            ),
            publisher=self.publisher,
            config=self.config,
        )
        self.workflow.add_listener(self.stats)

    def generate(self) -> InMemoryPolicyRequestStore:
        """Run every generated request through the workflow.

        Returns
        -------
        InMemoryPolicyRequestStore
            Store holding all requests in their final status.
        """
        logger.info(
            "Starting lifecycle scenario: %d requests, cancel rate %.1f%%",
            self.num_requests,
            self.cancel_rate * 100,
        )

        for request in self._request_gen.generate_batch(self.num_requests, self.num_customers):
            self._run_one(request)

        logger.info("Lifecycle scenario complete: %s", self.store.summary())
        return self.store

    def _run_one(self, request: Any) -> None:
        request = self.workflow.create(request)
        request_id = request.policy_request_id

        outcome = self.workflow.run_fraud_analysis(request_id)
        if outcome.status != PolicyRequestStatus.VALIDATED:
            return

        if self.random.random() < self.cancel_rate:
            self.workflow.cancel(request_id, "Customer withdrew the request")
            return

        try:
            self.workflow.process_payment(request_id)
        except BusinessRuleViolation as exc:
            if exc.error_code != ErrorCode.PAYMENT_FAILED:
                raise
            logger.info("Payment declined for policy %s", request_id)
            return

        self.workflow.process_subscription(request_id)

    def summary(self) -> dict[str, Any]:
        """Final status counts plus transition statistics."""
        unfinished = [r for r in self.store.all() if r.finished_at is None]
        return {
            "requests": self.store.summary(),
            "unfinished": len(unfinished),
            "transitions": self.stats.summary(),
            "approval_rate": round(self.stats.approval_rate, 4),
        }
