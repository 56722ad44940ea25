"""Policy-request lifecycle orchestrator.

One method per business action. Each action loads the request, obtains a
decision (underwriting rule or external collaborator), routes the resulting
status change through ``update_status`` and emits exactly one domain event.

Failure policy:
  - Illegal transitions raise ``InvalidStateTransition`` before any mutation.
  - Fraud-analysis and subscription failures resolve to REJECTED and are
    reported through ``WorkflowOutcome.error_code``; they never raise. A
    subscription attempted outside PENDING counts as such a failure.
  - A declined payment rejects the request and then raises
    ``BusinessRuleViolation(PAYMENT_FAILED)``.
  - Publisher errors propagate after the transition has been persisted.
"""

from __future__ import annotations

import logging
import uuid
from dataclasses import replace
from datetime import datetime
from typing import Callable

from policy_flow.config import WorkflowConfig
from policy_flow.exceptions import (
    BusinessRuleViolation,
    ErrorCode,
    InvalidStateTransition,
    ValidationError,
)
from policy_flow.models.policy import (
    DomainEvent,
    EventType,
    PolicyRequest,
    PolicyRequestStatus,
    RiskAnalysis,
    StatusHistoryEntry,
)
from policy_flow.workflow import underwriting
from policy_flow.workflow.events import event_type_for_status
from policy_flow.workflow.ledger import StatusHistoryLedger
from policy_flow.workflow.ports import (
    EventPublisher,
    FraudAnalysisProvider,
    PaymentProcessor,
    PolicyRequestStore,
    SubscriptionIssuer,
)
from policy_flow.workflow.results import WorkflowOutcome, call_collaborator
from policy_flow.workflow.transitions import ensure_transition, is_terminal
from policy_flow.workflow.validation import to_risk_analysis, validate_policy_request

logger = logging.getLogger(__name__)

TransitionListener = Callable[[PolicyRequest, StatusHistoryEntry], None]


class PolicyWorkflow:
    """Coordinate the lifecycle of policy requests.

    Parameters
    ----------
    store : PolicyRequestStore
        Persistence collaborator; enforces optimistic versioning on save.
    fraud_provider : FraudAnalysisProvider
        Produces the risk analysis used for underwriting.
    payment_processor : PaymentProcessor
        Returns True when the first premium was collected.
    subscription_issuer : SubscriptionIssuer
        Issues the policy; raises on failure.
    publisher : EventPublisher
        Receives one domain event per business action.
    config : WorkflowConfig | None
        Routing keys and underwriting limits (defaults when omitted).
    clock : Callable[[], datetime] | None
        Time source for history entries, audit stamps and events.
    """

    def __init__(
        self,
        store: PolicyRequestStore,
        fraud_provider: FraudAnalysisProvider,
        payment_processor: PaymentProcessor,
        subscription_issuer: SubscriptionIssuer,
        publisher: EventPublisher,
        config: WorkflowConfig | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self.store = store
        self.config = config or WorkflowConfig()
        self._fraud_provider = fraud_provider
        self._payment_processor = payment_processor
        self._subscription_issuer = subscription_issuer
        self._publisher = publisher
        self._clock = clock or datetime.now
        self._ledger = StatusHistoryLedger(clock=self._clock)
        self._listeners: list[TransitionListener] = []

    def add_listener(self, listener: TransitionListener) -> None:
        """Register a callback invoked after every persisted transition."""
        self._listeners.append(listener)

    # Queries

    def find_by_id(self, policy_request_id: str) -> PolicyRequest:
        """Load one request; raises ``NotFoundError`` when unknown."""
        logger.debug("Finding policy request by ID: %s", policy_request_id)
        return self.store.find_by_id(policy_request_id)

    def find_by_customer_id(self, customer_id: str) -> list[PolicyRequest]:
        logger.debug("Finding policy requests for customer: %s", customer_id)
        return self.store.find_by_customer_id(customer_id)

    def status_history(self, policy_request_id: str) -> list[StatusHistoryEntry]:
        """Status history of one request, newest first."""
        return self.find_by_id(policy_request_id).history_for_display()

    # Commands

    def create(self, request: PolicyRequest) -> PolicyRequest:
        """Validate and persist a new request in RECEIVED status."""
        logger.info(
            "Creating policy request for customer: %s, category: %s, amount: %s",
            request.customer_id,
            getattr(request.category, "value", request.category),
            request.insured_amount,
        )
        validate_policy_request(request)

        now = self._clock()
        if not request.policy_request_id:
            request.policy_request_id = str(uuid.uuid4())
        request.status = PolicyRequestStatus.RECEIVED
        request.status_history = []
        request.finished_at = None
        request.risk_analysis = None
        request.version = 0
        request.audit.touch(now)

        saved = self.store.save(request)
        self._publish(EventType.POLICY_REQUEST_CREATED, saved, now)

        logger.info("Policy request created with ID: %s", saved.policy_request_id)
        return saved

    def update_status(
        self,
        request: PolicyRequest,
        new_status: PolicyRequestStatus,
        reason: str | None = None,
        event_type: EventType | None = None,
    ) -> PolicyRequest:
        """Apply one status transition and announce it.

        The event type defaults to the one registered for ``new_status``;
        ``event_type`` overrides it (e.g. ``PaymentRejected``). The updated
        request is returned as a new object; ``request`` itself is never
        modified.

        Raises
        ------
        InvalidStateTransition
            If the transition table forbids the change.
        IntegrityViolation
            If ``request`` is stale; nothing is persisted or published.
        """
        if new_status is None:
            raise ValidationError("new_status is required")

        current = request.status
        try:
            ensure_transition(current, new_status)
        except InvalidStateTransition:
            logger.warning(
                "Invalid status transition for policy %s: %s -> %s",
                request.policy_request_id,
                getattr(current, "value", current),
                new_status.value,
            )
            raise

        now = self._clock()
        entry = self._ledger.append(
            request.policy_request_id, current, new_status, reason=reason, changed_at=now
        )

        # Work on a copy so a rejected save leaves ``request`` as loaded
        updated = replace(
            request,
            status=new_status,
            status_history=[*request.status_history, entry],
            audit=replace(request.audit),
        )
        if is_terminal(new_status) and updated.finished_at is None:
            updated.finished_at = now
        updated.audit.touch(now)

        saved = self.store.save(updated)
        logger.info(
            "Status updated for policy %s from %s to %s",
            saved.policy_request_id,
            current.value,
            new_status.value,
            extra={"policy_request_id": saved.policy_request_id, "status": new_status.value},
        )

        for listener in self._listeners:
            listener(saved, entry)

        self._publish(event_type or event_type_for_status(new_status), saved, now)
        return saved

    def validate(self, policy_request_id: str) -> WorkflowOutcome:
        """Underwrite a request against its attached risk analysis."""
        logger.info("Starting validation for policy request: %s", policy_request_id)
        request = self.find_by_id(policy_request_id)

        analysis = request.risk_analysis
        if analysis is None:
            logger.warning("Cannot validate policy %s without risk analysis", policy_request_id)
            raise BusinessRuleViolation(
                ErrorCode.MISSING_RISK_ANALYSIS,
                f"Policy request {policy_request_id} has no risk analysis",
            )

        limits = self.config.underwriting
        args = (request.category, request.insured_amount, analysis.classification, limits)
        if underwriting.is_amount_acceptable(*args):
            reason = underwriting.acceptance_reason(*args)
            request = self.update_status(request, PolicyRequestStatus.VALIDATED, reason)
            logger.info("Policy %s validated successfully", policy_request_id)
            return WorkflowOutcome(request, accepted=True, reason=reason)

        reason = underwriting.rejection_reason(*args)
        request = self.update_status(request, PolicyRequestStatus.REJECTED, reason)
        logger.warning("Policy %s validation failed: %s", policy_request_id, reason)
        return WorkflowOutcome(
            request,
            accepted=False,
            reason=reason,
            error_code=ErrorCode.UNDERWRITING_LIMIT_EXCEEDED,
        )

    def run_fraud_analysis(self, policy_request_id: str) -> WorkflowOutcome:
        """Attach a fresh risk analysis and underwrite, or reject on failure."""
        logger.info("Starting fraud analysis for policy request: %s", policy_request_id)
        request = self.find_by_id(policy_request_id)

        if request.status != PolicyRequestStatus.RECEIVED:
            logger.warning(
                "Fraud analysis refused for policy %s in status %s",
                policy_request_id,
                request.status.value,
            )
            raise InvalidStateTransition(request.status, PolicyRequestStatus.VALIDATED)

        result = call_collaborator("Fraud analysis", lambda: self._analyze(request))
        if not result.ok:
            logger.error(
                "Fraud analysis failed for policy request %s: %s",
                policy_request_id,
                result.reason,
                exc_info=result.error,
            )
            request = self.update_status(request, PolicyRequestStatus.REJECTED, result.reason)
            return WorkflowOutcome(
                request,
                accepted=False,
                reason=result.reason,
                error_code=ErrorCode.FRAUD_ANALYSIS_ERROR,
            )

        analysis = result.value
        request.risk_analysis = analysis
        request.audit.touch(self._clock())
        self.store.save(request)
        logger.info(
            "Fraud analysis completed for policy %s: classification=%s, occurrences=%d",
            policy_request_id,
            analysis.classification.value,
            len(analysis.occurrences),
        )
        return self.validate(policy_request_id)

    def process_payment(self, policy_request_id: str) -> WorkflowOutcome:
        """Collect payment for a VALIDATED request.

        Raises
        ------
        InvalidStateTransition
            If the request is not VALIDATED.
        BusinessRuleViolation
            ``PAYMENT_FAILED`` after the request was moved to REJECTED.
        """
        logger.info("Processing payment for policy request: %s", policy_request_id)
        request = self.find_by_id(policy_request_id)

        if request.status != PolicyRequestStatus.VALIDATED:
            logger.warning(
                "Payment refused for policy %s in status %s",
                policy_request_id,
                request.status.value,
            )
            raise InvalidStateTransition(request.status, PolicyRequestStatus.PENDING)

        if self._payment_processor.process(request):
            request = self.update_status(
                request, PolicyRequestStatus.PENDING, "Payment processed"
            )
            logger.info("Payment processed successfully for policy: %s", policy_request_id)
            return WorkflowOutcome(request, accepted=True, reason="Payment processed")

        reason = "Payment was declined by the payment processor"
        self.update_status(
            request,
            PolicyRequestStatus.REJECTED,
            reason,
            event_type=EventType.PAYMENT_REJECTED,
        )
        logger.warning("Payment processing failed for policy: %s", policy_request_id)
        raise BusinessRuleViolation(ErrorCode.PAYMENT_FAILED, reason)

    def process_subscription(self, policy_request_id: str) -> WorkflowOutcome:
        """Issue the policy for a PENDING request.

        A request in any other status, or an issuer failure, moves the request
        to REJECTED and returns an outcome with ``SUBSCRIPTION_ERROR``.
        Requests already in a terminal status fail the transition table.
        """
        logger.info("Processing subscription for policy request: %s", policy_request_id)
        request = self.find_by_id(policy_request_id)

        result = call_collaborator("Subscription issuance", lambda: self._issue(request))
        if result.ok:
            request = self.update_status(
                request, PolicyRequestStatus.APPROVED, "Subscription issued"
            )
            logger.info("Subscription processed successfully for policy: %s", policy_request_id)
            return WorkflowOutcome(request, accepted=True, reason="Subscription issued")

        logger.error(
            "Error processing subscription for policy request %s: %s",
            policy_request_id,
            result.reason,
            exc_info=result.error,
        )
        request = self.update_status(request, PolicyRequestStatus.REJECTED, result.reason)
        return WorkflowOutcome(
            request,
            accepted=False,
            reason=result.reason,
            error_code=ErrorCode.SUBSCRIPTION_ERROR,
        )

    def cancel(self, policy_request_id: str, reason: str | None = None) -> WorkflowOutcome:
        """Cancel a request that has not been approved yet."""
        logger.info("Attempting to cancel policy request: %s", policy_request_id)
        request = self.find_by_id(policy_request_id)

        if request.status == PolicyRequestStatus.APPROVED:
            logger.warning("Cannot cancel approved policy: %s", policy_request_id)
            raise BusinessRuleViolation(
                ErrorCode.CANNOT_CANCEL_APPROVED,
                f"Policy request {policy_request_id} is already approved",
            )

        reason = reason or "Cancelled on customer request"
        request = self.update_status(request, PolicyRequestStatus.CANCELLED, reason)
        logger.info("Policy %s cancelled successfully", policy_request_id)
        return WorkflowOutcome(request, accepted=True, reason=reason)

    # Internals

    def _analyze(self, request: PolicyRequest) -> RiskAnalysis:
        response = self._fraud_provider.analyze(request.policy_request_id, request.customer_id)
        if response is not None and response.policy_request_id != request.policy_request_id:
            raise ValidationError(
                f"Fraud analysis response is for {response.policy_request_id}, "
                f"expected {request.policy_request_id}"
            )
        return to_risk_analysis(response, self._clock())

    def _issue(self, request: PolicyRequest) -> None:
        if request.status != PolicyRequestStatus.PENDING:
            raise InvalidStateTransition(request.status, PolicyRequestStatus.APPROVED)
        self._subscription_issuer.issue(request)

    def _publish(self, event_type: EventType, request: PolicyRequest, timestamp: datetime) -> None:
        routing = self.config.routing
        routing_key = routing.routing_key(event_type)
        event = DomainEvent.for_request(event_type, request, timestamp)
        logger.info(
            "Publishing event %s to %s with routing key %s",
            event_type.value,
            routing.topic,
            routing_key,
        )
        self._publisher.publish(routing.topic, routing_key, event)
