"""Policy-request store with optimistic concurrency control."""

import copy
import logging
import threading
from collections import Counter

from policy_flow.exceptions import IntegrityViolation, NotFoundError, ValidationError
from policy_flow.models.policy import PolicyRequest

logger = logging.getLogger(__name__)


class InMemoryPolicyRequestStore:
    """Dict-backed store keyed by policy request id.

    Stored requests are private deep copies, so callers only change what is
    persisted by calling ``save``. Each save must present the version it
    loaded; the store bumps it on success.
    """

    def __init__(self) -> None:
        self._requests: dict[str, PolicyRequest] = {}
        self._customer_requests: dict[str, list[str]] = {}
        self._lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._requests)

    def __contains__(self, policy_request_id: object) -> bool:
        return policy_request_id in self._requests

    def save(self, request: PolicyRequest) -> PolicyRequest:
        """Insert or update ``request`` and return it with its new version.

        Raises
        ------
        IntegrityViolation
            On a duplicate insert (version 0 for a known id) or when the
            caller's version is stale.
        """
        if not request.policy_request_id:
            raise ValidationError("policy_request_id is required")

        with self._lock:
            stored = self._requests.get(request.policy_request_id)
            if stored is None:
                if request.version != 0:
                    raise IntegrityViolation(
                        f"Policy request {request.policy_request_id} does not exist "
                        f"(version {request.version})"
                    )
                self._customer_requests.setdefault(request.customer_id, []).append(
                    request.policy_request_id
                )
            elif request.version == 0:
                raise IntegrityViolation(
                    f"Policy request {request.policy_request_id} already exists"
                )
            elif stored.version != request.version:
                logger.warning(
                    "Stale write for policy %s: stored version %d, given %d",
                    request.policy_request_id,
                    stored.version,
                    request.version,
                )
                raise IntegrityViolation(
                    f"Policy request {request.policy_request_id} was modified concurrently "
                    f"(stored version {stored.version}, given {request.version})"
                )

            request.version += 1
            self._requests[request.policy_request_id] = copy.deepcopy(request)

        logger.debug("Saved policy %s at version %d", request.policy_request_id, request.version)
        return request

    def find_by_id(self, policy_request_id: str) -> PolicyRequest:
        """Return a copy of the stored request.

        Raises
        ------
        NotFoundError
            If no request has this id.
        """
        with self._lock:
            stored = self._requests.get(policy_request_id)
            if stored is None:
                raise NotFoundError(f"Policy request not found: {policy_request_id}")
            return copy.deepcopy(stored)

    def find_by_customer_id(self, customer_id: str) -> list[PolicyRequest]:
        with self._lock:
            ids = self._customer_requests.get(customer_id, [])
            return [copy.deepcopy(self._requests[i]) for i in ids]

    def all(self) -> list[PolicyRequest]:
        with self._lock:
            return [copy.deepcopy(r) for r in self._requests.values()]

    def summary(self) -> dict[str, int]:
        """Get a summary of stored requests by status."""
        with self._lock:
            counts = Counter(r.status.value for r in self._requests.values())
        return {"policy_requests": len(self._requests), **dict(counts)}
