"""In-memory publisher that records every event it receives."""

from dataclasses import dataclass

from policy_flow.models.policy import DomainEvent, EventType


@dataclass(frozen=True)
class PublishedEvent:
    topic: str
    routing_key: str
    event: DomainEvent


class InMemoryEventPublisher:
    """Keep published events in order, for tests and dry runs."""

    def __init__(self) -> None:
        self.published: list[PublishedEvent] = []

    def publish(self, topic: str, routing_key: str, event: DomainEvent) -> None:
        self.published.append(PublishedEvent(topic, routing_key, event))

    @property
    def events(self) -> list[DomainEvent]:
        return [p.event for p in self.published]

    def event_types(self, policy_request_id: str | None = None) -> list[EventType]:
        """Event types in publish order, optionally for one request only."""
        return [
            p.event.event_type
            for p in self.published
            if policy_request_id is None or p.event.policy_request_id == policy_request_id
        ]

    def routing_keys(self, policy_request_id: str | None = None) -> list[str]:
        return [
            p.routing_key
            for p in self.published
            if policy_request_id is None or p.event.policy_request_id == policy_request_id
        ]

    def clear(self) -> None:
        self.published.clear()

    def close(self) -> None:
        pass
