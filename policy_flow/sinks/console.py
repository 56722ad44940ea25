"""Console publisher for debugging and development."""

import json

from policy_flow.models.policy import DomainEvent
from policy_flow.sinks.serialization import event_envelope


class ConsoleEventPublisher:
    """Print domain events to stdout."""

    def __init__(self, pretty: bool = True) -> None:
        self.pretty = pretty
        self._counts: dict[str, int] = {}

    def publish(self, topic: str, routing_key: str, event: DomainEvent) -> None:
        data = event_envelope(topic, routing_key, event)
        if self.pretty:
            print(json.dumps(data, indent=2, ensure_ascii=False))
        else:
            print(json.dumps(data, ensure_ascii=False))
        key = event.event_type.value
        self._counts[key] = self._counts.get(key, 0) + 1

    def close(self) -> None:
        """Print summary and close."""
        print(f"\n{'='*60}")
        print("Console Publisher Summary")
        print("=" * 60)
        for event_type, count in self._counts.items():
            print(f"  {event_type}: {count} events")
