"""Event publishers for domain events."""

from policy_flow.sinks.console import ConsoleEventPublisher
from policy_flow.sinks.json_file import JsonLinesEventPublisher
from policy_flow.sinks.kafka import KafkaEventPublisher, PublisherStats
from policy_flow.sinks.memory import InMemoryEventPublisher, PublishedEvent

__all__ = [
    "ConsoleEventPublisher",
    "InMemoryEventPublisher",
    "JsonLinesEventPublisher",
    "KafkaEventPublisher",
    "PublishedEvent",
    "PublisherStats",
]
