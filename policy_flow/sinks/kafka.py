"""Kafka publisher for policy lifecycle events."""

import logging
import time
from dataclasses import dataclass
from typing import Any

from confluent_kafka import KafkaException, Producer

from policy_flow.config import KafkaConfig
from policy_flow.exceptions import EventPublishError
from policy_flow.models.policy import DomainEvent
from policy_flow.sinks.serialization import encode_event

logger = logging.getLogger(__name__)


@dataclass
class PublisherStats:
    """Track producer delivery statistics."""

    sent: int = 0
    delivered: int = 0
    failed: int = 0
    start_time: float | None = None

    @property
    def success_rate(self) -> float:
        """Calculate success rate."""
        total = self.delivered + self.failed
        return self.delivered / total if total > 0 else 0.0


class KafkaEventPublisher:
    """Publish domain events to a Kafka topic, one confirmed message at a time.

    The message key is the policy request id, so all events of one request
    land on the same partition in the order they were emitted. The routing
    key and event type travel as headers.
    """

    def __init__(self, config: KafkaConfig | str) -> None:
        """Initialize Kafka publisher.

        Parameters
        ----------
        config : KafkaConfig | str
            Producer configuration or bootstrap servers string.
        """
        if isinstance(config, str):
            config = KafkaConfig(bootstrap_servers=config)

        self.config = config
        self.producer = Producer(config.to_dict())
        self.stats = PublisherStats(start_time=time.time())
        self._last_error: Any = None

    def _delivery_callback(self, err: Any, msg: Any) -> None:
        """Handle delivery reports."""
        if err:
            self.stats.failed += 1
            self._last_error = err
            logger.error("Delivery failed: %s", err)
        else:
            self.stats.delivered += 1
            logger.debug("Delivered to %s[%d]@%d", msg.topic(), msg.partition(), msg.offset())

    def publish(self, topic: str, routing_key: str, event: DomainEvent) -> None:
        """Send one event and wait for its delivery report.

        Raises
        ------
        EventPublishError
            If the producer rejects the message, delivery fails, or no
            report arrives within ``delivery_timeout``.
        """
        self._last_error = None
        try:
            self.producer.produce(
                topic=topic,
                key=event.policy_request_id.encode("utf-8"),
                value=encode_event(event),
                headers=[
                    ("routing_key", routing_key.encode("utf-8")),
                    ("event_type", event.event_type.value.encode("utf-8")),
                ],
                callback=self._delivery_callback,
            )
        except (BufferError, KafkaException) as exc:
            self.stats.failed += 1
            raise EventPublishError(
                f"Failed to publish {event.event_type.value} for {event.policy_request_id}: {exc}"
            ) from exc
        self.stats.sent += 1
        self.producer.poll(0)

        remaining = self.producer.flush(self.config.delivery_timeout)
        if remaining:
            raise EventPublishError(
                f"Timed out waiting for delivery of {event.event_type.value} "
                f"for {event.policy_request_id}"
            )
        if self._last_error is not None:
            raise EventPublishError(
                f"Delivery of {event.event_type.value} for {event.policy_request_id} "
                f"failed: {self._last_error}"
            )
        logger.debug("Published %s with routing key %s", event.event_type.value, routing_key)

    def flush(self, timeout: float = 30.0) -> None:
        """Flush pending messages."""
        self.producer.flush(timeout)

    def close(self) -> None:
        """Flush and close the producer."""
        self.flush()
        logger.info(
            "Kafka publisher closed: sent=%d, delivered=%d, failed=%d",
            self.stats.sent,
            self.stats.delivered,
            self.stats.failed,
        )
