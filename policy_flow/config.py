"""Configuration management for policy-flow."""

import json
import os
from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Any

from policy_flow.exceptions import ConfigurationError
from policy_flow.models.policy.enums import EventType


@dataclass
class KafkaConfig:
    """Kafka producer configuration."""

    bootstrap_servers: str = "localhost:9092"
    acks: str = "all"
    linger_ms: int = 0
    compression: str = "snappy"
    retries: int = 3
    delivery_timeout: float = 10.0  # seconds to wait for a delivery report

    def to_dict(self) -> dict[str, Any]:
        """Convert to confluent-kafka config dict."""
        return {
            "bootstrap.servers": self.bootstrap_servers,
            "acks": self.acks,
            "linger.ms": self.linger_ms,
            "compression.type": self.compression,
            "retries": self.retries,
        }


def _default_routing_keys() -> dict[EventType, str]:
    return {
        EventType.POLICY_REQUEST_CREATED: "policy.created",
        EventType.POLICY_VALIDATED: "policy.validated",
        EventType.POLICY_REJECTED: "policy.rejected",
        EventType.SUBSCRIPTION_APPROVED: "policy.approved",
        EventType.POLICY_CANCELLED: "policy.cancelled",
        EventType.PAYMENT_PROCESSED: "payment.processed",
        EventType.PAYMENT_REJECTED: "payment.rejected",
        EventType.PAYMENT_REQUESTED: "payment.requested",
        EventType.POLICY_STATUS_CHANGED: "policy.status.updated",
    }


@dataclass
class RoutingConfig:
    """Topic and routing keys used when publishing domain events."""

    topic: str = "policy.events.exchange"
    routing_keys: dict[EventType, str] = field(default_factory=_default_routing_keys)

    def routing_key(self, event_type: EventType) -> str:
        """Routing key for an event type, falling back to the status-changed key."""
        return self.routing_keys.get(
            event_type, self.routing_keys[EventType.POLICY_STATUS_CHANGED]
        )


@dataclass
class UnderwritingConfig:
    """Insured-amount limits per risk classification (inclusive)."""

    regular_limit: Decimal = Decimal("500000")
    high_risk_limit: Decimal = Decimal("50000")
    preferred_limit: Decimal = Decimal("1000000")
    no_information_life_limit: Decimal = Decimal("100000")
    no_information_limit: Decimal = Decimal("50000")

    @classmethod
    def from_mapping(cls, values: dict[str, Any]) -> "UnderwritingConfig":
        """Build limits from a mapping of field name to amount.

        Raises
        ------
        ConfigurationError
            If a key is unknown or an amount is not a positive decimal.
        """
        known = set(cls.__dataclass_fields__)
        limits: dict[str, Decimal] = {}
        for key, raw in values.items():
            if key not in known:
                raise ConfigurationError(f"Unknown underwriting limit: {key}")
            try:
                amount = Decimal(str(raw))
            except InvalidOperation as exc:
                raise ConfigurationError(f"Invalid amount for {key}: {raw!r}") from exc
            if amount <= 0:
                raise ConfigurationError(f"Underwriting limit {key} must be positive")
            limits[key] = amount
        return cls(**limits)


@dataclass
class OutputConfig:
    """Output configuration for file-based publishers."""

    json_output_dir: Path = field(default_factory=lambda: Path("output"))
    pretty_json: bool = False


@dataclass
class WorkflowConfig:
    """Main configuration for policy-flow."""

    kafka: KafkaConfig = field(default_factory=KafkaConfig)
    routing: RoutingConfig = field(default_factory=RoutingConfig)
    underwriting: UnderwritingConfig = field(default_factory=UnderwritingConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
    seed: int | None = None
    log_level: str = "INFO"
    log_format: str = "standard"

    @classmethod
    def from_env(cls) -> "WorkflowConfig":
        """Create config from environment variables."""
        kafka = KafkaConfig(
            bootstrap_servers=os.getenv("KAFKA_BOOTSTRAP_SERVERS", "localhost:9092"),
            acks=os.getenv("KAFKA_ACKS", "all"),
            delivery_timeout=float(os.getenv("KAFKA_DELIVERY_TIMEOUT", "10")),
        )

        routing = RoutingConfig(
            topic=os.getenv("POLICY_EVENTS_TOPIC", "policy.events.exchange"),
        )

        limits_str = os.getenv("UNDERWRITING_LIMITS")
        if limits_str:
            try:
                limits = json.loads(limits_str)
            except json.JSONDecodeError as exc:
                raise ConfigurationError("UNDERWRITING_LIMITS must be a JSON object") from exc
            if not isinstance(limits, dict):
                raise ConfigurationError("UNDERWRITING_LIMITS must be a JSON object")
            underwriting = UnderwritingConfig.from_mapping(limits)
        else:
            underwriting = UnderwritingConfig()

        output = OutputConfig(
            json_output_dir=Path(os.getenv("OUTPUT_DIR", "output")),
            pretty_json=os.getenv("PRETTY_JSON", "false").lower() == "true",
        )

        return cls(
            kafka=kafka,
            routing=routing,
            underwriting=underwriting,
            output=output,
            seed=int(os.getenv("SEED")) if os.getenv("SEED") else None,
            log_level=os.getenv("LOG_LEVEL", "INFO"),
            log_format=os.getenv("LOG_FORMAT", "standard"),
        )
