"""Tests for config and logging."""

import json
import logging
import os
from decimal import Decimal
from pathlib import Path
from unittest.mock import patch

import pytest

from policy_flow.config import (
    KafkaConfig,
    OutputConfig,
    RoutingConfig,
    UnderwritingConfig,
    WorkflowConfig,
)
from policy_flow.exceptions import ConfigurationError
from policy_flow.logging import JsonFormatter, get_logger, setup_logging
from policy_flow.models.policy import EventType

ENV_VARS = [
    "KAFKA_BOOTSTRAP_SERVERS",
    "KAFKA_ACKS",
    "KAFKA_DELIVERY_TIMEOUT",
    "POLICY_EVENTS_TOPIC",
    "UNDERWRITING_LIMITS",
    "OUTPUT_DIR",
    "PRETTY_JSON",
    "SEED",
    "LOG_LEVEL",
    "LOG_FORMAT",
]


@pytest.fixture
def clean_env():
    """Environment without any policy-flow variables."""
    env = {k: v for k, v in os.environ.items() if k not in ENV_VARS}
    with patch.dict(os.environ, env, clear=True):
        yield


class TestKafkaConfig:
    """Tests for KafkaConfig."""

    def test_default_values(self) -> None:
        """Test default configuration values."""
        config = KafkaConfig()

        assert config.bootstrap_servers == "localhost:9092"
        assert config.acks == "all"
        assert config.linger_ms == 0
        assert config.delivery_timeout == 10.0

    def test_to_dict(self) -> None:
        """Test conversion to confluent-kafka config dict."""
        result = KafkaConfig(bootstrap_servers="kafka:9092", compression="gzip").to_dict()

        assert result["bootstrap.servers"] == "kafka:9092"
        assert result["acks"] == "all"
        assert result["compression.type"] == "gzip"
        assert result["retries"] == 3
        assert "delivery_timeout" not in result


class TestRoutingConfig:
    """Tests for RoutingConfig."""

    def test_default_topic(self) -> None:
        assert RoutingConfig().topic == "policy.events.exchange"

    @pytest.mark.parametrize(
        "event_type,key",
        [
            (EventType.POLICY_REQUEST_CREATED, "policy.created"),
            (EventType.POLICY_VALIDATED, "policy.validated"),
            (EventType.POLICY_REJECTED, "policy.rejected"),
            (EventType.SUBSCRIPTION_APPROVED, "policy.approved"),
            (EventType.POLICY_CANCELLED, "policy.cancelled"),
            (EventType.PAYMENT_PROCESSED, "payment.processed"),
            (EventType.PAYMENT_REJECTED, "payment.rejected"),
            (EventType.PAYMENT_REQUESTED, "payment.requested"),
            (EventType.POLICY_STATUS_CHANGED, "policy.status.updated"),
        ],
    )
    def test_routing_keys(self, event_type: EventType, key: str) -> None:
        """Test every event type has its routing key."""
        assert RoutingConfig().routing_key(event_type) == key

    def test_missing_key_falls_back_to_status_changed(self) -> None:
        """Test unmapped event types use the generic key."""
        routing = RoutingConfig()
        del routing.routing_keys[EventType.POLICY_CANCELLED]

        assert routing.routing_key(EventType.POLICY_CANCELLED) == "policy.status.updated"

    def test_instances_do_not_share_keys(self) -> None:
        first = RoutingConfig()
        first.routing_keys[EventType.POLICY_VALIDATED] = "custom"

        assert RoutingConfig().routing_key(EventType.POLICY_VALIDATED) == "policy.validated"


class TestUnderwritingConfig:
    """Tests for UnderwritingConfig."""

    def test_default_limits(self) -> None:
        config = UnderwritingConfig()

        assert config.regular_limit == Decimal("500000")
        assert config.high_risk_limit == Decimal("50000")
        assert config.preferred_limit == Decimal("1000000")
        assert config.no_information_life_limit == Decimal("100000")
        assert config.no_information_limit == Decimal("50000")

    def test_from_mapping_overrides(self) -> None:
        """Test partial override keeps the other defaults."""
        config = UnderwritingConfig.from_mapping({"high_risk_limit": "75000"})

        assert config.high_risk_limit == Decimal("75000")
        assert config.regular_limit == Decimal("500000")

    def test_from_mapping_unknown_key(self) -> None:
        with pytest.raises(ConfigurationError, match="Unknown underwriting limit"):
            UnderwritingConfig.from_mapping({"gold_limit": 1})

    def test_from_mapping_invalid_amount(self) -> None:
        with pytest.raises(ConfigurationError, match="Invalid amount"):
            UnderwritingConfig.from_mapping({"regular_limit": "lots"})

    def test_from_mapping_non_positive(self) -> None:
        with pytest.raises(ConfigurationError, match="must be positive"):
            UnderwritingConfig.from_mapping({"regular_limit": 0})


class TestOutputConfig:
    """Tests for OutputConfig."""

    def test_default_values(self) -> None:
        config = OutputConfig()

        assert config.json_output_dir == Path("output")
        assert config.pretty_json is False


class TestWorkflowConfig:
    """Tests for WorkflowConfig."""

    def test_default_values(self) -> None:
        config = WorkflowConfig()

        assert config.seed is None
        assert config.log_level == "INFO"
        assert config.log_format == "standard"
        assert config.routing.topic == "policy.events.exchange"

    def test_from_env_default(self, clean_env) -> None:
        """Test creating config from environment with defaults."""
        config = WorkflowConfig.from_env()

        assert config.kafka.bootstrap_servers == "localhost:9092"
        assert config.kafka.acks == "all"
        assert config.routing.topic == "policy.events.exchange"
        assert config.underwriting == UnderwritingConfig()
        assert config.seed is None
        assert config.log_level == "INFO"

    def test_from_env_custom(self, clean_env) -> None:
        """Test creating config from custom environment variables."""
        env_vars = {
            "KAFKA_BOOTSTRAP_SERVERS": "kafka-cluster:9092",
            "KAFKA_ACKS": "1",
            "KAFKA_DELIVERY_TIMEOUT": "2.5",
            "POLICY_EVENTS_TOPIC": "insurance.events",
            "UNDERWRITING_LIMITS": json.dumps({"regular_limit": 600000}),
            "OUTPUT_DIR": "/tmp/events",
            "PRETTY_JSON": "true",
            "SEED": "123",
            "LOG_LEVEL": "DEBUG",
            "LOG_FORMAT": "json",
        }

        with patch.dict(os.environ, env_vars):
            config = WorkflowConfig.from_env()

        assert config.kafka.bootstrap_servers == "kafka-cluster:9092"
        assert config.kafka.acks == "1"
        assert config.kafka.delivery_timeout == 2.5
        assert config.routing.topic == "insurance.events"
        assert config.underwriting.regular_limit == Decimal("600000")
        assert config.output.json_output_dir == Path("/tmp/events")
        assert config.output.pretty_json is True
        assert config.seed == 123
        assert config.log_level == "DEBUG"
        assert config.log_format == "json"

    def test_from_env_invalid_limits_json(self, clean_env) -> None:
        with patch.dict(os.environ, {"UNDERWRITING_LIMITS": "{not json"}):
            with pytest.raises(ConfigurationError):
                WorkflowConfig.from_env()

    def test_from_env_limits_not_object(self, clean_env) -> None:
        with patch.dict(os.environ, {"UNDERWRITING_LIMITS": "[1, 2]"}):
            with pytest.raises(ConfigurationError, match="JSON object"):
                WorkflowConfig.from_env()


class TestSetupLogging:
    """Tests for setup_logging function."""

    def test_setup_logging_default(self) -> None:
        """Test default logging setup."""
        setup_logging()

        assert logging.getLogger("policy_flow").level == logging.INFO

    def test_setup_logging_debug(self) -> None:
        setup_logging(level="DEBUG")

        assert logging.getLogger().level == logging.DEBUG

    def test_setup_logging_invalid_level(self) -> None:
        """Test logging with invalid level defaults to INFO."""
        setup_logging(level="INVALID")

        assert logging.getLogger().level == logging.INFO

    def test_setup_logging_json_format(self) -> None:
        """Test JSON format logging."""
        setup_logging(format_type="json")

        logger = logging.getLogger()
        assert any(isinstance(h.formatter, JsonFormatter) for h in logger.handlers)

    def test_setup_logging_replaces_handlers(self) -> None:
        """Test that setup_logging replaces existing handlers."""
        logger = logging.getLogger()
        logger.addHandler(logging.StreamHandler())
        logger.addHandler(logging.StreamHandler())

        setup_logging()

        assert len(logger.handlers) == 1

    def test_external_loggers_quieted(self) -> None:
        """Test that external library loggers are quieted."""
        setup_logging(level="DEBUG")

        assert logging.getLogger("confluent_kafka").level == logging.WARNING
        assert logging.getLogger("faker").level == logging.WARNING


class TestJsonFormatter:
    """Tests for JsonFormatter."""

    def _record(self, **kwargs) -> logging.LogRecord:
        values = dict(
            name="test.logger",
            level=logging.INFO,
            pathname="/path/to/file.py",
            lineno=42,
            msg="Test message",
            args=(),
            exc_info=None,
        )
        values.update(kwargs)
        return logging.LogRecord(**values)

    def test_format_basic(self) -> None:
        """Test basic log formatting."""
        data = json.loads(JsonFormatter().format(self._record()))

        assert data["level"] == "INFO"
        assert data["logger"] == "test.logger"
        assert data["message"] == "Test message"
        assert "timestamp" in data

    def test_format_with_exception(self) -> None:
        """Test formatting with exception info."""
        try:
            raise ValueError("Test error")
        except ValueError:
            import sys

            exc_info = sys.exc_info()

        record = self._record(level=logging.ERROR, msg="Error occurred", exc_info=exc_info)
        data = json.loads(JsonFormatter().format(record))

        assert data["level"] == "ERROR"
        assert "ValueError" in data["exception"]

    def test_format_with_workflow_fields(self) -> None:
        """Test policy fields passed through ``extra`` are emitted."""
        record = self._record()
        record.policy_request_id = "req-1"
        record.status = "VALIDATED"

        data = json.loads(JsonFormatter().format(record))

        assert data["policy_request_id"] == "req-1"
        assert data["status"] == "VALIDATED"
        assert "event_type" not in data

    def test_format_with_extra(self) -> None:
        """Test formatting with extra fields."""
        record = self._record()
        record.extra = {"custom_field": "custom_value"}

        data = json.loads(JsonFormatter().format(record))

        assert data["custom_field"] == "custom_value"


class TestGetLogger:
    """Tests for get_logger function."""

    def test_get_logger(self) -> None:
        logger = get_logger("test.module")

        assert isinstance(logger, logging.Logger)
        assert logger.name == "test.module"

    def test_get_logger_same_instance(self) -> None:
        assert get_logger("test.same") is get_logger("test.same")


class TestPolicyFlowInit:
    """Tests for policy_flow __init__.py."""

    def test_version_exported(self) -> None:
        from policy_flow import __version__

        assert isinstance(__version__, str)
