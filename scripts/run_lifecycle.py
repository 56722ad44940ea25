#!/usr/bin/env python3
"""Run generated policy requests through the lifecycle workflow.

Each request is created, fraud-analysed, underwritten and, when validated,
paid for and subscribed (or cancelled). Domain events go to the selected
publisher:
- console: pretty-printed JSON on stdout
- json: one JSON Lines file per topic under --output-dir
- kafka: confluent-kafka producer, keyed by policy request id
- memory: kept in memory; only the summary is printed
"""

import argparse
import json
import logging
import sys
import time
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from policy_flow.config import KafkaConfig, WorkflowConfig
from policy_flow.exceptions import PolicyFlowError
from policy_flow.logging import setup_logging
from policy_flow.scenarios import PolicyLifecycleScenario
from policy_flow.sinks import (
    ConsoleEventPublisher,
    InMemoryEventPublisher,
    JsonLinesEventPublisher,
    KafkaEventPublisher,
)

logger = logging.getLogger(__name__)


def build_publisher(args: argparse.Namespace, config: WorkflowConfig):
    """Create the event publisher selected on the command line."""
    if args.publisher == "console":
        return ConsoleEventPublisher(pretty=True)
    if args.publisher == "json":
        return JsonLinesEventPublisher(args.output_dir, pretty=config.output.pretty_json)
    if args.publisher == "kafka":
        kafka = KafkaConfig(
            bootstrap_servers=args.kafka_bootstrap,
            acks=config.kafka.acks,
            delivery_timeout=config.kafka.delivery_timeout,
        )
        return KafkaEventPublisher(kafka)
    return InMemoryEventPublisher()


def main() -> None:
    """Main entry point."""
    config = WorkflowConfig.from_env()

    parser = argparse.ArgumentParser(
        description="Run generated policy requests through the lifecycle workflow"
    )
    parser.add_argument(
        "--requests",
        type=int,
        default=100,
        help="Number of policy requests to generate (default: 100)",
    )
    parser.add_argument(
        "--customers",
        type=int,
        default=None,
        help="Size of the customer pool (default: one customer per request)",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=config.seed if config.seed is not None else 42,
        help="Random seed for reproducibility (default: 42)",
    )
    parser.add_argument(
        "--publisher",
        type=str,
        choices=["console", "json", "kafka", "memory"],
        default="memory",
        help="Where to publish domain events (default: memory)",
    )
    parser.add_argument(
        "--output-dir",
        type=Path,
        default=config.output.json_output_dir,
        help="Output directory for the json publisher (default: output)",
    )
    parser.add_argument(
        "--kafka-bootstrap",
        type=str,
        default=config.kafka.bootstrap_servers,
        help="Kafka bootstrap servers",
    )
    parser.add_argument(
        "--payment-approval-rate",
        type=float,
        default=0.9,
        help="Probability that a payment is approved (default: 0.9)",
    )
    parser.add_argument(
        "--subscription-failure-rate",
        type=float,
        default=0.05,
        help="Probability that subscription issuance fails (default: 0.05)",
    )
    parser.add_argument(
        "--cancel-rate",
        type=float,
        default=0.05,
        help="Probability that a validated request is cancelled (default: 0.05)",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=config.log_level,
        help="Log level (default: INFO)",
    )
    parser.add_argument(
        "--log-format",
        type=str,
        choices=["standard", "json"],
        default=config.log_format,
        help="Log format (default: standard)",
    )

    args = parser.parse_args()

    for name in ("payment_approval_rate", "subscription_failure_rate", "cancel_rate"):
        value = getattr(args, name)
        if not 0.0 <= value <= 1.0:
            parser.error(f"--{name.replace('_', '-')} must be between 0 and 1")

    setup_logging(args.log_level, args.log_format)

    logger.info("=" * 60)
    logger.info("Policy Flow - Lifecycle Run")
    logger.info("=" * 60)
    logger.info("Requests: %d, publisher: %s, seed: %d", args.requests, args.publisher, args.seed)

    publisher = build_publisher(args, config)
    scenario = PolicyLifecycleScenario(
        num_requests=args.requests,
        num_customers=args.customers,
        payment_approval_rate=args.payment_approval_rate,
        subscription_failure_rate=args.subscription_failure_rate,
        cancel_rate=args.cancel_rate,
        seed=args.seed,
        publisher=publisher,
        config=config,
    )

    start = time.perf_counter()
    try:
        scenario.generate()
    except PolicyFlowError:
        logger.exception("Lifecycle run aborted")
        sys.exit(1)
    finally:
        publisher.close()
    elapsed = time.perf_counter() - start

    logger.info("Completed in %.2fs", elapsed)
    print(json.dumps(scenario.summary(), indent=2))


if __name__ == "__main__":
    main()
