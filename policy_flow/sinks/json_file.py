"""JSON Lines publisher that appends events to a file."""

import json
import logging
from pathlib import Path

from policy_flow.models.policy import DomainEvent
from policy_flow.sinks.serialization import event_envelope

logger = logging.getLogger(__name__)


class JsonLinesEventPublisher:
    """Append each event as one JSON line to ``<output_dir>/<topic>.jsonl``."""

    def __init__(self, output_dir: str | Path, pretty: bool = False) -> None:
        """Initialize JSON Lines publisher.

        Parameters
        ----------
        output_dir : str | Path
            Directory to write event files.
        pretty : bool
            Indent each record. Records still end with a newline but span
            several lines, so only use it for inspection.
        """
        self.output_dir = Path(output_dir)
        self.output_dir.mkdir(parents=True, exist_ok=True)
        self.pretty = pretty
        self._counts: dict[str, int] = {}

    def path_for(self, topic: str) -> Path:
        # Use topic name as filename (replace dots with underscores)
        return self.output_dir / (topic.replace(".", "_") + ".jsonl")

    def publish(self, topic: str, routing_key: str, event: DomainEvent) -> None:
        data = event_envelope(topic, routing_key, event)
        with open(self.path_for(topic), "a", encoding="utf-8") as f:
            if self.pretty:
                f.write(json.dumps(data, indent=2, ensure_ascii=False) + "\n")
            else:
                f.write(json.dumps(data, ensure_ascii=False) + "\n")
        self._counts[topic] = self._counts.get(topic, 0) + 1

    def close(self) -> None:
        """Log summary."""
        for topic, count in self._counts.items():
            logger.info("Wrote %d events to %s", count, self.path_for(topic))
