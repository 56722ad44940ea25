"""Base models shared across domains."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass
class AuditMetadata:
    """Creation and last-update timestamps attached to an aggregate."""

    created_at: datetime | None = None
    updated_at: datetime | None = None

    def touch(self, now: datetime) -> None:
        """Stamp ``now`` as the update time, and as creation time if unset."""
        if self.created_at is None:
            self.created_at = now
        self.updated_at = now
