"""Shared serialization utilities for event publishers."""

import json
from dataclasses import fields, is_dataclass
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Any

from policy_flow.models.policy import DomainEvent


def to_dict(obj: Any) -> dict:
    """Convert object to dictionary."""
    if is_dataclass(obj):
        return dataclass_to_dict(obj)
    elif isinstance(obj, dict):
        return {k: serialize_value(v) for k, v in obj.items()}
    else:
        return {"value": str(obj)}


def dataclass_to_dict(obj: Any) -> dict:
    """Convert a dataclass to a JSON-ready dict.

    Walks ``fields()`` instead of ``asdict()`` so enum members and nested
    dataclasses go through ``serialize_value``.
    """
    return {f.name: serialize_value(getattr(obj, f.name)) for f in fields(obj)}


def serialize_value(value: Any) -> Any:
    """Serialize a value for JSON output."""
    if isinstance(value, Decimal):
        return str(value)
    elif isinstance(value, Enum):
        return value.value
    elif isinstance(value, datetime):
        return value.isoformat()
    elif isinstance(value, date):
        return value.isoformat()
    elif is_dataclass(value):
        return dataclass_to_dict(value)
    elif isinstance(value, dict):
        return {serialize_value(k): serialize_value(v) for k, v in value.items()}
    elif isinstance(value, (list, tuple)):
        return [serialize_value(v) for v in value]
    return value


def event_envelope(topic: str, routing_key: str, event: DomainEvent) -> dict:
    """Event payload plus the destination it was published to."""
    return {"topic": topic, "routing_key": routing_key, **to_dict(event)}


def encode_event(event: DomainEvent) -> bytes:
    """UTF-8 JSON encoding used on the wire."""
    return json.dumps(to_dict(event), ensure_ascii=False).encode("utf-8")
