"""Base class for typed event payloads.

Payloads travel as schema-less maps. Each event type gets a frozen dataclass
declaring only the fields its consumers need; ``from_payload`` picks those
fields out of the map (by their camelCase wire name) and ignores the rest.
Every field is optional: a missing key becomes ``None``.
"""

from dataclasses import dataclass, field, fields
from typing import Any, ClassVar, Mapping

from shared.events.envelope import EventType


def wire(name: str, default: Any = None):
    """Declare a payload field read from the ``name`` key of the wire map."""
    return field(default=default, metadata={"wire": name})


@dataclass(frozen=True)
class EventPayload:
    event_type: ClassVar[EventType]

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any] | None):
        payload = payload or {}
        values = {}
        for f in fields(cls):
            key = f.metadata.get("wire", f.name)
            if key in payload:
                values[f.name] = payload[key]
        return cls(**values)
