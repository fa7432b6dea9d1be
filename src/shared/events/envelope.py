"""Event envelope — the wire format exchanged over the messaging transport.

One message per event, one topic per event type. The body is a JSON object
carrying the event payload at top level plus a ``producedAt`` timestamp:

    {
        "passportId": "p1",
        "batteryIdentifier": "B-1",
        "createdBy": "u1",
        "createdAt": "2026-01-01T10:00:00+00:00",
        "producedAt": "2026-01-01T10:00:00.120000+00:00"
    }

The event type is not part of the body; it is carried by the topic name.
"""

import json
from dataclasses import dataclass, field
from datetime import UTC, date, datetime
from enum import Enum
from types import MappingProxyType
from typing import Any, Mapping

PRODUCED_AT_KEY = "producedAt"


class EventType(Enum):
    PASSPORT_CREATED = "passport.created"
    PASSPORT_UPDATED = "passport.updated"
    PASSPORT_DELETED = "passport.deleted"
    DOCUMENT_UPLOADED = "document.uploaded"
    DOCUMENT_DELETED = "document.deleted"
    USER_REGISTERED = "user.registered"
    USER_LOGIN = "user.login"
    SYSTEM_ALERT = "system.alert"
    GENERAL_INFO = "general.info"


class DecodeError(ValueError):
    """A message could not be turned into a DomainEvent."""


class UnknownEventTypeError(DecodeError):
    """The topic does not name a known event type."""


@dataclass(frozen=True)
class DomainEvent:
    """An immutable fact published when owned state changes."""

    event_type: EventType
    payload: Mapping[str, Any] = field(default_factory=dict)
    produced_at: datetime = field(default_factory=lambda: datetime.now(UTC))

    def __post_init__(self):
        # Freeze the payload so handlers cannot mutate a published event
        object.__setattr__(self, "payload", MappingProxyType(dict(self.payload)))

    @property
    def topic(self) -> str:
        return self.event_type.value


def resolve_event_type(value: str | EventType) -> EventType:
    """Return the EventType for a topic/type string."""
    if isinstance(value, EventType):
        return value
    try:
        return EventType(value)
    except ValueError:
        raise UnknownEventTypeError(f"Unknown event type: {value}") from None


def _json_default(value):
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, (set, frozenset, tuple)):
        return list(value)
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def encode(event: DomainEvent) -> dict:
    """Render an event as the wire message (a JSON-compatible dict)."""
    message = json.loads(json.dumps(dict(event.payload), default=_json_default))
    message[PRODUCED_AT_KEY] = event.produced_at.isoformat()
    return message


def dumps(event: DomainEvent) -> str:
    """Render an event as JSON text."""
    return json.dumps(encode(event))


def _parse_timestamp(value) -> datetime:
    if isinstance(value, datetime):
        parsed = value
    else:
        try:
            parsed = datetime.fromisoformat(str(value).replace("Z", "+00:00"))
        except ValueError:
            raise DecodeError(f"Invalid {PRODUCED_AT_KEY} timestamp: {value!r}") from None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed


def decode(topic: str, raw: bytes | str | Mapping) -> DomainEvent:
    """Turn a transport message received on ``topic`` into a DomainEvent.

    Raises:
        UnknownEventTypeError: the topic is not a known event type.
        DecodeError: the body is not a JSON object or carries a bad timestamp.
    """
    event_type = resolve_event_type(topic)

    if isinstance(raw, (bytes, bytearray)):
        try:
            raw = raw.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise DecodeError(f"Message on {topic} is not valid UTF-8") from exc

    if isinstance(raw, str):
        try:
            body = json.loads(raw)
        except json.JSONDecodeError as exc:
            raise DecodeError(f"Message on {topic} is not valid JSON: {exc.msg}") from exc
    else:
        body = raw

    if not isinstance(body, Mapping):
        raise DecodeError(f"Message on {topic} must be a JSON object, got {type(body).__name__}")

    payload = dict(body)
    produced_at = payload.pop(PRODUCED_AT_KEY, None)

    return DomainEvent(
        event_type=event_type,
        payload=payload,
        produced_at=_parse_timestamp(produced_at) if produced_at is not None else datetime.now(UTC),
    )
