"""Event contracts for internally generated notifications (alerts and general information)."""

from dataclasses import dataclass

from shared.events.base import EventPayload, wire
from shared.events.envelope import EventType


@dataclass(frozen=True)
class SystemAlert(EventPayload):
    event_type = EventType.SYSTEM_ALERT

    message: str | None = wire("message")


@dataclass(frozen=True)
class GeneralInfo(EventPayload):
    event_type = EventType.GENERAL_INFO

    title: str | None = wire("title")
    message: str | None = wire("message")
