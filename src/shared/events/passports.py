"""Cross-service event contracts for passport lifecycle events.

Published by the passport service on the ``passport.*`` topics and consumed
by the Notifications context.
"""

from dataclasses import dataclass

from shared.events.base import EventPayload, wire
from shared.events.envelope import EventType


@dataclass(frozen=True)
class PassportCreated(EventPayload):
    """A new battery passport was created."""

    event_type = EventType.PASSPORT_CREATED

    passport_id: str | None = wire("passportId")
    battery_identifier: str | None = wire("batteryIdentifier")
    model_name: str | None = wire("modelName")
    manufacturer_name: str | None = wire("manufacturerName")
    created_by: str | None = wire("createdBy")
    created_at: str | None = wire("createdAt")


@dataclass(frozen=True)
class PassportUpdated(EventPayload):
    """An existing battery passport was modified."""

    event_type = EventType.PASSPORT_UPDATED

    passport_id: str | None = wire("passportId")
    battery_identifier: str | None = wire("batteryIdentifier")
    updated_fields: list[str] | None = wire("updatedFields")
    updated_by: str | None = wire("updatedBy")
    updated_at: str | None = wire("updatedAt")


@dataclass(frozen=True)
class PassportDeleted(EventPayload):
    """A battery passport was deleted."""

    event_type = EventType.PASSPORT_DELETED

    passport_id: str | None = wire("passportId")
    battery_identifier: str | None = wire("batteryIdentifier")
    deleted_by: str | None = wire("deletedBy")
    deleted_at: str | None = wire("deletedAt")
