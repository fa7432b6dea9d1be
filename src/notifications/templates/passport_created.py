"""Passport created template — broadcast when a new battery passport is registered."""

from notifications.templates.base import or_placeholder
from shared.events.envelope import EventType
from shared.events.passports import PassportCreated


class PassportCreatedTemplate:
    event_type = EventType.PASSPORT_CREATED.value
    payload_cls = PassportCreated

    @staticmethod
    def render(payload: PassportCreated) -> dict:
        return {
            "title": "New Battery Passport Created",
            "body": (
                "A new battery passport has been created successfully.\n\n"
                f"Battery Identifier: {or_placeholder(payload.battery_identifier)}\n"
                f"Model: {or_placeholder(payload.model_name)}\n"
                f"Manufacturer: {or_placeholder(payload.manufacturer_name)}"
            ),
        }
