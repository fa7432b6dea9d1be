"""Passport updated template — lists the fields that changed."""

from notifications.templates.base import or_placeholder
from shared.events.envelope import EventType
from shared.events.passports import PassportUpdated


class PassportUpdatedTemplate:
    event_type = EventType.PASSPORT_UPDATED.value
    payload_cls = PassportUpdated

    @staticmethod
    def render(payload: PassportUpdated) -> dict:
        fields = payload.updated_fields
        if isinstance(fields, (list, tuple)):
            fields = ", ".join(str(f) for f in fields)
        return {
            "title": "Battery Passport Updated",
            "body": (
                "A battery passport has been updated.\n\n"
                f"Battery Identifier: {or_placeholder(payload.battery_identifier)}\n"
                f"Updated Fields: {or_placeholder(fields)}"
            ),
        }
