"""Passport deleted template."""

from notifications.templates.base import or_placeholder
from shared.events.envelope import EventType
from shared.events.passports import PassportDeleted


class PassportDeletedTemplate:
    event_type = EventType.PASSPORT_DELETED.value
    payload_cls = PassportDeleted

    @staticmethod
    def render(payload: PassportDeleted) -> dict:
        return {
            "title": "Battery Passport Deleted",
            "body": (
                "A battery passport has been deleted.\n\n"
                f"Battery Identifier: {or_placeholder(payload.battery_identifier)}\n"
                f"Deleted By: {or_placeholder(payload.deleted_by)}"
            ),
        }
