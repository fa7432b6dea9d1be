"""System alert template — free-text alert raised by an internal caller."""

from shared.events.envelope import EventType
from shared.events.system import SystemAlert


class SystemAlertTemplate:
    event_type = EventType.SYSTEM_ALERT.value
    payload_cls = SystemAlert

    @staticmethod
    def render(payload: SystemAlert) -> dict:
        return {
            "title": "System Alert",
            "body": payload.message or "A system alert has been triggered.",
        }
