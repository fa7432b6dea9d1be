"""General information template — caller supplies title and message."""

from shared.events.envelope import EventType
from shared.events.system import GeneralInfo


class GeneralInfoTemplate:
    event_type = EventType.GENERAL_INFO.value
    payload_cls = GeneralInfo

    @staticmethod
    def render(payload: GeneralInfo) -> dict:
        return {
            "title": payload.title or "Information",
            "body": payload.message or "This is a general information notification.",
        }
