"""Template registry and notification builder.

Each template knows the typed payload it reads and how to render a title and
body from it. ``build`` is a pure function: templates never fail on missing
fields, and unknown event types get a fixed fallback.
"""

from typing import Any, Mapping

from notifications.templates.document_deleted import DocumentDeletedTemplate
from notifications.templates.document_uploaded import DocumentUploadedTemplate
from notifications.templates.general_info import GeneralInfoTemplate
from notifications.templates.passport_created import PassportCreatedTemplate
from notifications.templates.passport_deleted import PassportDeletedTemplate
from notifications.templates.passport_updated import PassportUpdatedTemplate
from notifications.templates.system_alert import SystemAlertTemplate
from notifications.templates.user_login import UserLoginTemplate
from notifications.templates.user_registered import UserRegisteredTemplate
from shared.events.envelope import EventType

FALLBACK = {
    "title": "Notification",
    "body": "You have a new notification from the system.",
}

TEMPLATE_REGISTRY: dict[str, type] = {
    EventType.PASSPORT_CREATED.value: PassportCreatedTemplate,
    EventType.PASSPORT_UPDATED.value: PassportUpdatedTemplate,
    EventType.PASSPORT_DELETED.value: PassportDeletedTemplate,
    EventType.DOCUMENT_UPLOADED.value: DocumentUploadedTemplate,
    EventType.DOCUMENT_DELETED.value: DocumentDeletedTemplate,
    EventType.USER_REGISTERED.value: UserRegisteredTemplate,
    EventType.USER_LOGIN.value: UserLoginTemplate,
    EventType.SYSTEM_ALERT.value: SystemAlertTemplate,
    EventType.GENERAL_INFO.value: GeneralInfoTemplate,
}


def get_template(event_type: str):
    """Look up a template class by event type string."""
    template_cls = TEMPLATE_REGISTRY.get(event_type)
    if template_cls is None:
        raise ValueError(f"No template registered for event type: {event_type}")
    return template_cls


def build(event_type: str | EventType, payload: Mapping[str, Any] | None = None) -> dict:
    """Render ``{"title", "body"}`` for an event type and its payload."""
    if isinstance(event_type, EventType):
        event_type = event_type.value

    template_cls = TEMPLATE_REGISTRY.get(event_type)
    if template_cls is None:
        return dict(FALLBACK)

    return template_cls.render(template_cls.payload_cls.from_payload(payload))
