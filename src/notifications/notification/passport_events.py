"""Inbound cross-service event handlers — Notifications reacts to passport events.

Subscribes to the passport lifecycle topics on the default broker. Each
message is routed through the module dispatcher to the handler for its event
type, which records a broadcast system notification built from the template.
"""

import structlog
from notifications.domain import notifications
from notifications.notification.creation import create_notification_from_event
from notifications.notification.event_dispatcher import EventDispatcher
from shared.events.envelope import DomainEvent, EventType

logger = structlog.get_logger(__name__)

SUBSCRIBED_TOPICS = (
    EventType.PASSPORT_CREATED.value,
    EventType.PASSPORT_UPDATED.value,
    EventType.PASSPORT_DELETED.value,
)

dispatcher = EventDispatcher()


# ---------------------------------------------------------------------------
# Handlers
# ---------------------------------------------------------------------------
@dispatcher.handles(EventType.PASSPORT_CREATED)
def on_passport_created(event: DomainEvent):
    notification = create_notification_from_event(
        event,
        metadata={
            "passportId": event.payload.get("passportId"),
            "createdBy": event.payload.get("createdBy"),
            "eventData": dict(event.payload),
        },
    )
    logger.info("Handled passport.created event", passport_id=event.payload.get("passportId"))
    return notification


@dispatcher.handles(EventType.PASSPORT_UPDATED)
def on_passport_updated(event: DomainEvent):
    notification = create_notification_from_event(
        event,
        metadata={
            "passportId": event.payload.get("passportId"),
            "updatedBy": event.payload.get("updatedBy"),
            "eventData": dict(event.payload),
        },
    )
    logger.info("Handled passport.updated event", passport_id=event.payload.get("passportId"))
    return notification


@dispatcher.handles(EventType.PASSPORT_DELETED)
def on_passport_deleted(event: DomainEvent):
    notification = create_notification_from_event(
        event,
        metadata={
            "passportId": event.payload.get("passportId"),
            "deletedBy": event.payload.get("deletedBy"),
            "eventData": dict(event.payload),
        },
    )
    logger.info("Handled passport.deleted event", passport_id=event.payload.get("passportId"))
    return notification


# ---------------------------------------------------------------------------
# Broker subscribers, one per subscribed topic
# ---------------------------------------------------------------------------
@notifications.subscriber(stream=EventType.PASSPORT_CREATED.value, broker="default")
class PassportCreatedSubscriber:
    def __call__(self, payload: dict) -> None:
        dispatcher.dispatch(EventType.PASSPORT_CREATED.value, payload)


@notifications.subscriber(stream=EventType.PASSPORT_UPDATED.value, broker="default")
class PassportUpdatedSubscriber:
    def __call__(self, payload: dict) -> None:
        dispatcher.dispatch(EventType.PASSPORT_UPDATED.value, payload)


@notifications.subscriber(stream=EventType.PASSPORT_DELETED.value, broker="default")
class PassportDeletedSubscriber:
    def __call__(self, payload: dict) -> None:
        dispatcher.dispatch(EventType.PASSPORT_DELETED.value, payload)
