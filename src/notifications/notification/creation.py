"""Notification creation — the entry points used by handlers and internal callers.

Creating a notification only records it. Email delivery happens afterwards in
the NotificationCreated handler, so callers never wait on (or fail because
of) the mail provider.
"""

import structlog
from notifications.notification.notification import (
    Notification,
    NotificationChannel,
    NotificationPriority,
)
from notifications.notification.store import NotificationStore
from notifications.templates import build
from shared.events.envelope import DomainEvent, EventType

logger = structlog.get_logger(__name__)


def create_notification(
    channel: str,
    event_type: str,
    title: str,
    body: str,
    recipient_user_id: str | None = None,
    recipient_email: str | None = None,
    priority: str = NotificationPriority.MEDIUM.value,
    metadata: dict | None = None,
    max_retries: int = 3,
) -> Notification:
    """Validate and persist a notification.

    Raises:
        ValidationError: invalid fields, or an email notification without a
            recipient. Nothing is written in that case.
    """
    notification = Notification.create(
        channel=channel,
        event_type=event_type,
        title=title,
        body=body,
        recipient_user_id=recipient_user_id,
        recipient_email=recipient_email,
        priority=priority,
        metadata=metadata,
        max_retries=max_retries,
    )
    NotificationStore().create(notification)

    logger.info(
        "Notification created",
        notification_id=str(notification.id),
        channel=channel,
        event_type=event_type,
        status=notification.status,
    )
    return notification


def create_system_notification(
    event_type: str,
    title: str,
    body: str,
    metadata: dict | None = None,
    priority: str = NotificationPriority.MEDIUM.value,
) -> Notification:
    """Create a broadcast system notification, visible to every user."""
    return create_notification(
        channel=NotificationChannel.SYSTEM.value,
        event_type=event_type,
        title=title,
        body=body,
        priority=priority,
        metadata=metadata,
    )


def create_notification_from_event(
    event: DomainEvent,
    channel: str = NotificationChannel.SYSTEM.value,
    recipient_user_id: str | None = None,
    recipient_email: str | None = None,
    metadata: dict | None = None,
) -> Notification:
    """Render an event through its template and record the resulting notification."""
    rendered = build(event.event_type, event.payload)
    return create_notification(
        channel=channel,
        event_type=event.event_type.value,
        title=rendered["title"],
        body=rendered["body"],
        recipient_user_id=recipient_user_id,
        recipient_email=recipient_email,
        metadata=metadata,
    )


def create_system_alert(message: str, priority: str = NotificationPriority.HIGH.value, **metadata) -> Notification:
    """Raise an internal alert visible to every user."""
    rendered = build(EventType.SYSTEM_ALERT, {"message": message})
    return create_notification(
        channel=NotificationChannel.ALERT.value,
        event_type=EventType.SYSTEM_ALERT.value,
        title=rendered["title"],
        body=rendered["body"],
        priority=priority,
        metadata=metadata or None,
    )
