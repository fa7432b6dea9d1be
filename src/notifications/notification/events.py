"""Domain events for the Notification aggregate."""

from notifications.domain import notifications
from protean.fields import DateTime, Identifier, Integer, String


@notifications.event(part_of="Notification")
class NotificationCreated:
    """A notification was recorded. Email notifications are now awaiting delivery."""

    __version__ = 1

    notification_id: Identifier(required=True)
    channel: String(required=True)
    event_type: String(required=True)
    status: String(required=True)
    recipient_user_id: Identifier()
    created_at: DateTime(required=True)


@notifications.event(part_of="Notification")
class NotificationSent:
    """A notification reached its sink (mail provider or file log)."""

    __version__ = 1

    notification_id: Identifier(required=True)
    channel: String(required=True)
    retry_count: Integer(required=True)
    sent_at: DateTime(required=True)


@notifications.event(part_of="Notification")
class NotificationFailed:
    """A delivery attempt failed."""

    __version__ = 1

    notification_id: Identifier(required=True)
    channel: String(required=True)
    reason: String(required=True, max_length=500, sanitize=False)
    retry_count: Integer(required=True)
    max_retries: Integer(required=True)
    failed_at: DateTime(required=True)


@notifications.event(part_of="Notification")
class NotificationRead:
    """The recipient marked the notification as read."""

    __version__ = 1

    notification_id: Identifier(required=True)
    read_at: DateTime(required=True)


@notifications.event(part_of="Notification")
class NotificationDeleted:
    """The notification was soft-deleted by its owner or an administrator."""

    __version__ = 1

    notification_id: Identifier(required=True)
    deleted_by: Identifier()
    deleted_at: DateTime(required=True)
