"""Inbox — the query surface offered to the CRUD layer.

Every operation takes the caller's ``UserContext`` and applies the visibility
rule: a caller sees active broadcast notifications and the email
notifications addressed to them; administrators see everything active.
Missing and invisible records are indistinguishable (ObjectNotFoundError).
"""

import math
from dataclasses import dataclass, field

import structlog
from notifications.notification.notification import Notification, NotificationStatus
from notifications.notification.store import NotificationStore
from protean.exceptions import ObjectNotFoundError
from shared.auth import UserContext

logger = structlog.get_logger(__name__)

DEFAULT_PAGE_SIZE = 20
MAX_PAGE_SIZE = 100


@dataclass
class NotificationPage:
    items: list[Notification] = field(default_factory=list)
    page: int = 1
    limit: int = DEFAULT_PAGE_SIZE
    total: int = 0

    @property
    def pages(self) -> int:
        return math.ceil(self.total / self.limit) if self.limit else 0


def list_notifications(
    user: UserContext,
    page: int = 1,
    limit: int = DEFAULT_PAGE_SIZE,
    status: str | None = None,
    channel: str | None = None,
) -> NotificationPage:
    """List the caller's visible notifications, newest first."""
    page = max(int(page), 1)
    limit = min(max(int(limit), 1), MAX_PAGE_SIZE)

    query = NotificationStore().visible_to(user)
    if status:
        query = query.filter(status=status)
    if channel:
        query = query.filter(channel=channel)

    result = query.order_by("-created_at").offset((page - 1) * limit).limit(limit).all()
    return NotificationPage(items=list(result.items), page=page, limit=limit, total=result.total)


def get_notification(user: UserContext, notification_id: str) -> Notification:
    notification = NotificationStore().find(notification_id)
    if notification is None or not notification.is_visible_to(user):
        raise ObjectNotFoundError(f"Notification {notification_id} not found")
    return notification


def mark_as_read(user: UserContext, notification_id: str) -> Notification:
    """Mark a notification as read. Repeating the call is a no-op success."""
    store = NotificationStore()
    notification = get_notification(user, notification_id)

    if notification.status == NotificationStatus.READ.value:
        return notification

    notification.mark_read()
    store.update(notification)

    logger.info("Notification marked as read", notification_id=str(notification.id), user_id=user.user_id)
    return notification


def delete_notification(user: UserContext, notification_id: str) -> None:
    """Soft-delete a notification; it disappears from every query but is kept for audit."""
    store = NotificationStore()
    notification = get_notification(user, notification_id)

    notification.soft_delete(deleted_by=user.user_id)
    store.update(notification)

    logger.info("Notification deleted", notification_id=str(notification.id), user_id=user.user_id)


def notification_stats(user: UserContext) -> dict:
    """Totals for the caller: overall, unread (sent but not yet read) and per status."""
    by_status = NotificationStore().aggregate(user)
    return {
        "total": sum(by_status.values()),
        "unread": by_status.get(NotificationStatus.SENT.value, 0),
        "by_status": by_status,
    }
