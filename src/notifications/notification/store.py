"""Notification store — persistence for notification records.

Wraps the Protean repository with the operations the pipeline needs. Every
call is an independent commit; there is no transaction spanning
build → persist → deliver → persist.
"""

from notifications.notification.notification import (
    Notification,
    NotificationChannel,
    NotificationStatus,
)
from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain
from protean.utils.query import Q

# Channels whose records are visible to every user
BROADCAST_CHANNELS = [c.value for c in NotificationChannel if c != NotificationChannel.EMAIL]


class NotificationStore:
    def __init__(self, repository=None):
        self._repo = repository or current_domain.repository_for(Notification)

    def create(self, notification: Notification) -> Notification:
        self._repo.add(notification)
        return notification

    def update(self, notification: Notification) -> Notification:
        self._repo.add(notification)
        return notification

    def find(self, notification_id) -> Notification | None:
        try:
            return self._repo.get(str(notification_id))
        except ObjectNotFoundError:
            return None

    def visible_to(self, user):
        """Query over active notifications the user may see.

        Admins see every active record; other users see broadcast channels
        plus email notifications addressed to them.
        """
        query = self._repo._dao.query.filter(is_active=True)
        if user is not None and not user.is_admin:
            query = query.filter(Q(recipient_user_id=str(user.user_id)) | Q(channel__in=BROADCAST_CHANNELS))
        return query

    def aggregate(self, user) -> dict:
        """Count visible notifications grouped by status (zero counts omitted)."""
        counts = {}
        for status in NotificationStatus:
            total = self.visible_to(user).filter(status=status.value).all().total
            if total:
                counts[status.value] = total
        return counts
