"""Internal dispatch handler — runs delivery once a notification is recorded.

Reacts to NotificationCreated. Pending email notifications are handed to the
delivery engine; notifications on other channels are already SENT and only
get their audit record written. In production this runs on the Protean
Engine, decoupled from whoever created the notification.
"""

import structlog
from notifications.domain import notifications
from notifications.notification.delivery import DeliveryEngine
from notifications.notification.events import NotificationCreated
from notifications.notification.notification import Notification, NotificationChannel
from notifications.notification.store import NotificationStore
from protean.utils.mixins import handle

logger = structlog.get_logger(__name__)


@notifications.event_handler(part_of=Notification)
class NotificationDispatcher:
    """Delivers notifications when they are created."""

    @handle(NotificationCreated)
    def on_notification_created(self, event: NotificationCreated) -> None:
        store = NotificationStore()
        notification = store.find(event.notification_id)
        if notification is None:
            logger.error(
                "Failed to load notification for dispatch",
                notification_id=str(event.notification_id),
            )
            return

        engine = DeliveryEngine.from_registry(store=store)
        if event.channel == NotificationChannel.EMAIL.value:
            engine.deliver(notification)
        else:
            engine.record(notification)
