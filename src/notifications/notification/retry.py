"""RetryNotification command + handler — manually re-attempt a failed delivery.

Nothing retries automatically; a failed notification stays failed until an
operator (or an external scheduler) issues this command.
"""

from notifications.domain import notifications
from notifications.notification.delivery import DeliveryEngine
from notifications.notification.notification import Notification, NotificationStatus
from notifications.notification.store import NotificationStore
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.fields import Identifier
from protean.utils.mixins import handle


@notifications.command(part_of="Notification")
class RetryNotification:
    """Request to re-attempt delivery of a failed notification."""

    notification_id: Identifier(required=True)


@notifications.command_handler(part_of=Notification)
class RetryNotificationHandler:
    @handle(RetryNotification)
    def retry_notification(self, command: RetryNotification):
        store = NotificationStore()
        notification = store.find(command.notification_id)
        if notification is None or not notification.is_active:
            raise ObjectNotFoundError(f"Notification {command.notification_id} not found")

        if notification.status != NotificationStatus.FAILED.value:
            raise ValidationError({"status": ["Only failed notifications can be retried"]})
        if not notification.is_retryable:
            raise ValidationError({"retry_count": ["Maximum retry attempts exceeded"]})

        result = DeliveryEngine.from_registry(store=store).deliver(notification)
        return result.success if result else False
