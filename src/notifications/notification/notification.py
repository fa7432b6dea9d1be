"""Notification aggregate — one unit of user-facing or system-facing information.

Notifications are created from inbound domain events (broadcast system
notifications) or directly by internal callers (targeted email). Each record
carries its own delivery lifecycle, independent of the event that triggered it.

State Machine (4 states):
    PENDING → SENT → READ
    PENDING → FAILED → (re-attempt) → SENT | FAILED

Non-email channels are created directly in SENT: the record itself is the
notification. A FAILED record is frozen once retry_count reaches max_retries.
"""

import json
from datetime import UTC, datetime
from enum import Enum

from notifications.domain import notifications
from notifications.notification.events import (
    NotificationCreated,
    NotificationDeleted,
    NotificationFailed,
    NotificationRead,
    NotificationSent,
)
from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, Identifier, Integer, String, Text
from shared.events.envelope import EventType

MAX_ERROR_LENGTH = 500


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------
class NotificationChannel(Enum):
    EMAIL = "email"
    SYSTEM = "system"
    ALERT = "alert"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class NotificationStatus(Enum):
    PENDING = "pending"
    SENT = "sent"
    FAILED = "failed"
    READ = "read"


class NotificationPriority(Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


# ---------------------------------------------------------------------------
# State Machine
# ---------------------------------------------------------------------------
_VALID_TRANSITIONS = {
    NotificationStatus.PENDING: {
        NotificationStatus.SENT,
        NotificationStatus.FAILED,
    },
    NotificationStatus.FAILED: {
        NotificationStatus.SENT,  # Re-attempt succeeded
        NotificationStatus.FAILED,  # Re-attempt failed
    },
    NotificationStatus.SENT: {
        NotificationStatus.READ,  # User action only
    },
    NotificationStatus.READ: set(),  # Terminal
}


# ---------------------------------------------------------------------------
# Aggregate Root
# ---------------------------------------------------------------------------
@notifications.aggregate
class Notification:
    """A notification record with its delivery lifecycle.

    ``delivery_data`` holds the metadata map as JSON: the source event data
    and the delivery artifacts (log file path, provider message id).
    """

    # Classification
    channel: String(choices=NotificationChannel, required=True)
    event_type: String(choices=EventType, required=True)
    priority: String(choices=NotificationPriority, default=NotificationPriority.MEDIUM.value)

    # Content
    title: String(max_length=500, required=True, sanitize=False)
    body: Text(required=True, sanitize=False)

    # Recipient (required for email)
    recipient_user_id: Identifier()
    recipient_email: String(max_length=254)

    # Status
    status: String(choices=NotificationStatus, default=NotificationStatus.PENDING.value)
    delivery_data: Text(sanitize=False)  # JSON
    last_error: String(max_length=MAX_ERROR_LENGTH, sanitize=False)

    # Retry
    retry_count: Integer(default=0, min_value=0)
    max_retries: Integer(default=3, min_value=1)

    # Timestamps
    sent_at: DateTime()
    read_at: DateTime()
    created_at: DateTime()
    updated_at: DateTime()

    # Soft delete
    is_active: Boolean(default=True)

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def create(
        cls,
        channel,
        event_type,
        title,
        body,
        recipient_user_id=None,
        recipient_email=None,
        priority=NotificationPriority.MEDIUM.value,
        metadata=None,
        max_retries=3,
    ):
        """Create a notification.

        Email notifications start PENDING and wait for delivery; every other
        channel is SENT immediately.

        Raises:
            ValidationError: an email notification has no recipient.
        """
        if channel == NotificationChannel.EMAIL.value and not (recipient_user_id or recipient_email):
            raise ValidationError(
                {"recipient": ["Recipient or recipient email is required for email notifications"]}
            )

        now = datetime.now(UTC)
        is_email = channel == NotificationChannel.EMAIL.value

        notification = cls(
            channel=channel,
            event_type=event_type,
            priority=priority or NotificationPriority.MEDIUM.value,
            title=title,
            body=body,
            recipient_user_id=recipient_user_id or None,
            recipient_email=recipient_email.strip().lower() if recipient_email else None,
            status=NotificationStatus.PENDING.value if is_email else NotificationStatus.SENT.value,
            delivery_data=json.dumps(metadata or {}, default=str),
            retry_count=0,
            max_retries=max_retries,
            sent_at=None if is_email else now,
            is_active=True,
            created_at=now,
            updated_at=now,
        )

        notification.raise_(
            NotificationCreated(
                notification_id=str(notification.id),
                channel=channel,
                event_type=event_type,
                status=notification.status,
                recipient_user_id=str(recipient_user_id) if recipient_user_id else None,
                created_at=now,
            )
        )

        return notification

    # -------------------------------------------------------------------
    # Metadata
    # -------------------------------------------------------------------
    def get_metadata(self) -> dict:
        return json.loads(self.delivery_data) if self.delivery_data else {}

    def update_metadata(self, **items):
        metadata = self.get_metadata()
        metadata.update(items)
        self.delivery_data = json.dumps(metadata, default=str)

    # -------------------------------------------------------------------
    # Derived state
    # -------------------------------------------------------------------
    @property
    def is_email(self) -> bool:
        return self.channel == NotificationChannel.EMAIL.value

    @property
    def is_retryable(self) -> bool:
        return self.status == NotificationStatus.FAILED.value and self.retry_count < self.max_retries

    @property
    def is_deliverable(self) -> bool:
        """Eligible for a delivery attempt: pending, or failed with retries left."""
        return self.status == NotificationStatus.PENDING.value or self.is_retryable

    def is_visible_to(self, user) -> bool:
        """Active, and either broadcast (non-email), addressed to the user, or the user is an admin."""
        if not self.is_active:
            return False
        if user.is_admin or not self.is_email:
            return True
        return self.recipient_user_id is not None and str(self.recipient_user_id) == str(user.user_id)

    # -------------------------------------------------------------------
    # State transitions
    # -------------------------------------------------------------------
    def _assert_can_transition(self, target_status):
        """Validate state machine transition."""
        current = NotificationStatus(self.status)
        if target_status not in _VALID_TRANSITIONS.get(current, set()):
            raise ValidationError({"status": [f"Cannot transition from {current.value} to {target_status.value}"]})

    def mark_sent(self, sent_at=None, **artifacts):
        """Mark notification as delivered to its sink, recording delivery artifacts in metadata."""
        self._assert_can_transition(NotificationStatus.SENT)

        now = sent_at or datetime.now(UTC)
        self.status = NotificationStatus.SENT.value
        self.sent_at = now
        self.last_error = None
        self.updated_at = now
        if artifacts:
            self.update_metadata(**artifacts)

        self.raise_(
            NotificationSent(
                notification_id=str(self.id),
                channel=self.channel,
                retry_count=self.retry_count,
                sent_at=now,
            )
        )

    def mark_failed(self, reason):
        """Record a failed delivery attempt. retry_count is capped at max_retries."""
        self._assert_can_transition(NotificationStatus.FAILED)

        now = datetime.now(UTC)
        self.status = NotificationStatus.FAILED.value
        self.retry_count = min(self.retry_count + 1, self.max_retries)
        self.last_error = str(reason)[:MAX_ERROR_LENGTH]
        self.updated_at = now

        self.raise_(
            NotificationFailed(
                notification_id=str(self.id),
                channel=self.channel,
                reason=self.last_error,
                retry_count=self.retry_count,
                max_retries=self.max_retries,
                failed_at=now,
            )
        )

    def mark_read(self, read_at=None):
        """Mark as read. Idempotent: an already-read notification keeps its read_at."""
        if self.status == NotificationStatus.READ.value:
            return

        self._assert_can_transition(NotificationStatus.READ)

        now = read_at or datetime.now(UTC)
        self.status = NotificationStatus.READ.value
        self.read_at = now
        self.updated_at = now

        self.raise_(
            NotificationRead(
                notification_id=str(self.id),
                read_at=now,
            )
        )

    def soft_delete(self, deleted_by=None):
        """Hide the notification from all queries; the record is retained for audit."""
        if not self.is_active:
            return

        now = datetime.now(UTC)
        self.is_active = False
        self.updated_at = now

        self.raise_(
            NotificationDeleted(
                notification_id=str(self.id),
                deleted_by=str(deleted_by) if deleted_by else None,
                deleted_at=now,
            )
        )
