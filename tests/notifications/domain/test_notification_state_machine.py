"""Tests for Notification state machine — valid transitions and invalid transition guards."""

import pytest
from notifications.notification.events import (
    NotificationDeleted,
    NotificationFailed,
    NotificationRead,
    NotificationSent,
)
from notifications.notification.notification import (
    MAX_ERROR_LENGTH,
    Notification,
    NotificationChannel,
    NotificationStatus,
)
from protean.exceptions import ValidationError
from shared.events.envelope import EventType


def _make_notification(**overrides):
    defaults = {
        "channel": NotificationChannel.EMAIL.value,
        "event_type": EventType.USER_REGISTERED.value,
        "title": "Welcome",
        "body": "Welcome!",
        "recipient_user_id": "user-001",
        "recipient_email": "owner@example.com",
    }
    defaults.update(overrides)
    return Notification.create(**defaults)


def _notification_at_state(target_status, **overrides):
    """Create a notification and advance it to the desired state."""
    n = _make_notification(**overrides)
    n._events.clear()

    if target_status == NotificationStatus.PENDING:
        return n

    if target_status == NotificationStatus.SENT:
        n.mark_sent()
        n._events.clear()
        return n

    if target_status == NotificationStatus.FAILED:
        n.mark_failed("Delivery error")
        n._events.clear()
        return n

    if target_status == NotificationStatus.READ:
        n.mark_sent()
        n.mark_read()
        n._events.clear()
        return n

    raise ValueError(f"Cannot create notification at state {target_status}")


# ---------------------------------------------------------------
# Happy path transitions
# ---------------------------------------------------------------
class TestValidTransitions:
    def test_pending_to_sent(self):
        n = _notification_at_state(NotificationStatus.PENDING)
        n.mark_sent()
        assert n.status == NotificationStatus.SENT.value
        assert n.sent_at is not None

    def test_pending_to_failed(self):
        n = _notification_at_state(NotificationStatus.PENDING)
        n.mark_failed("Connection timeout")
        assert n.status == NotificationStatus.FAILED.value
        assert n.retry_count == 1
        assert n.last_error == "Connection timeout"

    def test_failed_to_sent(self):
        n = _notification_at_state(NotificationStatus.FAILED)
        n.mark_sent()
        assert n.status == NotificationStatus.SENT.value
        assert n.last_error is None

    def test_failed_to_failed_increments_retry_count(self):
        n = _notification_at_state(NotificationStatus.FAILED)
        n.mark_failed("Still down")
        assert n.retry_count == 2

    def test_sent_to_read(self):
        n = _notification_at_state(NotificationStatus.SENT)
        n.mark_read()
        assert n.status == NotificationStatus.READ.value
        assert n.read_at is not None


# ---------------------------------------------------------------
# Invalid transitions
# ---------------------------------------------------------------
class TestInvalidTransitions:
    def test_sent_cannot_be_sent_again(self):
        n = _notification_at_state(NotificationStatus.SENT)
        with pytest.raises(ValidationError):
            n.mark_sent()

    def test_sent_cannot_fail(self):
        n = _notification_at_state(NotificationStatus.SENT)
        with pytest.raises(ValidationError):
            n.mark_failed("late failure")

    def test_pending_cannot_be_read(self):
        n = _notification_at_state(NotificationStatus.PENDING)
        with pytest.raises(ValidationError):
            n.mark_read()

    def test_failed_cannot_be_read(self):
        n = _notification_at_state(NotificationStatus.FAILED)
        with pytest.raises(ValidationError):
            n.mark_read()

    def test_read_is_terminal_for_delivery(self):
        n = _notification_at_state(NotificationStatus.READ)
        with pytest.raises(ValidationError):
            n.mark_sent()
        with pytest.raises(ValidationError):
            n.mark_failed("nope")


# ---------------------------------------------------------------
# Retry bookkeeping
# ---------------------------------------------------------------
class TestRetryBookkeeping:
    def test_retryable_while_below_max(self):
        n = _notification_at_state(NotificationStatus.FAILED, max_retries=2)
        assert n.is_retryable
        assert n.is_deliverable

    def test_not_retryable_at_max(self):
        n = _notification_at_state(NotificationStatus.FAILED, max_retries=2)
        n.mark_failed("again")
        assert n.retry_count == 2
        assert not n.is_retryable
        assert not n.is_deliverable

    def test_retry_count_never_exceeds_max(self):
        n = _notification_at_state(NotificationStatus.FAILED, max_retries=1)
        n.mark_failed("again")
        n.mark_failed("and again")
        assert n.retry_count == 1

    def test_pending_is_deliverable(self):
        assert _notification_at_state(NotificationStatus.PENDING).is_deliverable

    def test_sent_is_not_deliverable(self):
        assert not _notification_at_state(NotificationStatus.SENT).is_deliverable

    def test_retry_count_kept_on_success(self):
        n = _notification_at_state(NotificationStatus.FAILED)
        n.mark_sent()
        assert n.retry_count == 1

    def test_long_error_truncated(self):
        n = _notification_at_state(NotificationStatus.PENDING)
        n.mark_failed("x" * (MAX_ERROR_LENGTH + 100))
        assert len(n.last_error) == MAX_ERROR_LENGTH


# ---------------------------------------------------------------
# Read and delete
# ---------------------------------------------------------------
class TestReadAndDelete:
    def test_mark_read_is_idempotent(self):
        n = _notification_at_state(NotificationStatus.READ)
        first_read_at = n.read_at
        n.mark_read()
        assert n.status == NotificationStatus.READ.value
        assert n.read_at == first_read_at
        assert n._events == []

    def test_soft_delete(self):
        n = _notification_at_state(NotificationStatus.SENT)
        n.soft_delete(deleted_by="user-001")
        assert n.is_active is False

    def test_soft_delete_is_idempotent(self):
        n = _notification_at_state(NotificationStatus.SENT)
        n.soft_delete()
        n._events.clear()
        n.soft_delete()
        assert n._events == []


# ---------------------------------------------------------------
# Events raised by transitions
# ---------------------------------------------------------------
class TestTransitionEvents:
    def test_mark_sent_raises_event(self):
        n = _notification_at_state(NotificationStatus.PENDING)
        n.mark_sent(emailMessageId="m-1")
        assert isinstance(n._events[-1], NotificationSent)
        assert n.get_metadata()["emailMessageId"] == "m-1"

    def test_mark_failed_raises_event(self):
        n = _notification_at_state(NotificationStatus.PENDING)
        n.mark_failed("boom")
        event = n._events[-1]
        assert isinstance(event, NotificationFailed)
        assert event.reason == "boom"
        assert event.retry_count == 1

    def test_mark_read_raises_event(self):
        n = _notification_at_state(NotificationStatus.SENT)
        n.mark_read()
        assert isinstance(n._events[-1], NotificationRead)

    def test_soft_delete_raises_event(self):
        n = _notification_at_state(NotificationStatus.SENT)
        n.soft_delete(deleted_by="user-001")
        event = n._events[-1]
        assert isinstance(event, NotificationDeleted)
        assert event.deleted_by == "user-001"
