"""Shared BDD fixtures and step definitions for the Notifications domain."""

import pytest
from notifications.notification.events import (
    NotificationCreated,
    NotificationDeleted,
    NotificationRead,
    NotificationSent,
)
from notifications.notification.notification import (
    Notification,
    NotificationChannel,
)
from pytest_bdd import given, parsers, then
from shared.events.envelope import EventType

_NOTIFICATION_EVENT_CLASSES = {
    "NotificationCreated": NotificationCreated,
    "NotificationSent": NotificationSent,
    "NotificationRead": NotificationRead,
    "NotificationDeleted": NotificationDeleted,
}


@pytest.fixture()
def error():
    """Container for captured validation errors."""
    return {"exc": None}


def _email(**overrides):
    defaults = {
        "channel": NotificationChannel.EMAIL.value,
        "event_type": EventType.USER_REGISTERED.value,
        "title": "Welcome",
        "body": "Welcome!",
        "recipient_user_id": "user-bdd",
        "recipient_email": "bdd@example.com",
    }
    defaults.update(overrides)
    return Notification.create(**defaults)


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given("a new system notification", target_fixture="notification")
def new_system_notification():
    return Notification.create(
        channel=NotificationChannel.SYSTEM.value,
        event_type=EventType.PASSPORT_CREATED.value,
        title="New Battery Passport Created",
        body="A new battery passport has been created successfully.",
    )


@given(
    parsers.cfparse('a new email notification for user "{user_id}"'),
    target_fixture="notification",
)
def new_email_notification(user_id):
    return _email(recipient_user_id=user_id)


@given("a pending notification", target_fixture="notification")
def pending_notification():
    n = _email()
    n._events.clear()
    return n


@given(
    parsers.cfparse("a pending notification allowing {max_retries:d} retries"),
    target_fixture="notification",
)
def pending_notification_with_limit(max_retries):
    n = _email(max_retries=max_retries)
    n._events.clear()
    return n


@given("a sent notification", target_fixture="notification")
def sent_notification():
    n = _email()
    n.mark_sent()
    n._events.clear()
    return n


@given("a read notification", target_fixture="notification")
def read_notification():
    n = _email()
    n.mark_sent()
    n.mark_read()
    n._events.clear()
    return n


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then(parsers.cfparse('the notification status is "{status}"'))
def notification_status_is(notification, status):
    assert notification.status == status


@then(parsers.cfparse("a {event_type} event is raised"))
def event_raised(notification, event_type):
    event_cls = _NOTIFICATION_EVENT_CLASSES[event_type]
    assert any(isinstance(e, event_cls) for e in notification._events)


@then("no event is raised")
def no_event_raised(notification):
    assert notification._events == []


@then("the action fails with a validation error")
def action_fails(error):
    assert error["exc"] is not None
