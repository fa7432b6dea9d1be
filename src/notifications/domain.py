"""Notifications bounded context — turns cross-service events into notifications.

Consumes passport lifecycle events from the broker, renders them through
per-event-type templates into Notification records, and drives each record
through its delivery lifecycle (email, with a durable file-log fallback).
Exposes read/unread state and soft deletion to end users.
"""

from protean.domain import Domain

from notifications.config import get_settings
from notifications.utils.logging import configure_logging, get_logger

_settings = get_settings()
configure_logging(level=_settings.log_level, log_dir=_settings.log_dir, log_file_prefix=_settings.log_file_prefix)

logger = get_logger(__name__)

notifications = Domain(name="notifications")
