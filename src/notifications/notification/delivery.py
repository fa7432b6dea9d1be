"""Delivery engine — owns the delivery half of the notification state machine.

Email notifications go to the configured email channel. Without one, the
notification is written to the file sink instead, which always counts as a
delivery. Every outcome is persisted before ``deliver`` returns and is only
observable through the record's status and metadata: delivery errors are
never raised to callers.
"""

import html
import json
from concurrent.futures import ThreadPoolExecutor
from concurrent.futures import TimeoutError as FutureTimeoutError
from dataclasses import dataclass
from datetime import UTC, datetime

import structlog
from notifications.channel import (
    DeliveryError,
    EmailPort,
    FileSink,
    get_email_channel,
    get_file_sink,
)
from notifications.channel.file_sink import log_filename
from notifications.config import get_settings
from notifications.notification.notification import Notification
from notifications.notification.store import NotificationStore

logger = structlog.get_logger(__name__)

# Shared pool bounding blocking provider calls
_executor = ThreadPoolExecutor(max_workers=4, thread_name_prefix="notification-delivery")

LOG_FILE_PATH_KEY = "logFilePath"
EMAIL_MESSAGE_ID_KEY = "emailMessageId"


@dataclass
class DeliveryResult:
    success: bool
    method: str  # "email" | "file"
    message_id: str | None = None
    file_path: str | None = None
    error: str | None = None


def render_log_record(notification: Notification, status: str) -> str:
    """Structured, human-readable record written by the file sink."""
    return "\n".join(
        [
            f"Notification Log - {datetime.now(UTC).isoformat()}",
            "----------------------------------------------",
            f"Notification ID: {notification.id}",
            f"Event Type: {notification.event_type}",
            f"Channel: {notification.channel}",
            f"Title: {notification.title}",
            f"Message: {notification.body}",
            f"Recipient: {notification.recipient_email or notification.recipient_user_id or 'N/A'}",
            f"Status: {status}",
            f"Priority: {notification.priority}",
            f"Metadata: {json.dumps(notification.get_metadata(), indent=2, default=str)}",
            "----------------------------------------------",
        ]
    )


def render_email(notification: Notification, sender_name: str) -> tuple[str, str]:
    """Return (plain text, HTML) bodies for an email notification."""
    metadata = notification.get_metadata()
    details = json.dumps(metadata, indent=2, default=str) if metadata else ""

    text = f"{notification.title}\n\n{notification.body}"
    if details:
        text += f"\n\nDetails: {details}"

    details_html = ""
    if details:
        details_html = (
            '<div style="margin-top: 20px; padding: 15px; background: #f9f9f9; border-left: 4px solid #007bff;">'
            f'<h4>Details:</h4><pre style="font-size: 12px;">{html.escape(details)}</pre></div>'
        )
    body_html = html.escape(notification.body).replace("\n", "<br>")
    year = datetime.now(UTC).year

    html_body = f"""<!DOCTYPE html>
<html>
<head>
  <style>
    body {{ font-family: Arial, sans-serif; line-height: 1.6; color: #333; }}
    .container {{ max-width: 600px; margin: 0 auto; padding: 20px; }}
    .header {{ background: #f4f4f4; padding: 20px; text-align: center; }}
    .content {{ padding: 20px; background: #fff; }}
    .footer {{ padding: 20px; text-align: center; font-size: 12px; color: #666; }}
  </style>
</head>
<body>
  <div class="container">
    <div class="header"><h2>{html.escape(sender_name)}</h2></div>
    <div class="content">
      <h3>{html.escape(notification.title)}</h3>
      <p>{body_html}</p>
      {details_html}
    </div>
    <div class="footer">
      <p>This is an automated message. Please do not reply to this email.</p>
      <p>&copy; {year} {html.escape(sender_name)}. All rights reserved.</p>
    </div>
  </div>
</body>
</html>"""
    return text, html_body


class DeliveryEngine:
    def __init__(
        self,
        store: NotificationStore | None = None,
        email_channel: EmailPort | None = None,
        file_sink: FileSink | None = None,
        timeout: float | None = None,
        sender_name: str | None = None,
    ):
        settings = get_settings()
        self.store = store or NotificationStore()
        self.email_channel = email_channel
        self.file_sink = file_sink or get_file_sink()
        self.timeout = timeout or settings.mail_timeout_seconds
        self.sender_name = sender_name or settings.from_name

    @classmethod
    def from_registry(cls, store: NotificationStore | None = None) -> "DeliveryEngine":
        """Engine wired to the configured channels."""
        return cls(store=store, email_channel=get_email_channel(), file_sink=get_file_sink())

    # -------------------------------------------------------------------
    # Email delivery
    # -------------------------------------------------------------------
    def deliver(self, notification: Notification) -> DeliveryResult | None:
        """Attempt delivery of an email notification and persist the outcome.

        Returns None when the record is not eligible (not email, already sent,
        or failed with no retries left).
        """
        if not notification.is_email:
            logger.warning(
                "Delivery requested for non-email notification, skipping",
                notification_id=str(notification.id),
                channel=notification.channel,
            )
            return None

        if not notification.is_deliverable:
            logger.info(
                "Notification not eligible for delivery, skipping",
                notification_id=str(notification.id),
                status=notification.status,
                retry_count=notification.retry_count,
                max_retries=notification.max_retries,
            )
            return None

        if self.email_channel is None:
            result = self._deliver_to_file(notification)
        else:
            result = self._deliver_by_email(notification)

        if result.success:
            notification.mark_sent(
                **(
                    {LOG_FILE_PATH_KEY: result.file_path}
                    if result.method == "file"
                    else {EMAIL_MESSAGE_ID_KEY: result.message_id}
                )
            )
            logger.info(
                "Notification delivered",
                notification_id=str(notification.id),
                method=result.method,
                message_id=result.message_id,
                file_path=result.file_path,
            )
        else:
            notification.mark_failed(result.error)
            logger.error(
                "Notification delivery failed",
                notification_id=str(notification.id),
                method=result.method,
                error=result.error,
                retry_count=notification.retry_count,
                max_retries=notification.max_retries,
            )

        self.store.update(notification)
        return result

    def _deliver_to_file(self, notification: Notification) -> DeliveryResult:
        try:
            path = self.file_sink.write(log_filename(), render_log_record(notification, "logged_to_file"))
        except DeliveryError as exc:
            return DeliveryResult(success=False, method="file", error=str(exc))
        return DeliveryResult(success=True, method="file", file_path=path)

    def _deliver_by_email(self, notification: Notification) -> DeliveryResult:
        if not notification.recipient_email:
            return DeliveryResult(success=False, method="email", error="Notification has no recipient email address")

        text, html_body = render_email(notification, self.sender_name)
        future = _executor.submit(
            self.email_channel.send,
            to=notification.recipient_email,
            subject=notification.title,
            body=text,
            html_body=html_body,
        )
        try:
            message_id = future.result(timeout=self.timeout)
        except FutureTimeoutError:
            future.cancel()
            return DeliveryResult(
                success=False, method="email", error=f"Email delivery timed out after {self.timeout}s"
            )
        except Exception as exc:
            # Adapters raise DeliveryError; anything else from a provider SDK is a failure too
            return DeliveryResult(success=False, method="email", error=str(exc) or type(exc).__name__)

        return DeliveryResult(success=True, method="email", message_id=message_id)

    # -------------------------------------------------------------------
    # Audit record for non-email channels
    # -------------------------------------------------------------------
    def record(self, notification: Notification) -> str | None:
        """Write the audit record of a non-email notification and store its path.

        The notification is already SENT; a sink failure is logged and leaves it untouched.
        """
        try:
            path = self.file_sink.write(log_filename(), render_log_record(notification, notification.status))
        except DeliveryError as exc:
            logger.warning(
                "Failed to write notification audit record",
                notification_id=str(notification.id),
                error=str(exc),
            )
            return None

        notification.update_metadata(**{LOG_FILE_PATH_KEY: path})
        self.store.update(notification)
        return path
