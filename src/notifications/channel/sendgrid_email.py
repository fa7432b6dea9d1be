"""SendGrid email adapter — production email dispatch via the SendGrid REST API."""

import json
from typing import Any

import structlog
from notifications.channel.email_port import DeliveryError, EmailPort
from sendgrid import SendGridAPIClient
from sendgrid.helpers.mail import From, Mail

logger = structlog.get_logger(__name__)


def _error_details(body: Any) -> str | None:
    """Return a human readable description of a SendGrid error payload."""
    if body in (None, ""):
        return None

    if isinstance(body, bytes):
        try:
            body = body.decode("utf-8")
        except UnicodeDecodeError:
            return None

    if isinstance(body, str):
        body = body.strip()
        if not body:
            return None
        try:
            body = json.loads(body)
        except json.JSONDecodeError:
            return body

    if isinstance(body, dict):
        errors = body.get("errors")
        if isinstance(errors, list):
            messages = [str(item["message"]) for item in errors if isinstance(item, dict) and item.get("message")]
            if messages:
                return "; ".join(messages)
        return json.dumps(body)

    return str(body)


class SendGridEmailAdapter(EmailPort):
    def __init__(self, api_key: str, from_email: str, from_name: str | None = None, client=None):
        self.from_email = from_email
        self.from_name = from_name
        self._client = client or SendGridAPIClient(api_key)

    def send(
        self,
        to: str,
        subject: str,
        body: str,
        html_body: str | None = None,
    ) -> str:
        message = Mail(
            from_email=From(self.from_email, self.from_name),
            to_emails=to,
            subject=subject,
            plain_text_content=body,
            html_content=html_body,
        )

        try:
            response = self._client.send(message)
        except Exception as exc:
            status_code = getattr(exc, "status_code", None)
            details = _error_details(getattr(exc, "body", None)) or str(exc)
            logger.error("SendGrid API request failed", status_code=status_code, details=details)
            raise DeliveryError(f"SendGrid request failed: {details}") from exc

        status_code = getattr(response, "status_code", None)
        if not isinstance(status_code, int) or not 200 <= status_code < 300:
            details = _error_details(getattr(response, "body", None))
            logger.error("SendGrid API rejected message", status_code=status_code, details=details)
            raise DeliveryError(f"SendGrid responded with status {status_code}: {details or 'no details'}")

        headers = getattr(response, "headers", None) or {}
        # The message was accepted even when the id header is missing
        return headers.get("X-Message-Id") or "unknown"
