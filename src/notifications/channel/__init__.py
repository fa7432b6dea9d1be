"""Channel registry — email adapter and file sink used by the delivery engine.

Provides singleton access to the configured channels. The email channel is
only configured when email notifications are enabled and SendGrid
credentials are present; without it, email notifications fall back to the
file sink. Tests swap in fakes with ``set_email_channel``/``set_file_sink``.
"""

from notifications.channel.email_port import DeliveryError, EmailPort
from notifications.channel.file_sink import FileSink, LocalFileSink
from notifications.config import get_settings

__all__ = [
    "DeliveryError",
    "EmailPort",
    "FileSink",
    "get_email_channel",
    "get_file_sink",
    "reset_channels",
    "set_email_channel",
    "set_file_sink",
]

_UNSET = object()

_email_channel = _UNSET
_file_sink: FileSink | None = None


def get_email_channel() -> EmailPort | None:
    """Return the configured email adapter, or None when email delivery is disabled."""
    global _email_channel
    if _email_channel is _UNSET:
        settings = get_settings()
        if settings.email_configured:
            from notifications.channel.sendgrid_email import SendGridEmailAdapter

            _email_channel = SendGridEmailAdapter(
                api_key=settings.sendgrid_api_key,
                from_email=settings.from_email,
                from_name=settings.from_name,
            )
        else:
            _email_channel = None
    return _email_channel


def get_file_sink() -> FileSink:
    global _file_sink
    if _file_sink is None:
        _file_sink = LocalFileSink(get_settings().notification_log_path)
    return _file_sink


def set_email_channel(channel: EmailPort | None) -> None:
    global _email_channel
    _email_channel = channel


def set_file_sink(sink: FileSink) -> None:
    global _file_sink
    _file_sink = sink


def reset_channels():
    """Reset channel singletons (useful for testing)."""
    global _email_channel, _file_sink
    _email_channel = _UNSET
    _file_sink = None
