"""File sink — durable, human-readable notification log.

Used as the delivery fallback when no email channel is configured, and as the
audit trail for system notifications.
"""

from abc import ABC, abstractmethod
from datetime import UTC, datetime
from pathlib import Path
from uuid import uuid4

from notifications.channel.email_port import DeliveryError


class FileSink(ABC):
    @abstractmethod
    def write(self, filename: str, content: str) -> str:
        """Persist ``content`` under ``filename`` and return the full path.

        Raises:
            DeliveryError: the content could not be written.
        """
        ...


class LocalFileSink(FileSink):
    """Writes one text file per notification into a local directory."""

    def __init__(self, directory: str | Path):
        self.directory = Path(directory)

    def write(self, filename: str, content: str) -> str:
        path = self.directory / filename
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            # "x" mode refuses to overwrite an existing record
            with path.open("x", encoding="utf-8") as handle:
                handle.write(content)
        except OSError as exc:
            raise DeliveryError(f"Failed to write notification log {path}: {exc}") from exc
        return str(path)


def log_filename(now: datetime | None = None) -> str:
    """Timestamp-derived unique filename, e.g. ``notification-2026-01-01T10-00-00.123456+00-00-1a2b3c.txt``."""
    now = now or datetime.now(UTC)
    timestamp = now.isoformat().replace(":", "-")
    return f"notification-{timestamp}-{uuid4().hex[:6]}.txt"
