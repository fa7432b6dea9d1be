"""Pipeline settings loaded from environment variables.

Protean's own configuration (databases, brokers, event processing mode) lives
in ``domain.toml``; this module covers the delivery and messaging knobs.
"""

from functools import lru_cache
from pathlib import Path

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Attributes:
        enable_email_notifications: Deliver email notifications through SendGrid
        sendgrid_api_key: SendGrid API key (email stays disabled without it)
        from_email: Sender address for notification emails
        from_name: Sender display name
        notification_log_path: Directory for the file-log fallback and audit records
        mail_timeout_seconds: Upper bound on a single mail provider call
        publish_timeout_seconds: Upper bound on a single broker publish
        shutdown_grace_seconds: Time allowed for in-flight messages to finish at shutdown
        log_level: Root log level (defaults to the level for the environment)
        log_dir: Directory for the rotating application logs
        log_file_prefix: File name prefix of the application logs
    """

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    enable_email_notifications: bool = False
    sendgrid_api_key: str = ""
    from_email: str = ""
    from_name: str = "Battery Passport System"

    notification_log_path: Path = Path("./notifications")

    mail_timeout_seconds: float = 10.0
    publish_timeout_seconds: float = 5.0
    shutdown_grace_seconds: float = 10.0

    log_level: str | None = None
    log_dir: Path = Path("logs")
    log_file_prefix: str = "passportstream"

    @field_validator("mail_timeout_seconds", "publish_timeout_seconds", "shutdown_grace_seconds")
    @classmethod
    def _positive(cls, value: float) -> float:
        if value <= 0:
            raise ValueError("must be greater than zero")
        return value

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, value: str | None) -> str | None:
        if not value:
            return None
        value = value.upper()
        if value not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"unknown log level {value}")
        return value

    @property
    def email_configured(self) -> bool:
        return bool(self.enable_email_notifications and self.sendgrid_api_key and self.from_email)


@lru_cache
def get_settings() -> Settings:
    return Settings()
