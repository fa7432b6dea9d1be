"""Tests for pipeline settings loaded from the environment."""

from pathlib import Path

import pytest
from notifications.config import Settings
from pydantic import ValidationError


class TestSettings:
    def test_defaults(self, monkeypatch):
        for name in ("ENABLE_EMAIL_NOTIFICATIONS", "SENDGRID_API_KEY", "FROM_EMAIL", "NOTIFICATION_LOG_PATH"):
            monkeypatch.delenv(name, raising=False)

        settings = Settings(_env_file=None)
        assert settings.enable_email_notifications is False
        assert settings.from_name == "Battery Passport System"
        assert settings.notification_log_path == Path("./notifications")
        assert settings.email_configured is False

    def test_reads_environment(self, monkeypatch):
        monkeypatch.setenv("ENABLE_EMAIL_NOTIFICATIONS", "true")
        monkeypatch.setenv("SENDGRID_API_KEY", "SG.key")
        monkeypatch.setenv("FROM_EMAIL", "noreply@example.com")
        monkeypatch.setenv("MAIL_TIMEOUT_SECONDS", "2.5")

        settings = Settings(_env_file=None)
        assert settings.email_configured is True
        assert settings.mail_timeout_seconds == 2.5

    def test_email_needs_api_key(self, monkeypatch):
        monkeypatch.setenv("ENABLE_EMAIL_NOTIFICATIONS", "true")
        monkeypatch.setenv("SENDGRID_API_KEY", "")
        monkeypatch.setenv("FROM_EMAIL", "noreply@example.com")
        assert Settings(_env_file=None).email_configured is False

    def test_email_needs_enable_flag(self, monkeypatch):
        monkeypatch.setenv("ENABLE_EMAIL_NOTIFICATIONS", "false")
        monkeypatch.setenv("SENDGRID_API_KEY", "SG.key")
        monkeypatch.setenv("FROM_EMAIL", "noreply@example.com")
        assert Settings(_env_file=None).email_configured is False

    @pytest.mark.parametrize("field", ["mail_timeout_seconds", "publish_timeout_seconds", "shutdown_grace_seconds"])
    def test_timeouts_must_be_positive(self, field):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, **{field: 0})

    def test_logging_settings(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "info")
        monkeypatch.setenv("LOG_DIR", "/var/log/passportstream")

        settings = Settings(_env_file=None)
        assert settings.log_level == "INFO"
        assert settings.log_dir == Path("/var/log/passportstream")
        assert settings.log_file_prefix == "passportstream"

    def test_unknown_log_level_rejected(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, log_level="chatty")
