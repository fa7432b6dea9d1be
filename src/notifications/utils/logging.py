"""Logging configuration for the Notifications domain.

stdlib logging owns the handlers: stdout plus two rotating files under the
configured log directory, ``<prefix>.log`` for everything and
``<prefix>_error.log`` for errors only. structlog renders key/value events on
top of it, as JSON in production and staging and through rich elsewhere.

Per-message context (topic, event type, notification id) is carried in
contextvars so every line logged while a message is handled carries it.
"""

import logging
import logging.handlers
import os
import sys
from pathlib import Path
from typing import Any

import structlog

DEFAULT_LOG_FILE_PREFIX = "passportstream"

MAX_LOG_BYTES = 10 * 1024 * 1024
LOG_BACKUPS = 5

_LEVEL_BY_ENVIRONMENT = {
    "production": "INFO",
    "staging": "INFO",
    "development": "DEBUG",
    "test": "WARNING",
}

# Libraries that log per message or per poll
_QUIET_LOGGERS = ("protean", "urllib3", "asyncio", "python_http_client")


def current_environment() -> str:
    return (os.getenv("ENVIRONMENT") or os.getenv("PROTEAN_ENV") or "development").lower()


def get_log_level(level: str | None = None) -> str:
    """Explicit level, else ``LOG_LEVEL``, else the default for the environment."""
    if level:
        return level.upper()
    return os.getenv("LOG_LEVEL", _LEVEL_BY_ENVIRONMENT.get(current_environment(), "INFO")).upper()


def _rotating_file(path: Path, level: int | str) -> logging.Handler:
    handler = logging.handlers.RotatingFileHandler(
        filename=path,
        maxBytes=MAX_LOG_BYTES,
        backupCount=LOG_BACKUPS,
        encoding="utf-8",
    )
    handler.setLevel(level)
    return handler


def setup_stdlib_logging(
    level: str | None = None,
    log_dir: str | Path = "logs",
    log_file_prefix: str = DEFAULT_LOG_FILE_PREFIX,
) -> list[Path]:
    """Install the console and file handlers on the root logger.

    Returns the paths of the log files in use.
    """
    log_level = get_log_level(level)
    log_path = Path(log_dir)
    log_path.mkdir(parents=True, exist_ok=True)

    main_log = log_path / f"{log_file_prefix}.log"
    error_log = log_path / f"{log_file_prefix}_error.log"

    console = logging.StreamHandler(sys.stdout)
    console.setLevel(log_level)

    root = logging.getLogger()
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()
    root.setLevel(log_level)
    root.addHandler(console)
    root.addHandler(_rotating_file(main_log, log_level))
    root.addHandler(_rotating_file(error_log, logging.ERROR))

    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    return [main_log, error_log]


def _renderer(environment: str):
    if environment in ("production", "staging"):
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(
        colors=environment != "test",
        exception_formatter=structlog.dev.RichTracebackFormatter(show_locals=False, max_frames=5),
    )


def setup_structlog(environment: str | None = None) -> None:
    """Route structlog through stdlib logging with the renderer for ``environment``."""
    processors = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        _renderer(environment or current_environment()),
    ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def configure_logging(
    level: str | None = None,
    log_dir: str | Path = "logs",
    log_file_prefix: str = DEFAULT_LOG_FILE_PREFIX,
) -> list[Path]:
    """Configure stdlib logging and structlog for the process."""
    log_files = setup_stdlib_logging(level=level, log_dir=log_dir, log_file_prefix=log_file_prefix)
    setup_structlog()
    return log_files


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)


def bind_message_context(**kwargs: Any) -> None:
    """Bind context (topic, event type, notification id) to all log lines of the current message."""
    structlog.contextvars.bind_contextvars(**kwargs)


def clear_message_context() -> None:
    structlog.contextvars.clear_contextvars()
