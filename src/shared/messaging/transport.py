"""Explicit connection to the messaging transport.

The connection wraps a Protean broker (``inline`` in development and tests,
Redis Streams in production) and is owned by the process's composition root.
It is opened once at startup, handed to publishers, and closed at shutdown.
"""

from concurrent.futures import ThreadPoolExecutor
from concurrent.futures import TimeoutError as FutureTimeoutError

import structlog

logger = structlog.get_logger(__name__)

DEFAULT_TIMEOUT_SECONDS = 5.0


class TransportError(Exception):
    """The messaging transport is unavailable or misused."""


class PublishError(TransportError):
    """A message could not be published (serialization, timeout or broker failure)."""


class TransportConnection:
    """Process-wide handle on a broker with a bounded timeout per call."""

    def __init__(self, broker, timeout: float = DEFAULT_TIMEOUT_SECONDS, name: str = "default"):
        self._broker = broker
        self.timeout = timeout
        self.name = name
        self._executor: ThreadPoolExecutor | None = None

    @classmethod
    def for_domain(cls, domain, broker_name: str = "default", timeout: float = DEFAULT_TIMEOUT_SECONDS):
        """Build a connection over a broker configured on a Protean domain."""
        broker = domain.brokers.get(broker_name)
        if broker is None:
            raise TransportError(f"Broker `{broker_name}` is not configured for domain `{domain.name}`")
        return cls(broker, timeout=timeout, name=broker_name)

    @property
    def is_connected(self) -> bool:
        return self._executor is not None

    def connect(self) -> "TransportConnection":
        if self._executor is None:
            self._executor = ThreadPoolExecutor(max_workers=4, thread_name_prefix=f"transport-{self.name}")
            logger.info("Transport connected", broker=self.name)
        return self

    def send(self, topic: str, message: dict) -> str:
        """Publish ``message`` on ``topic`` and return the broker's message identifier."""
        if self._executor is None:
            raise TransportError(f"Transport `{self.name}` is not connected")

        future = self._executor.submit(self._broker.publish, topic, message)
        try:
            return future.result(timeout=self.timeout)
        except FutureTimeoutError as exc:
            future.cancel()
            raise PublishError(f"Publishing to {topic} timed out after {self.timeout}s") from exc
        except Exception as exc:
            raise PublishError(f"Publishing to {topic} failed: {exc}") from exc

    def close(self) -> None:
        if self._executor is None:
            return
        # In-flight sends are abandoned; callers drain before closing
        self._executor.shutdown(wait=False, cancel_futures=True)
        self._executor = None
        logger.info("Transport disconnected", broker=self.name)

    def __enter__(self):
        return self.connect()

    def __exit__(self, exc_type, exc, tb):
        self.close()
