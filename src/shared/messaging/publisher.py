"""Event publisher used by upstream domain services.

Publishing is outside the transactional boundary of the domain write: by the
time an event is emitted the mutation has committed, so ``emit`` is
best-effort. It runs in the background, logs failures and never raises into
the business operation.

Usage from a domain service::

    passport = repo.add(passport)
    publisher.emit_event(
        EventType.PASSPORT_CREATED,
        {"passportId": passport.id, "batteryIdentifier": passport.battery_identifier},
    )
"""

from concurrent.futures import Future, ThreadPoolExecutor
from typing import Any, Mapping

import structlog

from shared.events.envelope import DomainEvent, EventType, encode
from shared.messaging.transport import PublishError, TransportConnection, TransportError

logger = structlog.get_logger(__name__)


class EventPublisher:
    def __init__(self, connection: TransportConnection):
        self._connection = connection
        self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="event-publisher")

    def publish(self, topic: str, event: DomainEvent) -> str:
        """Publish synchronously. Raises PublishError on any failure."""
        try:
            message = encode(event)
        except (TypeError, ValueError) as exc:
            raise PublishError(f"Event for {topic} could not be serialized: {exc}") from exc

        message_id = self._connection.send(topic, message)
        logger.info(
            "Event published",
            topic=topic,
            event_type=event.event_type.value,
            message_id=message_id,
        )
        return message_id

    def emit(self, topic: str, event: DomainEvent) -> Future:
        """Publish in the background. Failures are logged, never raised.

        Once the publisher is closed the event is dropped and the returned
        future is already resolved to ``None``.
        """
        try:
            return self._executor.submit(self._publish_quietly, topic, event)
        except RuntimeError:
            logger.error(
                "Event publish failed",
                topic=topic,
                event_type=event.event_type.value,
                error="publisher is closed",
            )
            dropped: Future = Future()
            dropped.set_result(None)
            return dropped

    def emit_event(self, event_type: EventType, payload: Mapping[str, Any]) -> Future:
        event = DomainEvent(event_type=event_type, payload=payload)
        return self.emit(event.topic, event)

    def close(self, wait: bool = True) -> None:
        """Stop accepting emits; with ``wait`` queued emits are flushed first."""
        self._executor.shutdown(wait=wait)

    def _publish_quietly(self, topic: str, event: DomainEvent) -> str | None:
        try:
            return self.publish(topic, event)
        except TransportError as exc:
            logger.error(
                "Event publish failed",
                topic=topic,
                event_type=event.event_type.value,
                error=str(exc),
            )
            return None
