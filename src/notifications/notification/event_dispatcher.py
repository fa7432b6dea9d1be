"""Inbound event dispatcher — routes transport messages to handlers by event type.

Every message is acknowledged no matter what happens to it: malformed
messages and unknown event types are logged and dropped, and a handler that
raises is logged and does not stop the next message. There is no redelivery
and no dead-letter queue, so processing is effectively at-most-once.

The dispatcher also tracks in-flight messages so that shutdown can stop
intake and wait, for a bounded grace period, until running handlers finish.
"""

import threading
from collections.abc import Callable, Mapping

import structlog
from notifications.utils.logging import bind_message_context, clear_message_context
from shared.events.envelope import (
    DecodeError,
    DomainEvent,
    EventType,
    UnknownEventTypeError,
    decode,
)

logger = structlog.get_logger(__name__)

EventHandler = Callable[[DomainEvent], object]


class HandlerError(Exception):
    """A handler raised while processing an event."""

    def __init__(self, event_type: EventType, cause: BaseException):
        super().__init__(f"Handler for {event_type.value} failed: {cause}")
        self.event_type = event_type
        self.cause = cause


class EventDispatcher:
    """Routes decoded messages to one handler per event type.

    A failing handler is reported as a ``HandlerError``: it is logged, kept
    as ``last_error`` and passed to ``on_error`` when one is given.
    """

    def __init__(self, on_error: Callable[[HandlerError], object] | None = None):
        self._handlers: dict[EventType, EventHandler] = {}
        self._on_error = on_error
        self.last_error: HandlerError | None = None
        self._in_flight = 0
        self._accepting = True
        self._idle = threading.Condition()

    # -------------------------------------------------------------------
    # Registration
    # -------------------------------------------------------------------
    def register(self, event_type: EventType, handler: EventHandler) -> None:
        """Route ``event_type`` to ``handler``. Each event type has exactly one handler."""
        if event_type in self._handlers:
            raise ValueError(f"A handler is already registered for {event_type.value}")
        self._handlers[event_type] = handler

    def handles(self, event_type: EventType):
        """Decorator form of ``register``."""

        def decorator(handler: EventHandler) -> EventHandler:
            self.register(event_type, handler)
            return handler

        return decorator

    def handler_for(self, event_type: EventType) -> EventHandler | None:
        return self._handlers.get(event_type)

    @property
    def event_types(self) -> list[EventType]:
        return list(self._handlers)

    # -------------------------------------------------------------------
    # Dispatch
    # -------------------------------------------------------------------
    def dispatch(self, topic: str, raw: bytes | str | Mapping) -> bool:
        """Decode a message received on ``topic`` and run its handler.

        Returns True when a handler completed, False when the message was
        dropped or its handler failed.
        """
        with self._idle:
            if not self._accepting:
                logger.warning("Dispatcher is shutting down, message dropped", topic=topic)
                return False
            self._in_flight += 1

        try:
            return self._dispatch(topic, raw)
        finally:
            with self._idle:
                self._in_flight -= 1
                if self._in_flight == 0:
                    self._idle.notify_all()

    def _dispatch(self, topic: str, raw) -> bool:
        try:
            event = decode(topic, raw)
        except UnknownEventTypeError:
            logger.warning("Unknown topic, message dropped", topic=topic)
            return False
        except DecodeError as exc:
            logger.error("Malformed message, dropped", topic=topic, error=str(exc))
            return False

        handler = self._handlers.get(event.event_type)
        if handler is None:
            logger.warning("No handler for event type, message dropped", event_type=event.event_type.value)
            return False

        bind_message_context(topic=topic, event_type=event.event_type.value)
        try:
            handler(event)
            logger.debug("Message processed")
            return True
        except Exception as exc:
            error = HandlerError(event.event_type, exc)
            logger.error("Error processing message", error=str(error), exc_info=True)
            self.last_error = error
            if self._on_error is not None:
                self._report(error)
            return False
        finally:
            clear_message_context()

    def _report(self, error: HandlerError) -> None:
        try:
            self._on_error(error)
        except Exception:
            logger.exception("Error callback failed", event_type=error.event_type.value)

    # -------------------------------------------------------------------
    # Shutdown
    # -------------------------------------------------------------------
    @property
    def in_flight(self) -> int:
        return self._in_flight

    def close(self) -> None:
        """Stop accepting new messages."""
        with self._idle:
            self._accepting = False

    def open(self) -> None:
        with self._idle:
            self._accepting = True

    def drain(self, timeout: float) -> bool:
        """Wait up to ``timeout`` seconds for in-flight messages. Returns True when idle."""
        with self._idle:
            drained = self._idle.wait_for(lambda: self._in_flight == 0, timeout=timeout)
        if not drained:
            logger.warning("Shutdown grace period elapsed with messages in flight", in_flight=self._in_flight)
        return drained
