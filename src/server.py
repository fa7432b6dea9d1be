"""Protean Engine runner for the Notifications domain.

Starts the Engine, which:
- reads the passport topics from the broker and feeds the subscribers
- runs the NotificationCreated handler that performs delivery

Shutdown (SIGINT, SIGTERM, SIGHUP or the end of a test run) goes through
``NotificationEngine.shutdown``: the inbound dispatcher stops taking messages,
in-flight messages get a bounded grace period to finish, and only then does
the Engine stop its subscriptions and release its broker connections.

Usage:
    PROTEAN_ENV=production python src/server.py
    PROTEAN_ENV=production python src/server.py --grace 30
"""

import argparse
import asyncio

import structlog
from protean.server.engine import Engine

logger = structlog.get_logger(__name__)


class NotificationEngine(Engine):
    """Engine that drains the inbound dispatcher before releasing the brokers."""

    def __init__(self, domain, dispatcher, grace_seconds: float, **kwargs):
        super().__init__(domain, **kwargs)
        self.dispatcher = dispatcher
        self.grace_seconds = grace_seconds

    async def shutdown(self, signal=None, exit_code=0):
        if not self.shutting_down:
            self.dispatcher.close()
            # drain() blocks on a condition; keep the loop free for running handlers
            drained = await asyncio.to_thread(self.dispatcher.drain, self.grace_seconds)
            if not drained:
                logger.warning("Stopping with unfinished messages", in_flight=self.dispatcher.in_flight)
        await super().shutdown(signal=signal, exit_code=exit_code)


def _init_domain():
    from notifications.domain import notifications

    notifications.init()
    return notifications


def run(grace_seconds: float | None = None) -> int:
    from notifications.config import get_settings
    from notifications.notification.passport_events import SUBSCRIBED_TOPICS, dispatcher

    domain = _init_domain()
    settings = get_settings()
    grace = grace_seconds if grace_seconds is not None else settings.shutdown_grace_seconds

    logger.info("Notification pipeline starting", topics=list(SUBSCRIBED_TOPICS), grace_seconds=grace)

    engine = NotificationEngine(domain, dispatcher=dispatcher, grace_seconds=grace)
    engine.run()

    logger.info("Notification pipeline stopped", exit_code=engine.exit_code)
    return engine.exit_code


def main():
    parser = argparse.ArgumentParser(description="PassportStream notification pipeline")
    parser.add_argument(
        "--grace",
        type=float,
        default=None,
        help="Seconds to wait for in-flight messages at shutdown (default: SHUTDOWN_GRACE_SECONDS)",
    )
    args = parser.parse_args()

    raise SystemExit(run(args.grace))


if __name__ == "__main__":
    main()
