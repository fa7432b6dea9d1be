"""Demo: publish passport lifecycle events as an upstream service would.

Opens a transport connection on the notifications domain's default broker,
emits a create / update / delete sequence for a number of passports and
closes the publisher and the connection on the way out. With the
notification Engine running, each event turns into a broadcast system
notification.

Prerequisites:
    1. Infrastructure running: Redis for the broker, Postgres for the store
    2. Schema created: PROTEAN_ENV=production python src/manage.py setup-db
    3. Engine running: PROTEAN_ENV=production python src/server.py

Usage:
    PROTEAN_ENV=production python scripts/publish_demo.py --count 10
    PROTEAN_ENV=production python scripts/publish_demo.py --count 10 --skip-delete
"""

import argparse
import sys
import time
import uuid
from datetime import UTC, datetime

# Add src/ to path so we can import domain modules
sys.path.insert(0, "src")


def _passport_events(index: int, actor: str):
    from shared.events.envelope import EventType

    passport_id = str(uuid.uuid4())
    battery_identifier = f"BAT-DEMO-{index + 1:05d}"
    now = datetime.now(UTC).isoformat()

    yield EventType.PASSPORT_CREATED, {
        "passportId": passport_id,
        "batteryIdentifier": battery_identifier,
        "modelName": "Demo Cell 75kWh",
        "manufacturerName": "Demo Batteries GmbH",
        "createdBy": actor,
        "createdAt": now,
    }
    yield EventType.PASSPORT_UPDATED, {
        "passportId": passport_id,
        "batteryIdentifier": battery_identifier,
        "updatedFields": ["modelName", "capacity"],
        "updatedBy": actor,
        "updatedAt": now,
    }
    yield EventType.PASSPORT_DELETED, {
        "passportId": passport_id,
        "batteryIdentifier": battery_identifier,
        "deletedBy": actor,
        "deletedAt": now,
    }


def main():
    parser = argparse.ArgumentParser(description="Publish demo passport lifecycle events")
    parser.add_argument("--count", type=int, default=5, help="Number of passports to simulate (default: 5)")
    parser.add_argument("--actor", default="demo-user", help="User id recorded as the author of each change")
    parser.add_argument("--skip-delete", action="store_true", help="Do not publish passport.deleted events")
    args = parser.parse_args()

    from notifications.config import get_settings
    from notifications.domain import notifications
    from shared.events.envelope import EventType
    from shared.messaging.publisher import EventPublisher
    from shared.messaging.transport import TransportConnection

    notifications.init()

    published = 0
    failed = 0
    start = time.monotonic()

    with notifications.domain_context():
        connection = TransportConnection.for_domain(notifications, timeout=get_settings().publish_timeout_seconds)
        connection.connect()
        publisher = EventPublisher(connection)
        try:
            futures = []
            for i in range(args.count):
                for event_type, payload in _passport_events(i, args.actor):
                    if args.skip_delete and event_type is EventType.PASSPORT_DELETED:
                        continue
                    futures.append(publisher.emit_event(event_type, payload))

            for future in futures:
                if future.result() is None:
                    failed += 1
                else:
                    published += 1
        finally:
            publisher.close()
            connection.close()

    elapsed = time.monotonic() - start
    print(f"Published {published} events ({failed} failed) in {elapsed:.2f}s")


if __name__ == "__main__":
    main()
