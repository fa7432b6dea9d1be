"""Cross-service event contracts for user account events (reserved for the auth service)."""

from dataclasses import dataclass

from shared.events.base import EventPayload, wire
from shared.events.envelope import EventType


@dataclass(frozen=True)
class UserRegistered(EventPayload):
    event_type = EventType.USER_REGISTERED

    user_id: str | None = wire("userId")
    email: str | None = wire("email")


@dataclass(frozen=True)
class UserLoggedIn(EventPayload):
    event_type = EventType.USER_LOGIN

    user_id: str | None = wire("userId")
    email: str | None = wire("email")
    login_at: str | None = wire("loginAt")
