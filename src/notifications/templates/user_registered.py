"""Welcome template — sent when a user registers."""

from shared.events.envelope import EventType
from shared.events.identity import UserRegistered


class UserRegisteredTemplate:
    event_type = EventType.USER_REGISTERED.value
    payload_cls = UserRegistered

    @staticmethod
    def render(payload: UserRegistered) -> dict:
        return {
            "title": "Welcome to Battery Passport System",
            "body": (
                "Thank you for registering with the Battery Passport System!\n\n"
                "Your account has been created successfully. "
                "You can now login and start using the system."
            ),
        }
