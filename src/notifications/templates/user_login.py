"""Login template — security notice for a successful login."""

from notifications.templates.base import or_placeholder
from shared.events.envelope import EventType
from shared.events.identity import UserLoggedIn


class UserLoginTemplate:
    event_type = EventType.USER_LOGIN.value
    payload_cls = UserLoggedIn

    @staticmethod
    def render(payload: UserLoggedIn) -> dict:
        return {
            "title": "Successful Login",
            "body": (
                "You have successfully logged into your account.\n\n"
                f"Login Time: {or_placeholder(payload.login_at)}\n"
                "If this wasn't you, please contact support immediately."
            ),
        }
