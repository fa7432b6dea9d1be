"""Caller identity as resolved by the authentication service.

Token verification lives in the auth service; the pipeline only consumes the
resolved ``UserContext``.
"""

from dataclasses import dataclass
from enum import Enum


class Role(Enum):
    USER = "user"
    ADMIN = "admin"


@dataclass(frozen=True)
class UserContext:
    user_id: str
    role: str = Role.USER.value

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN.value
