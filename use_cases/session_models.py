"""Session DTOs shared across application layers."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class AuthEvent(str, Enum):
    SIGNED_IN = "SIGNED_IN"
    SIGNED_OUT = "SIGNED_OUT"
    USER_UPDATED = "USER_UPDATED"
    TOKEN_REFRESHED = "TOKEN_REFRESHED"
    PASSWORD_RECOVERY = "PASSWORD_RECOVERY"
    INITIAL_SESSION = "INITIAL_SESSION"
    MFA_CHALLENGE_VERIFIED = "MFA_CHALLENGE_VERIFIED"
    OTHER = "OTHER"

    @classmethod
    def parse(cls, raw) -> "AuthEvent":
        """Map a backend event tag onto a known event, unknown tags become OTHER."""
        if isinstance(raw, cls):
            return raw
        try:
            return cls(str(raw).upper())
        except ValueError:
            return cls.OTHER


@dataclass(frozen=True)
class UserSession:
    user_id: str
    email: Optional[str]
    access_token: str
    refresh_token: str
    expires_at: Optional[int] = None


def is_authenticated(session: Optional[UserSession]) -> bool:
    return session is not None
