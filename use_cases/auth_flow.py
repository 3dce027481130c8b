"""Authentication flow orchestration (application layer)."""

from dataclasses import dataclass
from typing import Literal, Optional

from use_cases.session_models import is_authenticated
from use_cases.session_sync import use_session

AuthFlowStatus = Literal["CONTINUE", "STOP", "LOADING"]


@dataclass(frozen=True)
class AuthFlowResult:
    """Result contract for auth flow orchestration."""

    status: AuthFlowStatus
    reason: str
    user_id: Optional[str] = None


def ensure_authenticated_session() -> AuthFlowResult:
    """Gate a protected page on the synchronized session."""
    state = use_session()
    if state.loading:
        return AuthFlowResult(status="LOADING", reason="session_loading")
    if not is_authenticated(state.session):
        return AuthFlowResult(status="STOP", reason="auth_required")
    return AuthFlowResult(status="CONTINUE", reason="authenticated", user_id=state.session.user_id)
