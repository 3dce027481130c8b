import logging
import os
from typing import Optional

import streamlit as st
from supabase import AuthApiError, AuthError, Client, ClientOptions, create_client

from use_cases.session_models import AuthEvent, UserSession

log = logging.getLogger(__name__)


class InvalidCredentialsError(Exception):
    pass


class AuthServiceError(Exception):
    pass


class BackendConfigError(Exception):
    pass


MIN_PASSWORD_LENGTH = 6


def get_secret(key):
    try:
        value = st.secrets.get(key)
    except FileNotFoundError:
        value = None
    return value or os.getenv(key)


def get_backend_config():
    """Return (url, anon_key) for the Supabase project or raise BackendConfigError."""
    url = get_secret("SUPABASE_URL")
    key = get_secret("SUPABASE_ANON_KEY") or get_secret("SUPABASE_KEY")
    if not url or not key:
        raise BackendConfigError("SUPABASE_URL / SUPABASE_ANON_KEY are not configured")
    return url, key


def create_backend_client() -> Client:
    """One client per browser session.

    Auto-refresh stays off: it runs on a background timer thread outside the
    Streamlit script run. `get_session()` refreshes an expired session on the
    script thread instead, and its TOKEN_REFRESHED notification arrives there.
    """
    url, key = get_backend_config()
    return create_client(url, key, options=ClientOptions(auto_refresh_token=False))


def to_user_session(session) -> Optional[UserSession]:
    """Convert a Supabase session into the app's session DTO."""
    if session is None or getattr(session, "user", None) is None:
        return None
    return UserSession(
        user_id=str(session.user.id),
        email=getattr(session.user, "email", None),
        access_token=session.access_token,
        refresh_token=session.refresh_token,
        expires_at=getattr(session, "expires_at", None),
    )


class SupabaseAuthGateway:
    """Auth surface of the Supabase client, speaking UserSession instead of raw sessions."""

    def __init__(self, client: Client, stored_refresh_token: Optional[str] = None):
        self.client = client
        self._stored_refresh_token = stored_refresh_token

    def on_auth_state_change(self, callback):
        def relay(event, session):
            callback(AuthEvent.parse(event), to_user_session(session))

        return self.client.auth.on_auth_state_change(relay)

    def get_session(self) -> Optional[UserSession]:
        session = to_user_session(self.client.auth.get_session())
        if session is None and self._stored_refresh_token:
            token, self._stored_refresh_token = self._stored_refresh_token, None
            try:
                response = self.client.auth.refresh_session(token)
            except AuthError as e:
                log.info("Stored refresh token rejected: %s", e.message)
                return None
            session = to_user_session(response.session)
        return session


def _credentials(email, password):
    email = (email or "").strip()
    if not email or not password:
        raise InvalidCredentialsError("Veuillez saisir votre email et votre mot de passe.")
    return email, password


def sign_in(client: Client, email, password):
    email, password = _credentials(email, password)
    try:
        response = client.auth.sign_in_with_password({"email": email, "password": password})
    except AuthApiError as e:
        log.info("Sign-in rejected (status=%s)", e.status)
        if e.status in (400, 401):
            raise InvalidCredentialsError("Email ou mot de passe incorrect.") from e
        raise AuthServiceError(e.message) from e
    except AuthError as e:
        raise AuthServiceError(e.message) from e
    return to_user_session(response.session)


def sign_up(client: Client, email, password, first_name="", last_name=""):
    """Create an account. Returns the session, or None when email confirmation is required."""
    email, password = _credentials(email, password)
    if len(password) < MIN_PASSWORD_LENGTH:
        raise InvalidCredentialsError(
            f"Le mot de passe doit contenir au moins {MIN_PASSWORD_LENGTH} caractères."
        )
    options = {"data": {"first_name": first_name.strip(), "last_name": last_name.strip()}}
    redirect_url = get_secret("AUTH_REDIRECT_URL")
    if redirect_url:
        options["email_redirect_to"] = redirect_url
    try:
        response = client.auth.sign_up({"email": email, "password": password, "options": options})
    except AuthError as e:
        raise AuthServiceError(e.message) from e
    return to_user_session(response.session)


def request_password_reset(client: Client, email):
    email = (email or "").strip()
    if not email:
        raise InvalidCredentialsError("Veuillez saisir votre email.")
    options = {}
    redirect_url = get_secret("AUTH_REDIRECT_URL")
    if redirect_url:
        options["redirect_to"] = redirect_url
    try:
        client.auth.reset_password_for_email(email, options)
    except AuthError as e:
        raise AuthServiceError(e.message) from e


def sign_out(client: Client):
    try:
        client.auth.sign_out()
    except AuthError:
        # The local session is dropped even when the server call fails.
        log.warning("Remote sign-out failed", exc_info=True)
