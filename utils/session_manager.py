import logging
from urllib.parse import unquote

import streamlit as st
import streamlit.components.v1 as components

import auth
from use_cases.session_models import AuthEvent
from use_cases.session_sync import HOME_PATH, LOGIN_PATH, SessionSynchronizer

log = logging.getLogger(__name__)

"""
SESSION STATE CONTRACT

This module owns the per-browser-session Streamlit state.

st.session_state keys:

backend_client: supabase.Client | None
    Supabase client of this browser session
    default: None
    owner: session_manager

session_sync: SessionSynchronizer | None
    started synchronizer bound to backend_client
    default: None
    owner: session_manager

current_path: str
    route the user is on ("/", "/login", "/daily-report", "/reports")
    default: "/"
    owner: session_manager (navigator)

nav_target: str | None
    navigation requested by the synchronizer, applied by app.py
    default: None
    owner: session_manager (navigator)

pending_browser_token: tuple | None
    ("set", refresh_token) or ("clear", None), written to the cookie on the next render
    default: None
    owner: session_manager

browser_token_consumed: bool
    the refresh-token cookie is only used once per browser session
    default: False
    owner: session_manager
"""

BROWSER_TOKEN_COOKIE = "closer_refresh_token"
BROWSER_TOKEN_MAX_AGE = 2592000  # 30 days


def init_session_state():
    if 'backend_client' not in st.session_state:
        st.session_state.backend_client = None
    if 'session_sync' not in st.session_state:
        st.session_state.session_sync = None
    if 'current_path' not in st.session_state:
        st.session_state.current_path = HOME_PATH
    if 'nav_target' not in st.session_state:
        st.session_state.nav_target = None
    if 'pending_browser_token' not in st.session_state:
        st.session_state.pending_browser_token = None
    if 'browser_token_consumed' not in st.session_state:
        st.session_state.browser_token_consumed = False


class StreamlitNavigator:
    """Navigator over st.session_state. Targets are applied by follow_pending_navigation()."""

    def current_path(self) -> str:
        return st.session_state.get("current_path", HOME_PATH)

    def navigate(self, path: str) -> None:
        st.session_state.current_path = path
        st.session_state.nav_target = path


def _read_browser_token():
    if st.session_state.browser_token_consumed:
        return None
    st.session_state.browser_token_consumed = True
    try:
        token = st.context.cookies.get(BROWSER_TOKEN_COOKIE)
    except Exception:
        # During some tests contexts might not be fully available
        token = None
    return unquote(token) if token else None


def _remember_browser_token(trigger, state):
    if state.session is not None:
        st.session_state.pending_browser_token = ("set", state.session.refresh_token)
    elif trigger == AuthEvent.SIGNED_OUT:
        st.session_state.pending_browser_token = ("clear", None)


def get_backend_client():
    if st.session_state.get("backend_client") is None:
        st.session_state.backend_client = auth.create_backend_client()
    return st.session_state.backend_client


def refresh_backend_session():
    """Let the client refresh an expired session on the script thread.

    The client does not auto-refresh, so a TOKEN_REFRESHED or SIGNED_OUT
    raised here reaches the synchronizer synchronously.
    """
    client = st.session_state.get("backend_client")
    if client is None:
        return
    try:
        client.auth.get_session()
    except auth.AuthError as e:
        log.warning("Session refresh failed: %s", e.message)


def get_synchronizer() -> SessionSynchronizer:
    """Create and start the synchronizer once per browser session."""
    init_session_state()
    if st.session_state.session_sync is not None:
        refresh_backend_session()
    else:
        gateway = auth.SupabaseAuthGateway(get_backend_client(), stored_refresh_token=_read_browser_token())
        sync = SessionSynchronizer(gateway, StreamlitNavigator())
        sync.add_listener(_remember_browser_token)
        # start() releases its own subscription on failure; only store a running one.
        sync.start()
        st.session_state.session_sync = sync
    return st.session_state.session_sync


def reset_session():
    """Release the auth subscription and drop the client; the next run starts fresh."""
    sync = st.session_state.get("session_sync")
    if sync is not None:
        sync.close()
    st.session_state.session_sync = None
    st.session_state.backend_client = None
    # Per-user form state of the daily report page.
    for key in ("profile_lookup", "report_form_defaults"):
        st.session_state.pop(key, None)


def follow_pending_navigation(pages, running_path):
    """Switch to the page requested by the synchronizer, if it is not the one running."""
    target = st.session_state.get("nav_target")
    if target is None:
        return
    st.session_state.nav_target = None
    if target != running_path and target in pages:
        st.switch_page(pages[target])


def flush_browser_token():
    pending = st.session_state.get("pending_browser_token")
    if pending is None:
        return
    st.session_state.pending_browser_token = None
    op, token = pending
    if op == "set":
        script = f"""
        var cookieStr = "{BROWSER_TOKEN_COOKIE}=" + encodeURIComponent("{token}") + "; path=/; max-age={BROWSER_TOKEN_MAX_AGE}; SameSite=Lax";
        """
    else:
        script = f"""
        var cookieStr = "{BROWSER_TOKEN_COOKIE}=; path=/; max-age=0; SameSite=Lax";
        """
    components.html(
        f"""
        <script>
          {script}
          document.cookie = cookieStr;
          // Set it on the app document too, the component runs in an iframe
          try {{
              window.parent.document.cookie = cookieStr;
          }} catch (e) {{
              console.log("Cross-origin frame block, normal behavior if different origin");
          }}
        </script>
        """,
        height=0,
    )


def logout():
    client = st.session_state.get("backend_client")
    if client is not None:
        auth.sign_out(client)
    reset_session()


def navigate_to(path):
    """Ask app.py to switch page once the current page has rendered."""
    StreamlitNavigator().navigate(path)


def request_login_redirect():
    navigate_to(LOGIN_PATH)


def set_flash(level, message):
    st.session_state.flash = (level, message)


def pop_flash():
    return st.session_state.pop("flash", None)
