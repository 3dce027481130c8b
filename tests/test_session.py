from unittest.mock import MagicMock, patch

import pytest
import streamlit as st

import auth
from tests.fakes import FakeAuthBackend
from use_cases.session_models import AuthEvent
from use_cases.session_sync import SessionState
from utils import session_manager


@pytest.fixture(autouse=True)
def fresh_state():
    st.session_state.clear()
    session_manager.init_session_state()
    yield
    st.session_state.clear()


def test_init_session_state():
    assert st.session_state.backend_client is None
    assert st.session_state.session_sync is None
    assert st.session_state.current_path == "/"
    assert st.session_state.nav_target is None
    assert st.session_state.pending_browser_token is None
    assert st.session_state.browser_token_consumed is False


def test_navigator_records_target():
    navigator = session_manager.StreamlitNavigator()
    navigator.navigate("/login")
    assert navigator.current_path() == "/login"
    assert st.session_state.nav_target == "/login"


@patch("utils.session_manager.st.switch_page")
def test_follow_pending_navigation_switches_once(mock_switch):
    pages = {"/": "home_page", "/login": "login_page"}
    session_manager.navigate_to("/login")

    session_manager.follow_pending_navigation(pages, "/reports")
    session_manager.follow_pending_navigation(pages, "/reports")

    mock_switch.assert_called_once_with("login_page")
    assert st.session_state.nav_target is None


@patch("utils.session_manager.st.switch_page")
def test_follow_pending_navigation_skips_running_page(mock_switch):
    session_manager.navigate_to("/")
    session_manager.follow_pending_navigation({"/": "home_page"}, "/")
    mock_switch.assert_not_called()


@patch("utils.session_manager.auth.SupabaseAuthGateway")
@patch("utils.session_manager.auth.create_backend_client")
def test_get_synchronizer_starts_once(mock_create_client, mock_gateway, user_session):
    mock_gateway.return_value = FakeAuthBackend(session=user_session)

    first = session_manager.get_synchronizer()
    second = session_manager.get_synchronizer()

    assert first is second
    mock_create_client.assert_called_once()
    assert mock_gateway.return_value.calls == ["subscribe", "get_session"]
    assert first.get_current_session() == user_session
    assert st.session_state.pending_browser_token == ("set", "refresh-token")


@patch("utils.session_manager.auth.SupabaseAuthGateway")
@patch("utils.session_manager.auth.create_backend_client")
def test_get_synchronizer_redirects_anonymous_user(_mock_create_client, mock_gateway):
    mock_gateway.return_value = FakeAuthBackend()
    st.session_state.current_path = "/reports"

    session_manager.get_synchronizer()

    assert st.session_state.nav_target == "/login"


def test_browser_token_listener():
    session_manager._remember_browser_token(AuthEvent.SIGNED_OUT, SessionState(session=None, loading=False))
    assert st.session_state.pending_browser_token == ("clear", None)

    st.session_state.pending_browser_token = None
    session_manager._remember_browser_token("INITIAL_RESOLUTION", SessionState(session=None, loading=False))
    assert st.session_state.pending_browser_token is None


@patch("utils.session_manager.components.html")
def test_flush_browser_token_renders_once(mock_html):
    st.session_state.pending_browser_token = ("set", "refresh-token")

    session_manager.flush_browser_token()
    session_manager.flush_browser_token()

    mock_html.assert_called_once()
    assert "closer_refresh_token" in mock_html.call_args[0][0]
    assert "refresh-token" in mock_html.call_args[0][0]


@patch("utils.session_manager.auth.sign_out")
def test_logout(mock_sign_out):
    client = MagicMock()
    sync = MagicMock()
    st.session_state.backend_client = client
    st.session_state.session_sync = sync
    st.session_state.profile_lookup = ("U1", "cached")

    session_manager.logout()

    mock_sign_out.assert_called_once_with(client)
    sync.close.assert_called_once()
    assert st.session_state.backend_client is None
    assert st.session_state.session_sync is None
    assert "profile_lookup" not in st.session_state


@patch("utils.session_manager.auth.SupabaseAuthGateway")
@patch("utils.session_manager.auth.create_backend_client")
def test_sign_out_while_on_reports_redirects_and_releases(_mock_create_client, mock_gateway, user_session):
    backend = FakeAuthBackend(session=user_session)
    mock_gateway.return_value = backend
    st.session_state.current_path = "/reports"
    session_manager.get_synchronizer()
    assert st.session_state.nav_target is None

    with patch("utils.session_manager.auth.sign_out", side_effect=lambda _client: backend.emit("SIGNED_OUT", None)):
        session_manager.logout()

    assert st.session_state.nav_target == "/login"
    assert st.session_state.pending_browser_token == ("clear", None)
    assert backend.subscription.unsubscribe_calls == 1


def test_flash_roundtrip():
    session_manager.set_flash("success", "ok")
    assert session_manager.pop_flash() == ("success", "ok")
    assert session_manager.pop_flash() is None


@patch("utils.session_manager.StreamlitNavigator.navigate", side_effect=RuntimeError("navigation unavailable"))
@patch("utils.session_manager.auth.SupabaseAuthGateway")
@patch("utils.session_manager.auth.create_backend_client")
def test_get_synchronizer_does_not_keep_failed_start(_mock_create_client, mock_gateway, _mock_navigate):
    backend = FakeAuthBackend()
    mock_gateway.return_value = backend
    st.session_state.current_path = "/reports"

    with pytest.raises(RuntimeError):
        session_manager.get_synchronizer()

    assert st.session_state.session_sync is None
    assert backend.subscription.unsubscribe_calls == 1


@patch("utils.session_manager.auth.SupabaseAuthGateway")
@patch("utils.session_manager.auth.create_backend_client")
def test_later_runs_let_the_client_refresh_on_script_thread(mock_create_client, mock_gateway, user_session):
    backend = FakeAuthBackend(session=user_session)
    mock_gateway.return_value = backend
    client = mock_create_client.return_value
    client.auth.get_session.side_effect = lambda: backend.emit("TOKEN_REFRESHED", user_session)

    session_manager.get_synchronizer()
    client.auth.get_session.assert_not_called()
    st.session_state.pending_browser_token = None

    session_manager.get_synchronizer()

    client.auth.get_session.assert_called_once()
    assert st.session_state.pending_browser_token == ("set", "refresh-token")


def test_refresh_failure_is_logged(caplog):
    client = MagicMock()
    client.auth.get_session.side_effect = auth.AuthError("Invalid Refresh Token", None)
    st.session_state.backend_client = client

    session_manager.refresh_backend_session()

    assert "Session refresh failed" in caplog.text
