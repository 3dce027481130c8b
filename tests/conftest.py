import pytest

from tests.fakes import FakeAuthBackend, FakeNavigator
from use_cases.session_models import UserSession


@pytest.fixture
def user_session():
    return UserSession(
        user_id="U1",
        email="closer@example.com",
        access_token="access-token",
        refresh_token="refresh-token",
        expires_at=1_900_000_000,
    )


@pytest.fixture
def other_session():
    return UserSession(
        user_id="U2",
        email="other@example.com",
        access_token="access-token-2",
        refresh_token="refresh-token-2",
    )


@pytest.fixture
def backend():
    return FakeAuthBackend()


@pytest.fixture
def navigator():
    return FakeNavigator()
