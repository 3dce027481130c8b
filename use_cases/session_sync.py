"""
Session synchronization and route guarding.

The synchronizer owns the current authentication session of one app
session. It is fed by two sources: the backend's auth-state notifications
and a one-time "get current session" request issued at start. Both go
through `apply_session_update`, which sets the session, clears the loading
flag and then asks `NAVIGATION_POLICY` whether the current location must
change.

Views read the state through `use_session()`, which only works inside a
`session_scope(...)` block.
"""

import logging
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Protocol, Tuple, Union

from use_cases.session_models import AuthEvent, UserSession

log = logging.getLogger(__name__)

HOME_PATH = "/"
LOGIN_PATH = "/login"
DAILY_REPORT_PATH = "/daily-report"
REPORTS_PATH = "/reports"

INITIAL_RESOLUTION = "INITIAL_RESOLUTION"

Trigger = Union[AuthEvent, str]


class SessionSyncError(RuntimeError):
    pass


class SessionScopeError(RuntimeError):
    pass


class AuthBackend(Protocol):
    def on_auth_state_change(self, callback: Callable[[AuthEvent, Optional[UserSession]], None]): ...

    def get_session(self) -> Optional[UserSession]: ...


class Navigator(Protocol):
    def current_path(self) -> str: ...

    def navigate(self, path: str) -> None: ...


@dataclass(frozen=True)
class SessionState:
    session: Optional[UserSession]
    loading: bool


# (trigger, session present, on login page) -> target path.
# None in the session column means "either".
NAVIGATION_POLICY: Dict[Tuple[Trigger, Optional[bool], bool], str] = {
    (AuthEvent.SIGNED_IN, None, True): HOME_PATH,
    (AuthEvent.USER_UPDATED, None, True): HOME_PATH,
    (AuthEvent.SIGNED_OUT, None, False): LOGIN_PATH,
    (INITIAL_RESOLUTION, False, False): LOGIN_PATH,
    (INITIAL_RESOLUTION, True, True): HOME_PATH,
}


def decide_navigation(trigger: Trigger, has_session: bool, current_path: str) -> Optional[str]:
    """Return the path to navigate to, or None when the location stays."""
    on_login = current_path == LOGIN_PATH
    target = NAVIGATION_POLICY.get((trigger, has_session, on_login))
    if target is None:
        target = NAVIGATION_POLICY.get((trigger, None, on_login))
    if target == current_path:
        return None
    return target


class SessionSynchronizer:
    def __init__(self, auth_backend: AuthBackend, navigator: Navigator):
        self._backend = auth_backend
        self._navigator = navigator
        self._session: Optional[UserSession] = None
        self._loading = True
        self._subscription = None
        self._started = False
        self._closed = False
        self._listeners: List[Callable[[Trigger, SessionState], None]] = []

    # --- state ---

    def get_current_session(self) -> Optional[UserSession]:
        return self._session

    def is_loading(self) -> bool:
        return self._loading

    @property
    def state(self) -> SessionState:
        return SessionState(session=self._session, loading=self._loading)

    def add_listener(self, listener: Callable[[Trigger, SessionState], None]) -> Callable[[], None]:
        self._listeners.append(listener)

        def remove() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return remove

    # --- lifecycle ---

    def start(self) -> "SessionSynchronizer":
        if self._closed:
            raise SessionSyncError("Session synchronizer already closed")
        if self._started:
            raise SessionSyncError("Session synchronizer already started")
        self._started = True

        # Subscribe before seeding so no transition between the two is lost.
        self._subscription = self._backend.on_auth_state_change(self.handle_auth_event)

        try:
            try:
                session = self._backend.get_session()
            except Exception:
                log.warning("Initial session fetch failed, continuing as signed out", exc_info=True)
                session = None
            self.apply_session_update(session, INITIAL_RESOLUTION)
        except BaseException:
            # A half-started synchronizer never reaches __exit__.
            self.close()
            raise
        return self

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        subscription, self._subscription = self._subscription, None
        if subscription is not None:
            subscription.unsubscribe()
            log.debug("Auth state subscription released")

    def __enter__(self) -> "SessionSynchronizer":
        return self.start()

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    # --- updates ---

    def handle_auth_event(self, event, session: Optional[UserSession]) -> None:
        """Callback registered with the backend's auth-state notifications."""
        self.apply_session_update(session, AuthEvent.parse(event))

    def apply_session_update(self, session: Optional[UserSession], trigger: Trigger) -> Optional[str]:
        """Record `session` and run the navigation policy for `trigger`.

        Applying the same session twice is harmless: the second pass finds
        the location already where the policy wants it and does nothing.
        Returns the path navigated to, if any.
        """
        self._session = session
        self._loading = False

        current = self._navigator.current_path()
        target = decide_navigation(trigger, session is not None, current)
        if target is not None:
            log.info("Auth transition %s: %s -> %s", getattr(trigger, "value", trigger), current, target)
            self._navigator.navigate(target)

        state = self.state
        for listener in list(self._listeners):
            listener(trigger, state)
        return target


_current_sync: ContextVar[Optional[SessionSynchronizer]] = ContextVar("current_session_sync", default=None)


@contextmanager
def session_scope(synchronizer: SessionSynchronizer):
    """Make `synchronizer` reachable through `use_session()` inside the block."""
    token = _current_sync.set(synchronizer)
    try:
        yield synchronizer
    finally:
        _current_sync.reset(token)


def current_synchronizer() -> SessionSynchronizer:
    synchronizer = _current_sync.get()
    if synchronizer is None:
        raise SessionScopeError("use_session() must be called within a session_scope()")
    return synchronizer


def use_session() -> SessionState:
    return current_synchronizer().state
