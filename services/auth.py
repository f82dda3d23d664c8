"""
Auth client for the backend's password sign-in API.

Listeners registered with `subscribe` receive ``(event, session)`` on every
transition: ``SIGNED_IN``, ``SIGNED_OUT``, ``TOKEN_REFRESHED``, and the
``INITIAL_SESSION`` emitted once by `start`.
"""
import logging
from typing import Callable, List, Optional

from domain.errors import AuthError, RemoteError
from domain.models import Session, session_from_dict
from services.backend import Backend, read_json

logger = logging.getLogger(__name__)

INITIAL_SESSION = 'INITIAL_SESSION'
SIGNED_IN = 'SIGNED_IN'
SIGNED_OUT = 'SIGNED_OUT'
TOKEN_REFRESHED = 'TOKEN_REFRESHED'

Listener = Callable[[str, Optional[Session]], None]


class AuthClient:
    def __init__(self, backend: Backend):
        self.backend = backend
        self.session: Optional[Session] = None
        self._listeners: List[Listener] = []

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a listener; returns a callable that unsubscribes it."""
        self._listeners.append(listener)

        def unsubscribe():
            if listener in self._listeners:
                self._listeners.remove(listener)
        return unsubscribe

    def _emit(self, event: str, session: Optional[Session]):
        for listener in list(self._listeners):
            listener(event, session)

    def _set_session(self, event: str, session: Optional[Session]):
        self.session = session
        self.backend.access_token = session.access_token if session else None
        self._emit(event, session)

    def start(self, session: Optional[Session]):
        """Adopt a restored session (or None) and announce it once."""
        self._set_session(INITIAL_SESSION, session)

    def sign_in_with_password(self, email: str, password: str) -> Session:
        try:
            response = self.backend.auth(
                'POST', 'token', params={'grant_type': 'password'},
                json={'email': email, 'password': password})
            payload = read_json(response)
        except RemoteError as e:
            raise AuthError(e.args[0] if e.args else "Invalid credentials! Please try again.") from e
        session = session_from_dict(payload)
        if session is None:
            raise AuthError("Invalid credentials! Please try again.")
        logger.info("Signed in %s", session.email)
        self._set_session(SIGNED_IN, session)
        return session

    def refresh(self, session: Session) -> Session:
        if not session.refresh_token:
            raise AuthError("Session expired, please log in again.")
        try:
            response = self.backend.auth(
                'POST', 'token', params={'grant_type': 'refresh_token'},
                json={'refresh_token': session.refresh_token})
            payload = read_json(response)
        except RemoteError as e:
            raise AuthError(f"Session expired, please log in again. ({e})") from e
        refreshed = session_from_dict(payload)
        if refreshed is None:
            raise AuthError("Session expired, please log in again.")
        refreshed.admin_verified = session.admin_verified
        self._set_session(TOKEN_REFRESHED, refreshed)
        return refreshed

    def sign_out(self):
        """Revoke the current token remotely, then drop it locally.

        The local session is cleared even when the remote call fails; the
        failure is re-raised as AuthError afterwards.
        """
        failure = None
        if self.session is not None:
            try:
                self.backend.auth('POST', 'logout')
            except RemoteError as e:
                logger.warning("Remote sign-out failed: %s", e)
                failure = e
        self._set_session(SIGNED_OUT, None)
        if failure is not None:
            raise AuthError(f"Logout failed: {failure}") from failure
