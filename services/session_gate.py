"""
Session Gate: owns the current admin session and its persisted copy.

A session is only *authorized* once the admin allow-list has confirmed its
email. Until then it is held in memory as pending and never written to the
local store, so a credential sign-in alone can neither reach protected views
nor survive a reload.
"""
import logging
from typing import Optional, Tuple

from domain.constants import ACCESS_DENIED_MESSAGE
from domain.errors import AuthError, RemoteError, ValidationError
from domain.models import Session, session_from_dict
from services.auth import AuthClient
from services.persistence import SessionStore
from services.remote import CollectionClient

logger = logging.getLogger(__name__)


class SessionGate:
    def __init__(self, auth: AuthClient, admins: CollectionClient, store: SessionStore):
        self.auth = auth
        self.admins = admins
        self.store = store
        self.session: Optional[Session] = None
        self._last_change: Optional[Tuple[str, Optional[str]]] = None
        auth.subscribe(self.on_change)

    @property
    def is_authenticated(self) -> bool:
        return self.session is not None

    @property
    def is_authorized(self) -> bool:
        return self.session is not None and self.session.admin_verified

    @property
    def email(self) -> Optional[str]:
        return self.session.email if self.session else None

    def restore(self) -> Optional[Session]:
        """Read the persisted session at startup.

        Unverified or unparsable entries are discarded. An expired session is
        refreshed once; if that fails it is cleared.
        """
        stored = self.store.load()
        session = session_from_dict(stored) if stored else None
        if stored is not None and (session is None or not session.admin_verified):
            logger.info("Discarding unusable stored session")
            self.store.clear()
            session = None
        if session is not None and session.is_expired():
            try:
                session = self.auth.refresh(session)
            except AuthError as e:
                logger.info("Stored session could not be refreshed: %s", e)
                self.store.clear()
                session = None
        self.auth.start(session)
        return self.session

    def on_change(self, event: str, session: Optional[Session]):
        """Auth change listener; safe to receive the same notification twice."""
        key = (event, session.access_token if session else None)
        if key == self._last_change:
            return
        self._last_change = key
        self.session = session
        if session is None:
            self.store.clear()
        elif session.admin_verified:
            self.store.save(session.to_dict())
        logger.debug("Auth event %s (authorized=%s)", event, self.is_authorized)

    def login(self, email: str, password: str) -> Session:
        email = (email or '').strip().lower()
        password = (password or '').strip()
        if not email or not password:
            raise ValidationError("Please enter both email and password.",
                                  [f for f, v in (('email', email), ('password', password)) if not v])
        self.auth.sign_in_with_password(email, password)
        if not self.require_admin(email):
            raise AuthError(ACCESS_DENIED_MESSAGE)
        return self.session

    def require_admin(self, email: str) -> bool:
        """Confirm `email` against the allow-list, signing out when it is absent."""
        if self.session is None:
            return False
        try:
            admin_row = self.admins.find_one('email', email)
        except RemoteError as e:
            logger.warning("Admin lookup failed for %s: %s", email, e)
            admin_row = None
        if not admin_row:
            logger.warning("Denied non-admin sign-in for %s", email)
            self._deny()
            return False
        self.session.admin_verified = True
        self.store.save(self.session.to_dict())
        logger.info("Admin access granted to %s", email)
        return True

    def _deny(self):
        try:
            self.auth.sign_out()
        except AuthError as e:
            logger.warning("Sign-out after denied access failed: %s", e)
        self.session = None
        self.store.clear()

    def logout(self):
        """Sign out; local state is cleared even when the remote call fails."""
        try:
            self.auth.sign_out()
        finally:
            self.session = None
            self.store.clear()
