import hmac
import logging
import secrets
import threading
import time
from typing import Callable, Optional

from werkzeug.security import generate_password_hash, check_password_hash

from shared.errors import AuthError
from shared.session_state import SessionStateMachine
from .session_store import Session

logger = logging.getLogger(__name__)

DEFAULT_IDLE_TIMEOUT = 30 * 60


class SessionGate:
    """
    Capability check in front of every registration operation.

    A session moves ANONYMOUS -> AUTHENTICATED on a successful credential
    check and back on logout or once it has been idle longer than
    idle_timeout seconds. Idle expiry is checked passively on authorize;
    every authorized call refreshes last_seen. Touch and logout are
    serialized so a terminated session is never refreshed back into the
    store.
    """

    def __init__(
        self,
        username: str,
        password: str,
        store,
        display_name: str = 'Admin',
        idle_timeout: float = DEFAULT_IDLE_TIMEOUT,
        clock: Callable[[], float] = None
    ):
        if not username or not password:
            raise ValueError("An operator username and password must be configured")
        self.username = username
        self._password_hash = generate_password_hash(password)
        self.display_name = display_name
        self.store = store
        self.idle_timeout = idle_timeout
        self.clock = clock or time.time
        self._lock = threading.RLock()

    def authenticate(self, username: str, password: str) -> Session:
        """Check the credential pair and open a new session."""
        username_ok = isinstance(username, str) and hmac.compare_digest(
            username.encode(), self.username.encode()
        )
        password_ok = isinstance(password, str) and check_password_hash(
            self._password_hash, password
        )
        if not (username_ok and password_ok):
            logger.warning("Failed login attempt")
            raise AuthError("Invalid username or password")

        sm = SessionStateMachine()
        sm.transition('login')
        session = Session(
            token=secrets.token_urlsafe(32),
            display_name=self.display_name,
            state=sm.state,
            last_seen=self.clock()
        )
        self.store.save(session)
        logger.info(f"Operator {self.display_name} logged in")
        return session

    def authorize(self, token: Optional[str]) -> bool:
        return self._touch(token) is not None

    def require(self, token: Optional[str], operation: str = None) -> Session:
        """Authorize or raise AuthError; optionally check the operation is allowed."""
        session = self._touch(token)
        if session is None:
            raise AuthError()
        if operation and not SessionStateMachine(session.state).can_perform(operation):
            raise AuthError(f"Operation '{operation}' is not allowed in this session")
        return session

    def get_session(self, token: Optional[str]) -> Optional[Session]:
        if not token:
            return None
        return self.store.get(token)

    def terminate(self, token: Optional[str]):
        with self._lock:
            session = self.get_session(token)
            if session is None:
                return
            sm = SessionStateMachine(session.state)
            if sm.can_transition('logout'):
                session.state = sm.transition('logout')
                logger.info(f"Operator {session.display_name} logged out")
            self.store.delete(token)

    def _touch(self, token: Optional[str]) -> Optional[Session]:
        with self._lock:
            session = self.get_session(token)
            if session is None or not session.logged_in:
                return None

            now = self.clock()
            sm = SessionStateMachine(session.state)
            # a logout may have landed since the read
            if not sm.can_transition('touch'):
                return None

            if now - session.last_seen > self.idle_timeout:
                session.state = sm.transition('expire')
                self.store.delete(token)
                logger.warning(f"Session for {session.display_name} expired after {self.idle_timeout}s idle")
                return None

            session.state = sm.transition('touch')
            session.last_seen = now
            if not self.store.refresh(session):
                return None
            return session
