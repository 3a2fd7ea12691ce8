import threading
from dataclasses import dataclass
from typing import Dict, Optional

import redis

from shared.session_state import SessionState, SessionStateMachine


@dataclass
class Session:
    token: str
    display_name: str
    state: SessionState = SessionState.ANONYMOUS
    last_seen: float = 0.0

    @property
    def logged_in(self) -> bool:
        return self.state == SessionState.AUTHENTICATED

    def to_dict(self) -> dict:
        return {
            'display_name': self.display_name,
            'logged_in': self.logged_in,
            'state': self.state.value,
        }


class InMemorySessionStore:
    """Sessions kept in process memory, keyed by token."""

    def __init__(self):
        self._sessions: Dict[str, Session] = {}
        self._lock = threading.Lock()

    def get(self, token: str) -> Optional[Session]:
        with self._lock:
            return self._sessions.get(token)

    def save(self, session: Session):
        with self._lock:
            self._sessions[session.token] = session

    def refresh(self, session: Session) -> bool:
        """Store session only if its token is still live."""
        with self._lock:
            if session.token not in self._sessions:
                return False
            self._sessions[session.token] = session
            return True

    def delete(self, token: str):
        with self._lock:
            self._sessions.pop(token, None)

    def ping(self) -> bool:
        return True


class RedisSessionStore:
    """
    Sessions kept as Redis hashes (session:<token>).

    Each save refreshes the key TTL to the idle window so abandoned sessions
    are reclaimed by Redis; the gate's idle check remains authoritative.
    """

    def __init__(self, redis_client: redis.Redis, ttl_seconds: int):
        self.redis = redis_client
        self.ttl_seconds = ttl_seconds

    @classmethod
    def from_url(cls, redis_url: str, ttl_seconds: int) -> "RedisSessionStore":
        client = redis.from_url(
            redis_url,
            decode_responses=True,
            socket_connect_timeout=5,
            socket_timeout=5
        )
        return cls(client, ttl_seconds)

    def _key(self, token: str) -> str:
        return f"session:{token}"

    def get(self, token: str) -> Optional[Session]:
        data = self.redis.hgetall(self._key(token))
        if not data:
            return None
        return Session(
            token=token,
            display_name=data.get('display_name', ''),
            state=SessionStateMachine.from_state_string(data.get('state')).state,
            last_seen=float(data.get('last_seen') or 0)
        )

    def _mapping(self, session: Session) -> dict:
        return {
            'display_name': session.display_name,
            'state': session.state.value,
            'last_seen': str(session.last_seen),
        }

    def save(self, session: Session):
        key = self._key(session.token)
        self.redis.hset(key, mapping=self._mapping(session))
        self.redis.expire(key, self.ttl_seconds)

    def refresh(self, session: Session) -> bool:
        """
        Rewrite an existing session hash and its TTL.

        The key is WATCHed so a concurrent delete (logout from another
        worker) aborts the write instead of recreating the session.
        """
        key = self._key(session.token)
        with self.redis.pipeline() as pipe:
            try:
                pipe.watch(key)
                if not pipe.exists(key):
                    return False
                pipe.multi()
                pipe.hset(key, mapping=self._mapping(session))
                pipe.expire(key, self.ttl_seconds)
                pipe.execute()
            except redis.exceptions.WatchError:
                return False
        return True

    def delete(self, token: str):
        self.redis.delete(self._key(token))

    def ping(self) -> bool:
        try:
            return bool(self.redis.ping())
        except redis.exceptions.RedisError:
            return False
