"""Server-side login sessions.

A session binds an opaque token to a username for a bounded time window.
Records are never mutated: they are created on login, removed on logout,
and evicted lazily by whoever next looks up an expired token.
"""

import datetime
import uuid
from dataclasses import dataclass
from typing import Callable, Dict, Optional

from partstracker.utils.logging import get_logger

logger = get_logger(__name__)

# Canonical UUID4 string: 32 hex digits and 4 hyphens, 122 random bits
TOKEN_LENGTH = 36

DEFAULT_TTL_MINUTES = 2


def utcnow() -> datetime.datetime:
    return datetime.datetime.now(datetime.timezone.utc)


@dataclass(frozen=True)
class Session:
    session_id: str
    username: str
    created_at: datetime.datetime
    expires_at: datetime.datetime

    def is_expired(self, now: Optional[datetime.datetime] = None) -> bool:
        return is_expired(self, now or utcnow())


def is_expired(session: Session, now: datetime.datetime) -> bool:
    return now >= session.expires_at


class SessionStore:
    """Process-wide table of live sessions keyed by session id."""

    def __init__(self, clock: Optional[Callable[[], datetime.datetime]] = None):
        self.clock = clock or utcnow
        self.default_ttl_minutes = DEFAULT_TTL_MINUTES
        self._sessions: Dict[str, Session] = {}

    def init_app(self, app) -> None:
        self._sessions = {}
        self.default_ttl_minutes = app.config.get('SESSION_TTL_MINUTES', DEFAULT_TTL_MINUTES)
        app.extensions['session_store'] = self

    def dispose(self) -> None:
        count = len(self._sessions)
        self._sessions = {}
        logger.info("Session store disposed", dropped=count)

    def now(self) -> datetime.datetime:
        return self.clock()

    def create(self, username: str, ttl_minutes=None) -> str:
        ttl = self.default_ttl_minutes if ttl_minutes is None else ttl_minutes
        if isinstance(ttl, bool) or not isinstance(ttl, (int, float)) or ttl <= 0:
            raise ValueError(f"Session TTL must be a positive number of minutes, got {ttl!r}")

        session_id = str(uuid.uuid4())
        while session_id in self._sessions:
            session_id = str(uuid.uuid4())

        created_at = self.now()
        self._sessions[session_id] = Session(
            session_id=session_id,
            username=username,
            created_at=created_at,
            expires_at=created_at + datetime.timedelta(minutes=ttl),
        )
        logger.info("Session created", username=username, ttl_minutes=ttl)
        return session_id

    def lookup(self, session_id) -> Optional[Session]:
        if not session_id:
            return None
        return self._sessions.get(session_id)

    def is_expired(self, session: Session) -> bool:
        return is_expired(session, self.now())

    def delete(self, session_id) -> None:
        self._sessions.pop(session_id, None)

    def __len__(self) -> int:
        return len(self._sessions)

    def __contains__(self, session_id) -> bool:
        return session_id in self._sessions
