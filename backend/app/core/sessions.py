"""
Server-side session storage.

Sessions live in process memory keyed by an opaque id; the client only holds
the signed id in a cookie. A session expires after a period of inactivity.
"""
import logging
import secrets
import threading
import time
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional

logger = logging.getLogger(__name__)


@dataclass
class _Entry:
    data: Dict[str, Any] = field(default_factory=dict)
    last_seen: float = 0.0


class SessionStore:
    """In-memory session store with inactivity-based expiry."""

    def __init__(self, expiry_seconds: float, clock: Callable[[], float] = time.monotonic):
        self.expiry_seconds = expiry_seconds
        self._clock = clock
        self._sessions: Dict[str, _Entry] = {}
        self._lock = threading.Lock()

    def _expired(self, entry: _Entry, now: float) -> bool:
        return now - entry.last_seen > self.expiry_seconds

    def create(self) -> str:
        session_id = secrets.token_urlsafe(32)
        with self._lock:
            self._purge_expired_locked()
            self._sessions[session_id] = _Entry(last_seen=self._clock())
        return session_id

    def load(self, session_id: str) -> Optional[Dict[str, Any]]:
        """Return a copy of the session data and refresh its activity time."""
        now = self._clock()
        with self._lock:
            entry = self._sessions.get(session_id)
            if entry is None:
                return None
            if self._expired(entry, now):
                del self._sessions[session_id]
                return None
            entry.last_seen = now
            return dict(entry.data)

    def save(self, session_id: str, data: Dict[str, Any]) -> None:
        with self._lock:
            self._sessions[session_id] = _Entry(data=dict(data), last_seen=self._clock())

    def delete(self, session_id: str) -> None:
        with self._lock:
            self._sessions.pop(session_id, None)

    def _purge_expired_locked(self) -> None:
        now = self._clock()
        stale = [sid for sid, entry in self._sessions.items() if self._expired(entry, now)]
        for sid in stale:
            del self._sessions[sid]
        if stale:
            logger.debug(f"Purged {len(stale)} expired sessions")

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)


class Session:
    """
    Per-request view of one session.

    `session_id` is None until the first `set`; the HTTP layer issues the
    cookie when `is_new` is true after the handler ran.
    """

    def __init__(self, store: SessionStore, session_id: Optional[str] = None,
                 data: Optional[Dict[str, Any]] = None):
        self._store = store
        self.session_id = session_id
        self._data: Dict[str, Any] = data or {}
        self.is_new = False
        self.cleared = False

    def get(self, key: str, default: Any = None) -> Any:
        return self._data.get(key, default)

    def set(self, key: str, value: Any) -> None:
        if self.session_id is None:
            self.session_id = self._store.create()
            self.is_new = True
        self._data[key] = value
        self._store.save(self.session_id, self._data)

    def clear(self) -> None:
        if self.session_id is not None:
            self._store.delete(self.session_id)
        self.session_id = None
        self._data = {}
        self.cleared = True
