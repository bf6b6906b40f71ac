"""
Server-side session data for the session backend.

The signed cookie only carries a random session id; the todo lists stay on the
server keyed by that id, so their size is not bounded by browser cookie limits.
Data lives in this process and expires ``max_age`` seconds after its last use.
"""

import secrets
import time
from typing import Any, MutableMapping

import structlog

from todos import config

log = structlog.get_logger()

SESSION_ID_KEY = "sid"


class MemorySessionStore:
    def __init__(self, max_age: int):
        self.max_age = max_age
        self._sessions: dict[str, tuple[float, dict]] = {}

    def __len__(self) -> int:
        return len(self._sessions)

    def load(self, session_id: str) -> dict:
        """The data dict for ``session_id``, created empty on first use."""
        now = time.monotonic()
        self._expire(now)
        _, data = self._sessions.get(session_id, (now, {}))
        self._sessions[session_id] = (now, data)
        return data

    def _expire(self, now: float) -> None:
        stale = [sid for sid, (seen, _) in self._sessions.items() if now - seen > self.max_age]
        for sid in stale:
            del self._sessions[sid]
        if stale:
            log.info("sessions expired", count=len(stale))


session_store = MemorySessionStore(config.SESSION_MAX_AGE)


def session_data(cookie_session: MutableMapping[str, Any], store: MemorySessionStore | None = None) -> dict:
    """Server-side data behind a cookie session, issuing a session id on first use."""
    if store is None:
        store = session_store
    session_id = cookie_session.get(SESSION_ID_KEY)
    if session_id is None:
        session_id = cookie_session[SESSION_ID_KEY] = secrets.token_urlsafe(32)
    return store.load(session_id)
