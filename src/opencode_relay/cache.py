"""
Client-side session cache: one remembered session per endpoint.

The record is only a hint. Before reuse the cached ID is checked against the
server, and a missing or unreachable session is replaced by a fresh one.
Two processes resolving the same endpoint at once may both create a session;
whichever writes last wins the record.
"""

import logging
from typing import Optional

from opencode_relay.models.endpoint import Endpoint
from opencode_relay.models.result import Ok
from opencode_relay.sessions import SessionsAPI
from opencode_relay.store import SessionStore

logger = logging.getLogger(__name__)


class CacheEntry:
    __slots__ = ("endpoint", "session_id", "key")

    def __init__(self, endpoint: Optional[Endpoint], session_id: str, key: str):
        self.endpoint = endpoint
        self.session_id = session_id
        self.key = key

    @property
    def server(self) -> str:
        return str(self.endpoint) if self.endpoint else self.key

    def __repr__(self) -> str:
        return f"CacheEntry(server={self.server!r}, session_id={self.session_id!r})"


def default_title(endpoint: Endpoint) -> str:
    return f"Session - {endpoint}"


class SessionCache:
    def __init__(self, store: SessionStore, sessions: Optional[SessionsAPI] = None):
        self._store = store
        self._sessions = sessions

    def cached(self, endpoint: Endpoint) -> Optional[str]:
        return self._store.get(endpoint.key)

    async def resolve(self, endpoint: Endpoint, force_new: bool = False) -> str:
        """Return a session ID that exists on the server right now."""
        if self._sessions is None:
            raise RuntimeError("SessionCache.resolve() needs a SessionsAPI")

        if not force_new:
            cached_id = self._store.get(endpoint.key)
            if cached_id:
                result = await self._sessions.lookup(cached_id)
                if isinstance(result, Ok):
                    logger.debug("Reusing session %s for %s", cached_id, endpoint)
                    return cached_id
                logger.warning("Cached session %s for %s is no longer valid (%r), creating a new one",
                               cached_id, endpoint, result)

        session = await self._sessions.create(title=default_title(endpoint))
        self._store.put(endpoint.key, session.id)
        logger.info("Created new session %s for %s", session.id, endpoint)
        return session.id

    def entries(self) -> list[CacheEntry]:
        out = []
        for key in self._store.list_keys():
            session_id = self._store.get(key)
            if not session_id:
                continue
            try:
                endpoint: Optional[Endpoint] = Endpoint.from_key(key)
            except ValueError:
                endpoint = None
            out.append(CacheEntry(endpoint, session_id, key))
        return out

    def forget(self, endpoint: Endpoint) -> bool:
        return self._store.delete(endpoint.key)

    def clear(self) -> int:
        count = 0
        for key in self._store.list_keys():
            if self._store.delete(key):
                count += 1
        return count
