"""
Server-authoritative session resolution.

Picks the session for the next prompt straight from the server's directory,
with no local state:

  SessionSelector.new()          always create
  SessionSelector.explicit(id)   that session or SessionNotFoundError
  SessionSelector.latest()       most recently updated, or a new one if none exist
"""

import logging
from typing import Literal, Optional

from pydantic import BaseModel

from opencode_relay.errors import SessionNotFoundError
from opencode_relay.models.result import NotFound, Ok
from opencode_relay.models.session import SessionInfo
from opencode_relay.sessions import SessionsAPI

logger = logging.getLogger(__name__)


class SessionSelector(BaseModel):
    kind: Literal["explicit", "latest", "new"]
    session_id: Optional[str] = None
    title: Optional[str] = None

    @classmethod
    def explicit(cls, session_id: str) -> "SessionSelector":
        if not session_id:
            raise ValueError("explicit selector needs a session id")
        return cls(kind="explicit", session_id=session_id)

    @classmethod
    def latest(cls) -> "SessionSelector":
        return cls(kind="latest")

    @classmethod
    def new(cls, title: Optional[str] = None) -> "SessionSelector":
        return cls(kind="new", title=title)


class SessionResolver:
    def __init__(self, sessions: SessionsAPI):
        self._sessions = sessions

    async def resolve(self, selector: SessionSelector) -> SessionInfo:
        if selector.kind == "new":
            session = await self._sessions.create(title=selector.title)
            logger.info("Created new session %s", session.id)
            return session

        if selector.kind == "explicit":
            result = await self._sessions.lookup(selector.session_id or "")
            if isinstance(result, Ok):
                return result.value
            if isinstance(result, NotFound):
                raise SessionNotFoundError(result.key)
            raise result.error

        sessions = await self._sessions.list()
        if sessions:
            return sorted(sessions, key=lambda s: s.updated_at, reverse=True)[0]
        session = await self._sessions.create(title=selector.title)
        logger.info("No sessions on server, created %s", session.id)
        return session
