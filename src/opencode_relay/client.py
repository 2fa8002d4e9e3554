"""
AsyncOpenCode / OpenCode — client facade over one OpenCode server.
"""

import asyncio
import logging
from typing import Any, Optional

import httpx

from opencode_relay.cache import SessionCache
from opencode_relay.chat import ChatEngine
from opencode_relay.config import Config
from opencode_relay.errors import OpenCodeError
from opencode_relay.models.endpoint import Endpoint
from opencode_relay.models.message import Message, PromptReply
from opencode_relay.models.session import SessionInfo
from opencode_relay.resolver import SessionResolver, SessionSelector
from opencode_relay.sessions import SessionsAPI
from opencode_relay.store import FileSessionStore, SessionStore
from opencode_relay.transport.http import HttpClient

logger = logging.getLogger(__name__)


class AsyncOpenCode:
    """Async OpenCode client (primary)."""

    def __init__(
        self,
        config: Optional[Config] = None,
        store: Optional[SessionStore] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.config = config or Config()
        self.endpoint: Endpoint = self.config.endpoint

        self.http = HttpClient(base_url=self.endpoint.base_url, timeout=self.config.timeout, transport=transport)
        self.sessions = SessionsAPI(self.http)
        self.resolver = SessionResolver(self.sessions)
        self.cache = SessionCache(store or FileSessionStore(self.config.sessions_dir), self.sessions)
        self.chat = ChatEngine(self.sessions, self.endpoint)

    async def __aenter__(self) -> "AsyncOpenCode":
        return self

    async def __aexit__(self, *exc: Any) -> None:
        await self.close()

    async def close(self) -> None:
        await self.http.close()

    async def resolve_session(
        self,
        *,
        new_session: bool = False,
        session_id: Optional[str] = None,
        latest: bool = False,
    ) -> str:
        """Pick the session ID for the next prompt.

        With neither `session_id` nor `latest` the per-endpoint cache decides.
        Otherwise the server's directory decides and the cache is left alone.
        """
        if session_id and new_session:
            raise ValueError("session_id and new_session are mutually exclusive")
        if session_id and latest:
            raise ValueError("session_id and latest are mutually exclusive")
        if session_id:
            return (await self.resolver.resolve(SessionSelector.explicit(session_id))).id
        if latest:
            selector = SessionSelector.new() if new_session else SessionSelector.latest()
            return (await self.resolver.resolve(selector)).id
        return await self.cache.resolve(self.endpoint, force_new=new_session)

    async def send(
        self,
        text: str,
        *,
        new_session: bool = False,
        session_id: Optional[str] = None,
        latest: bool = False,
        provider: Optional[str] = None,
        model: Optional[str] = None,
    ) -> PromptReply:
        """Resolve a session and send one prompt to it. Errors propagate."""
        if not text:
            raise OpenCodeError("invalid_input", "Prompt text is required")
        sid = await self.resolve_session(new_session=new_session, session_id=session_id, latest=latest)
        return await self.chat.prompt(
            sid, text,
            provider=provider or self.config.provider,
            model=model or self.config.model,
        )

    async def delete_session(self, session_id: str) -> bool:
        """Delete a remote session. Also drops the cache record if it pointed there."""
        try:
            await self.sessions.delete(session_id)
        except OpenCodeError as e:
            logger.error("Failed to delete session %s: %s", session_id, e)
            return False
        if self.cache.cached(self.endpoint) == session_id:
            self.cache.forget(self.endpoint)
        return True

    async def rename_session(self, session_id: str, title: str) -> Optional[SessionInfo]:
        try:
            return await self.sessions.update(session_id, title)
        except OpenCodeError as e:
            logger.error("Failed to rename session %s: %s", session_id, e)
            return None

    async def get_messages(self, session_id: str, limit: Optional[int] = None) -> Optional[list[Message]]:
        try:
            return await self.sessions.messages(session_id, limit=limit)
        except OpenCodeError as e:
            logger.error("Failed to fetch messages for %s: %s", session_id, e)
            return None


class OpenCode:
    """Sync wrapper around AsyncOpenCode. Runs the event loop internally."""

    def __init__(self, **kwargs: Any):
        self._loop = asyncio.new_event_loop()
        self._async = AsyncOpenCode(**kwargs)

    def _run(self, coro: Any) -> Any:
        return self._loop.run_until_complete(coro)

    def __enter__(self) -> "OpenCode":
        return self

    def __exit__(self, *exc: Any) -> None:
        self.close()

    @property
    def config(self) -> Config:
        return self._async.config

    @property
    def cache(self) -> SessionCache:
        return self._async.cache

    def close(self) -> None:
        self._run(self._async.close())
        self._loop.close()

    def send(self, text: str, **kwargs: Any) -> PromptReply:
        return self._run(self._async.send(text, **kwargs))

    def resolve_session(self, **kwargs: Any) -> str:
        return self._run(self._async.resolve_session(**kwargs))

    def list_sessions(self) -> list[SessionInfo]:
        return self._run(self._async.sessions.list())

    def create_session(self, title: Optional[str] = None) -> SessionInfo:
        return self._run(self._async.sessions.create(title=title))

    def delete_session(self, session_id: str) -> bool:
        return self._run(self._async.delete_session(session_id))

    def rename_session(self, session_id: str, title: str) -> Optional[SessionInfo]:
        return self._run(self._async.rename_session(session_id, title))

    def get_messages(self, session_id: str, limit: Optional[int] = None) -> Optional[list[Message]]:
        return self._run(self._async.get_messages(session_id, limit=limit))
