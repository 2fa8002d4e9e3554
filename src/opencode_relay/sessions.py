"""
Sessions REST API — the remote session directory of an OpenCode server.
"""

from __future__ import annotations

from typing import Any, Optional, TypeVar

from pydantic import BaseModel, ValidationError

from opencode_relay.errors import OpenCodeError, SessionCreationError, SessionNotFoundError
from opencode_relay.models.message import Message
from opencode_relay.models.result import LookupResult, NotFound, Ok, TransportFailure
from opencode_relay.models.session import SessionInfo
from opencode_relay.transport.http import HttpClient, NotFoundResponse

M = TypeVar("M", bound=BaseModel)


def _parse(model: type[M], data: Any, path: str) -> M:
    try:
        return model.model_validate(data)
    except ValidationError as e:
        raise OpenCodeError("invalid_response", f"Unexpected response from {path}: {e.error_count()} validation error(s)",
                            {"path": path, "errors": e.errors(include_url=False)})


def _parse_list(model: type[M], data: Any, path: str) -> list[M]:
    if data is None:
        return []
    if not isinstance(data, list):
        raise OpenCodeError("invalid_response", f"Expected a list from {path}, got {type(data).__name__}",
                            {"path": path})
    return [_parse(model, item, path) for item in data]


class SessionsAPI:
    def __init__(self, http: HttpClient):
        self._http = http

    async def list(self) -> list[SessionInfo]:
        """List every session the server knows about, in server order."""
        data = await self._http.get("/session")
        return _parse_list(SessionInfo, data, "/session")

    async def get(self, session_id: str) -> SessionInfo:
        """Get one session. Raises SessionNotFoundError when it is gone."""
        try:
            data = await self._http.get(f"/session/{session_id}")
        except NotFoundResponse:
            raise SessionNotFoundError(session_id)
        if not isinstance(data, dict) or not data.get("id"):
            raise SessionNotFoundError(session_id)
        return _parse(SessionInfo, data, f"/session/{session_id}")

    async def lookup(self, session_id: str) -> LookupResult[SessionInfo]:
        """Like get(), but reports the outcome as Ok / NotFound / TransportFailure."""
        try:
            return Ok(await self.get(session_id))
        except SessionNotFoundError:
            return NotFound(session_id)
        except OpenCodeError as e:
            return TransportFailure(e)

    async def create(self, title: Optional[str] = None) -> SessionInfo:
        body = {"title": title} if title else {}
        data = await self._http.post("/session", body)
        if not isinstance(data, dict) or not data.get("id"):
            raise SessionCreationError(details={"response": data})
        return _parse(SessionInfo, data, "/session")

    async def delete(self, session_id: str) -> Any:
        try:
            return await self._http.delete(f"/session/{session_id}")
        except NotFoundResponse:
            raise SessionNotFoundError(session_id)

    async def update(self, session_id: str, title: str) -> SessionInfo:
        """Rename a session."""
        try:
            data = await self._http.patch(f"/session/{session_id}", {"title": title})
        except NotFoundResponse:
            raise SessionNotFoundError(session_id)
        return _parse(SessionInfo, data, f"/session/{session_id}")

    async def messages(self, session_id: str, limit: Optional[int] = None) -> list[Message]:
        params = {"limit": limit} if limit else None
        try:
            data = await self._http.get(f"/session/{session_id}/message", params=params)
        except NotFoundResponse:
            raise SessionNotFoundError(session_id)
        return _parse_list(Message, data, f"/session/{session_id}/message")

    async def prompt(self, session_id: str, provider: str, model: str, text: str) -> Message:
        """Submit one prompt turn and wait for the assistant message."""
        try:
            data = await self._http.post(f"/session/{session_id}/message", {
                "model": {"providerID": provider, "modelID": model},
                "parts": [{"type": "text", "text": text}],
            })
        except NotFoundResponse:
            raise SessionNotFoundError(session_id)
        return _parse(Message, data if data is not None else {}, f"/session/{session_id}/message")
