"""In-memory stand-in for an OpenCode server, served through httpx.MockTransport."""

import json
from typing import Any, Optional

import httpx
import pytest

from opencode_relay import AsyncOpenCode, Config, MemorySessionStore


class FakeOpenCodeServer:
    def __init__(self) -> None:
        self.sessions: dict[str, dict[str, Any]] = {}
        self.messages: dict[str, list[dict[str, Any]]] = {}
        self.calls: list[tuple[str, str]] = []
        self.prompts: list[dict[str, Any]] = []
        self.refuse_connections = False
        self.broken_get = False
        self.create_returns_no_id = False
        self.overrides: dict[tuple[str, str], Any] = {}
        self.reply_parts: list[dict[str, Any]] = [
            {"type": "step-start"},
            {"type": "text", "text": "Hello from the model"},
        ]
        self._next = 0
        self._clock = 1_700_000_000_000

    def add_session(self, session_id: str, title: str = "", updated: Optional[int] = None) -> dict[str, Any]:
        self._clock += 1000
        session = {
            "id": session_id,
            "title": title,
            "projectID": "proj_1",
            "directory": "/tmp/project",
            "version": "0.9.0",
            "time": {"created": self._clock, "updated": updated if updated is not None else self._clock},
        }
        self.sessions[session_id] = session
        self.messages.setdefault(session_id, [])
        return session

    def count(self, method: str, path: str) -> int:
        return sum(1 for c in self.calls if c == (method, path))

    @property
    def creates(self) -> int:
        return self.count("POST", "/session")

    @staticmethod
    def _not_found(session_id: str) -> httpx.Response:
        return httpx.Response(404, json={"name": "NotFoundError", "data": {"message": f"Session {session_id} not found"}})

    def handler(self, request: httpx.Request) -> httpx.Response:
        if self.refuse_connections:
            raise httpx.ConnectError("[Errno 111] Connection refused", request=request)
        method, path = request.method, request.url.path
        self.calls.append((method, path))
        if (method, path) in self.overrides:
            return httpx.Response(200, json=self.overrides[(method, path)])
        body = json.loads(request.content) if request.content else {}
        parts = path.strip("/").split("/")

        if parts == ["session"]:
            if method == "GET":
                return httpx.Response(200, json=list(self.sessions.values()))
            if method == "POST":
                if self.create_returns_no_id:
                    return httpx.Response(200, json={})
                self._next += 1
                return httpx.Response(200, json=self.add_session(f"ses_new{self._next}", body.get("title", "")))

        if len(parts) == 2 and parts[0] == "session":
            sid = parts[1]
            if method == "GET" and self.broken_get:
                return httpx.Response(500, text="internal error")
            if sid not in self.sessions:
                return self._not_found(sid)
            if method == "GET":
                return httpx.Response(200, json=self.sessions[sid])
            if method == "DELETE":
                del self.sessions[sid]
                return httpx.Response(200, json=True)
            if method == "PATCH":
                self.sessions[sid]["title"] = body["title"]
                return httpx.Response(200, json=self.sessions[sid])

        if len(parts) == 3 and parts[0] == "session" and parts[2] == "message":
            sid = parts[1]
            if sid not in self.sessions:
                return self._not_found(sid)
            if method == "GET":
                msgs = self.messages[sid]
                limit = request.url.params.get("limit")
                return httpx.Response(200, json=msgs[-int(limit):] if limit else msgs)
            if method == "POST":
                self.prompts.append({"session_id": sid, **body})
                n = len(self.messages[sid])
                user = {"info": {"id": f"msg_{n}", "role": "user", "sessionID": sid}, "parts": body["parts"]}
                reply = {"info": {"id": f"msg_{n + 1}", "role": "assistant", "sessionID": sid},
                         "parts": list(self.reply_parts)}
                self.messages[sid] += [user, reply]
                self._clock += 1000
                self.sessions[sid]["time"]["updated"] = self._clock
                return httpx.Response(200, json=reply)

        return httpx.Response(405, json={"name": "MethodNotAllowed"})

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)


@pytest.fixture
def server() -> FakeOpenCodeServer:
    return FakeOpenCodeServer()


@pytest.fixture
def store() -> MemorySessionStore:
    return MemorySessionStore()


@pytest.fixture
def config(tmp_path) -> Config:
    return Config(sessions_dir=tmp_path / "sessions")


@pytest.fixture
def make_client(server, store, config):
    def _make(**overrides: Any) -> AsyncOpenCode:
        cfg = config.with_overrides(**overrides) if overrides else config
        return AsyncOpenCode(cfg, store=store, transport=server.transport())
    return _make
