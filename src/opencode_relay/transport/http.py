"""
REST HTTP client for a local OpenCode server.
"""

import logging
from typing import Any, Optional

import httpx

from opencode_relay.errors import ConnectionError, OpenCodeError, TransportError

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "http://127.0.0.1:4096"


class NotFoundResponse(OpenCodeError):
    """HTTP-level not-found; SessionsAPI turns this into a session error."""

    def __init__(self, path: str, message: str):
        super().__init__("not_found", message, {"path": path})
        self.path = path


class HttpClient:
    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self._base_url = base_url.rstrip("/")
        self._client = httpx.AsyncClient(
            base_url=self._base_url,
            headers={"User-Agent": "opencode-relay/0.1.0", "Accept": "application/json"},
            timeout=timeout,
            transport=transport,
        )

    @staticmethod
    def _is_not_found(resp: httpx.Response) -> bool:
        if resp.status_code == 404:
            return True
        # OpenCode reports missing sessions as {"name": "NotFoundError", ...}, sometimes with a 400.
        try:
            body = resp.json()
        except ValueError:
            return False
        return isinstance(body, dict) and body.get("name") == "NotFoundError"

    async def _request(self, method: str, path: str, **kwargs: Any) -> Any:
        logger.debug("%s %s%s", method, self._base_url, path)
        try:
            resp = await self._client.request(method, path, **kwargs)
        except httpx.ConnectError as e:
            raise ConnectionError(f"Cannot connect to server at {self._base_url}",
                                  {"base_url": self._base_url, "reason": str(e)})
        except httpx.TransportError as e:
            raise TransportError(f"{method} {path} failed: {e}", {"base_url": self._base_url})
        if resp.status_code >= 400:
            if self._is_not_found(resp):
                raise NotFoundResponse(path, f"HTTP {resp.status_code}: {resp.text[:200]}")
            raise OpenCodeError("http_error", f"HTTP {resp.status_code}: {resp.text[:200]}",
                                {"status": resp.status_code, "path": path})
        if not resp.content:
            return None
        try:
            return resp.json()
        except ValueError:
            raise OpenCodeError("invalid_response", f"Non-JSON response from {path}: {resp.text[:200]}")

    async def get(self, path: str, params: Optional[dict[str, Any]] = None) -> Any:
        return await self._request("GET", path, params=params)

    async def post(self, path: str, body: Optional[dict[str, Any]] = None) -> Any:
        return await self._request("POST", path, json=body if body is not None else {})

    async def patch(self, path: str, body: Optional[dict[str, Any]] = None) -> Any:
        return await self._request("PATCH", path, json=body if body is not None else {})

    async def delete(self, path: str) -> Any:
        return await self._request("DELETE", path)

    async def close(self) -> None:
        await self._client.aclose()
