"""
opencode-relay error types.
"""

from typing import Any, Optional


class OpenCodeError(Exception):
    def __init__(self, code: str, message: str, details: Optional[dict[str, Any]] = None):
        super().__init__(message)
        self.code = code
        self.details = details


class ConnectionError(OpenCodeError):
    """The server refused the connection or could not be reached."""

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None):
        super().__init__("connection_refused", message, details)


class TransportError(OpenCodeError):
    def __init__(self, message: str, details: Optional[dict[str, Any]] = None):
        super().__init__("transport_error", message, details)


class SessionError(OpenCodeError):
    def __init__(self, message: str, code: str = "session_error", details: Optional[dict[str, Any]] = None):
        super().__init__(code, message, details)


class SessionNotFoundError(SessionError):
    def __init__(self, session_id: str, message: Optional[str] = None):
        super().__init__(message or f"Session not found: {session_id}", code="session_not_found",
                         details={"session_id": session_id})
        self.session_id = session_id


class SessionCreationError(SessionError):
    def __init__(self, message: str = "Server did not return an id for the new session",
                 details: Optional[dict[str, Any]] = None):
        super().__init__(message, code="session_create_failed", details=details)
