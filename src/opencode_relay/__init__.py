"""
opencode-relay — send prompts to a local OpenCode server.

Remembers one conversation per server (host:port) so repeated invocations
continue where the last one left off.
"""

from opencode_relay.client import OpenCode, AsyncOpenCode
from opencode_relay.config import Config, load_config
from opencode_relay.cache import SessionCache, CacheEntry
from opencode_relay.resolver import SessionResolver, SessionSelector
from opencode_relay.sessions import SessionsAPI
from opencode_relay.store import SessionStore, FileSessionStore, MemorySessionStore
from opencode_relay.models.endpoint import Endpoint
from opencode_relay.errors import (
    OpenCodeError,
    ConnectionError,
    TransportError,
    SessionError,
    SessionNotFoundError,
    SessionCreationError,
)

__version__ = "0.1.0"
__all__ = [
    "OpenCode",
    "AsyncOpenCode",
    "Config",
    "load_config",
    "SessionCache",
    "CacheEntry",
    "SessionResolver",
    "SessionSelector",
    "SessionsAPI",
    "SessionStore",
    "FileSessionStore",
    "MemorySessionStore",
    "Endpoint",
    "OpenCodeError",
    "ConnectionError",
    "TransportError",
    "SessionError",
    "SessionNotFoundError",
    "SessionCreationError",
]
