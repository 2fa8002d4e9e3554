"""
Prompt dispatch: one request, one reply, no streaming.
"""

from opencode_relay.errors import OpenCodeError
from opencode_relay.models.endpoint import Endpoint
from opencode_relay.models.message import PromptReply
from opencode_relay.sessions import SessionsAPI


class ChatEngine:
    def __init__(self, sessions: SessionsAPI, endpoint: Endpoint):
        self._sessions = sessions
        self._endpoint = endpoint

    async def prompt(self, session_id: str, text: str, provider: str, model: str) -> PromptReply:
        """Send `text` to the session and extract the first text part of the reply."""
        if not text:
            raise OpenCodeError("invalid_input", "Prompt text is required")
        message = await self._sessions.prompt(session_id, provider, model, text)
        return PromptReply(
            session_id=session_id,
            server=str(self._endpoint),
            response=message.model_dump(by_alias=True),
            text=message.text,
        )
