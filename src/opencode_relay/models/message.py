"""
Message models — `/session/{id}/message` payloads.

A message is an `info` header plus an ordered list of parts. Only text parts
carry `text`; tool, file and step parts keep their fields as extras.
"""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


class MessagePart(BaseModel):
    model_config = ConfigDict(extra="allow")

    type: str
    text: Optional[str] = None


class MessageInfo(BaseModel):
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    id: str = ""
    role: str = ""  # "user" | "assistant"
    session_id: Optional[str] = Field(default=None, alias="sessionID")


class Message(BaseModel):
    info: MessageInfo = Field(default_factory=MessageInfo)
    parts: list[MessagePart] = Field(default_factory=list)

    @property
    def text(self) -> Optional[str]:
        return first_text(self.parts)


class PromptReply(BaseModel):
    session_id: str
    server: str
    response: Any = None
    text: Optional[str] = None


def first_text(parts: list[MessagePart]) -> Optional[str]:
    """Text of the first text-typed part, None when there is none."""
    for part in parts:
        if part.type == "text":
            return part.text or None
    return None
