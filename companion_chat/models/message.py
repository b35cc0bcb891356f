"""Conversation message model."""

import uuid
from enum import Enum

from pydantic import BaseModel, Field


class Role(str, Enum):
    """Speaker of a message. Values match the Gemini turn roles."""

    USER = "user"
    MODEL = "model"


class Message(BaseModel):
    """A single entry in the conversation.

    Attributes:
        id: Opaque identifier, stable for the lifetime of the message.
        role: Who wrote the message.
        text: Message body. Only MODEL messages are rewritten, while streaming.
        timestamp: Creation time in milliseconds, non-decreasing within a store.
        author: Assistant name in effect when a MODEL message was created.
    """

    id: str = Field(default_factory=lambda: uuid.uuid4().hex)
    role: Role
    text: str = ""
    timestamp: int = Field(..., ge=0)
    author: str | None = None

    @property
    def is_user(self) -> bool:
        return self.role is Role.USER
