"""Pydantic models for conversation state and the HTTP streaming API.

Provides type safety, validation, and automatic OpenAPI documentation.

Models:
    - Role: Speaker of a message (user or model)
    - Message: Individual entry in the conversation
    - HistoryTurn: Prior turn sent with a streaming request
    - ChatStreamRequest: Incoming streaming chat payload
    - StreamChunk: One server-sent event of a streamed answer
"""

from companion_chat.models.message import Message, Role
from companion_chat.models.schemas import (
    ChatStreamRequest,
    HistoryTurn,
    StreamChunk,
    StreamStatus,
)

__all__ = [
    "ChatStreamRequest",
    "HistoryTurn",
    "Message",
    "Role",
    "StreamChunk",
    "StreamStatus",
]
