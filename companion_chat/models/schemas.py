from enum import Enum

from pydantic import BaseModel, Field, field_validator

from companion_chat.conversation.names import DEFAULT_ASSISTANT_NAME, MAX_NAME_LENGTH
from companion_chat.models.message import Message, Role


class StreamStatus(str, Enum):
    """Status values for streaming updates."""

    GENERATING = "generating"
    COMPLETE = "complete"
    ERROR = "error"


class HistoryTurn(BaseModel):
    """A prior conversation turn supplied by the client.

    Attributes:
        role: Speaker of the turn (user or model).
        text: Turn body as it was shown to the user.
    """

    role: Role
    text: str = ""

    def to_message(self, timestamp: int) -> Message:
        """Convert into a conversation message for the streaming adapter."""
        return Message(role=self.role, text=self.text, timestamp=timestamp)


class ChatStreamRequest(BaseModel):
    """Request payload for the streaming chat endpoint.

    Attributes:
        message: The new user utterance.
        history: Full prior conversation, oldest first.
        assistant_name: Display name injected into the behavioral instruction.
    """

    message: str = Field(..., min_length=1)
    history: list[HistoryTurn] = Field(default_factory=list)
    assistant_name: str = Field(
        default=DEFAULT_ASSISTANT_NAME, min_length=1, max_length=MAX_NAME_LENGTH
    )

    @field_validator("message", "assistant_name", mode="before")
    @classmethod
    def strip_text(cls, v: str) -> str:
        """Strip whitespace before length validation."""
        if isinstance(v, str):
            return v.strip()
        return v

    def history_messages(self) -> list[Message]:
        """Return the history as messages, in order."""
        return [turn.to_message(timestamp=index) for index, turn in enumerate(self.history)]


class StreamChunk(BaseModel):
    """A chunk of streamed response data.

    Attributes:
        content: The text fragment carried by this chunk.
        done: Whether this is the final chunk.
        status: Current processing status (generating, complete, error).
        error: Error message if something went wrong.
    """

    content: str
    done: bool
    status: StreamStatus | None = None
    error: str | None = None
