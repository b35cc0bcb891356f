"""Ordered, append-only conversation store.

Insertion order is chronological order is rendering order. Messages are never
removed individually; ``reset`` replaces the whole sequence.
"""

import time
from collections.abc import Iterator

from companion_chat.exceptions import DuplicateMessageError, MessageNotFoundError
from companion_chat.models.message import Message, Role


class ConversationStore:
    """Holds the messages of one chat session."""

    def __init__(self) -> None:
        self._messages: list[Message] = []
        self._last_timestamp = 0

    @property
    def messages(self) -> tuple[Message, ...]:
        return tuple(self._messages)

    def __len__(self) -> int:
        return len(self._messages)

    def __iter__(self) -> Iterator[Message]:
        return iter(tuple(self._messages))

    def _next_timestamp(self) -> int:
        now = time.time_ns() // 1_000_000
        # Wall clock may step backwards; timestamps must not.
        self._last_timestamp = max(now, self._last_timestamp)
        return self._last_timestamp

    def new_message(self, role: Role, text: str = "", author: str | None = None) -> Message:
        """Build a message with a fresh id and the next timestamp.

        The message is not appended.
        """
        return Message(role=role, text=text, timestamp=self._next_timestamp(), author=author)

    def get(self, message_id: str) -> Message:
        for message in self._messages:
            if message.id == message_id:
                return message
        raise MessageNotFoundError(f"No message with id {message_id!r}")

    def append(self, message: Message) -> Message:
        """Add a message to the end of the conversation.

        Raises:
            DuplicateMessageError: If a message with the same id exists.
        """
        if any(existing.id == message.id for existing in self._messages):
            raise DuplicateMessageError(f"Message id {message.id!r} already present")
        self._messages.append(message)
        return message

    def replace_text(self, message_id: str, new_text: str) -> Message:
        """Replace the text of one message, leaving everything else untouched.

        Raises:
            MessageNotFoundError: If no message has the given id.
        """
        message = self.get(message_id)
        message.text = new_text
        return message

    def reset(self, greeting: str, author: str | None = None) -> Message:
        """Discard all messages and start over with a single MODEL greeting."""
        message = self.new_message(Role.MODEL, greeting, author=author)
        self._messages = [message]
        return message

    def snapshot(self) -> tuple[Message, ...]:
        """Return copies of the current messages, safe to hand to a request."""
        return tuple(message.model_copy() for message in self._messages)
