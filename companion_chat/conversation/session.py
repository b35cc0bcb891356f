"""Chat session: the single state container behind one chat page.

Owns the conversation store, the assistant name, the draft input and the busy
flag, and is the only code that mutates them. All mutations run on one
asyncio event loop; the busy flag is the only concurrency control.
"""

import logging
from collections.abc import AsyncIterator, Callable, Iterable
from typing import Protocol

from companion_chat.conversation import texts
from companion_chat.conversation.names import AssistantNameStore, normalize_assistant_name
from companion_chat.conversation.store import ConversationStore
from companion_chat.exceptions import MessageNotFoundError
from companion_chat.models.message import Message, Role

logger = logging.getLogger(__name__)

Listener = Callable[[], None]


class FragmentSource(Protocol):
    """Anything that streams answer fragments, e.g. ``ResponseStreamer``."""

    def stream_response(
        self,
        user_text: str,
        history: Iterable[Message],
        assistant_name: str,
    ) -> AsyncIterator[str]: ...


class ChatSession:
    """Conversation state and the streaming accumulation loop."""

    def __init__(self, streamer: FragmentSource, name_store: AssistantNameStore) -> None:
        self._streamer = streamer
        self._name_store = name_store
        self._listeners: list[Listener] = []

        self.store = ConversationStore()
        self.assistant_name: str = name_store.load()
        self.draft: str = ""
        self.is_busy: bool = False
        self.pending_id: str | None = None

        self.store.reset(texts.greeting_text(self.assistant_name), author=self.assistant_name)

    @property
    def messages(self) -> tuple[Message, ...]:
        return self.store.messages

    def add_listener(self, listener: Listener) -> None:
        """Register a callback invoked after every change to the conversation."""
        self._listeners.append(listener)

    def _notify(self) -> None:
        for listener in self._listeners:
            try:
                listener()
            except Exception:
                logger.exception("Session listener failed")

    def is_pending(self, message: Message) -> bool:
        """Whether the message is the placeholder of the answer currently streaming."""
        return message.id == self.pending_id

    def _append_model_message(self, text: str) -> Message:
        message = self.store.new_message(Role.MODEL, text, author=self.assistant_name)
        return self.store.append(message)

    def can_submit(self) -> bool:
        return not self.is_busy and bool(self.draft.strip())

    async def submit(self) -> bool:
        """Send the current draft and stream the answer into a placeholder.

        Returns:
            False if the draft is blank or another submission is in flight,
            in which case nothing changes. True once the exchange finished,
            successfully or not.
        """
        if not self.can_submit():
            return False

        user_text = self.draft.strip()
        self.draft = ""

        history = self.store.snapshot()
        self.store.append(self.store.new_message(Role.USER, user_text))
        self.is_busy = True
        placeholder = self._append_model_message("")
        self.pending_id = placeholder.id
        self._notify()

        try:
            accumulated = ""
            placeholder_present = True
            async for fragment in self._streamer.stream_response(
                user_text, history, self.assistant_name
            ):
                accumulated += fragment
                if not placeholder_present:
                    continue
                try:
                    self.store.replace_text(placeholder.id, accumulated)
                except MessageNotFoundError:
                    # Conversation was cleared mid-stream. The request still runs to the end.
                    logger.info("Placeholder gone after reset, discarding the rest of the answer")
                    placeholder_present = False
                    continue
                self._notify()
        except Exception as e:
            logger.error(f"Failed to send message: {e}")
            self._append_model_message(texts.APOLOGY_TEXT)
        finally:
            self.is_busy = False
            self.pending_id = None
            self._notify()

        return True

    def change_name(self, raw_name: str) -> Message:
        """Switch to a new assistant name and announce it.

        Raises:
            ValueError: If the name is blank or too long. Nothing changes then.
        """
        name = normalize_assistant_name(raw_name)
        self.assistant_name = name
        self._name_store.save(name)
        logger.info(f"Assistant renamed to {name!r}")

        message = self._append_model_message(texts.name_change_text(name))
        self._notify()
        return message

    def clear(self) -> Message:
        """Drop the whole conversation and greet again with the current name."""
        greeting = self.store.reset(
            texts.greeting_text(self.assistant_name), author=self.assistant_name
        )
        self._notify()
        return greeting
