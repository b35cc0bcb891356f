"""Gemini streaming adapter.

Turns one chat exchange into an async stream of text fragments.

Architecture Decisions:

1. **One chat per exchange** - Every call opens a fresh SDK chat seeded with
   the full prior conversation. Nothing is kept on the Gemini side, so the
   client-side conversation is the single source of truth and a cleared
   conversation really is forgotten.

2. **Instruction built per call** - The persona instruction embeds the current
   assistant name. A rename takes effect with the next message and never
   rewrites what was already sent.

3. **Lazy client** - The ``genai.Client`` is created on first use. A missing
   API key fails the first streaming call with ``ConfigurationError`` before
   any network attempt, instead of failing application startup.

4. **Errors propagate** - SDK and transport errors are logged and re-raised as
   ``StreamingError``. Fragments already yielded remain valid; the caller
   decides how to present the failure.
"""

import logging
from collections.abc import AsyncIterator, Iterable

from google import genai
from google.genai import types

from companion_chat.agent.config import AgentConfig, get_agent_config
from companion_chat.agent.prompts import build_system_instruction
from companion_chat.exceptions import ConfigurationError, StreamingError
from companion_chat.models.message import Message, Role

logger = logging.getLogger(__name__)


def to_contents(history: Iterable[Message]) -> list[types.Content]:
    """Map conversation messages to Gemini role-tagged turns.

    Args:
        history: Prior messages, oldest first.

    Returns:
        One ``Content`` per message with a single text part.
    """
    return [
        types.Content(
            role="user" if message.role is Role.USER else "model",
            parts=[types.Part(text=message.text)],
        )
        for message in history
    ]


class ResponseStreamer:
    """Streams Gemini answers for single chat exchanges.

    Wraps the Google GenAI SDK with:
    - Per-exchange chat creation with full history
    - Per-call persona instruction
    - Fixed sampling temperature from configuration
    - Centralized error logging and translation
    """

    def __init__(self, config: AgentConfig | None = None) -> None:
        """Initialize the streamer.

        Args:
            config: Optional agent configuration.
                    Loads from environment if not provided.
        """
        self._config = config or get_agent_config()
        self._client: genai.Client | None = None

    @property
    def config(self) -> AgentConfig:
        return self._config

    def _get_client(self) -> genai.Client:
        """Return the SDK client, creating it on first use.

        Raises:
            ConfigurationError: If no API key is configured.
        """
        if not self._config.has_api_key:
            raise ConfigurationError(
                "API key is missing. Set GEMINI_API_KEY (or GOOGLE_API_KEY) in .env"
            )
        if self._client is None:
            self._client = genai.Client(api_key=self._config.api_key)
        return self._client

    def _generation_config(self, assistant_name: str) -> types.GenerateContentConfig:
        return types.GenerateContentConfig(
            system_instruction=build_system_instruction(assistant_name),
            temperature=self._config.temperature,
        )

    async def stream_response(
        self,
        user_text: str,
        history: Iterable[Message],
        assistant_name: str,
    ) -> AsyncIterator[str]:
        """Stream response fragments for one user message.

        Args:
            user_text: The new user utterance.
            history: The conversation before this utterance, oldest first.
            assistant_name: Name substituted into the behavioral instruction.

        Yields:
            Non-empty text fragments in receipt order.

        Raises:
            ConfigurationError: If no API key is configured.
            StreamingError: If the request fails at any point.
        """
        client = self._get_client()

        try:
            chat = client.aio.chats.create(
                model=self._config.model_name,
                history=to_contents(history),
                config=self._generation_config(assistant_name),
            )
            stream = await chat.send_message_stream(user_text)

            async for chunk in stream:
                if chunk.text:
                    yield chunk.text

        except Exception as e:
            logger.error(f"Error calling Gemini API: {e}")
            raise StreamingError(str(e) or type(e).__name__) from e


# Module-level singleton instance
_response_streamer: ResponseStreamer | None = None


def get_response_streamer() -> ResponseStreamer:
    """Get or create the global response streamer.

    The streamer holds no conversation state, so one instance serves all pages.

    Returns:
        The ResponseStreamer instance.
    """
    global _response_streamer
    if _response_streamer is None:
        _response_streamer = ResponseStreamer()
    return _response_streamer
