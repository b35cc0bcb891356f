"""Pytest fixtures and shared test configuration.

Fixtures:
    - fake_streamer: Scripted fragment source recording every call
    - name_storage: Plain dict standing in for browser storage
    - session: ChatSession wired to the fake streamer
    - async_client: HTTPX client for API testing with the fake streamer
"""

from collections.abc import AsyncGenerator, AsyncIterator, Iterable
from dataclasses import dataclass, field
from typing import Any

import pytest
from httpx import ASGITransport, AsyncClient

from companion_chat.agent.chat_agent import get_response_streamer
from companion_chat.api.app import create_app
from companion_chat.conversation.names import AssistantNameStore
from companion_chat.conversation.session import ChatSession
from companion_chat.exceptions import StreamingError
from companion_chat.models.message import Message


@dataclass
class StreamCall:
    user_text: str
    history: list[Message]
    assistant_name: str


@dataclass
class FakeStreamer:
    """Yields ``fragments`` and optionally fails afterwards with ``error``."""

    fragments: list[str] = field(default_factory=list)
    error: Exception | None = None
    calls: list[StreamCall] = field(default_factory=list)
    on_fragment: Any = None

    async def stream_response(
        self,
        user_text: str,
        history: Iterable[Message],
        assistant_name: str,
    ) -> AsyncIterator[str]:
        self.calls.append(StreamCall(user_text, list(history), assistant_name))
        for fragment in self.fragments:
            yield fragment
            if self.on_fragment is not None:
                self.on_fragment(fragment)
        if self.error is not None:
            raise self.error


@pytest.fixture
def fake_streamer() -> FakeStreamer:
    return FakeStreamer()


@pytest.fixture
def failing_streamer() -> FakeStreamer:
    return FakeStreamer(error=StreamingError("connection reset"))


@pytest.fixture
def name_storage() -> dict[str, Any]:
    return {}


@pytest.fixture
def session(fake_streamer: FakeStreamer, name_storage: dict[str, Any]) -> ChatSession:
    return ChatSession(fake_streamer, AssistantNameStore(name_storage))


@pytest.fixture
async def async_client(fake_streamer: FakeStreamer) -> AsyncGenerator[AsyncClient]:
    """Create async HTTP client with the streamer dependency overridden.

    Yields:
        Configured AsyncClient for making test requests.
    """
    app = create_app()
    app.dependency_overrides[get_response_streamer] = lambda: fake_streamer
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
