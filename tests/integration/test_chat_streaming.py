"""Integration tests for the SSE streaming chat endpoint.

Runs the real FastAPI app through httpx ASGITransport. The Gemini adapter is
replaced by a scripted streamer through FastAPI dependency overrides.
"""

import json

import pytest_check as check
from httpx import AsyncClient

from companion_chat.exceptions import ConfigurationError, StreamingError
from companion_chat.models.message import Role
from companion_chat.models.schemas import StreamChunk, StreamStatus
from tests.conftest import FakeStreamer


async def _read_chunks(client: AsyncClient, payload: dict) -> list[StreamChunk]:
    chunks: list[StreamChunk] = []
    async with client.stream("POST", "/chat/stream", json=payload) as response:
        assert response.status_code == 200
        async for line in response.aiter_lines():
            if line.startswith("data: "):
                chunks.append(StreamChunk.model_validate_json(line.removeprefix("data: ")))
    return chunks


class TestHealth:
    async def test_health(self, async_client: AsyncClient) -> None:
        response = await async_client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "healthy", "service": "companion-chat"}


class TestStreamingEndpoint:
    """Tests for POST /chat/stream."""

    async def test_stream_returns_sse_content_type(self, async_client: AsyncClient) -> None:
        async with async_client.stream(
            "POST", "/chat/stream", json={"message": "Hallo"}
        ) as response:
            assert response.status_code == 200
            assert "text/event-stream" in response.headers["content-type"]

    async def test_chunks_are_valid_json(
        self, async_client: AsyncClient, fake_streamer: FakeStreamer
    ) -> None:
        fake_streamer.fragments = ["a", "b"]

        async with async_client.stream(
            "POST", "/chat/stream", json={"message": "Hallo"}
        ) as response:
            async for line in response.aiter_lines():
                if line.startswith("data: "):
                    data = json.loads(line.removeprefix("data: "))
                    check.is_in("content", data)
                    check.is_in("done", data)

    async def test_fragments_arrive_in_order_then_done(
        self, async_client: AsyncClient, fake_streamer: FakeStreamer
    ) -> None:
        """Status chunk first, one chunk per fragment, final done chunk last."""
        fake_streamer.fragments = ["Hal", "lo zurück!"]

        chunks = await _read_chunks(async_client, {"message": "Hallo"})

        check.equal(chunks[0].status, StreamStatus.GENERATING)
        check.equal([c.content for c in chunks[1:-1]], ["Hal", "lo zurück!"])
        check.is_true(all(not c.done for c in chunks[:-1]))
        check.is_true(chunks[-1].done)
        check.equal(chunks[-1].status, StreamStatus.COMPLETE)
        check.equal("".join(c.content for c in chunks), "Hallo zurück!")

    async def test_history_and_name_forwarded(
        self, async_client: AsyncClient, fake_streamer: FakeStreamer
    ) -> None:
        payload = {
            "message": "  Und jetzt?  ",
            "assistant_name": " Nova ",
            "history": [
                {"role": "model", "text": "Hallo! Ich bin Nova."},
                {"role": "user", "text": "Hi"},
            ],
        }

        await _read_chunks(async_client, payload)

        (call,) = fake_streamer.calls
        check.equal(call.user_text, "Und jetzt?")
        check.equal(call.assistant_name, "Nova")
        check.equal(
            [(m.role, m.text) for m in call.history],
            [(Role.MODEL, "Hallo! Ich bin Nova."), (Role.USER, "Hi")],
        )

    async def test_default_assistant_name(
        self, async_client: AsyncClient, fake_streamer: FakeStreamer
    ) -> None:
        await _read_chunks(async_client, {"message": "Hallo"})

        assert fake_streamer.calls[0].assistant_name == "Lumi"


class TestStreamingErrorHandling:
    """Tests for error scenarios in the streaming endpoint."""

    async def test_failure_ends_with_error_chunk(
        self, async_client: AsyncClient, fake_streamer: FakeStreamer
    ) -> None:
        fake_streamer.fragments = ["Teil"]
        fake_streamer.error = StreamingError("connection reset")

        chunks = await _read_chunks(async_client, {"message": "Hallo"})

        check.equal(chunks[1].content, "Teil")
        check.is_true(chunks[-1].done)
        check.equal(chunks[-1].status, StreamStatus.ERROR)
        check.equal(chunks[-1].error, "connection reset")

    async def test_missing_key_reported_as_error_chunk(
        self, async_client: AsyncClient, fake_streamer: FakeStreamer
    ) -> None:
        fake_streamer.error = ConfigurationError("API key is missing")

        chunks = await _read_chunks(async_client, {"message": "Hallo"})

        check.equal(len(chunks), 2)
        check.equal(chunks[-1].status, StreamStatus.ERROR)

    async def test_empty_message_returns_422(self, async_client: AsyncClient) -> None:
        response = await async_client.post("/chat/stream", json={"message": ""})

        assert response.status_code == 422
        assert "detail" in response.json()

    async def test_whitespace_only_message_returns_422(
        self, async_client: AsyncClient, fake_streamer: FakeStreamer
    ) -> None:
        """Whitespace-only input never reaches the streamer."""
        response = await async_client.post("/chat/stream", json={"message": "   "})

        check.equal(response.status_code, 422)
        check.equal(fake_streamer.calls, [])

    async def test_invalid_assistant_name_returns_422(self, async_client: AsyncClient) -> None:
        response = await async_client.post(
            "/chat/stream", json={"message": "Hallo", "assistant_name": "x" * 21}
        )

        assert response.status_code == 422

    async def test_unknown_history_role_returns_422(self, async_client: AsyncClient) -> None:
        response = await async_client.post(
            "/chat/stream",
            json={"message": "Hallo", "history": [{"role": "system", "text": "x"}]},
        )

        assert response.status_code == 422

    async def test_wrong_http_method_returns_405(self, async_client: AsyncClient) -> None:
        response = await async_client.get("/chat/stream")

        assert response.status_code == 405
