"""Streaming chat endpoint.

Exposes the response streaming adapter over HTTP as server-sent events.
The endpoint is stateless: the client sends the whole prior conversation and
the assistant name with every request.
"""

import logging
from collections.abc import AsyncIterator
from typing import Annotated

from fastapi import APIRouter, Depends
from fastapi.responses import StreamingResponse

from companion_chat.agent.chat_agent import ResponseStreamer, get_response_streamer
from companion_chat.exceptions import ChatError
from companion_chat.models.schemas import ChatStreamRequest, StreamChunk, StreamStatus

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/chat", tags=["chat"])


def _sse(chunk: StreamChunk) -> str:
    return f"data: {chunk.model_dump_json()}\n\n"


async def _event_stream(
    request: ChatStreamRequest,
    streamer: ResponseStreamer,
) -> AsyncIterator[str]:
    """Frame adapter fragments as SSE events, ending with a done chunk."""
    yield _sse(StreamChunk(content="", done=False, status=StreamStatus.GENERATING))

    try:
        async for fragment in streamer.stream_response(
            request.message,
            request.history_messages(),
            request.assistant_name,
        ):
            yield _sse(StreamChunk(content=fragment, done=False))
    except ChatError as e:
        logger.warning(f"Streaming failed: {e}")
        yield _sse(StreamChunk(content="", done=True, status=StreamStatus.ERROR, error=str(e)))
        return

    yield _sse(StreamChunk(content="", done=True, status=StreamStatus.COMPLETE))


@router.post("/stream")
async def chat_stream(
    request: ChatStreamRequest,
    streamer: Annotated[ResponseStreamer, Depends(get_response_streamer)],
) -> StreamingResponse:
    """Stream one assistant answer as server-sent events.

    Each event is ``data: <StreamChunk JSON>``. The first event carries the
    ``generating`` status, the last one has ``done=true`` and either the
    ``complete`` or the ``error`` status.

    Raises:
        422: Blank message or invalid assistant name.
    """
    logger.info(f"Streaming answer as {request.assistant_name!r} ({len(request.history)} prior turns)")
    return StreamingResponse(
        _event_stream(request, streamer),
        media_type="text/event-stream",
        headers={"Cache-Control": "no-cache"},
    )
