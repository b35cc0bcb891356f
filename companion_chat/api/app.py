"""FastAPI app for the chat: CORS, the streaming router and a health check.

The chat page is mounted on this app by `companion_chat.main`.
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from companion_chat import __version__
from companion_chat.agent.chat_agent import get_response_streamer
from companion_chat.api.chat import router as chat_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    """Log startup and shutdown, and warn early when no API key is configured."""
    logger.info("Starting Companion Chat API...")
    if not get_response_streamer().config.has_api_key:
        logger.warning("No Gemini API key configured; every answer will fail until one is set")
    yield
    logger.info("Shutting down Companion Chat API...")


def create_app() -> FastAPI:
    """Build the app with middleware, the /chat router and /health."""
    application = FastAPI(
        title="Companion Chat API",
        description=(
            "Browser chat with a German-speaking Gemini assistant. "
            "Streams answers fragment by fragment as server-sent events."
        ),
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    application.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["*"],
    )

    application.include_router(chat_router)

    @application.get("/health")
    async def health_check() -> dict[str, str]:
        """Check service health status."""
        return {"status": "healthy", "service": "companion-chat"}

    return application


app = create_app()
