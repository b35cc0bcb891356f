"""Command-line entry point for Companion Chat.

Reads `.env`, sets up logging from LOG_LEVEL and starts the server selected
by RUN_MODE.
"""

import logging
import os
import sys

from dotenv import load_dotenv

# Must run before importing modules that read the environment
load_dotenv()

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)],
)
logger = logging.getLogger(__name__)


def run_integrated() -> None:
    """Serve the chat page, the streaming API and the health check from one uvicorn server."""
    import uvicorn
    from nicegui import ui

    from companion_chat.api.app import create_app
    from companion_chat.ui.chat_page import chat_page  # noqa: F401 - Registers the page

    app = create_app()

    ui.run_with(
        app,
        title="Dein KI-Begleiter",
        favicon="✨",
        storage_secret=os.getenv("NICEGUI_STORAGE_SECRET", "companion-chat-secret"),
    )

    port = int(os.getenv("PORT", "8000"))
    logger.info(f"Starting integrated server on http://localhost:{port}")
    logger.info(f"API docs available at http://localhost:{port}/docs")
    logger.info(f"Chat UI available at http://localhost:{port}/")

    uvicorn.run(
        app,
        host=os.getenv("HOST", "0.0.0.0"),
        port=port,
        log_level=os.getenv("LOG_LEVEL", "info").lower(),
    )


def run_ui_only() -> None:
    """Run only the NiceGUI chat page on its own server (port 8080)."""
    from companion_chat.ui.chat_page import main as run_chat_page

    logger.info("Starting chat UI on http://localhost:8080")
    run_chat_page()


def main() -> None:
    """Application entry point.

    Set RUN_MODE=ui to serve only the chat page.
    Default is integrated mode (API and chat page on port 8000).
    """
    mode = os.getenv("RUN_MODE", "integrated").lower()

    logger.info(f"Starting Companion Chat in {mode} mode")

    if mode == "ui":
        run_ui_only()
    else:
        run_integrated()


if __name__ in {"__main__", "__mp_main__"}:
    main()
