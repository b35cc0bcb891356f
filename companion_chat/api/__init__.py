"""FastAPI application hosting the chat page and the streaming API.

Endpoints:
    - GET /health: Service health status
    - POST /chat/stream: Stateless SSE stream of one assistant answer
    - /: NiceGUI chat page (mounted in main)
"""

from companion_chat.api.app import app, create_app

__all__ = ["app", "create_app"]
