"""Companion Chat - a small browser chat with a streaming Gemini assistant.

Combines FastAPI for HTTP hosting and streaming, NiceGUI for the chat page,
the Google GenAI SDK for generation, and Pydantic for data validation.

Components:
    - agent: Gemini streaming adapter and its configuration
    - conversation: message store, assistant name, submission orchestration
    - api: HTTP endpoints and SSE streaming
    - ui: Web interface for chat interactions
    - models: Message and request/response schemas
"""

__version__ = "0.1.0"
