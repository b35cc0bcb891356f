"""Gemini streaming adapter for chat exchanges.

Responsibilities:
    - Adapter configuration from the environment
    - Persona instruction with the current assistant name
    - Translation of the conversation into Gemini turns
    - Streaming fragment extraction

Keeps the Google GenAI SDK out of the conversation and HTTP layers.
"""

from companion_chat.agent.chat_agent import ResponseStreamer, get_response_streamer
from companion_chat.agent.config import AgentConfig, get_agent_config

__all__ = ["AgentConfig", "ResponseStreamer", "get_agent_config", "get_response_streamer"]
