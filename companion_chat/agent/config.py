"""Agent configuration with environment variable loading.

Pydantic-based configuration for the Gemini streaming adapter.
The API key may be empty here; the adapter refuses to stream without it so a
missing key surfaces as a failed answer instead of a failed startup.
"""

import os

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

# Load environment variables from .env file
load_dotenv()


def _api_key_from_env() -> str:
    return os.getenv("GEMINI_API_KEY") or os.getenv("GOOGLE_API_KEY") or os.getenv("API_KEY", "")


class AgentConfig(BaseModel):
    """Configuration for the Gemini streaming adapter.

    Attributes:
        api_key: Gemini API key (empty when not configured).
        model_name: Model identifier to use.
        temperature: Sampling temperature (0.0 = deterministic, 2.0 = creative).
    """

    api_key: str = Field(
        default_factory=_api_key_from_env,
        description="API key for the Gemini API",
    )
    model_name: str = Field(
        default_factory=lambda: os.getenv("GEMINI_MODEL", "gemini-2.5-flash"),
        description="Model to use",
    )
    temperature: float = Field(
        default=0.7,
        ge=0.0,
        le=2.0,
        description="Sampling temperature for response generation",
    )

    @field_validator("api_key", "model_name")
    @classmethod
    def strip_value(cls, v: str) -> str:
        """Strip surrounding whitespace from string settings."""
        return v.strip()

    @property
    def has_api_key(self) -> bool:
        return bool(self.api_key)


def get_agent_config() -> AgentConfig:
    """Create agent configuration from environment.

    Returns:
        Configured AgentConfig instance.
    """
    return AgentConfig()
