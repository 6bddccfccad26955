"""Chat service configuration with environment variable loading.

Pydantic-based configuration for the completion provider, the system prompt
sources and the request hardening limits.
Supports OpenAI and OpenAI-compatible APIs via custom base URL.
"""

import os
from pathlib import Path

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, field_validator

# Load environment variables from .env file
load_dotenv()

PROMPTS_DIR = Path(__file__).parent.parent / "prompts"


class ChatConfig(BaseModel):
    """Configuration for the chat service.

    Supports OpenAI and any OpenAI-compatible API via LLM_BASE_URL.

    Attributes:
        api_key: API key for model access.
        base_url: API base URL (None for OpenAI default).
        model_name: Model identifier to use.
        temperature: Sampling temperature (0.0 = deterministic, 2.0 = creative).
        max_tokens: Maximum tokens in generated response.
        timeout: Seconds to wait for the provider before giving up.
        context_path: Markdown file describing the domain context.
        persona_path: Markdown file describing the persona.
        persona_name: Name the assistant answers as.
        domain_name: Name of the review domain.
        upload_dir: Directory where uploads are held during a request.
        max_upload_bytes: Largest accepted upload.
        rate_limit_requests: Requests allowed per client IP per window.
        rate_limit_window_seconds: Length of the rate-limit window.
    """

    # Values come from default factories, so they must be validated too.
    model_config = ConfigDict(validate_default=True)

    api_key: str = Field(
        default_factory=lambda: os.getenv("LLM_API_KEY", os.getenv("OPENAI_API_KEY", "")),
        description="API key for LLM provider",
    )
    base_url: str | None = Field(
        default_factory=lambda: os.getenv("LLM_BASE_URL") or None,
        description="API base URL (None for OpenAI default)",
    )
    model_name: str = Field(
        default_factory=lambda: os.getenv("LLM_MODEL", "gpt-4o"),
        description="Model to use",
    )
    temperature: float = Field(
        default_factory=lambda: float(os.getenv("LLM_TEMPERATURE", "0.7")),
        ge=0.0,
        le=2.0,
        description="Sampling temperature for response generation",
    )
    max_tokens: int = Field(
        default_factory=lambda: int(os.getenv("LLM_MAX_TOKENS", "1500")),
        ge=1,
        le=128000,
        description="Maximum tokens in generated response",
    )
    timeout: float = Field(
        default_factory=lambda: float(os.getenv("LLM_TIMEOUT", "60")),
        gt=0.0,
        description="Provider call timeout in seconds",
    )
    context_path: Path = Field(
        default_factory=lambda: Path(os.getenv("CONTEXT_PATH", PROMPTS_DIR / "context.md")),
        description="Domain context Markdown file",
    )
    persona_path: Path = Field(
        default_factory=lambda: Path(os.getenv("PERSONA_PATH", PROMPTS_DIR / "persona.md")),
        description="Persona Markdown file",
    )
    persona_name: str = Field(
        default_factory=lambda: os.getenv("PERSONA_NAME", "Fee"),
        min_length=1,
    )
    domain_name: str = Field(
        default_factory=lambda: os.getenv("DOMAIN_NAME", "SESMag"),
        min_length=1,
    )
    upload_dir: Path = Field(
        default_factory=lambda: Path(os.getenv("UPLOAD_DIR", "uploads")),
        description="Temporary storage for uploads in flight",
    )
    max_upload_bytes: int = Field(
        default_factory=lambda: int(os.getenv("MAX_UPLOAD_BYTES", str(10 * 1024 * 1024))),
        ge=1,
    )
    rate_limit_requests: int = Field(
        default_factory=lambda: int(os.getenv("RATE_LIMIT_REQUESTS", "100")),
        ge=1,
    )
    rate_limit_window_seconds: float = Field(
        default_factory=lambda: float(os.getenv("RATE_LIMIT_WINDOW_SECONDS", "900")),
        gt=0.0,
    )

    @field_validator("api_key")
    @classmethod
    def validate_api_key(cls, v: str) -> str:
        """Validate that API key is provided and non-empty."""
        if not v or not v.strip():
            raise ValueError(
                "API key required. Set LLM_API_KEY or OPENAI_API_KEY in .env"
            )
        return v.strip()


def get_chat_config() -> ChatConfig:
    """Create chat configuration from environment.

    Returns:
        Configured ChatConfig instance.

    Raises:
        ValueError: If no API key is set.
    """
    return ChatConfig()
