"""Relay configuration with environment variable loading.

Pydantic-based configuration for the SafePipe completion relay.
"""

import os

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, field_validator

# Load environment variables from .env file
load_dotenv()

DEFAULT_API_URL = "https://safepipe.eu/api/v1/chat/completions"
DEFAULT_MODEL = "gpt-4o-mini"


def _timeout_from_env() -> float | None:
    value = os.getenv("SAFEPIPE_TIMEOUT_SECONDS", "").strip()
    if not value:
        return None
    try:
        return float(value)
    except ValueError as e:
        raise ValueError(f"SAFEPIPE_TIMEOUT_SECONDS must be a number, got {value!r}") from e


class RelayConfig(BaseModel):
    """Configuration for the completion relay.

    Environment defaults go through the same validation as explicit values.

    Attributes:
        api_key: Bearer credential for the completion service.
        api_url: Chat completions endpoint.
        default_model: Model used when a request names none.
        default_safe_mode: Safe mode used when a request leaves it unset.
        timeout_seconds: Upstream timeout; None disables it.
    """

    model_config = ConfigDict(validate_default=True)

    api_key: str = Field(
        default_factory=lambda: os.getenv("SAFEPIPE_API_KEY", ""),
        description="Bearer credential for the completion service",
    )
    api_url: str = Field(
        default_factory=lambda: os.getenv("SAFEPIPE_API_URL") or DEFAULT_API_URL,
        description="Chat completions endpoint",
    )
    default_model: str = Field(
        default_factory=lambda: os.getenv("SAFEPIPE_MODEL") or DEFAULT_MODEL,
        description="Model to use when the request names none",
    )
    default_safe_mode: bool = True
    timeout_seconds: float | None = Field(
        default_factory=_timeout_from_env,
        gt=0,
        description="Upstream timeout in seconds (None waits indefinitely)",
    )

    @field_validator("api_key")
    @classmethod
    def validate_api_key(cls, v: str) -> str:
        """Validate that the API key is provided and non-empty."""
        if not v or not v.strip():
            raise ValueError("SAFEPIPE_API_KEY is not configured")
        return v.strip()


def get_relay_config() -> RelayConfig:
    """Create relay configuration from environment.

    Raises:
        pydantic.ValidationError: If no API key is set or a value is invalid.
        ValueError: If SAFEPIPE_TIMEOUT_SECONDS is not a number.
    """
    return RelayConfig()
