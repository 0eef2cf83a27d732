"""Application settings loaded from environment variables."""

from __future__ import annotations

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """CogniWeave server configuration."""

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}

    # Server
    # Default to loopback; there is no auth layer in front of the tools.
    cw_host: str = "127.0.0.1"
    cw_port: int = 8001
    cw_log_level: str = "info"
    cw_allow_insecure_bind: bool = False

    # Generative model
    llm_provider: Literal["anthropic", "openai", "mock"] = "anthropic"
    anthropic_api_key: str = ""
    anthropic_model: str = "claude-sonnet-4-5-20250929"
    openai_api_key: str = ""
    openai_model: str = "gpt-4o"
    llm_timeout_s: float = Field(default=60.0, gt=0)
    llm_max_retries: int = Field(default=2, ge=0)

    # Batch simplification is grouped to stay under provider rate limits
    simplify_batch_size: int = Field(default=3, ge=1)
    simplify_batch_delay_s: float = Field(default=0.5, ge=0)

    # Profile store
    db_path: str = "~/.cogniweave/profiles.db"
    encryption_key: str = ""


def get_settings() -> Settings:
    """Create and return a Settings instance."""
    return Settings()
