"""Configuration Management."""

import os
from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()


class Settings(BaseSettings):
    """Application settings from environment."""

    model_config = SettingsConfigDict(
        env_prefix="DYNUI_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # External generator
    gemini_api_key: str = Field(
        default_factory=lambda: os.getenv("GEMINI_API_KEY", ""), description="Gemini API key"
    )
    gemini_model: str = Field(default="gemini-2.0-flash", description="Gemini model name")
    gemini_base_url: str = Field(
        default="https://generativelanguage.googleapis.com", description="Gemini REST endpoint"
    )
    gemini_temperature: float = Field(default=0.3, ge=0.0, le=2.0, description="Model temperature")
    gemini_max_tokens: int = Field(default=8192, gt=0, description="Max output tokens")
    generation_timeout: float = Field(
        default=30.0, gt=0, description="Upper bound on one external generation call (seconds)"
    )

    # Logging
    log_level: str = Field(default="INFO", description="Log level")
    json_logs: bool = Field(default=False, description="Use JSON log format")

    # Domains
    domains_file: Path = Field(
        default=Path("domains.json"), description="Where AI-created domains are persisted"
    )

    # Caching
    enable_cache: bool = Field(default=True, description="Cache external generator responses")
    cache_size: int = Field(default=100, gt=0, description="Cache max size")
    cache_ttl: int = Field(default=3600, gt=0, description="Cache TTL (seconds)")

    # Input validation
    max_input_size: int = Field(default=1024 * 1024, gt=0, description="Max input JSON size (bytes)")
    max_json_depth: int = Field(default=20, gt=0, description="Max input JSON nesting depth")

    @property
    def ai_enabled(self) -> bool:
        """External generation is attempted only with an API key."""
        return bool(self.gemini_api_key)


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
