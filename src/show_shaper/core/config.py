"""Configuration Management."""

import os
from functools import lru_cache
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()


class Settings(BaseSettings):
    """Application settings from environment."""

    model_config = SettingsConfigDict(
        env_prefix="SHAPER_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",  # Ignore extra environment variables
    )

    # Server
    host: str = Field(default="0.0.0.0", description="HTTP bind address")
    port: int = Field(default=8000, gt=0, description="HTTP port")

    # Translator
    gemini_api_key: str = Field(
        default_factory=lambda: os.getenv("GEMINI_API_KEY", ""), description="Gemini API key"
    )
    gemini_model: str = Field(default="gemini-2.0-flash-lite", description="Gemini model name")
    gemini_temperature: float = Field(default=0.2, ge=0.0, le=2.0, description="Model temperature")
    gemini_max_tokens: int = Field(default=1024, gt=0, description="Max output tokens")
    translator_timeout: float = Field(default=10.0, gt=0, description="Translator request timeout")

    # Show data
    shows_api_url: str = Field(default="https://api.tvmaze.com", description="Show catalog base URL")
    shows_timeout: float = Field(default=5.0, gt=0, description="Show catalog request timeout")

    # History
    history_cap: int = Field(default=10, gt=0, description="Max undo snapshots per user")

    # Persistence
    store_path: str | None = Field(
        default=None, description="JSON file for design records (in-memory when unset)"
    )

    # Logging
    log_level: str = Field(default="INFO", description="Log level")
    json_logs: bool = Field(default=False, description="Use JSON log format")

    # Caching
    enable_cache: bool = Field(default=True, description="Cache translated command lists")
    cache_size: int = Field(default=100, gt=0, description="Cache max size")
    cache_ttl: int = Field(default=3600, gt=0, description="Cache TTL (seconds)")

    # Validation
    max_prompt_length: int = Field(default=2_000, gt=0, description="Max prompt length")


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
