"""Configuration management using pydantic-settings."""

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Client settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="LIBPIXEL_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Client
    host: str = Field(
        default="",
        description="LibPixel host used for generated URLs (e.g. test.libpx.com)",
    )
    https: bool = Field(
        default=False,
        description="Generate https URLs instead of http",
    )
    secret: str | None = Field(
        default=None,
        description="Shared secret for URL signing (unsigned URLs when unset)",
    )

    # Logging
    log_level: str = Field(
        default="WARNING",
        description="Minimum log level",
    )
    log_format: Literal["console", "json"] = Field(
        default="console",
        description="Log renderer",
    )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings."""
    return Settings()
