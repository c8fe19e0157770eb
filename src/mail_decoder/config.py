"""Configuration management for Mail Decoder.

This module handles application configuration using Pydantic settings.
Configuration can be loaded from environment variables or .env files.

The decoder itself never reads these settings: callers pass a
:class:`DecoderLimits` value explicitly, and only the command line builds one
from the environment.
"""

from functools import lru_cache

from pydantic import BaseModel, ConfigDict, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_MAX_MESSAGE_SIZE = 50 * 1024 * 1024
DEFAULT_MAX_PART_SIZE = 25 * 1024 * 1024
DEFAULT_MAX_NESTING_DEPTH = 16


class DecoderLimits(BaseModel):
    """Resource limits applied to a single decode call."""

    model_config = ConfigDict(frozen=True)

    max_message_size: int = Field(
        default=DEFAULT_MAX_MESSAGE_SIZE,
        gt=0,
        description="Maximum size of the raw message in bytes",
    )
    max_part_size: int = Field(
        default=DEFAULT_MAX_PART_SIZE,
        gt=0,
        description="Maximum number of characters buffered for one body part",
    )
    max_nesting_depth: int = Field(
        default=DEFAULT_MAX_NESTING_DEPTH,
        gt=0,
        description="Maximum depth of nested multipart containers",
    )


class Settings(BaseSettings):
    """Application settings with environment variable support.

    All settings can be overridden via environment variables with
    the MAIL_DECODER_ prefix (e.g., MAIL_DECODER_MAX_NESTING_DEPTH).
    """

    model_config = SettingsConfigDict(
        env_prefix="MAIL_DECODER_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Decoder limits
    max_message_size: int = Field(
        default=DEFAULT_MAX_MESSAGE_SIZE,
        gt=0,
        description="Maximum size of a raw message in bytes",
    )
    max_part_size: int = Field(
        default=DEFAULT_MAX_PART_SIZE,
        gt=0,
        description="Maximum number of characters buffered for one body part",
    )
    max_nesting_depth: int = Field(
        default=DEFAULT_MAX_NESTING_DEPTH,
        gt=0,
        description="Maximum depth of nested multipart containers",
    )

    # Application Configuration
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    )
    debug: bool = Field(
        default=False,
        description="Enable debug mode",
    )

    def decoder_limits(self) -> DecoderLimits:
        """Build the limits passed to :func:`mail_decoder.parse`.

        Returns:
            DecoderLimits: Immutable limits taken from these settings.
        """
        return DecoderLimits(
            max_message_size=self.max_message_size,
            max_part_size=self.max_part_size,
            max_nesting_depth=self.max_nesting_depth,
        )


@lru_cache
def get_settings() -> Settings:
    """Get cached application settings.

    Returns:
        Settings: Application settings instance.
    """
    return Settings()
