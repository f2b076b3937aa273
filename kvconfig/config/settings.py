"""Library settings using Pydantic Settings.

Features:
- Environment variable loading (``KVCONFIG_`` prefix)
- Type validation
- Default values
- Compatibility switch for the legacy comment boundary
"""

import logging

from typing import Any

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from kvconfig.utils.constants import (
    DEFAULT_ENCODING,
    DEFAULT_MAX_LINE_LENGTH,
    VALID_LOG_LEVELS,
)


class Settings(BaseSettings):
    """Settings controlling how configuration files are read and written."""

    # Parsing
    legacy_comment_boundary: bool = Field(
        False,
        description="Also drop the character right before '#' when stripping comments",
    )
    max_line_length: int = Field(
        DEFAULT_MAX_LINE_LENGTH,
        ge=1,
        description="Characters kept per line, longer lines are truncated",
    )

    # File I/O
    encoding: str = Field(DEFAULT_ENCODING, description="Configuration file encoding")

    # Monitoring
    log_level: str = Field("INFO", description="Logging level")
    debug: bool = Field(False, description="Enable debug mode")

    model_config = SettingsConfigDict(
        env_prefix="KVCONFIG_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: Any) -> str:
        """Validate log level."""
        if str(v).upper() not in VALID_LOG_LEVELS:
            raise ValueError(f"log_level must be one of {VALID_LOG_LEVELS}")
        return str(v).upper()

    @field_validator("encoding")
    @classmethod
    def validate_encoding(cls, v: str) -> str:
        """Reject encodings the codec registry does not know."""
        import codecs

        try:
            codecs.lookup(v)
        except LookupError as e:
            raise ValueError(f"unknown encoding: {v}") from e
        return v

    def get_log_level(self) -> int:
        """Get logging level as integer."""
        return logging.DEBUG if self.debug else getattr(logging, self.log_level)
