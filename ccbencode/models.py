"""Pydantic configuration models for ccBencode."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field, field_validator

from ccbencode.bstring import normalize_encoding
from ccbencode.exceptions import InvalidArgumentError


class LogLevel(str, Enum):
    """Logging levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class TextErrors(str, Enum):
    """Codec error handlers used when rendering byte strings as text."""

    STRICT = "strict"
    REPLACE = "replace"
    IGNORE = "ignore"
    BACKSLASHREPLACE = "backslashreplace"


class BencodeConfig(BaseModel):
    """Byte string and codec configuration."""

    default_encoding: str = Field(
        default="utf-8",
        description="Text encoding attached to decoded byte strings",
    )
    text_errors: TextErrors = Field(
        default=TextErrors.STRICT,
        description="Codec error handler used when displaying byte strings",
    )

    @field_validator("default_encoding")
    @classmethod
    def validate_encoding(cls, v: str) -> str:
        """Validate and normalize the encoding name."""
        try:
            return normalize_encoding(v)
        except InvalidArgumentError as e:
            raise ValueError(e.message) from e


class ObservabilityConfig(BaseModel):
    """Observability configuration."""

    log_level: LogLevel = Field(default=LogLevel.WARNING, description="Log level")
    log_file: str | None = Field(None, description="Log file path")
    structured_logging: bool = Field(
        default=False,
        description="Use structured (JSON) logging",
    )
    log_correlation_id: bool = Field(
        default=True,
        description="Include correlation IDs",
    )


class Config(BaseModel):
    """Main configuration model."""

    bencode: BencodeConfig = Field(
        default_factory=BencodeConfig,
        description="Byte string and codec configuration",
    )
    observability: ObservabilityConfig = Field(
        default_factory=ObservabilityConfig,
        description="Observability configuration",
    )
