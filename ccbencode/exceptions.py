"""Exception hierarchy for ccBencode.

Every error raised by the library derives from :class:`CCBencodeError`, which
carries a human readable message plus an optional ``details`` mapping.
"""

from __future__ import annotations

from typing import Any


class CCBencodeError(Exception):
    """Base exception for all ccBencode errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        """Initialize ccBencode error."""
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        """Return string representation of the error."""
        if self.details:
            return f"{self.message} (Details: {self.details})"
        return self.message


class ValidationError(CCBencodeError):
    """Data validation errors."""


class InvalidArgumentError(ValidationError, TypeError):
    """An absent or unusable argument was passed to a constructor."""


class ConfigurationError(ValidationError):
    """Configuration validation errors."""


class BencodeError(ValidationError):
    """Bencode encoding/decoding errors."""


class BencodeDecodeError(BencodeError):
    """Malformed bencoded input."""


class BencodeEncodeError(BencodeError):
    """Value that cannot be represented in bencode."""


class EncodingMismatchError(BencodeError, UnicodeError):
    """Raw bytes are not valid text under the requested encoding."""
