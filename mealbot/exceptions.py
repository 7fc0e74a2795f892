"""Exception classes for the bot.

Transport and outer decode errors are shown to the user; inner decode
errors are recovered by the formatter and only logged.
"""

from typing import Any, Dict, Optional


class BotError(Exception):
    """Base exception for all bot errors.

    Attributes:
        message: Human-readable error message.
        details: Optional additional error context.
    """

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class TransportError(BotError):
    """Raised when the menu service can't be reached or answers non-200."""

    def __init__(self, message: str, status_code: Optional[int] = None, body: str = ""):
        """Initialize transport error.

        Args:
            message: Error message.
            status_code: HTTP status of the response, if there was one.
            body: Raw response body text, shown to the user as is.
        """
        details = {"status_code": status_code} if status_code is not None else {}
        super().__init__(message, details=details)
        self.status_code = status_code
        self.body = body


class OuterDecodeError(BotError):
    """Raised when the meal response itself is not valid JSON of the expected shape."""


# The parser contract names this failure ParseError.
ParseError = OuterDecodeError


class InnerDecodeError(BotError):
    """Raised when a recipe blob or the shopping list blob can't be decoded."""

    def __init__(self, message: str, blob: str = ""):
        super().__init__(message, details={"blob": blob})
        self.blob = blob


class ConfigurationError(BotError):
    """Raised when the bot configuration is invalid."""

    def __init__(self, message: str, config_key: Optional[str] = None):
        details = {"config_key": config_key} if config_key else {}
        super().__init__(message, details=details)
