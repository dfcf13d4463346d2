"""Custom exceptions for the weather widget."""

from enum import Enum
from typing import Any


class ErrorCode(str, Enum):
    """Error codes attached to widget exceptions."""

    WIDGET_ERROR = "WIDGET_ERROR"
    NETWORK_ERROR = "NETWORK_ERROR"
    INVALID_RESPONSE = "INVALID_RESPONSE"
    PROFILE_UNAVAILABLE = "PROFILE_UNAVAILABLE"
    CONFIG_ERROR = "CONFIG_ERROR"
    BLOCK_REGISTRATION_ERROR = "BLOCK_REGISTRATION_ERROR"


class WidgetError(Exception):
    """Base exception for weather widget errors.

    All custom exceptions inherit from this class so callers can recover
    from any widget failure with a single handler.
    """

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.WIDGET_ERROR,
        details: dict[str, Any] | None = None,
    ):
        """Initialize widget exception.

        Args:
            message: Human-readable error message
            code: Error code from ErrorCode enum
            details: Additional error context
        """
        self.message = message
        self.code = code
        self.details = details or {}
        super().__init__(message)


class NetworkError(WidgetError):
    """Transport-level failure reaching the weather provider."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message, code=ErrorCode.NETWORK_ERROR, details=details)


class InvalidResponse(WidgetError):
    """Provider answered with an error status or an unusable body."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        details: dict[str, Any] | None = None,
    ):
        self.status_code = status_code
        super().__init__(message, code=ErrorCode.INVALID_RESPONSE, details=details)


class ProfileUnavailable(WidgetError):
    """Host profile could not be fetched or has no location."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message, code=ErrorCode.PROFILE_UNAVAILABLE, details=details)


class ConfigError(WidgetError):
    """Configuration file is unreadable or invalid."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message, code=ErrorCode.CONFIG_ERROR, details=details)


class BlockRegistrationError(WidgetError):
    """Block definition rejected by the registry."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message, code=ErrorCode.BLOCK_REGISTRATION_ERROR, details=details)
