"""ethoscompare Error Handling Module

This module defines the error handling system for ethoscompare, providing
structured error classes with context information and user-friendly messages.

The error hierarchy follows these principles:
- One Source of Truth: All error codes are defined in ErrorCode enum
- Structured Context: ErrorContext provides additional information
- Proper Exception Chaining: Original exceptions are preserved

Only two errors ever cross the resolution layer: ProfileNotFoundError
(surfaced to the user) and TransportDegradedError (absorbed by the
resolvers unless offline fallback is disabled). Malformed upstream data
is substituted with defaults and is never raised.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Any, Union

# Type alias for primitive context values (str, int, float, bool only)
PrimitiveContextValue = Union[str, int, float, bool]


class ErrorCode(str, Enum):
    """Error codes for ethoscompare.

    This enum serves as the single source of truth for all error codes
    used throughout the application.
    """

    # Lookup Errors
    PROFILE_NOT_FOUND = "PROFILE_NOT_FOUND"
    INVALID_HANDLE = "INVALID_HANDLE"

    # Upstream API Errors
    API_CONNECTION_ERROR = "API_CONNECTION_ERROR"
    API_TIMEOUT = "API_TIMEOUT"
    API_SERVER_ERROR = "API_SERVER_ERROR"
    API_REQUEST_FAILED = "API_REQUEST_FAILED"
    API_INVALID_RESPONSE = "API_INVALID_RESPONSE"

    # Configuration Errors
    CONFIGURATION_ERROR = "CONFIGURATION_ERROR"
    CONFIG_MISSING = "CONFIG_MISSING"

    # CLI Errors
    CLI_UNEXPECTED_ERROR = "CLI_UNEXPECTED_ERROR"
    CLI_OUTPUT_ERROR = "CLI_OUTPUT_ERROR"


def _coerce_primitives(value: Any | None) -> dict[str, PrimitiveContextValue] | None:
    """Coerce additional_data values to primitives.

    Args:
        value: Input dictionary or None

    Returns:
        Dictionary with primitive values only, or None

    Raises:
        TypeError: If value is not a dict or contains unconvertible types
    """
    if value is None:
        return None

    if not isinstance(value, dict):
        error_msg = f"additional_data must be dict, got {type(value).__name__}"
        raise TypeError(error_msg)

    coerced: dict[str, PrimitiveContextValue] = {}
    for key, val in value.items():
        if isinstance(val, (str, int, float, bool)):
            coerced[key] = val
        elif isinstance(val, Enum):
            coerced[key] = val.value
        elif isinstance(val, Decimal):
            coerced[key] = str(val)
        elif val is None:
            continue
        else:
            error_msg = (
                f"Cannot coerce {type(val).__name__} to primitive type. "
                f"Only str, int, float, bool, Enum, Decimal are allowed."
            )
            raise TypeError(error_msg)

    return coerced


@dataclass(frozen=True)
class ErrorContext:
    """Context information for errors.

    Only primitive types are allowed in additional_data so the context
    can always be serialized into a structured log record.

    Attributes:
        operation: Optional operation name that caused the error
        handle: Optional profile handle the operation was working on
        endpoint: Optional upstream endpoint involved
        additional_data: Optional dict with primitive values only
    """

    operation: str | None = None
    handle: str | None = None
    endpoint: str | None = None
    additional_data: dict[str, PrimitiveContextValue] | None = None

    def __post_init__(self) -> None:
        if self.additional_data is not None:
            object.__setattr__(
                self,
                "additional_data",
                _coerce_primitives(self.additional_data),
            )

    def safe_dict(self) -> dict[str, Any]:
        """Export context as a dict that always carries ``additional_data``."""
        data: dict[str, Any] = {}
        if self.operation is not None:
            data["operation"] = self.operation
        if self.handle is not None:
            data["handle"] = self.handle
        if self.endpoint is not None:
            data["endpoint"] = self.endpoint
        data["additional_data"] = dict(self.additional_data or {})
        return data


class EthosCompareError(Exception):
    """Base exception class for all ethoscompare errors."""

    def __init__(
        self,
        code: ErrorCode,
        message: str,
        context: ErrorContext | None = None,
        original_error: Exception | None = None,
    ) -> None:
        """Initialize EthosCompareError.

        Args:
            code: Error code from ErrorCode enum
            message: Human-readable error message
            context: Additional context information
            original_error: Original exception that caused this error
        """
        self.code = code
        self.message = message
        self.context = context or ErrorContext()
        self.original_error = original_error
        super().__init__(f"{code.value}: {message}")

    def __str__(self) -> str:
        return f"{self.code.value}: {self.message}"

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for logging and JSON output."""
        return {
            "code": self.code.value,
            "message": self.message,
            "context": self.context.safe_dict(),
            "original_error": str(self.original_error) if self.original_error else None,
        }


class DomainError(EthosCompareError):
    """Domain-specific errors.

    These errors occur when a lookup cannot be satisfied by the data the
    network returned, e.g. no profile carries the requested handle.
    """


class InfrastructureError(EthosCompareError):
    """Infrastructure-related errors.

    These errors occur when interacting with the upstream scoring API.
    """


class ApplicationError(EthosCompareError):
    """Application-level errors (configuration, command handling)."""


class ProfileNotFoundError(DomainError):
    """No upstream record matches the requested handle."""

    def __init__(
        self,
        handle: str,
        message: str | None = None,
        original_error: Exception | None = None,
    ) -> None:
        super().__init__(
            ErrorCode.PROFILE_NOT_FOUND,
            message or f"User not found: {handle}",
            ErrorContext(operation="resolve_profile", handle=handle),
            original_error,
        )
        self.handle = handle


class TransportDegradedError(InfrastructureError):
    """An upstream call failed, timed out or returned an unusable payload.

    Resolvers absorb this error: profile resolution falls back to a
    synthetic profile and search returns an empty result set.
    """


class CliError(ApplicationError):
    """CLI-specific error carrying the process exit code."""

    def __init__(
        self,
        code: ErrorCode,
        message: str,
        context: ErrorContext | None = None,
        original_error: Exception | None = None,
        command: str | None = None,
        exit_code: int = 1,
    ):
        super().__init__(code, message, context, original_error)
        self.command = command
        self.exit_code = exit_code


def create_transport_error(
    code: ErrorCode,
    message: str,
    endpoint: str,
    operation: str | None = None,
    original_error: Exception | None = None,
    status_code: int | None = None,
) -> TransportDegradedError:
    """Create a transport error with endpoint context."""
    additional_data: dict[str, PrimitiveContextValue] | None = (
        {"status_code": status_code} if status_code is not None else None
    )
    context = ErrorContext(
        operation=operation,
        endpoint=endpoint,
        additional_data=additional_data,
    )
    return TransportDegradedError(code, message, context, original_error)


def create_config_error(
    message: str,
    config_key: str | None = None,
    operation: str | None = None,
    original_error: Exception | None = None,
) -> ApplicationError:
    """Create a configuration error with context."""
    additional_data: dict[str, PrimitiveContextValue] | None = (
        {"config_key": config_key} if config_key else None
    )
    context = ErrorContext(
        operation=operation,
        additional_data=additional_data,
    )
    return ApplicationError(
        ErrorCode.CONFIGURATION_ERROR,
        message,
        context,
        original_error,
    )


def create_cli_error(
    message: str,
    command: str | None = None,
    original_error: Exception | None = None,
    exit_code: int = 1,
    code: ErrorCode = ErrorCode.CLI_UNEXPECTED_ERROR,
) -> CliError:
    """Create a CLI error with context."""
    additional_data: dict[str, PrimitiveContextValue] | None = (
        {"command": command} if command else None
    )
    context = ErrorContext(
        operation="cli",
        additional_data=additional_data,
    )
    return CliError(
        code,
        message,
        context,
        original_error,
        command,
        exit_code,
    )
