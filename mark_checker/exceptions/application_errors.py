"""Application-specific exception classes with standardized error handling."""

import traceback
import uuid
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Optional

from mark_checker.models.api_responses import ErrorCode


class ErrorSeverity(Enum):
    """Error severity levels."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class ApplicationError(Exception):
    """Base application error class.

    Carries a standardized error code, a user-facing message and detailed
    context so the hosting request handler can report engine failures
    consistently.
    """

    def __init__(
        self,
        message: str,
        error_code: ErrorCode = ErrorCode.INTERNAL_ERROR,
        user_message: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
        severity: ErrorSeverity = ErrorSeverity.MEDIUM,
        context: Optional[Dict[str, Any]] = None,
        original_error: Optional[Exception] = None,
        field: Optional[str] = None,
        recoverable: bool = False,
    ):
        """Initialize application error.

        Args:
            message: Technical error message for developers
            error_code: Standardized error code
            user_message: User-friendly error message
            details: Additional error details
            severity: Error severity level
            context: Context information where error occurred
            original_error: Original exception that caused this error
            field: Field name for validation errors
            recoverable: Whether the error is recoverable
        """
        super().__init__(message)

        self.message = message
        self.error_code = error_code
        self.user_message = user_message or self._get_default_user_message()
        self.details = details or {}
        self.severity = severity
        self.context = context or {}
        self.original_error = original_error
        self.field = field
        self.recoverable = recoverable

        self.timestamp = datetime.now(timezone.utc)
        self.error_id = f"ERR_{uuid.uuid4().hex[:8].upper()}"
        self.traceback_info = traceback.format_exc() if original_error else None

        if original_error:
            self.details["original_error"] = {
                "type": type(original_error).__name__,
                "message": str(original_error),
            }

    def _get_default_user_message(self) -> str:
        """Get default user-friendly message based on error code."""
        user_messages = {
            ErrorCode.VALIDATION_ERROR: "Please check your input and try again.",
            ErrorCode.NOT_FOUND: "The requested resource was not found.",
            ErrorCode.PROCESSING_ERROR: "We're having trouble processing your submission. Please try again.",
            ErrorCode.SERVICE_UNAVAILABLE: "This service is temporarily unavailable. Please try again later.",
            ErrorCode.EMPTY_CONTENT: "No readable text content found in the file.",
            ErrorCode.INTERNAL_ERROR: "An unexpected error occurred. Please try again later.",
        }
        return user_messages.get(
            self.error_code, "An error occurred. Please try again."
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to dictionary for logging and API responses."""
        return {
            "error_id": self.error_id,
            "timestamp": self.timestamp.isoformat(),
            "error_code": self.error_code.value,
            "message": self.message,
            "user_message": self.user_message,
            "severity": self.severity.value,
            "field": self.field,
            "recoverable": self.recoverable,
            "details": self.details,
            "context": self.context,
            "traceback": self.traceback_info,
        }

    def __str__(self) -> str:
        return f"[{self.error_code.value}] {self.message} (ID: {self.error_id})"

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"message='{self.message}', "
            f"error_code={self.error_code}, "
            f"severity={self.severity}, "
            f"error_id='{self.error_id}'"
            f")"
        )


class ValidationError(ApplicationError):
    """Validation error for input validation failures."""

    def __init__(
        self,
        message: str,
        field: Optional[str] = None,
        validation_errors: Optional[List[Dict[str, str]]] = None,
        **kwargs,
    ):
        details = kwargs.pop("details", None) or {}
        if validation_errors:
            details["validation_errors"] = validation_errors

        super().__init__(
            message=message,
            error_code=ErrorCode.VALIDATION_ERROR,
            field=field,
            details=details,
            severity=ErrorSeverity.LOW,
            recoverable=True,
            **kwargs,
        )


class ProcessingError(ApplicationError):
    """Processing error for business logic failures."""

    def __init__(self, message: str, operation: Optional[str] = None, **kwargs):
        details = kwargs.pop("details", None) or {}
        if operation:
            details["operation"] = operation

        super().__init__(
            message=message,
            error_code=ErrorCode.PROCESSING_ERROR,
            details=details,
            severity=ErrorSeverity.MEDIUM,
            recoverable=True,
            **kwargs,
        )


class ServiceUnavailableError(ApplicationError):
    """Error for collaborators or resources that cannot be reached."""

    def __init__(self, message: str, service_name: Optional[str] = None, **kwargs):
        details = kwargs.pop("details", None) or {}
        if service_name:
            details["service_name"] = service_name

        super().__init__(
            message=message,
            error_code=ErrorCode.SERVICE_UNAVAILABLE,
            details=details,
            severity=ErrorSeverity.HIGH,
            recoverable=True,
            **kwargs,
        )


class ConfigurationError(ApplicationError):
    """Configuration error for invalid or missing configuration."""

    def __init__(self, message: str, config_key: Optional[str] = None, **kwargs):
        details = kwargs.pop("details", None) or {}
        if config_key:
            details["config_key"] = config_key

        super().__init__(
            message=message,
            error_code=ErrorCode.INTERNAL_ERROR,
            user_message="A configuration error occurred. Please contact support.",
            details=details,
            severity=ErrorSeverity.HIGH,
            recoverable=False,
            **kwargs,
        )


class LexiconUnavailableError(ServiceUnavailableError):
    """The English word list could not be loaded."""

    def __init__(self, message: str, source: Optional[str] = None, **kwargs):
        details = kwargs.pop("details", None) or {}
        if source:
            details["source"] = source

        super().__init__(
            message=message,
            service_name="lexicon_service",
            details=details,
            **kwargs,
        )


class ImageNormalizationError(ProcessingError):
    """An uploaded image could not be prepared for text recognition."""

    def __init__(self, message: str, step: Optional[str] = None, **kwargs):
        super().__init__(message=message, operation=step or "image_normalization", **kwargs)
