"""Custom exception classes for the Mark Checker engine."""

from ..models.api_responses import ErrorCode
from .application_errors import (
    ApplicationError,
    ConfigurationError,
    ErrorSeverity,
    ImageNormalizationError,
    LexiconUnavailableError,
    ProcessingError,
    ServiceUnavailableError,
    ValidationError,
)

__all__ = [
    "ApplicationError",
    "ValidationError",
    "ProcessingError",
    "ServiceUnavailableError",
    "ConfigurationError",
    "LexiconUnavailableError",
    "ImageNormalizationError",
    "ErrorSeverity",
    "ErrorCode",
]
