"""Error taxonomy for sitemap generation."""

from enum import Enum
from typing import Optional


class ErrorType(str, Enum):
    """Categorizes generator errors for reporting."""

    MISSING_ARGUMENT = "missing_argument"
    INVALID_ARGUMENT = "invalid_argument"
    INVALID_CONFIGURATION = "invalid_configuration"
    PRECONDITION = "precondition"
    SIZE_EXCEEDED = "size_exceeded"
    CAPABILITY_UNAVAILABLE = "capability_unavailable"
    IO_FAILURE = "io_failure"
    UNKNOWN = "unknown"


class SitemapError(Exception):
    """Base class for all sitemap generator errors.

    Attributes:
        error_type: Categorization for handling
        message: Human-readable error message
        original_error: The underlying exception, if any
    """

    error_type: ErrorType = ErrorType.UNKNOWN

    def __init__(
        self,
        message: str,
        original_error: Optional[Exception] = None,
    ):
        self.message = message
        self.original_error = original_error
        super().__init__(self.message)

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"message={self.message!r}, "
            f"error_type={self.error_type})"
        )


class MissingArgumentError(SitemapError, TypeError):
    """Raised when a required value was not supplied at all."""

    error_type = ErrorType.MISSING_ARGUMENT


class InvalidArgumentError(SitemapError, ValueError):
    """Raised when a supplied value violates a format, range or enum constraint."""

    error_type = ErrorType.INVALID_ARGUMENT


class InvalidConfigurationError(SitemapError, ValueError):
    """Raised when a configuration value violates protocol limits."""

    error_type = ErrorType.INVALID_CONFIGURATION


class PreconditionError(SitemapError, RuntimeError):
    """Raised when an operation is invoked out of order."""

    error_type = ErrorType.PRECONDITION


class SizeExceededError(SitemapError):
    """Raised when a produced document violates a hard protocol limit.

    Attributes:
        size: Actual size (bytes or document count)
        limit: The limit that was exceeded
    """

    error_type = ErrorType.SIZE_EXCEEDED

    def __init__(
        self,
        message: str,
        size: Optional[int] = None,
        limit: Optional[int] = None,
    ):
        self.size = size
        self.limit = limit
        super().__init__(message)


class CapabilityUnavailableError(SitemapError, ImportError):
    """Raised when a required optional library is not installed."""

    error_type = ErrorType.CAPABILITY_UNAVAILABLE


class SitemapIOError(SitemapError, OSError):
    """Raised when a sitemap or robots file cannot be written.

    Attributes:
        path: The file that could not be opened or written
    """

    error_type = ErrorType.IO_FAILURE

    def __init__(
        self,
        message: str,
        path: Optional[str] = None,
        original_error: Optional[Exception] = None,
    ):
        self.path = path
        super().__init__(message, original_error=original_error)
