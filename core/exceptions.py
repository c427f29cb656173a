"""
Custom exceptions for the sales feed pipeline with structured error context.

Every failure in the pipeline is absorbed by the component that owns it
(the poller skips a tick, the tag enricher retries, the color enricher
gives up), so these exceptions exist mainly to carry context into the logs.

Exception Hierarchy:
    SalesFeedException (base)
    ├── FetchError
    │   ├── FeedFetchError
    │   ├── TagPageFetchError
    │   └── ImageLoadError
    ├── ParseError
    │   ├── FeedFormatError
    │   ├── TagParseError
    │   └── ImageDecodeError
    └── RetryableError / NonRetryableError (mixins)
"""

from typing import Optional, Dict, Any
from datetime import datetime, timezone


class SalesFeedException(Exception):
    """
    Base exception for all pipeline errors.

    Attributes:
        message: Human-readable error message
        context: Additional context information (url, status code, etc.)
        original_exception: The original exception that was caught (if any)
    """

    def __init__(
        self,
        message: str,
        context: Optional[Dict[str, Any]] = None,
        original_exception: Optional[Exception] = None
    ):
        self.message = message
        self.context = context or {}
        self.original_exception = original_exception
        self.timestamp = datetime.now(timezone.utc)

        self.context["error_timestamp"] = self.timestamp.isoformat()

        super().__init__(message)
        if original_exception:
            self.__cause__ = original_exception

    def __str__(self) -> str:
        """Format error message with context."""
        base_msg = f"{self.__class__.__name__}: {self.message}"

        if self.context:
            context_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            base_msg += f" | Context: {context_str}"

        if self.original_exception:
            base_msg += f" | Caused by: {type(self.original_exception).__name__}: {str(self.original_exception)}"

        return base_msg

    @property
    def retryable(self) -> Optional[bool]:
        """True for transient errors, False for permanent ones, None if unclassified"""
        if isinstance(self, RetryableError):
            return True
        if isinstance(self, NonRetryableError):
            return False
        return None

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for logging."""
        return {
            "error_type": self.__class__.__name__,
            "retryable": self.retryable,
            "message": self.message,
            "context": self.context,
            "timestamp": self.timestamp.isoformat(),
            "original_error": str(self.original_exception) if self.original_exception else None
        }


# ============================================================================
# Fetch Errors
# ============================================================================

class FetchError(SalesFeedException):
    """Base exception for transport failures."""
    pass


class FeedFetchError(FetchError):
    """
    Exception raised when the feed snapshot cannot be fetched.

    Context should include:
        - feed_url: The feed endpoint
        - status_code: HTTP status code (if applicable)
    """
    pass


class TagPageFetchError(FetchError):
    """
    Exception raised when an item page cannot be fetched for tag scraping.

    Context should include:
        - url: The item page url
        - status_code: HTTP status code (if applicable)
    """
    pass


class ImageLoadError(FetchError):
    """
    Exception raised when an art image cannot be downloaded.

    Context should include:
        - art_url: The image url
    """
    pass


# ============================================================================
# Parse Errors
# ============================================================================

class ParseError(SalesFeedException):
    """Base exception for payloads that arrived but could not be understood."""
    pass


class FeedFormatError(ParseError):
    """
    Exception raised when the feed payload does not match the expected shape.

    Context should include:
        - feed_url: The feed endpoint
        - response_body: Response body (truncated)
    """
    pass


class TagParseError(ParseError):
    """
    Exception raised when an item page cannot be parsed.

    Context should include:
        - url: The item page url
    """
    pass


class ImageDecodeError(ParseError):
    """
    Exception raised when downloaded image bytes cannot be decoded.

    Context should include:
        - art_url: The image url
        - size_bytes: Number of bytes received
    """
    pass


# ============================================================================
# Retry Strategy Mixins
# ============================================================================

# These only classify errors for logging (`SalesFeedException.retryable`);
# each caller applies its own fixed retry policy regardless of the class.

class RetryableError(SalesFeedException):
    """
    Mixin for transient errors.

    Use this for:
    - Network timeouts and connection failures
    - Rate limiting (HTTP 429)
    - Server errors (HTTP 5xx)
    """
    pass


class NonRetryableError(SalesFeedException):
    """
    Mixin for permanent errors.

    Use this for:
    - Resource not found (HTTP 404)
    - Other client errors (HTTP 4xx)
    """
    pass


# ============================================================================
# Specific Errors
# ============================================================================

class NetworkError(RetryableError, FetchError):
    """Network-related errors (timeouts, connection failures, 5xx)."""
    pass


class RateLimitError(RetryableError, FetchError):
    """Rate limiting errors (HTTP 429)."""

    def __init__(
        self,
        message: str,
        context: Optional[Dict[str, Any]] = None,
        original_exception: Optional[Exception] = None,
        retry_after: Optional[int] = None
    ):
        super().__init__(message, context, original_exception)
        self.retry_after = retry_after  # Seconds the server asked us to wait
        if retry_after:
            self.context["retry_after"] = retry_after


class ResourceNotFoundError(NonRetryableError, FetchError):
    """Resource not found errors (HTTP 404)."""
    pass
