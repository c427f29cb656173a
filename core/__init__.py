"""
Core utilities and configuration for the sales feed watcher.

This package provides foundational components used throughout the pipeline:

Modules:
    config: Application configuration and environment variable management
    exceptions: Custom exception hierarchy for error handling
    logging: Logging configuration and utilities

Usage:
    from core.config import settings
    from core.exceptions import FeedFetchError, NetworkError
    from core.logging import setup_logging
"""

__all__ = [
    "settings",
    "setup_logging",
    # Exceptions
    "SalesFeedException",
    "FetchError",
    "FeedFetchError",
    "TagPageFetchError",
    "ImageLoadError",
    "ParseError",
    "FeedFormatError",
    "TagParseError",
    "ImageDecodeError",
    "RetryableError",
    "NonRetryableError",
    "NetworkError",
    "RateLimitError",
    "ResourceNotFoundError",
]
