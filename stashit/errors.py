"""
StashIt - Core Error Types

Defines the exception hierarchy for the cache core.
All exceptions inherit from StashItError for consistent error handling.

Messages are literal, human-readable strings; consumers match on them,
so they must not be reworded.
"""

from typing import Any


class StashItError(Exception):
    """Base exception for all StashIt errors."""

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to a dictionary (for logs and API responses)."""
        return {
            "error": self.__class__.__name__,
            "message": self.message,
            "details": self.details,
        }


class ValidationError(StashItError):
    """Raised when an adapter, hook, plugin or argument is malformed."""

    pass


class ConfigurationError(StashItError):
    """Raised when configuration is invalid or missing."""

    pass


class CacheError(StashItError):
    """Base exception for storage-related errors."""

    pass


class CacheOperationError(CacheError):
    """Raised by an adapter when a storage operation fails."""

    def __init__(
        self,
        operation: str,
        backend: str,
        details: dict[str, Any] | None = None,
    ):
        message = f"Cache operation '{operation}' failed on backend: {backend}"
        super().__init__(message, {"operation": operation, "backend": backend, **(details or {})})
        self.operation = operation
        self.backend = backend
