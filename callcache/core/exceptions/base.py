"""
Base Exception Class

This module contains the base exception class that all other callcache
exceptions inherit from, plus ConfigurationError which every layer raises.
Specialized exceptions live in their themed modules.

Author: System Architect
Date: 2026-10-17
"""

from typing import Any


class CallCacheError(Exception):
    """
    Root of every error raised by callcache.

    ``details`` carries structured context (adapter, operation, cache key,
    callable) that ClassCache enriches via ``with_context`` before a store
    failure propagates, and ``to_dict`` is what the call observer logs.

    Attributes:
        message: Error message
        correlation_id: Correlation ID of the call being served (if available)
        details: Additional error details (dict)

    Example:
        raise StoreError(
            "Redis GET failed",
            correlation_id="abc-123",
            details={"key": "5d41402abc4b2a76b9719d911017c592", "adapter": "redis"}
        )
    """

    def __init__(
        self, message: str, correlation_id: str | None = None, details: dict[str, Any] | None = None
    ):
        self.message = message
        self.correlation_id = correlation_id
        self.details = (details or {}).copy()
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """
        Convert exception to dictionary for logging.

        Returns:
            Dict with error_type, message, correlation_id, and details
        """
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "correlation_id": self.correlation_id,
            "details": self.details,
        }

    def with_suggestion(self, suggestion: str) -> "CallCacheError":
        """
        Add a suggestion to help users fix the error.

        Returns:
            Self (for method chaining)
        """
        self.details["suggestion"] = suggestion
        return self

    def with_context(self, **context) -> "CallCacheError":
        """
        Add additional context to the error details.

        Returns:
            Self (for method chaining)
        """
        self.details.update(context)
        return self

    @classmethod
    def from_exception(
        cls,
        exc: Exception,
        message: str | None = None,
        correlation_id: str | None = None,
        **details
    ) -> "CallCacheError":
        """
        Create a callcache error from another exception.

        Useful for wrapping third-party exceptions (redis, orjson) with
        additional context. Callers should still use ``raise ... from exc``
        so the original traceback stays attached.

        Example:
            >>> try:
            ...     client.get(key)
            ... except redis.RedisError as e:
            ...     raise StoreError.from_exception(e, key=key) from e
        """
        error_message = message or str(exc)
        error_details = {
            "original_error": exc.__class__.__name__,
            "original_message": str(exc),
            **details
        }
        return cls(error_message, correlation_id=correlation_id, details=error_details)


class ConfigurationError(CallCacheError):
    """Raised when configuration is invalid or missing."""
    pass
