"""Service-level exceptions and their HTTP status mapping."""

from __future__ import annotations


class SeedSiftError(Exception):
    """Base exception for request-shape errors surfaced to API clients."""

    status_code: int = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class QueryValidationError(SeedSiftError):
    """Raised for a missing/blank query or a malformed magnet link."""

    status_code = 400


class UnknownAdapterError(SeedSiftError):
    """Raised when the requested adapter is not registered."""

    status_code = 400


class MethodNotAllowedError(SeedSiftError):
    """Raised when an endpoint is called with an unsupported HTTP method."""

    status_code = 405

    def __init__(self, method: str) -> None:
        super().__init__(f"Method {method} is not allowed")
        self.method = method


class StorageError(Exception):
    """Raised when search history cannot be loaded or persisted."""
