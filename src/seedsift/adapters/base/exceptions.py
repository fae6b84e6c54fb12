"""Adapter-specific exceptions.

None of these reach API clients as HTTP errors: the engine downgrades
``AdapterError`` to text in the response metadata, and ``ConfigurationError``
is logged at startup.
"""


class AdapterError(Exception):
    """Base exception for adapter errors."""


class ConnectionError(AdapterError):
    """Raised when the adapter cannot reach its search backend."""


class QueryError(AdapterError):
    """Raised when a backend answers with an error or an unreadable payload."""


class ConfigurationError(AdapterError):
    """Raised when adapter or registry configuration is invalid."""
