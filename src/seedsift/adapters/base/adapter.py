"""Base search adapter — Abstract interface for all magnet search backends.

Every backend must implement this interface to be served by SeedSift.
The adapter is responsible for:
  1. Answering a paged query against its backend (remote API or local data)
  2. Mapping raw records to the normalized ``SearchResult`` schema
  3. Failing as a whole with ``AdapterError`` (never returning partial results)
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from seedsift.models.response import AdapterInfo
from seedsift.models.result import SearchResult

DEFAULT_TIMEOUT = 10.0


class SearchAdapter(ABC):
    """Abstract base class for search adapters.

    All adapters must implement:
      - id / name / description / endpoint: descriptive properties
      - search(): Execute a paged query and return normalized results

    Adapters are shared by concurrent requests and must not keep per-request
    mutable state. ``initialize()`` and ``shutdown()`` bracket the adapter's
    lifetime inside the application.
    """

    @property
    @abstractmethod
    def id(self) -> str:
        """Stable, unique adapter id (e.g. 'apibay', 'nyaa')."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable adapter name."""

    @property
    def description(self) -> str:
        """Short description shown in adapter listings."""
        return ""

    @property
    def endpoint(self) -> str:
        """Informational endpoint (URL or data location)."""
        return ""

    @property
    def timeout(self) -> float:
        """Per-request time budget in seconds."""
        return DEFAULT_TIMEOUT

    async def initialize(self) -> None:
        """Acquire resources (HTTP clients, etc.). Called once at startup."""

    async def shutdown(self) -> None:
        """Release resources. Called once at application shutdown."""

    @abstractmethod
    async def search(self, query: str, page: int = 1) -> list[SearchResult]:
        """Execute a search query against the backend.

        Args:
            query: The search term.
            page: 1-based page number.

        Returns:
            The complete list of normalized results for that page.

        Raises:
            AdapterError: On transport or parse failure.
        """

    def describe(self, *, is_default: bool = False, is_fallback: bool = False) -> AdapterInfo:
        """Build the public descriptor for adapter listings."""
        return AdapterInfo(
            id=self.id,
            name=self.name,
            description=self.description,
            endpoint=self.endpoint,
            is_default=is_default,
            is_fallback=is_fallback,
        )
