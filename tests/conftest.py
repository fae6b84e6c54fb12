"""Shared test fixtures and configuration."""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from pathlib import Path

import pytest

from seedsift.adapters.base.adapter import SearchAdapter
from seedsift.adapters.base.exceptions import ConnectionError
from seedsift.config.settings import Settings
from seedsift.models.result import SearchResult


class FakeAdapter(SearchAdapter):
    """In-memory adapter with scripted behavior.

    ``behavior`` is either a list of results, an exception instance to raise,
    or the string ``"hang"`` to block until cancelled.
    """

    def __init__(
        self,
        adapter_id: str,
        behavior: list[SearchResult] | Exception | str = (),
        timeout: float = 1.0,
    ) -> None:
        self._id = adapter_id
        self._behavior = behavior
        self._timeout = timeout
        self.calls: list[tuple[str, int]] = []
        self.initialized = False
        self.closed = False

    @property
    def id(self) -> str:
        return self._id

    @property
    def name(self) -> str:
        return f"{self._id.title()} Adapter"

    @property
    def description(self) -> str:
        return f"Fake {self._id} backend"

    @property
    def endpoint(self) -> str:
        return f"https://{self._id}.invalid/search"

    @property
    def timeout(self) -> float:
        return self._timeout

    async def initialize(self) -> None:
        self.initialized = True

    async def shutdown(self) -> None:
        self.closed = True

    async def search(self, query: str, page: int = 1) -> list[SearchResult]:
        self.calls.append((query, page))
        if isinstance(self._behavior, Exception):
            raise self._behavior
        if self._behavior == "hang":
            await asyncio.Event().wait()
        return [r.model_copy(deep=True) for r in self._behavior]


def make_results(source: str, count: int) -> list[SearchResult]:
    """Build *count* distinct results attributed to *source*."""
    return [
        SearchResult(
            title=f"{source} result {i}",
            magnet=f"magnet:?xt=urn:btih:{i:040X}&dn={source}+result+{i}",
            info_hash=f"{i:040X}",
            seeders=i,
            leechers=0,
            size=1024 * (i + 1),
            source=source,
        )
        for i in range(count)
    ]


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    """Create a test Settings instance with defaults and a temporary history file."""
    return Settings(
        _env_file=None,  # type: ignore[call-arg]
        debug=True,
        history={"file": str(tmp_path / "history.json")},
    )


@pytest.fixture
def fake_adapter() -> Callable[..., FakeAdapter]:
    """Factory for scripted fake adapters."""
    return FakeAdapter


@pytest.fixture
def results_factory() -> Callable[[str, int], list[SearchResult]]:
    """Factory for lists of distinct search results."""
    return make_results


@pytest.fixture
def failing_adapter() -> FakeAdapter:
    """An adapter whose transport always fails."""
    return FakeAdapter("broken", ConnectionError("Broken Adapter request failed: connection refused"))


@pytest.fixture
def sample_data_file() -> Path:
    """The sample dataset shipped with the repository."""
    return Path(__file__).resolve().parent.parent / "data" / "sample_results.json"
