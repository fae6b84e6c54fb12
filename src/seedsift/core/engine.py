"""SeedSift Engine — Core orchestrator for the search request lifecycle.

The engine manages one request end to end:
  1. Validation: reject blank queries
  2. Magnet decoding: a magnet link is answered directly, no adapter involved
  3. Adapter dispatch: explicit adapter, else the registry default
  4. Fallback: if the primary failed or found nothing, ask the fallback
  5. History: record the response (best-effort)
  6. Response assembly with diagnostic metadata

Adapter failures never abort a request; they are reported in
``SearchMeta``. Only request-shape problems raise (``QueryValidationError``,
``UnknownAdapterError``).
"""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING

from seedsift.adapters.base.adapter import SearchAdapter
from seedsift.adapters.base.exceptions import AdapterError
from seedsift.adapters.base.registry import AdapterRegistry
from seedsift.errors import QueryValidationError, StorageError, UnknownAdapterError
from seedsift.history.store import HistoryStore
from seedsift.models.response import SearchMeta, SearchResponse
from seedsift.models.result import SearchResult
from seedsift.utils.magnet import is_magnet, parse_magnet
from seedsift.utils.parsing import parse_optional_int

if TYPE_CHECKING:
    from seedsift.config.settings import Settings

logger = logging.getLogger(__name__)


def normalize_page(page: object) -> int:
    """Coerce a raw page value to a positive page number (default 1)."""
    number = parse_optional_int(page)
    if number is None or number < 1:
        return 1
    return number


class SeedSiftEngine:
    """Core orchestrator for SeedSift searches.

    Pipeline:
      Query → [magnet?] → Magnet Codec ───────────────────────┐
            → [Registry] → primary adapter → (fallback adapter)┤
                                                               → [History] → SearchResponse

    Attributes:
        settings: Application configuration.
        adapter_registry: Registry of search adapters.
        history: History store, or None when history is disabled.
    """

    def __init__(
        self,
        settings: Settings,
        adapter_registry: AdapterRegistry | None = None,
        history: HistoryStore | None = None,
    ) -> None:
        self.settings = settings
        self.adapter_registry = adapter_registry or AdapterRegistry()
        self.history = history

    async def initialize(self) -> None:
        """Initialize all registered adapters."""
        for adapter_id in self.adapter_registry.registered_adapters:
            adapter = self.adapter_registry.get(adapter_id)
            if adapter is None:
                continue
            try:
                await adapter.initialize()
            except AdapterError:
                logger.warning("Failed to initialize adapter '%s'", adapter_id, exc_info=True)
        logger.info("SeedSift engine initialized")

    async def shutdown(self) -> None:
        """Gracefully shut down all components."""
        await self.adapter_registry.shutdown_all()
        logger.info("SeedSift engine shut down")

    # ──────────────────────────────────────────────────────────────────────
    # Search
    # ──────────────────────────────────────────────────────────────────────

    async def search(
        self,
        query: str | None,
        adapter_id: str | None = None,
        page: object = None,
    ) -> SearchResponse:
        """Execute one search request.

        Args:
            query: Search term or magnet link.
            adapter_id: Explicit adapter id; the registry default if empty.
            page: 1-based page; missing, invalid or non-positive means 1.

        Returns:
            The normalized response. Adapter failures are reported in
            ``response.meta`` and never raised.

        Raises:
            QueryValidationError: If the query is blank or a malformed magnet.
            UnknownAdapterError: If no adapter can serve the request.
        """
        query = (query or "").strip()
        if not query:
            raise QueryValidationError("Please provide a search keyword or a magnet link.")

        if is_magnet(query):
            response = self._magnet_response(query)
        else:
            response = await self._adapter_response(query, (adapter_id or "").strip(), normalize_page(page))

        await self._record(response)
        return response

    def _magnet_response(self, query: str) -> SearchResponse:
        result = parse_magnet(query)
        logger.info("Decoded magnet link: info_hash=%s", result.info_hash)
        return SearchResponse(
            query=query,
            results=[result],
            meta=SearchMeta(mode="magnet", result_count=1),
        )

    async def _adapter_response(self, query: str, adapter_id: str, page: int) -> SearchResponse:
        adapter = self._resolve_adapter(adapter_id)

        results, error = await self._run_adapter(adapter, query, page)
        meta = SearchMeta(
            mode="search",
            adapter=adapter.id,
            adapter_name=adapter.name,
            adapter_description=adapter.description,
            adapter_endpoint=adapter.endpoint,
            adapter_error=error,
            page=page,
            has_prev_page=page > 1,
        )

        if error is not None or not results:
            fallback = self.adapter_registry.fallback(excluding_id=adapter.id)
            if fallback is not None:
                logger.info(
                    "Primary adapter '%s' %s, trying fallback '%s'",
                    adapter.id,
                    "failed" if error else "returned no results",
                    fallback.id,
                )
                fallback_results, fallback_error = await self._run_adapter(fallback, query, page)
                if fallback_error is not None:
                    meta.fallback_adapter = fallback.id
                    meta.fallback_adapter_name = fallback.name
                    meta.fallback_adapter_error = fallback_error
                elif fallback_results:
                    results = fallback_results
                    meta.fallback_used = True
                    meta.fallback_adapter = fallback.id
                    meta.fallback_adapter_name = fallback.name

        # No total counts from adapters: a full page suggests there is another
        meta.result_count = len(results)
        meta.has_next_page = len(results) >= self.settings.search.expected_page_size

        logger.info(
            "Search complete: query=%s, adapter=%s, page=%d, results=%d, fallback_used=%s",
            query,
            adapter.id,
            page,
            len(results),
            meta.fallback_used,
        )
        return SearchResponse(query=query, results=results, meta=meta)

    def _resolve_adapter(self, adapter_id: str) -> SearchAdapter:
        if adapter_id:
            adapter = self.adapter_registry.get(adapter_id)
            if adapter is None:
                raise UnknownAdapterError(f"Unknown adapter: {adapter_id}")
            return adapter

        adapter = self.adapter_registry.default_adapter()
        if adapter is None:
            raise UnknownAdapterError("No default adapter is configured")
        return adapter

    async def _run_adapter(
        self, adapter: SearchAdapter, query: str, page: int
    ) -> tuple[list[SearchResult], str | None]:
        """Call one adapter within its time budget.

        Returns:
            ``(results, None)`` on success, ``([], message)`` on failure.
        """
        try:
            results = await asyncio.wait_for(adapter.search(query, page), timeout=adapter.timeout)
        except TimeoutError:
            logger.warning("Adapter '%s' timed out after %.1fs", adapter.id, adapter.timeout)
            return [], f"{adapter.name} did not respond within {adapter.timeout:g}s"
        except AdapterError as e:
            logger.warning("Adapter '%s' failed: %s", adapter.id, e)
            return [], str(e) or type(e).__name__
        return results, None

    async def _record(self, response: SearchResponse) -> None:
        if self.history is None:
            return
        try:
            await asyncio.to_thread(self.history.record, response)
        except StorageError:
            logger.error("Failed to record search history for query=%s", response.query, exc_info=True)
