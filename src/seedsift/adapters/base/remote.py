"""Remote JSON adapter — Shared plumbing for HTTP search APIs.

Concrete remote adapters only describe *where* to ask and *how to read one
record*. This base class owns the ``httpx.AsyncClient``, the request/response
error handling and the normalization rules every remote source shares:

  - a record without a title, or without both magnet and info-hash, is dropped
  - a magnet is synthesized from info-hash + title + trackers when missing
  - an info-hash is extracted from the magnet when missing
  - unparsable optional numbers become ``None``, never ``0``
  - empty or "uncategorized" categories become ``"Unknown"``
"""

from __future__ import annotations

import logging
import time
from abc import abstractmethod
from datetime import datetime
from typing import Any

import httpx

from seedsift.adapters.base.adapter import DEFAULT_TIMEOUT, SearchAdapter
from seedsift.adapters.base.exceptions import ConnectionError, QueryError
from seedsift.models.result import SearchResult
from seedsift.utils.magnet import build_magnet, extract_info_hash
from seedsift.utils.parsing import normalize_category

logger = logging.getLogger(__name__)

USER_AGENT = "seedsift/0.1"


class RemoteJSONAdapter(SearchAdapter):
    """Base class for adapters backed by a JSON-over-HTTP search API.

    The HTTP client is created once and reused by every request; it carries
    no per-request state, so concurrent searches can share it.

    Args:
        endpoint: Full URL of the search endpoint.
        trackers: Announce URLs used when a magnet must be synthesized.
        timeout: HTTP timeout in seconds (also the engine's time budget).
    """

    #: Extra query parameters sent with every request
    extra_params: dict[str, str] = {}

    def __init__(
        self,
        endpoint: str,
        trackers: list[str] | None = None,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        self._endpoint = endpoint
        self._trackers = list(trackers or [])
        self._timeout = timeout
        self._client: httpx.AsyncClient | None = None

    @property
    def endpoint(self) -> str:
        return self._endpoint

    @property
    def timeout(self) -> float:
        return self._timeout

    @property
    def trackers(self) -> list[str]:
        """Copy of the configured tracker list."""
        return list(self._trackers)

    async def initialize(self) -> None:
        """Create the shared ``httpx.AsyncClient``."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=httpx.Timeout(self._timeout),
                headers={"User-Agent": USER_AGENT, "Accept": "application/json"},
                follow_redirects=True,
            )
            logger.info("%s adapter initialized (endpoint=%s)", self.id, self._endpoint)

    async def shutdown(self) -> None:
        """Close the HTTP client."""
        if self._client:
            await self._client.aclose()
            self._client = None

    # ── Search ───────────────────────────────────────────────────────────

    async def search(self, query: str, page: int = 1) -> list[SearchResult]:
        """Query the remote API and normalize its records.

        Raises:
            ConnectionError: If the backend cannot be reached or times out.
            QueryError: If the backend answers with a non-200 status or a
                payload that is not the expected JSON shape, or a record that
                cannot be mapped.
        """
        if self._client is None:
            await self.initialize()
        assert self._client is not None

        params = {"q": query, "page": str(page), **self.extra_params}
        start = time.monotonic()
        try:
            resp = await self._client.get(self._endpoint, params=params)
        except httpx.TimeoutException as e:
            raise ConnectionError(f"{self.name} timed out: {e}") from e
        except httpx.HTTPError as e:
            raise ConnectionError(f"{self.name} request failed: {e}") from e

        if resp.status_code != 200:
            raise QueryError(f"{self.name} returned HTTP {resp.status_code}: {resp.text[:200]}")

        try:
            payload = resp.json()
        except ValueError as e:
            raise QueryError(f"{self.name} returned invalid JSON: {e}") from e

        records = self.extract_records(payload)
        results: list[SearchResult] = []
        for raw in records:
            if not isinstance(raw, dict):
                raise QueryError(f"{self.name} returned a malformed record: {raw!r}")
            try:
                result = self.map_record(raw)
            except (ValueError, TypeError, LookupError, ArithmeticError) as e:
                raise QueryError(f"{self.name} returned a record that could not be mapped: {e}") from e
            if result is not None:
                results.append(result)

        logger.debug(
            "%s search: query=%s, page=%d, records=%d, results=%d, took=%dms",
            self.id,
            query,
            page,
            len(records),
            len(results),
            int((time.monotonic() - start) * 1000),
        )
        return results

    @abstractmethod
    def extract_records(self, payload: Any) -> list[Any]:
        """Return the list of raw records from a decoded response body.

        Raises:
            QueryError: If the payload does not have the expected shape.
        """

    @abstractmethod
    def map_record(self, raw: dict[str, Any]) -> SearchResult | None:
        """Map one raw record to a ``SearchResult``, or None to drop it."""

    # ── Normalization ────────────────────────────────────────────────────

    def build_result(
        self,
        *,
        title: Any,
        magnet: Any = None,
        info_hash: Any = None,
        seeders: int | None = None,
        leechers: int | None = None,
        size: int | None = None,
        uploaded: datetime | None = None,
        category: Any = None,
    ) -> SearchResult | None:
        """Apply the shared normalization rules to one record's fields.

        Returns:
            The normalized result, or None if the record is not actionable.
        """
        title = str(title).strip() if title else ""
        magnet = str(magnet).strip() if magnet else ""
        info_hash = str(info_hash).strip() if info_hash else ""

        if not title or not (magnet or info_hash):
            return None

        if not magnet:
            magnet = build_magnet(info_hash, title, self._trackers)
        elif not info_hash:
            info_hash = extract_info_hash(magnet) or ""

        return SearchResult(
            title=title,
            magnet=magnet,
            info_hash=info_hash or None,
            trackers=list(self._trackers),
            seeders=seeders,
            leechers=leechers,
            size=size if size is not None and size > 0 else None,
            uploaded=uploaded,
            category=normalize_category(category),
            source=self.id,
        )
