"""Sample adapter — Searches a local JSON dataset of normalized results.

The dataset is loaded once when the adapter is constructed. Each query is a
case-insensitive substring match over title and info-hash, paginated with a
fixed page size. It needs no network access, which makes it a good fallback
and a convenient backend for development.

Dataset format (JSON array)::

    [{"title": "...", "magnet": "magnet:?...", "infoHash": "...",
      "trackers": ["udp://..."], "seeders": 10, "leechers": 2,
      "size": 1073741824, "uploaded": "2024-01-01T00:00:00Z",
      "category": "Software", "source": "local-sample"}]
"""

from __future__ import annotations

import asyncio
import json
import logging
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from seedsift.adapters.base.adapter import SearchAdapter
from seedsift.adapters.base.exceptions import ConfigurationError
from seedsift.models.result import SearchResult
from seedsift.utils.parsing import coalesce, normalize_category, parse_datetime, parse_optional_int

logger = logging.getLogger(__name__)

PAGE_SIZE = 10


class SampleAdapter(SearchAdapter):
    """Search adapter over a local JSON dataset.

    Args:
        data_file: Path to the JSON dataset.
        timeout: Time budget in seconds for one search.

    Raises:
        ConfigurationError: If the dataset cannot be read or parsed.
    """

    def __init__(self, data_file: str | Path, timeout: float = 5.0) -> None:
        self._data_file = Path(data_file)
        self._timeout = timeout
        self._items = self._load(self._data_file)
        logger.info("Sample adapter loaded %d records from %s", len(self._items), self._data_file)

    @property
    def id(self) -> str:
        return "sample"

    @property
    def name(self) -> str:
        return "Local sample data"

    @property
    def description(self) -> str:
        return "Matches queries against the bundled sample dataset"

    @property
    def endpoint(self) -> str:
        return "local-data"

    @property
    def timeout(self) -> float:
        return self._timeout

    # ── Search ───────────────────────────────────────────────────────────

    async def search(self, query: str, page: int = 1) -> list[SearchResult]:
        """Filter the dataset and return the requested page.

        The scan yields to the event loop between records, so a cancelled
        request stops with ``asyncio.CancelledError`` instead of returning a
        partial page.
        """
        needle = query.strip().lower()
        matches: list[SearchResult] = []
        for item in self._items:
            await asyncio.sleep(0)
            if needle in item.title.lower() or needle in (item.info_hash or "").lower():
                matches.append(item)

        start = (max(page, 1) - 1) * PAGE_SIZE
        return [item.model_copy(deep=True) for item in matches[start : start + PAGE_SIZE]]

    # ── Loading ──────────────────────────────────────────────────────────

    def _load(self, path: Path) -> list[SearchResult]:
        try:
            with open(path, encoding="utf-8") as f:
                raw = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise ConfigurationError(f"Failed to load sample data from {path}: {e}") from e

        if not isinstance(raw, list):
            raise ConfigurationError(f"Sample data in {path} must be a JSON array")

        try:
            return [self._map_record(record) for record in raw if isinstance(record, dict) and record.get("title")]
        except (ValidationError, TypeError) as e:
            raise ConfigurationError(f"Invalid record in sample data {path}: {e}") from e

    def _map_record(self, raw: dict[str, Any]) -> SearchResult:
        seeders = parse_optional_int(raw.get("seeders"))
        leechers = parse_optional_int(raw.get("leechers"))
        size = parse_optional_int(raw.get("size"))
        source = raw.get("source")
        trackers = raw.get("trackers") or []
        if not isinstance(trackers, list):
            raise TypeError(f"trackers must be a list, got {type(trackers).__name__}")

        return SearchResult(
            title=str(raw["title"]),
            magnet=str(raw.get("magnet") or ""),
            info_hash=raw.get("infoHash") or raw.get("info_hash") or None,
            trackers=[str(t) for t in trackers],
            # Negative counts in the dataset mean "unknown"
            seeders=seeders if seeders is not None and seeders >= 0 else None,
            leechers=leechers if leechers is not None and leechers >= 0 else None,
            size=size if size is not None and size > 0 else None,
            uploaded=parse_datetime(raw.get("uploaded")),
            category=normalize_category(raw.get("category")),
            source=coalesce(source if isinstance(source, str) else None, self.id),
        )
