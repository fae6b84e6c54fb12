"""Sukebei adapter — Sukebei index via nyaaapi.onrender.com/sukebei.

Unlike the Nyaa endpoint, results are wrapped in an envelope and sizes are
human-readable strings::

    {"count": 1, "data": [{"title": "...", "magnet": "magnet:?...",
      "seeders": 5, "leechers": 0, "size": "2.0 GiB",
      "time": "2024-03-01 12:00", "category": "Real Life - Videos"}]}

The info-hash is read from the magnet link.
"""

from __future__ import annotations

from typing import Any

from seedsift.adapters.base.exceptions import QueryError
from seedsift.adapters.base.remote import RemoteJSONAdapter
from seedsift.models.result import SearchResult
from seedsift.utils.parsing import parse_datetime, parse_optional_int, parse_size_string

DEFAULT_ENDPOINT = "https://nyaaapi.onrender.com/sukebei"


class SukebeiAdapter(RemoteJSONAdapter):
    """Search adapter for the Sukebei JSON API."""

    def __init__(
        self,
        endpoint: str = DEFAULT_ENDPOINT,
        trackers: list[str] | None = None,
        timeout: float = 10.0,
    ) -> None:
        super().__init__(endpoint=endpoint, trackers=trackers, timeout=timeout)

    @property
    def id(self) -> str:
        return "sukebei"

    @property
    def name(self) -> str:
        return "Sukebei"

    @property
    def description(self) -> str:
        return "Searches Sukebei through the nyaaapi.onrender.com JSON API"

    def extract_records(self, payload: Any) -> list[Any]:
        if not isinstance(payload, dict):
            raise QueryError(f"{self.name} returned an unexpected payload: expected a JSON object")
        data = payload.get("data")
        if data is None:
            return []
        if not isinstance(data, list):
            raise QueryError(f"{self.name} returned an unexpected 'data' field")
        return data

    def map_record(self, raw: dict[str, Any]) -> SearchResult | None:
        # No info_hash field here: records without a magnet cannot be used
        return self.build_result(
            title=raw.get("title"),
            magnet=raw.get("magnet"),
            seeders=parse_optional_int(raw.get("seeders")),
            leechers=parse_optional_int(raw.get("leechers")),
            size=parse_size_string(raw.get("size")),
            uploaded=parse_datetime(raw.get("time")),
            category=raw.get("category"),
        )
