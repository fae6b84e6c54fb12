"""Nyaa adapter — Anime-focused torrent index via nyaaapi.onrender.com.

The API returns a flat JSON array with numeric counts and sizes::

    [{"name": "...", "info_hash": "...", "magnet": "magnet:?...",
      "seeders": 120, "leechers": 4, "size": 734003200,
      "date": "2024-03-01 12:00:00", "category": "Anime - English-translated"}]

Either ``magnet`` or ``info_hash`` may be missing; the other is derived.
"""

from __future__ import annotations

from typing import Any

from seedsift.adapters.base.exceptions import QueryError
from seedsift.adapters.base.remote import RemoteJSONAdapter
from seedsift.models.result import SearchResult
from seedsift.utils.parsing import parse_datetime, parse_optional_int

DEFAULT_ENDPOINT = "https://nyaaapi.onrender.com/nyaa"


class NyaaAdapter(RemoteJSONAdapter):
    """Search adapter for the Nyaa JSON API."""

    def __init__(
        self,
        endpoint: str = DEFAULT_ENDPOINT,
        trackers: list[str] | None = None,
        timeout: float = 10.0,
    ) -> None:
        super().__init__(endpoint=endpoint, trackers=trackers, timeout=timeout)

    @property
    def id(self) -> str:
        return "nyaa"

    @property
    def name(self) -> str:
        return "Nyaa"

    @property
    def description(self) -> str:
        return "Searches Nyaa through the nyaaapi.onrender.com JSON API"

    def extract_records(self, payload: Any) -> list[Any]:
        if not isinstance(payload, list):
            raise QueryError(f"{self.name} returned an unexpected payload: expected a JSON array")
        return payload

    def map_record(self, raw: dict[str, Any]) -> SearchResult | None:
        return self.build_result(
            title=raw.get("name"),
            magnet=raw.get("magnet"),
            info_hash=raw.get("info_hash"),
            seeders=parse_optional_int(raw.get("seeders")),
            leechers=parse_optional_int(raw.get("leechers")),
            size=parse_optional_int(raw.get("size")),
            uploaded=parse_datetime(raw.get("date")),
            category=raw.get("category"),
        )
