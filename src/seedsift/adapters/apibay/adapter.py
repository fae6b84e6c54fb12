"""APIBay adapter — The Pirate Bay's public JSON search API.

``apibay.org/q.php`` answers with a flat JSON array. Every value is a
string, including counts and sizes, and ``added`` is a UNIX timestamp::

    [{"name": "...", "info_hash": "...", "seeders": "12", "leechers": "3",
      "size": "1073741824", "added": "1700000000", "category": "207"}]

Records carry no magnet link, so one is built from the info-hash and the
configured tracker list.

Usage::

    adapter = ApiBayAdapter(trackers=["udp://tracker.opentrackr.org:1337/announce"])
    await adapter.initialize()
    results = await adapter.search("ubuntu", page=1)
"""

from __future__ import annotations

from typing import Any

from seedsift.adapters.base.exceptions import QueryError
from seedsift.adapters.base.remote import RemoteJSONAdapter
from seedsift.models.result import SearchResult
from seedsift.utils.parsing import parse_optional_int, parse_unix_timestamp

DEFAULT_ENDPOINT = "https://apibay.org/q.php"

# apibay answers a search with no hits with one placeholder record carrying this hash
NO_RESULTS_HASH = "0" * 40


class ApiBayAdapter(RemoteJSONAdapter):
    """Search adapter for apibay.org."""

    extra_params = {"cat": "0"}

    def __init__(
        self,
        endpoint: str = DEFAULT_ENDPOINT,
        trackers: list[str] | None = None,
        timeout: float = 8.0,
    ) -> None:
        super().__init__(endpoint=endpoint, trackers=trackers, timeout=timeout)

    @property
    def id(self) -> str:
        return "apibay"

    @property
    def name(self) -> str:
        return "The Pirate Bay (apibay.org)"

    @property
    def description(self) -> str:
        return "Searches the public apibay.org JSON API"

    def extract_records(self, payload: Any) -> list[Any]:
        if not isinstance(payload, list):
            raise QueryError(f"{self.name} returned an unexpected payload: expected a JSON array")
        return payload

    def map_record(self, raw: dict[str, Any]) -> SearchResult | None:
        if str(raw.get("info_hash") or "").strip() == NO_RESULTS_HASH:
            return None
        return self.build_result(
            title=raw.get("name"),
            info_hash=raw.get("info_hash"),
            seeders=parse_optional_int(raw.get("seeders")),
            leechers=parse_optional_int(raw.get("leechers")),
            size=parse_optional_int(raw.get("size")),
            uploaded=parse_unix_timestamp(raw.get("added")),
            category=raw.get("category"),
        )
