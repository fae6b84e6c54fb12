"""Search response models — What the API returns and the history log stores.

A ``SearchResponse`` always comes back with HTTP 200 once the request itself
is well-formed. Adapter and fallback failures are reported inside
``SearchMeta`` rather than as transport errors.
"""

from __future__ import annotations

from typing import Literal

from pydantic import Field

from seedsift.models.result import SearchResult, WireModel

SearchMode = Literal["magnet", "search"]


# ═══════════════════════════════════════════════════════════════════════════════
# Diagnostics envelope
# ═══════════════════════════════════════════════════════════════════════════════


class SearchMeta(WireModel):
    """Diagnostic metadata for one executed search.

    ``adapter_error`` being set does not imply ``results`` is empty: when the
    fallback adapter succeeds the primary error is kept for diagnostics.
    """

    mode: SearchMode = Field(description="'magnet' for decoded links, 'search' for adapter queries")

    # Primary adapter
    adapter: str | None = Field(default=None, description="Id of the adapter that was queried")
    adapter_name: str | None = Field(default=None, description="Display name of that adapter")
    adapter_description: str | None = Field(default=None, description="Description of that adapter")
    adapter_endpoint: str | None = Field(default=None, description="Endpoint of that adapter")
    result_count: int = Field(default=0, description="Number of results in the response")
    adapter_error: str | None = Field(default=None, description="Non-fatal error from the primary adapter")

    # Fallback
    fallback_used: bool = Field(default=False, description="Whether fallback results were returned")
    fallback_adapter: str | None = Field(default=None, description="Id of the fallback adapter, if consulted")
    fallback_adapter_name: str | None = Field(default=None, description="Display name of the fallback adapter")
    fallback_adapter_error: str | None = Field(default=None, description="Error from the fallback adapter")

    # Pagination
    page: int = Field(default=1, ge=1, description="Requested page (1-based)")
    has_prev_page: bool = Field(default=False, description="Whether a previous page exists")
    has_next_page: bool = Field(default=False, description="Heuristic: a full page came back")


class SearchResponse(WireModel):
    """Normalized response for one search request."""

    query: str = Field(description="The query as received (trimmed)")
    results: list[SearchResult] = Field(default_factory=list, description="Normalized results in adapter order")
    meta: SearchMeta = Field(description="Diagnostic metadata")


# ═══════════════════════════════════════════════════════════════════════════════
# Adapter listing
# ═══════════════════════════════════════════════════════════════════════════════


class AdapterInfo(WireModel):
    """Public descriptor of a registered adapter, built fresh on every listing."""

    id: str = Field(description="Stable adapter id")
    name: str = Field(description="Display name")
    description: str = Field(default="", description="Short description")
    endpoint: str = Field(default="", description="Informational endpoint or data location")
    is_default: bool = Field(default=False, description="Whether this is the default adapter")
    is_fallback: bool = Field(default=False, description="Whether this is the fallback adapter")
