"""History entry model."""

from __future__ import annotations

from datetime import datetime

from pydantic import Field

from seedsift.models.response import SearchMeta, SearchMode
from seedsift.models.result import SearchResult, WireModel


class HistoryEntry(WireModel):
    """One recorded search, with its results capped by the history store."""

    id: str = Field(description="Unique id derived from the creation time in nanoseconds")
    query: str = Field(description="The query that was executed")
    created_at: datetime = Field(description="Creation time (UTC)")
    mode: SearchMode = Field(description="Search mode copied from the response metadata")
    meta: SearchMeta = Field(description="Response metadata; result_count matches the stored results")
    results: list[SearchResult] = Field(default_factory=list, description="Stored (capped) results")
