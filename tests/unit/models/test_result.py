"""Tests for the normalized result and response models."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta, timezone

import pytest
from pydantic import ValidationError

from seedsift.models.response import SearchMeta, SearchResponse
from seedsift.models.result import SearchResult


class TestSearchResult:
    def test_size_label_follows_size(self) -> None:
        result = SearchResult(title="x", size=1536)
        assert result.size_label == "1.5 KB"

    def test_size_label_cannot_be_forced(self) -> None:
        result = SearchResult(title="x", size=None, size_label="9 GB")
        assert result.size_label == ""

    def test_info_hash_upper_cased(self) -> None:
        assert SearchResult(title="x", info_hash=" abcdef ").info_hash == "ABCDEF"
        assert SearchResult(title="x", info_hash="  ").info_hash is None

    def test_uploaded_normalized_to_utc(self) -> None:
        tz = timezone(timedelta(hours=9))
        result = SearchResult(title="x", uploaded=datetime(2024, 1, 1, 9, 0, tzinfo=tz))
        assert result.uploaded == datetime(2024, 1, 1, 0, 0, tzinfo=UTC)
        assert result.uploaded.tzinfo == UTC

    def test_uploaded_out_of_utc_range_rejected(self) -> None:
        tz = timezone(timedelta(hours=5))
        with pytest.raises(ValidationError, match="out of range"):
            SearchResult(title="x", uploaded=datetime(1, 1, 1, tzinfo=tz))

    def test_defaults(self) -> None:
        result = SearchResult(title="x")
        assert result.category == "Unknown"
        assert result.trackers == []
        assert result.seeders is None

    def test_serializes_camel_case(self) -> None:
        data = SearchResult(title="x", info_hash="ab", size=10).model_dump(by_alias=True)
        assert data["infoHash"] == "AB"
        assert data["sizeLabel"] == "10 B"
        assert "info_hash" not in data

    def test_accepts_camel_and_snake_input(self) -> None:
        assert SearchResult.model_validate({"title": "x", "infoHash": "ab"}).info_hash == "AB"
        assert SearchResult.model_validate({"title": "x", "info_hash": "cd"}).info_hash == "CD"


class TestSearchResponse:
    def test_meta_defaults(self) -> None:
        meta = SearchMeta(mode="search")
        assert meta.page == 1
        assert meta.fallback_used is False
        assert meta.adapter_error is None
        assert meta.result_count == 0

    def test_page_must_be_positive(self) -> None:
        with pytest.raises(ValidationError):
            SearchMeta(mode="search", page=0)

    def test_mode_is_restricted(self) -> None:
        with pytest.raises(ValidationError):
            SearchMeta(mode="browse")  # type: ignore[arg-type]

    def test_wire_shape(self) -> None:
        response = SearchResponse(
            query="ubuntu",
            results=[SearchResult(title="Ubuntu")],
            meta=SearchMeta(mode="search", adapter="apibay", result_count=1, has_next_page=False),
        )
        data = response.model_dump(mode="json", by_alias=True)
        assert data["meta"]["resultCount"] == 1
        assert data["meta"]["hasNextPage"] is False
        assert data["meta"]["fallbackUsed"] is False
        assert data["results"][0]["title"] == "Ubuntu"
