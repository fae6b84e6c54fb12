"""Tests for the local sample-data adapter."""

from __future__ import annotations

import asyncio
import json
from pathlib import Path
from typing import Any

import pytest

from seedsift.adapters.base.exceptions import ConfigurationError
from seedsift.adapters.sample.adapter import PAGE_SIZE, SampleAdapter

# ── Helpers ──────────────────────────────────────────────────────────────────


def _write_dataset(path: Path, records: list[dict[str, Any]]) -> Path:
    path.write_text(json.dumps(records), encoding="utf-8")
    return path


def _record(i: int, title: str = "Debian") -> dict[str, Any]:
    return {
        "title": f"{title} {i}",
        "infoHash": f"{i:040x}",
        "seeders": i,
        "leechers": 1,
        "size": 1024 * 1024,
        "uploaded": "2024-01-01T00:00:00Z",
        "category": "Software",
    }


# ── Fixtures ──────────────────────────────────────────────────────────────────


@pytest.fixture
def big_dataset(tmp_path: Path) -> Path:
    """25 matching records plus one that never matches."""
    records = [_record(i) for i in range(25)]
    records.append(_record(99, title="Something else"))
    return _write_dataset(tmp_path / "sample.json", records)


# ── Loading ──────────────────────────────────────────────────────────────────


class TestSampleLoading:
    def test_loads_bundled_dataset(self, sample_data_file: Path) -> None:
        adapter = SampleAdapter(sample_data_file)
        assert adapter.id == "sample"
        assert adapter.endpoint == "local-data"

    def test_missing_file_raises(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigurationError, match="Failed to load sample data"):
            SampleAdapter(tmp_path / "nope.json")

    def test_invalid_json_raises(self, tmp_path: Path) -> None:
        path = tmp_path / "bad.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(ConfigurationError):
            SampleAdapter(path)

    def test_non_array_raises(self, tmp_path: Path) -> None:
        path = _write_dataset(tmp_path / "obj.json", [])
        path.write_text('{"title": "x"}', encoding="utf-8")
        with pytest.raises(ConfigurationError, match="JSON array"):
            SampleAdapter(path)

    async def test_negative_counts_mean_unknown(self, tmp_path: Path) -> None:
        record = _record(1) | {"seeders": -1, "leechers": -5, "source": ""}
        adapter = SampleAdapter(_write_dataset(tmp_path / "s.json", [record]))
        [result] = await adapter.search("debian")
        assert result.seeders is None
        assert result.leechers is None
        assert result.source == "sample"
        assert result.size_label == "1.0 MB"

    def test_mistyped_record_raises_configuration_error(self, tmp_path: Path) -> None:
        path = _write_dataset(tmp_path / "typed.json", [{"title": "x", "infoHash": 123}])
        with pytest.raises(ConfigurationError, match="Invalid record"):
            SampleAdapter(path)

    def test_string_trackers_rejected(self, tmp_path: Path) -> None:
        record = _record(1) | {"trackers": "udp://tracker.test:1337"}
        with pytest.raises(ConfigurationError, match="trackers must be a list"):
            SampleAdapter(_write_dataset(tmp_path / "trackers.json", [record]))

    async def test_non_string_source_falls_back_to_adapter_id(self, tmp_path: Path) -> None:
        adapter = SampleAdapter(_write_dataset(tmp_path / "src.json", [_record(1) | {"source": 7}]))
        [result] = await adapter.search("debian")
        assert result.source == "sample"


# ── Search ───────────────────────────────────────────────────────────────────


class TestSampleSearch:
    async def test_case_insensitive_title_match(self, sample_data_file: Path) -> None:
        adapter = SampleAdapter(sample_data_file)
        results = await adapter.search("UBUNTU")
        assert [r.title for r in results] == [
            "Ubuntu 24.04 LTS Desktop amd64",
            "Ubuntu 24.04 LTS Server amd64",
        ]

    async def test_matches_info_hash(self, sample_data_file: Path) -> None:
        adapter = SampleAdapter(sample_data_file)
        results = await adapter.search("dd8255ecdc7ca55f")
        assert [r.title for r in results] == ["Big Buck Bunny 1080p"]

    async def test_no_match(self, sample_data_file: Path) -> None:
        adapter = SampleAdapter(sample_data_file)
        assert await adapter.search("no-such-torrent-anywhere") == []

    async def test_pagination(self, big_dataset: Path) -> None:
        adapter = SampleAdapter(big_dataset)

        first = await adapter.search("debian", page=1)
        third = await adapter.search("debian", page=3)
        beyond = await adapter.search("debian", page=4)

        assert len(first) == PAGE_SIZE
        assert first[0].title == "Debian 0"
        assert [r.title for r in third] == [f"Debian {i}" for i in range(20, 25)]
        assert beyond == []

    async def test_results_are_independent_copies(self, big_dataset: Path) -> None:
        adapter = SampleAdapter(big_dataset)
        [first, *_] = await adapter.search("debian 1")
        first.title = "mutated"
        first.trackers.append("udp://mutated")

        [again, *_] = await adapter.search("debian 1")
        assert again.title == "Debian 1"
        assert again.trackers == []

    async def test_cancellation_stops_scan(self, big_dataset: Path) -> None:
        adapter = SampleAdapter(big_dataset)
        task = asyncio.create_task(adapter.search("debian"))
        await asyncio.sleep(0)
        task.cancel()
        with pytest.raises(asyncio.CancelledError):
            await task
