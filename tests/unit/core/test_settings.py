"""Tests for configuration loading."""

from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from seedsift.config.settings import DEFAULT_TRACKERS, Settings


class TestDefaults:
    def test_defaults(self) -> None:
        settings = Settings(_env_file=None)  # type: ignore[call-arg]
        assert settings.server.port == 3001
        assert settings.search.default_adapter == "apibay"
        assert settings.search.fallback_adapter == "sample"
        assert settings.search.trackers == DEFAULT_TRACKERS
        assert set(settings.search.adapters) == {"apibay", "nyaa", "sukebei", "sample"}
        assert settings.history.max_entries == 50
        assert settings.history.max_results_per_entry == 20

    def test_default_trackers_not_shared(self) -> None:
        first = Settings(_env_file=None)  # type: ignore[call-arg]
        first.search.trackers.append("udp://extra")
        assert Settings(_env_file=None).search.trackers == DEFAULT_TRACKERS  # type: ignore[call-arg]


class TestEnvironment:
    def test_nested_env_vars(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("SEEDSIFT_SERVER__PORT", "9090")
        monkeypatch.setenv("SEEDSIFT_SEARCH__DEFAULT_ADAPTER", "nyaa")
        monkeypatch.setenv("SEEDSIFT_HISTORY__MAX_ENTRIES", "5")
        settings = Settings(_env_file=None)  # type: ignore[call-arg]
        assert settings.server.port == 9090
        assert settings.search.default_adapter == "nyaa"
        assert settings.history.max_entries == 5

    def test_trackers_from_comma_separated_string(self) -> None:
        settings = Settings(_env_file=None, search={"trackers": "udp://a:1, udp://b:2 ,"})  # type: ignore[call-arg]
        assert settings.search.trackers == ["udp://a:1", "udp://b:2"]

    def test_trackers_from_json_string(self) -> None:
        settings = Settings(_env_file=None, search={"trackers": '["udp://a:1"]'})  # type: ignore[call-arg]
        assert settings.search.trackers == ["udp://a:1"]

    def test_history_limits_must_be_positive(self) -> None:
        with pytest.raises(ValidationError):
            Settings(_env_file=None, history={"max_entries": 0})  # type: ignore[call-arg]


class TestYaml:
    def test_from_yaml(self, tmp_path: Path) -> None:
        path = tmp_path / "seedsift-config.yaml"
        path.write_text(
            "server:\n"
            "  port: 8088\n"
            "search:\n"
            "  fallback_adapter: ''\n"
            "  adapters:\n"
            "    nyaa:\n"
            "      endpoint: https://mirror.test/nyaa\n"
            "      timeout: 4\n"
        )
        settings = Settings.from_yaml(path)
        assert settings.server.port == 8088
        assert settings.search.fallback_adapter == ""
        assert settings.search.adapters["nyaa"].endpoint == "https://mirror.test/nyaa"
        assert settings.search.adapters["nyaa"].timeout == 4.0

    def test_empty_yaml_gives_defaults(self, tmp_path: Path) -> None:
        path = tmp_path / "empty.yaml"
        path.write_text("")
        assert Settings.from_yaml(path).server.port == 3001

    def test_missing_yaml(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            Settings.from_yaml(tmp_path / "missing.yaml")

    def test_non_mapping_yaml_rejected(self, tmp_path: Path) -> None:
        path = tmp_path / "list.yaml"
        path.write_text("- apibay\n- nyaa\n")
        with pytest.raises(ValueError, match="must contain a mapping"):
            Settings.from_yaml(path)
