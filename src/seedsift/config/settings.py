"""Application settings — Pydantic-based configuration with YAML and env var support.

Configuration is loaded from (in order of precedence):
  1. YAML config file (if specified)
  2. Environment variables (SEEDSIFT_ prefix)
  3. Default values
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings

DEFAULT_TRACKERS = [
    "udp://tracker.opentrackr.org:1337/announce",
    "udp://open.stealth.si:80/announce",
    "udp://tracker.tiny-vps.com:6969/announce",
]


class ServerSettings(BaseModel):
    """HTTP server configuration."""

    host: str = Field(default="0.0.0.0", description="Server bind address")
    port: int = Field(default=3001, description="Server port")
    workers: int = Field(default=1, description="Number of worker processes")


class AdapterConfig(BaseModel):
    """Configuration for a single search adapter."""

    enabled: bool = Field(default=True, description="Whether this adapter is registered")
    endpoint: str | None = Field(default=None, description="Endpoint URL (remote adapters)")
    data_file: str | None = Field(default=None, description="Dataset path (local adapters)")
    timeout: float | None = Field(default=None, gt=0, description="Per-request timeout in seconds")
    extra: dict[str, Any] = Field(default_factory=dict, description="Adapter-specific options")


def _default_adapters() -> dict[str, AdapterConfig]:
    return {
        "apibay": AdapterConfig(),
        "nyaa": AdapterConfig(),
        "sukebei": AdapterConfig(),
        "sample": AdapterConfig(data_file="data/sample_results.json"),
    }


class SearchSettings(BaseModel):
    """Search behavior configuration."""

    default_adapter: str = Field(default="apibay", description="Default search adapter id")
    fallback_adapter: str = Field(default="sample", description="Fallback adapter id (empty = none)")
    expected_page_size: int = Field(
        default=10,
        ge=1,
        description="A page with at least this many results is assumed to have a next page",
    )
    trackers: list[str] = Field(
        default_factory=lambda: list(DEFAULT_TRACKERS),
        description="Trackers appended to synthesized magnet links",
    )
    adapters: dict[str, AdapterConfig] = Field(
        default_factory=_default_adapters,
        description="Adapter configurations keyed by adapter id",
    )

    @field_validator("trackers", mode="before")
    @classmethod
    def _parse_trackers(cls, v: Any) -> list[str]:
        """Parse trackers from a JSON string or comma-separated env var, or a list."""
        if isinstance(v, str):
            import json

            try:
                parsed = json.loads(v)
                if isinstance(parsed, list):
                    return [str(t) for t in parsed]
            except (json.JSONDecodeError, TypeError):
                pass
            return [t.strip() for t in v.split(",") if t.strip()]
        return list(v)


class HistorySettings(BaseModel):
    """Search history configuration."""

    file: str = Field(default="data/search_history.json", description="History JSON file path")
    max_entries: int = Field(default=50, ge=1, description="Maximum number of history entries")
    max_results_per_entry: int = Field(default=20, ge=1, description="Maximum results stored per entry")


class ObservabilitySettings(BaseModel):
    """Observability configuration."""

    log_level: str = Field(default="info", description="Log level: debug, info, warning, error")
    log_format: str = Field(default="json", description="Log format: json, console")


class Settings(BaseSettings):
    """Root application settings.

    Configuration is loaded from environment variables with the SEEDSIFT_ prefix.
    Nested settings use double underscores: SEEDSIFT_SERVER__PORT=9090

    Example:
        SEEDSIFT_SERVER__PORT=9090
        SEEDSIFT_SEARCH__DEFAULT_ADAPTER=nyaa
        SEEDSIFT_SEARCH__FALLBACK_ADAPTER=sample
        SEEDSIFT_HISTORY__FILE=/var/lib/seedsift/history.json
    """

    model_config = {
        "env_prefix": "SEEDSIFT_",
        "env_nested_delimiter": "__",
        "case_sensitive": False,
        "env_file": ".env",
        "env_file_encoding": "utf-8",
    }

    # Application metadata
    app_name: str = Field(default="SeedSift", description="Application name")
    debug: bool = Field(default=False, description="Debug mode")

    # Component settings
    server: ServerSettings = Field(default_factory=ServerSettings)
    search: SearchSettings = Field(default_factory=SearchSettings)
    history: HistorySettings = Field(default_factory=HistorySettings)
    observability: ObservabilitySettings = Field(default_factory=ObservabilitySettings)

    @classmethod
    def from_yaml(cls, path: str | Path) -> Settings:
        """Load settings from a YAML configuration file.

        Values from the YAML file override environment variables and defaults.
        The file must hold a mapping shaped like ``Settings`` (``server``,
        ``search``, ``history``, ``observability``); an empty file yields the
        defaults.

        Args:
            path: Path to the YAML config file.

        Returns:
            Populated Settings instance.

        Raises:
            FileNotFoundError: If the file does not exist.
            ValueError: If the top level of the file is not a mapping.
        """
        config_path = Path(path)
        if not config_path.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")

        with open(config_path) as f:
            data = yaml.safe_load(f) or {}
        if not isinstance(data, dict):
            raise ValueError(f"Config file {config_path} must contain a mapping, got {type(data).__name__}")

        return cls(**data)
