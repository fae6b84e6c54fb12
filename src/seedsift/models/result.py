"""Search result model — The normalized record every adapter produces.

Remote APIs, the local sample dataset and direct magnet links all map their
raw records to ``SearchResult`` so the API, the fallback logic and the
history log only ever deal with one shape.
"""

from __future__ import annotations

from datetime import UTC, datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

from seedsift.utils.parsing import UNKNOWN_CATEGORY, format_size


class WireModel(BaseModel):
    """Base model for everything serialized over HTTP or into the history file.

    Attributes are snake_case in Python and camelCase on the wire. Both forms
    are accepted on input.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class SearchResult(WireModel):
    """A single normalized search hit.

    ``None`` in the optional numeric fields means the source did not report
    the value; it is never interchangeable with ``0``.
    """

    title: str = Field(description="Display title of the torrent")
    magnet: str = Field(default="", description="Magnet URI (empty if not constructible)")
    info_hash: str | None = Field(default=None, description="Upper-case hex info-hash")
    trackers: list[str] = Field(default_factory=list, description="Announce URLs in order")
    seeders: int | None = Field(default=None, description="Seeder count, if reported")
    leechers: int | None = Field(default=None, description="Leecher count, if reported")
    size: int | None = Field(default=None, description="Total size in bytes, if reported")
    size_label: str = Field(default="", description="Human-readable size, derived from size")
    uploaded: datetime | None = Field(default=None, description="Upload time (UTC)")
    category: str = Field(default=UNKNOWN_CATEGORY, description="Free-text category")
    source: str = Field(default="", description="Id of the adapter that produced this result")

    @field_validator("info_hash")
    @classmethod
    def _upper_info_hash(cls, v: str | None) -> str | None:
        if v is None:
            return None
        v = v.strip()
        return v.upper() if v else None

    @field_validator("uploaded")
    @classmethod
    def _as_utc(cls, v: datetime | None) -> datetime | None:
        if v is None:
            return None
        if v.tzinfo is None:
            return v.replace(tzinfo=UTC)
        try:
            return v.astimezone(UTC)
        except OverflowError as e:
            raise ValueError(f"upload time out of range: {v.isoformat()}") from e

    @model_validator(mode="after")
    def _derive_size_label(self) -> SearchResult:
        # The label always follows the byte count so the two cannot disagree
        self.size_label = format_size(self.size)
        return self
