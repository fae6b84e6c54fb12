"""History Store — Bounded, crash-safe log of executed searches.

The store keeps the most recent searches newest-first in memory and mirrors
them to a pretty-printed JSON file. Every write serializes the whole list to
a temporary file in the same directory and atomically replaces the real
file, so a reader (or a restarted process) only ever sees a complete old
version or a complete new version.

All mutations happen under one lock; ``record`` is synchronous and meant to
be called from a worker thread when used from async code.
"""

from __future__ import annotations

import logging
import os
import tempfile
import threading
import time
from datetime import UTC, datetime
from pathlib import Path

from pydantic import TypeAdapter, ValidationError

from seedsift.errors import StorageError
from seedsift.models.history import HistoryEntry
from seedsift.models.response import SearchResponse

logger = logging.getLogger(__name__)

DEFAULT_MAX_ENTRIES = 50
DEFAULT_MAX_RESULTS_PER_ENTRY = 20

_entries_adapter = TypeAdapter(list[HistoryEntry])


class HistoryStore:
    """File-backed store of past search responses.

    Args:
        path: Location of the JSON history file.
        max_entries: Maximum number of entries kept (oldest dropped first).
        max_results_per_entry: Maximum number of results kept per entry.

    Raises:
        StorageError: If an existing history file cannot be read or parsed,
            or a missing one cannot be created.
    """

    def __init__(
        self,
        path: str | Path,
        max_entries: int = DEFAULT_MAX_ENTRIES,
        max_results_per_entry: int = DEFAULT_MAX_RESULTS_PER_ENTRY,
    ) -> None:
        self.path = Path(path)
        self.max_entries = max_entries if max_entries > 0 else DEFAULT_MAX_ENTRIES
        self.max_results_per_entry = (
            max_results_per_entry if max_results_per_entry > 0 else DEFAULT_MAX_RESULTS_PER_ENTRY
        )
        self._lock = threading.Lock()
        self._entries: list[HistoryEntry] = []
        self._last_id = 0
        self._load()

    # ── Public API ───────────────────────────────────────────────────────

    def record(self, response: SearchResponse) -> HistoryEntry:
        """Persist a search response as the newest history entry.

        Results beyond the per-entry cap are dropped and ``meta.result_count``
        is set to the number actually stored.

        Returns:
            A copy of the stored entry.

        Raises:
            StorageError: If the history file cannot be written. In-memory
                state is left as it was before the call.
        """
        results = [r.model_copy(deep=True) for r in response.results[: self.max_results_per_entry]]
        meta = response.meta.model_copy(deep=True, update={"result_count": len(results)})

        with self._lock:
            entry = HistoryEntry(
                id=self._next_id(),
                query=response.query,
                created_at=datetime.now(UTC),
                mode=meta.mode,
                meta=meta,
                results=results,
            )
            entries = [entry, *self._entries][: self.max_entries]
            self._persist(entries)
            self._entries = entries

        logger.debug("Recorded history entry %s for query=%s", entry.id, entry.query)
        return entry.model_copy(deep=True)

    def list(self) -> list[HistoryEntry]:
        """Return deep copies of all entries, newest first."""
        with self._lock:
            return [entry.model_copy(deep=True) for entry in self._entries]

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    # ── Internals ────────────────────────────────────────────────────────

    def _next_id(self) -> str:
        # Nanosecond clock, forced strictly increasing so ids never collide
        self._last_id = max(time.time_ns(), self._last_id + 1)
        return str(self._last_id)

    def _load(self) -> None:
        with self._lock:
            try:
                data = self.path.read_bytes()
            except FileNotFoundError:
                logger.info("History file %s not found, creating an empty one", self.path)
                self._persist([])
                return
            except OSError as e:
                raise StorageError(f"Failed to read history file {self.path}: {e}") from e

            if not data.strip():
                self._entries = []
                return

            try:
                entries = _entries_adapter.validate_json(data)
            except ValidationError as e:
                raise StorageError(f"Failed to parse history file {self.path}: {e}") from e

            self._entries = entries[: self.max_entries]
            for entry in self._entries:
                if entry.id.isdigit():
                    self._last_id = max(self._last_id, int(entry.id))
            logger.info("Loaded %d history entries from %s", len(self._entries), self.path)

    def _persist(self, entries: list[HistoryEntry]) -> None:
        """Atomically replace the history file with *entries*."""
        try:
            payload = _entries_adapter.dump_json(entries, indent=2, by_alias=True)
        except ValueError as e:
            raise StorageError(f"Failed to encode history: {e}") from e

        tmp_name: str | None = None
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=self.path.parent,
                prefix=f".{self.path.name}.",
                suffix=".tmp",
            )
            with os.fdopen(fd, "wb") as f:
                f.write(payload)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_name, self.path)
            tmp_name = None
        except OSError as e:
            raise StorageError(f"Failed to write history file {self.path}: {e}") from e
        finally:
            if tmp_name is not None:
                try:
                    os.unlink(tmp_name)
                except OSError:
                    logger.warning("Could not remove temporary history file %s", tmp_name)
