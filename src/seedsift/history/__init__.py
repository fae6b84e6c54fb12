"""Search history persistence."""

from seedsift.history.store import HistoryStore

__all__ = ["HistoryStore"]
