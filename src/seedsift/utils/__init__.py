"""Shared helpers: magnet codec, best-effort parsing and locking."""
