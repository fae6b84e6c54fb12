"""SeedSift — Magnet search aggregator with adapter fallback and search history."""

__version__ = "0.1.0"
