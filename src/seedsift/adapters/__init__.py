"""Search adapter layer — Pluggable connectors for magnet search backends.

Built-in adapters:
  - apibay: The Pirate Bay public JSON API (apibay.org)
  - nyaa: Nyaa JSON API (nyaaapi.onrender.com/nyaa)
  - sukebei: Sukebei JSON API (nyaaapi.onrender.com/sukebei)
  - sample: Local JSON dataset, matched in memory

Implement ``SearchAdapter`` (or ``RemoteJSONAdapter`` for HTTP APIs) to
connect your own search backend.
"""
