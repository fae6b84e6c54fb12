"""API dependencies — Hands the running engine to the endpoints.

The lifespan in ``seedsift.api.app`` builds one ``SeedSiftEngine`` (registry,
history store and adapters) and publishes it here with ``set_engine``. Endpoints
take it through ``Depends(get_engine)``, and tests swap in their own engine the
same way.
"""

from __future__ import annotations

from seedsift.core.engine import SeedSiftEngine

# Set by the application lifespan, cleared again on shutdown
_engine: SeedSiftEngine | None = None


def set_engine(engine: SeedSiftEngine | None) -> None:
    """Publish the engine endpoints should use, or None to unpublish it."""
    global _engine
    _engine = engine


def get_engine() -> SeedSiftEngine:
    """FastAPI dependency returning the published engine.

    Raises:
        RuntimeError: If no engine is published, i.e. the app was used
            outside its lifespan and no test engine was set.
    """
    if _engine is None:
        raise RuntimeError("SeedSift engine not initialized. Is the server running?")
    return _engine
