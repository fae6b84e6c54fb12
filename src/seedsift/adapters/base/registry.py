"""Adapter Registry — Holds adapter instances and the default/fallback choice.

The registry is the single owner of adapter instances. Request handlers only
read from it (lookup, default, fallback, listing); startup code writes to it
(registration, configuration). Reads share a lock, writes take it
exclusively, so the registry can be used from the event loop and from
worker threads alike.
"""

from __future__ import annotations

import logging

from seedsift.adapters.base.adapter import SearchAdapter
from seedsift.adapters.base.exceptions import ConfigurationError
from seedsift.models.response import AdapterInfo
from seedsift.utils.locks import ReadWriteLock

logger = logging.getLogger(__name__)


class AdapterRegistry:
    """Registry for search adapter instances.

    The registry maintains:
      - Adapter instances keyed by id (last registration wins)
      - The default adapter id (exactly one once configured)
      - The fallback adapter id (at most one, never the default)

    Example:
        >>> registry = AdapterRegistry()
        >>> registry.register(ApiBayAdapter(trackers=[...]))
        >>> registry.register(SampleAdapter("data/sample_results.json"))
        >>> registry.configure("apibay", "sample")
        >>> registry.fallback(excluding_id="apibay").id
        'sample'
    """

    def __init__(self) -> None:
        self._lock = ReadWriteLock()
        self._adapters: dict[str, SearchAdapter] = {}
        self._default_id: str | None = None
        self._fallback_id: str | None = None

    def register(self, adapter: SearchAdapter) -> None:
        """Register an adapter, replacing any adapter with the same id.

        Args:
            adapter: The adapter instance to register.
        """
        with self._lock.write():
            if adapter.id in self._adapters:
                logger.warning("Overwriting existing adapter registration: %s", adapter.id)
            self._adapters[adapter.id] = adapter
        logger.info("Registered adapter: %s", adapter.id)

    def configure(self, default_id: str = "", fallback_id: str = "") -> None:
        """Designate the default and fallback adapters.

        Args:
            default_id: Id of the default adapter. If empty, the current
                default is kept, or the first registered adapter becomes
                the default.
            fallback_id: Id of the fallback adapter. Empty, or equal to the
                resolved default, means "no fallback".

        Raises:
            ConfigurationError: If no adapters are registered, or a non-empty
                id names an unregistered adapter. State is left unchanged.
        """
        with self._lock.write():
            if not self._adapters:
                raise ConfigurationError("No adapters registered")

            if default_id:
                if default_id not in self._adapters:
                    raise ConfigurationError(f"Default adapter '{default_id}' is not registered")
                resolved_default = default_id
            elif self._default_id in self._adapters:
                resolved_default = self._default_id
            else:
                resolved_default = next(iter(self._adapters))

            resolved_fallback: str | None = None
            if fallback_id and fallback_id != resolved_default:
                if fallback_id not in self._adapters:
                    raise ConfigurationError(f"Fallback adapter '{fallback_id}' is not registered")
                resolved_fallback = fallback_id
            elif fallback_id:
                logger.info(
                    "Fallback adapter '%s' is also the default adapter; running without fallback",
                    fallback_id,
                )

            self._default_id = resolved_default
            self._fallback_id = resolved_fallback

        logger.info("Adapters configured: default=%s, fallback=%s", resolved_default, resolved_fallback)

    def get(self, adapter_id: str) -> SearchAdapter | None:
        """Return the adapter registered under *adapter_id*, if any."""
        with self._lock.read():
            return self._adapters.get(adapter_id)

    def default_adapter(self) -> SearchAdapter | None:
        """Return the default adapter, or None if none is configured."""
        with self._lock.read():
            if self._default_id is None:
                return None
            return self._adapters.get(self._default_id)

    @property
    def default_id(self) -> str:
        """Id of the default adapter (empty string if not configured)."""
        with self._lock.read():
            return self._default_id or ""

    def fallback(self, excluding_id: str) -> SearchAdapter | None:
        """Return the fallback adapter unless it is *excluding_id*.

        Args:
            excluding_id: Id of the adapter that has just failed.
        """
        with self._lock.read():
            if self._fallback_id is None or self._fallback_id == excluding_id:
                return None
            return self._adapters.get(self._fallback_id)

    def list(self) -> list[AdapterInfo]:
        """Describe all adapters: the default first, the rest by id."""
        with self._lock.read():
            infos = [
                adapter.describe(
                    is_default=adapter_id == self._default_id,
                    is_fallback=adapter_id == self._fallback_id,
                )
                for adapter_id, adapter in self._adapters.items()
            ]
        return sorted(infos, key=lambda info: (not info.is_default, info.id))

    async def shutdown_all(self) -> None:
        """Gracefully shut down all registered adapters."""
        with self._lock.read():
            adapters = list(self._adapters.items())
        for adapter_id, adapter in adapters:
            try:
                await adapter.shutdown()
                logger.info("Shut down adapter: %s", adapter_id)
            except Exception:
                logger.warning("Error shutting down adapter: %s", adapter_id, exc_info=True)

    @property
    def registered_adapters(self) -> list[str]:
        """Ids of all registered adapters, in registration order."""
        with self._lock.read():
            return list(self._adapters)
