"""Base adapter interface — Abstract classes for magnet search backends."""

from seedsift.adapters.base.adapter import SearchAdapter
from seedsift.adapters.base.registry import AdapterRegistry
from seedsift.adapters.base.remote import RemoteJSONAdapter

__all__ = ["AdapterRegistry", "RemoteJSONAdapter", "SearchAdapter"]
