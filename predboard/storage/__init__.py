"""Storage and caching."""

from predboard.storage.cache import CacheStore, MemoryCache
from predboard.storage.json_storage import JsonStorage

__all__ = ["CacheStore", "MemoryCache", "JsonStorage"]
