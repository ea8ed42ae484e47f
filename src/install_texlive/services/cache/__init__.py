"""Cache storage services."""

from .store import CacheStore, LocalCacheStore

__all__ = ["CacheStore", "LocalCacheStore"]
