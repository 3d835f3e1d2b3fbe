from .store import CacheEntry, CacheSnapshot, CacheStore, FileCacheStore, MemoryCacheStore
from .view import DEFAULT_TTL, CachedView

__all__ = [
    "CacheEntry",
    "CacheSnapshot",
    "CacheStore",
    "FileCacheStore",
    "MemoryCacheStore",
    "CachedView",
    "DEFAULT_TTL",
]
