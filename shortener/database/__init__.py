"""Store and cache layer for the shortlinks service."""

from .base import URLStoreBase
from .cache import URLCacheBase, RedisCache, InMemoryCache, NullCache
from .memory import InMemoryURLStore
from .models import URLMapping
from .postgres import PostgresURLStore

__all__ = [
    "URLStoreBase",
    "URLCacheBase",
    "RedisCache",
    "InMemoryCache",
    "NullCache",
    "InMemoryURLStore",
    "URLMapping",
    "PostgresURLStore",
]
