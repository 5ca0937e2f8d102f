"""Cache layer for URL shortener.

The cache is an optimization, never a dependency: no implementation raises
to its caller. Failures are logged and degrade to a miss or a no-op.
"""

import logging
import time
from abc import ABC, abstractmethod
from typing import Callable, Dict, Optional, Tuple

import redis.asyncio as redis


DEFAULT_TTL_SECONDS = 3600


class URLCacheBase(ABC):
    """Short code -> long URL cache."""

    def __init__(self, ttl_seconds: int = DEFAULT_TTL_SECONDS, logger: Optional[logging.Logger] = None):
        self.ttl_seconds = ttl_seconds
        self.logger = logger or logging.getLogger(__name__)

    @abstractmethod
    async def get(self, short_code: str) -> Optional[str]:
        """Return the cached long URL, or None on a miss."""

    @abstractmethod
    async def set(self, short_code: str, long_url: str, ttl: Optional[int] = None) -> bool:
        """Cache a mapping. Returns True if it was stored."""

    @abstractmethod
    async def evict(self, short_code: str) -> bool:
        """Remove a mapping. Returns True if the eviction went through."""

    async def health_check(self) -> bool:
        return True

    async def close(self) -> None:
        pass


class NullCache(URLCacheBase):
    """Cache that never stores anything."""

    async def get(self, short_code: str) -> Optional[str]:
        return None

    async def set(self, short_code: str, long_url: str, ttl: Optional[int] = None) -> bool:
        return False

    async def evict(self, short_code: str) -> bool:
        return True


class InMemoryCache(URLCacheBase):
    """Process-local cache with per-entry TTL."""

    def __init__(
        self,
        ttl_seconds: int = DEFAULT_TTL_SECONDS,
        clock: Callable[[], float] = time.monotonic,
        logger: Optional[logging.Logger] = None,
    ):
        super().__init__(ttl_seconds=ttl_seconds, logger=logger)
        self._clock = clock
        self._entries: Dict[str, Tuple[str, float]] = {}

    async def get(self, short_code: str) -> Optional[str]:
        entry = self._entries.get(short_code)
        if entry is None:
            return None

        long_url, expires_at = entry
        if self._clock() >= expires_at:
            self._entries.pop(short_code, None)
            return None
        return long_url

    async def set(self, short_code: str, long_url: str, ttl: Optional[int] = None) -> bool:
        ttl = ttl or self.ttl_seconds
        self._entries[short_code] = (long_url, self._clock() + ttl)
        return True

    async def evict(self, short_code: str) -> bool:
        self._entries.pop(short_code, None)
        return True

    async def close(self) -> None:
        self._entries.clear()


class RedisCache(URLCacheBase):
    """Redis cache for URL mappings."""

    KEY_PREFIX = "shortlinks:url:"

    def __init__(
        self,
        redis_url: str,
        ttl_seconds: int = DEFAULT_TTL_SECONDS,
        timeout_seconds: float = 1.0,
        logger: Optional[logging.Logger] = None,
        client: Optional[redis.Redis] = None,
    ):
        """Initialize Redis cache.

        Args:
            redis_url: Redis connection URL (e.g., redis://localhost:6379/0)
            ttl_seconds: Default TTL for cached items
            timeout_seconds: Socket connect/read timeout for every command
            logger: Optional logger instance
            client: Pre-built client, mainly for tests
        """
        super().__init__(ttl_seconds=ttl_seconds, logger=logger)
        self.redis_url = redis_url
        self.timeout_seconds = timeout_seconds
        self.client: Optional[redis.Redis] = client

        self.logger.info(f"Redis cache enabled with TTL={ttl_seconds}s")

    async def connect(self) -> None:
        """Connect to Redis.

        A failed ping is logged and the client kept: every later command
        degrades to a miss until Redis comes back.
        """
        if self.client is None:
            self.client = redis.from_url(
                self.redis_url,
                encoding="utf-8",
                decode_responses=True,
                socket_timeout=self.timeout_seconds,
                socket_connect_timeout=self.timeout_seconds,
            )

        try:
            await self.client.ping()
            self.logger.info("Connected to Redis")
        except Exception as e:
            self.logger.warning(f"Redis not reachable at startup: {e}")

    def get_cache_key(self, short_code: str) -> str:
        """Generate cache key for short code."""
        return f"{self.KEY_PREFIX}{short_code}"

    async def get(self, short_code: str) -> Optional[str]:
        if self.client is None:
            return None

        try:
            return await self.client.get(self.get_cache_key(short_code))
        except Exception as e:
            self.logger.warning(f"Cache get error for {short_code}: {e}")
            return None

    async def set(self, short_code: str, long_url: str, ttl: Optional[int] = None) -> bool:
        if self.client is None:
            return False

        try:
            await self.client.setex(self.get_cache_key(short_code), ttl or self.ttl_seconds, long_url)
            return True
        except Exception as e:
            self.logger.warning(f"Cache set error for {short_code}: {e}")
            return False

    async def evict(self, short_code: str) -> bool:
        if self.client is None:
            return False

        try:
            await self.client.delete(self.get_cache_key(short_code))
            return True
        except Exception as e:
            self.logger.warning(f"Cache evict error for {short_code}: {e}")
            return False

    async def health_check(self) -> bool:
        if self.client is None:
            return False

        try:
            return bool(await self.client.ping())
        except Exception:
            return False

    async def close(self) -> None:
        """Close Redis connection."""
        if self.client:
            await self.client.aclose()
            self.logger.info("Redis connection closed")
