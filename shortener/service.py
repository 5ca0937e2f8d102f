"""Business logic service for the URL shortener."""

import logging
from typing import Dict, List, Optional

from .common.validators import is_valid_url
from .database.base import URLStoreBase
from .database.cache import NullCache, URLCacheBase
from .database.models import URLMapping
from .errors import ConflictError, ExhaustedRetriesError, InvalidInputError, NotFoundError
from .shortcode import ShortCodeGenerator


class URLShortenerService:
    """Coordinates code generation, the store and the cache.

    The store is the system of record and its atomic unique insert is the
    only thing guarding create races; the cache is consulted first on
    resolve and is never allowed to fail a request.
    """

    def __init__(
        self,
        store: URLStoreBase,
        cache: Optional[URLCacheBase] = None,
        short_code_generator: Optional[ShortCodeGenerator] = None,
        logger: Optional[logging.Logger] = None,
        max_collision_retries: int = 5,
        cache_ttl_seconds: Optional[int] = None,
    ):
        """Initialize URL shortener service.

        Args:
            store: Store instance
            cache: Optional cache instance (no caching if omitted)
            short_code_generator: Optional short code generator
            logger: Optional logger
            max_collision_retries: Insert attempts before giving up
            cache_ttl_seconds: TTL override for cache writes
        """
        if max_collision_retries < 1:
            raise ValueError("max_collision_retries must be at least 1")

        self.store = store
        self.cache = cache if cache is not None else NullCache()
        self.generator = short_code_generator or ShortCodeGenerator()
        self.logger = logger or logging.getLogger(__name__)
        self.max_collision_retries = max_collision_retries
        self.cache_ttl_seconds = cache_ttl_seconds

    async def create_short_url(self, long_url: str) -> URLMapping:
        """Create a new short URL.

        Args:
            long_url: The original long URL

        Returns:
            The stored mapping

        Raises:
            InvalidInputError: If long_url is empty or malformed
            ExhaustedRetriesError: If every candidate code collided
            UnavailableError: If the store is unreachable
        """
        is_valid, error = is_valid_url(long_url)
        if not is_valid:
            raise InvalidInputError(f"Invalid URL: {error}")

        mapping = None
        attempt = 0
        while mapping is None:
            if attempt >= self.max_collision_retries:
                self.logger.error(
                    f"Short code space exhausted: {attempt} collisions in a row "
                    f"at length {self.generator.length}"
                )
                raise ExhaustedRetriesError(attempt)
            attempt += 1

            short_code = self.generator.generate(long_url)
            try:
                mapping = await self.store.insert(long_url, short_code)
            except ConflictError:
                self.logger.warning(
                    f"Short code collision on {short_code} "
                    f"(attempt {attempt}/{self.max_collision_retries})"
                )

        await self.cache.set(mapping.short_code, mapping.long_url, self.cache_ttl_seconds)

        self.logger.info(f"Created short URL: {mapping.short_code} -> {mapping.long_url}")
        return mapping

    async def resolve(self, short_code: str) -> str:
        """Get the long URL for a short code.

        Args:
            short_code: The short code to lookup

        Returns:
            The long URL

        Raises:
            NotFoundError: If no mapping exists
            UnavailableError: If the store is unreachable on a cache miss
        """
        if not short_code:
            raise NotFoundError(short_code)

        cached_url = await self.cache.get(short_code)
        if cached_url is not None:
            self.logger.debug(f"Cache hit for {short_code}")
            return cached_url

        self.logger.debug(f"Cache miss for {short_code}")
        mapping = await self.store.find_by_code(short_code)
        await self.cache.set(short_code, mapping.long_url, self.cache_ttl_seconds)
        return mapping.long_url

    async def get_mapping(self, short_code: str) -> URLMapping:
        """Get the full stored mapping for a short code."""
        if not short_code:
            raise NotFoundError(short_code)
        return await self.store.find_by_code(short_code)

    async def list_all(self) -> List[URLMapping]:
        """List every mapping, oldest first."""
        return await self.store.list_all()

    async def delete(self, short_code: str) -> None:
        """Delete a short URL.

        The cache entry is evicted after the store delete succeeds. A failed
        eviction is logged but does not fail the delete; the cache TTL bounds
        how long a stale entry can be served.

        Raises:
            NotFoundError: If no mapping exists
            UnavailableError: If the store is unreachable
        """
        if not short_code:
            raise NotFoundError(short_code)

        await self.store.delete_by_code(short_code)

        if not await self.cache.evict(short_code):
            self.logger.warning(f"Cache eviction failed for deleted short code {short_code}")

        self.logger.info(f"Deleted short URL: {short_code}")

    async def health_check(self) -> Dict[str, bool]:
        """Perform health check. Cache health never affects overall."""
        db_healthy = await self.store.health_check()
        cache_healthy = await self.cache.health_check()

        return {
            "database": db_healthy,
            "cache": cache_healthy,
            "overall": db_healthy,
        }

    async def close(self) -> None:
        """Close service connections."""
        await self.store.close()
        await self.cache.close()
