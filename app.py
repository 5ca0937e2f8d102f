#!/usr/bin/env python3
"""
Main entry point for the shortlinks service.

Concurrency: requests are served concurrently on one event loop per worker
(FastAPI + asyncpg connection pool + redis.asyncio). Set WORKERS > 1 for
multi-process scaling; uvicorn then forks workers through the build_app
factory and each worker owns its own pool and cache client.

Usage:
    python app.py

Environment variables:
    DATABASE_URL - PostgreSQL connection URL
    CREATE_TABLES - Set to 1/true to create the urls table on startup
    REDIS_URL - Redis connection URL (optional)
    BASE_URL - Base URL for short links
    PORT - Port to listen on
    WORKERS - Number of uvicorn worker processes (default 1)
    LOG_LEVEL - Logging level
"""

import logging
import signal
import sys
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

from config import Config, load_config
from shortener.database.cache import NullCache, RedisCache, URLCacheBase
from shortener.database.postgres import PostgresURLStore
from shortener.service import URLShortenerService
from shortener.shortcode import ShortCodeGenerator
from shortener.common.logging_config import setup_logging
from web_app import create_app


async def build_cache(config: Config, logger: logging.Logger) -> URLCacheBase:
    """Connect the Redis cache, or fall back to no caching."""
    if not config.redis_url:
        logger.info("Redis caching disabled")
        return NullCache(ttl_seconds=config.cache_ttl_seconds, logger=logger)

    logger.info("Connecting to Redis")
    cache = RedisCache(
        redis_url=config.redis_url,
        ttl_seconds=config.cache_ttl_seconds,
        timeout_seconds=config.cache_timeout_seconds,
        logger=logger,
    )
    await cache.connect()
    return cache


def build_store(config: Config, logger: logging.Logger) -> PostgresURLStore:
    return PostgresURLStore(
        database_url=config.database_url,
        pool_min_size=config.db_pool_min_size,
        pool_max_size=config.db_pool_max_size,
        timeout_seconds=config.store_timeout_seconds,
        logger=logger,
    )


def build_service(config: Config, store, cache, logger: logging.Logger) -> URLShortenerService:
    generator = ShortCodeGenerator(
        length=config.short_code_length,
        strategy=config.code_strategy,
    )
    return URLShortenerService(
        store=store,
        cache=cache,
        short_code_generator=generator,
        logger=logger,
        max_collision_retries=config.max_collision_retries,
        cache_ttl_seconds=config.cache_ttl_seconds,
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create the store pool and cache client at startup, drain them on shutdown."""
    config = app.state.config
    logger = app.state.logger

    logger.info("Starting shortlinks service...")

    store = build_store(config, logger)
    if config.create_tables:
        await store.ensure_schema()

    cache = await build_cache(config, logger)
    service = build_service(config, store, cache, logger)
    app.state.service = service

    logger.info("Service started successfully")

    try:
        yield
    finally:
        logger.info("Shutting down shortlinks service...")
        await service.close()
        logger.info("Service stopped")


def build_app() -> FastAPI:
    """Build the application from the environment.

    Used directly for a single worker and as the uvicorn factory when
    uvicorn forks several workers, so each process gets its own pool and
    cache client.
    """
    config = load_config()

    logger = setup_logging(
        level=config.log_level,
        log_file=config.log_file,
        json_format=config.log_json,
    )

    app = create_app(service_instance=None, config=config)
    app.state.logger = logger
    app.router.lifespan_context = lifespan
    return app


def main():
    """Main entry point."""
    app = build_app()
    config = app.state.config
    logger = app.state.logger

    logger.info("Shortlinks Service")
    logger.info(f"Configuration: {config.model_dump(exclude={'database_url', 'redis_url'})}")

    if config.workers > 1:
        # uvicorn only forks workers when given an import string
        logger.info(f"Starting {config.workers} workers on {config.host}:{config.port}")
        uvicorn.run(
            "app:build_app",
            factory=True,
            host=config.host,
            port=config.port,
            workers=config.workers,
            log_level=config.log_level.lower(),
            access_log=True,
        )
        return

    uvicorn_config = uvicorn.Config(
        app,
        host=config.host,
        port=config.port,
        log_level=config.log_level.lower(),
        access_log=True,
    )

    server = uvicorn.Server(uvicorn_config)

    def handle_signal(signum, frame):
        logger.info(f"Received signal {signum}, initiating graceful shutdown...")
        server.should_exit = True

    signal.signal(signal.SIGINT, handle_signal)
    signal.signal(signal.SIGTERM, handle_signal)

    try:
        logger.info(f"Starting server on {config.host}:{config.port}")
        server.run()
    except Exception as e:
        logger.error(f"Server error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
