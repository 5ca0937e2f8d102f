#!/usr/bin/env python3
"""
Command-line interface for the shortlinks service.

Usage:
    python shortlinks_cli.py shorten <url>
    python shortlinks_cli.py resolve <short_code>
    python shortlinks_cli.py info <short_code>
    python shortlinks_cli.py list
    python shortlinks_cli.py delete <short_code>
    python shortlinks_cli.py health
"""

import argparse
import asyncio
import json
import os
import sys
from typing import Optional

# Add project root to path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '../..')))

from app import build_cache, build_service, build_store
from config import load_config
from shortener.errors import ShortenerError
from shortener.common.logging_config import setup_logging


class ShortlinksCLI:
    """Command-line interface over URLShortenerService."""

    def __init__(self, database_url: Optional[str] = None, redis_url: Optional[str] = None, verbose: bool = False):
        overrides = {}
        if database_url:
            overrides["database_url"] = database_url
        if redis_url:
            overrides["redis_url"] = redis_url
        self.config = load_config().model_copy(update=overrides)
        self.logger = setup_logging(level="DEBUG" if verbose else "WARNING")
        self.service = None

    async def initialize(self):
        """Initialize store, cache and service."""
        store = build_store(self.config, self.logger)
        cache = await build_cache(self.config, self.logger)
        self.service = build_service(self.config, store, cache, self.logger)

    async def cleanup(self):
        if self.service:
            await self.service.close()

    def _print(self, payload: dict, error: bool = False) -> int:
        print(json.dumps(payload, indent=2, default=str), file=sys.stderr if error else sys.stdout)
        return 1 if error else 0

    async def run(self, command: str, short_code: Optional[str] = None, url: Optional[str] = None) -> int:
        """Dispatch one command. Returns the process exit code."""
        try:
            if command == "shorten":
                mapping = await self.service.create_short_url(url)
                return self._print({"success": True, **mapping.to_dict()})

            if command == "resolve":
                long_url = await self.service.resolve(short_code)
                return self._print({"success": True, "short_code": short_code, "long_url": long_url})

            if command == "info":
                mapping = await self.service.get_mapping(short_code)
                return self._print({"success": True, **mapping.to_dict()})

            if command == "list":
                mappings = await self.service.list_all()
                return self._print({"success": True, "count": len(mappings), "urls": [m.to_dict() for m in mappings]})

            if command == "delete":
                await self.service.delete(short_code)
                return self._print({"success": True, "short_code": short_code, "message": "short url deleted successfully"})

            if command == "health":
                health = await self.service.health_check()
                return self._print({"success": health["overall"], **health}, error=not health["overall"])

        except ShortenerError as e:
            return self._print({"success": False, "error": type(e).__name__, "detail": str(e)}, error=True)

        return self._print({"success": False, "error": f"Unknown command: {command}"}, error=True)


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Shortlinks command-line interface")
    parser.add_argument("--database-url", default=None, help="PostgreSQL connection URL (defaults to DATABASE_URL)")
    parser.add_argument("--redis-url", default=None, help="Redis connection URL (defaults to REDIS_URL)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Verbose output")

    subparsers = parser.add_subparsers(dest="command", required=True)

    shorten = subparsers.add_parser("shorten", help="Create a short URL")
    shorten.add_argument("url")

    for name, help_text in (
        ("resolve", "Print the long URL for a short code"),
        ("info", "Show the stored mapping for a short code"),
        ("delete", "Delete a short URL"),
    ):
        sub = subparsers.add_parser(name, help=help_text)
        sub.add_argument("short_code")

    subparsers.add_parser("list", help="List all short URLs, oldest first")
    subparsers.add_parser("health", help="Check store and cache health")

    return parser.parse_args(argv)


async def main(argv=None) -> int:
    args = parse_args(argv)
    cli = ShortlinksCLI(database_url=args.database_url, redis_url=args.redis_url, verbose=args.verbose)

    await cli.initialize()
    try:
        return await cli.run(
            args.command,
            short_code=getattr(args, "short_code", None),
            url=getattr(args, "url", None),
        )
    finally:
        await cli.cleanup()


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
