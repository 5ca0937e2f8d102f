"""Pytest configuration and fixtures."""

from typing import Iterable, List

import pytest
from httpx import ASGITransport, AsyncClient

from config import Config
from shortener.database.cache import InMemoryCache, NullCache
from shortener.database.memory import InMemoryURLStore
from shortener.service import URLShortenerService
from shortener.shortcode import ShortCodeGenerator
from shortener.common.logging_config import setup_logging
from web_app import create_app


class ScriptedCodeGenerator(ShortCodeGenerator):
    """Returns scripted codes first, then falls back to random ones."""

    def __init__(self, codes: Iterable[str], length: int = 8):
        super().__init__(length=length)
        self.script: List[str] = list(codes)
        self.calls = 0

    def generate(self, long_url=None) -> str:
        self.calls += 1
        if self.script:
            return self.script.pop(0)
        return self.generate_random()


class FixedCodeGenerator(ShortCodeGenerator):
    """Always returns the same code."""

    def __init__(self, code: str = "AAAAAAAA"):
        super().__init__(length=len(code))
        self.code = code
        self.calls = 0

    def generate(self, long_url=None) -> str:
        self.calls += 1
        return self.code


@pytest.fixture
def logger():
    """Create test logger."""
    return setup_logging(level="DEBUG")


@pytest.fixture
def short_code_generator():
    """Create short code generator."""
    return ShortCodeGenerator(length=8)


@pytest.fixture
def store():
    return InMemoryURLStore()


@pytest.fixture(params=["memory", "null"])
def cache(request):
    """Every test using this fixture runs once per cache implementation."""
    if request.param == "memory":
        return InMemoryCache(ttl_seconds=60)
    return NullCache()


@pytest.fixture
def service(store, cache, short_code_generator, logger) -> URLShortenerService:
    """Create service instance."""
    return URLShortenerService(
        store=store,
        cache=cache,
        short_code_generator=short_code_generator,
        logger=logger,
    )


@pytest.fixture
def config():
    return Config(base_url="http://testserver")


@pytest.fixture
def app(service, config):
    """Create test FastAPI app."""
    return create_app(service_instance=service, config=config)


@pytest.fixture
async def client(app):
    """Create test client."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as ac:
        yield ac


@pytest.fixture
def sample_urls():
    """Sample URLs for testing."""
    return [
        "https://example.com/test",
        "https://github.com/user/repo",
        "https://stackoverflow.com/questions/123456",
    ]


@pytest.fixture
def scripted_generator():
    """Factory for generators that replay a fixed list of codes."""
    return ScriptedCodeGenerator


@pytest.fixture
def fixed_generator():
    """Factory for generators that always return one code."""
    return FixedCodeGenerator
