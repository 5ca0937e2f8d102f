"""Core short-code engine for the shortlinks service."""

from .errors import (
    ShortenerError,
    InvalidInputError,
    ExhaustedRetriesError,
    StoreError,
    ConflictError,
    NotFoundError,
    UnavailableError,
)
from .shortcode import ShortCodeGenerator
from .service import URLShortenerService

__all__ = [
    "ShortenerError",
    "InvalidInputError",
    "ExhaustedRetriesError",
    "StoreError",
    "ConflictError",
    "NotFoundError",
    "UnavailableError",
    "ShortCodeGenerator",
    "URLShortenerService",
]
