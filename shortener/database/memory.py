"""In-memory store for tests and local runs."""

import itertools
import logging
from datetime import datetime, timezone
from typing import Callable, Dict, List, Optional, Set

from ..errors import ConflictError, NotFoundError
from .base import URLStoreBase
from .models import URLMapping


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class InMemoryURLStore(URLStoreBase):
    """Dictionary-backed store.
    
    ``insert`` has no suspension point between the existence check and the
    write, so it is atomic with respect to other tasks on the same loop.
    Deleted codes are remembered and never handed out again.
    """
    
    def __init__(
        self,
        clock: Optional[Callable[[], datetime]] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self._rows: Dict[str, URLMapping] = {}
        self._retired: Set[str] = set()
        self._ids = itertools.count(1)
        self._clock = clock or _utcnow
        self.logger = logger or logging.getLogger(__name__)
    
    async def insert(self, long_url: str, short_code: str) -> URLMapping:
        if short_code in self._rows or short_code in self._retired:
            raise ConflictError(short_code)
        
        mapping = URLMapping(
            id=next(self._ids),
            long_url=long_url,
            short_code=short_code,
            created_at=self._clock(),
        )
        self._rows[short_code] = mapping
        return mapping
    
    async def find_by_code(self, short_code: str) -> URLMapping:
        try:
            return self._rows[short_code]
        except KeyError:
            raise NotFoundError(short_code) from None
    
    async def list_all(self) -> List[URLMapping]:
        return sorted(self._rows.values(), key=lambda m: (m.created_at, m.id))
    
    async def delete_by_code(self, short_code: str) -> None:
        if self._rows.pop(short_code, None) is None:
            raise NotFoundError(short_code)
        self._retired.add(short_code)
    
    async def health_check(self) -> bool:
        return True
    
    async def close(self) -> None:
        self.logger.debug(f"Discarding {len(self._rows)} in-memory mappings")
        self._rows.clear()
