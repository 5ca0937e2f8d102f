"""Abstract base class for URL shortener store implementations."""

from abc import ABC, abstractmethod
from typing import List

from .models import URLMapping


class URLStoreBase(ABC):
    """Durable store of short code -> long URL mappings.
    
    Every operation raises a ``StoreError`` subclass on failure:
    ``ConflictError``, ``NotFoundError`` or ``UnavailableError``. A store that
    cannot be reached must raise ``UnavailableError``, never ``NotFoundError``.
    Values the store rejects raise ``InvalidInputError``. Short codes are
    unique forever: a deleted code is never reissued.
    """
    
    @abstractmethod
    async def insert(self, long_url: str, short_code: str) -> URLMapping:
        """Insert a new mapping.
        
        The uniqueness check and the insert are a single atomic operation.
        
        Args:
            long_url: The original long URL
            short_code: The candidate short code
            
        Returns:
            The stored mapping with its id and created_at
            
        Raises:
            ConflictError: If short_code exists or was ever deleted
        """
    
    @abstractmethod
    async def find_by_code(self, short_code: str) -> URLMapping:
        """Look up a mapping by short code.
        
        Raises:
            NotFoundError: If no mapping exists
        """
    
    @abstractmethod
    async def list_all(self) -> List[URLMapping]:
        """List all mappings, oldest first. Empty list when there are none."""
    
    @abstractmethod
    async def delete_by_code(self, short_code: str) -> None:
        """Delete a mapping permanently and retire its code.
        
        Raises:
            NotFoundError: If no mapping exists
        """
    
    @abstractmethod
    async def health_check(self) -> bool:
        """Check if the store is reachable."""
    
    @abstractmethod
    async def close(self) -> None:
        """Release store connections."""
