"""Data models for the URL shortener."""

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Mapping


@dataclass(frozen=True)
class URLMapping:
    """A stored short code -> long URL mapping."""
    
    id: int
    long_url: str
    short_code: str
    created_at: datetime
    
    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "id": self.id,
            "long_url": self.long_url,
            "short_code": self.short_code,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }
    
    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "URLMapping":
        """Create from a database row or dictionary."""
        created_at = record["created_at"]
        if isinstance(created_at, str):
            created_at = datetime.fromisoformat(created_at)
        if created_at is not None and created_at.tzinfo is None:
            created_at = created_at.replace(tzinfo=timezone.utc)
        return cls(
            id=record["id"],
            long_url=record["long_url"],
            short_code=record["short_code"],
            created_at=created_at,
        )
