"""Data models for the link shortener."""

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Mapping, Optional


def _as_utc(value: Optional[datetime]) -> Optional[datetime]:
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def _isoformat(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value else None


@dataclass
class Link:
    """A short code and the URL it redirects to, with click telemetry."""

    code: str
    url: str
    created_at: datetime
    updated_at: datetime
    clicks: int = 0
    last_clicked: Optional[datetime] = None

    def to_dict(self) -> dict:
        """Convert to the wire representation (camelCase, ISO-8601)."""
        return {
            "code": self.code,
            "url": self.url,
            "clicks": self.clicks,
            "lastClicked": _isoformat(self.last_clicked),
            "createdAt": _isoformat(self.created_at),
            "updatedAt": _isoformat(self.updated_at),
        }

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "Link":
        """Create from a database row (any mapping with column names)."""
        return cls(
            code=record["code"],
            url=record["url"],
            clicks=record["clicks"] or 0,
            last_clicked=_as_utc(record["last_clicked"]),
            created_at=_as_utc(record["created_at"]),
            updated_at=_as_utc(record["updated_at"]),
        )
