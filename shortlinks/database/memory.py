"""In-process link store, used for tests and local development."""

import asyncio
import logging
from dataclasses import replace
from datetime import datetime, timezone
from typing import Callable, Optional, List, Dict, Any

from ..errors import CodeExistsError
from .base import LinkStoreBase
from .models import Link


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class MemoryLinkStore(LinkStoreBase):
    """Dictionary-backed store.

    An asyncio.Lock (one per event loop) serializes writes, which gives the same
    insert-if-absent and increment guarantees the database provides.
    Callers always receive copies, never the stored records.
    """

    def __init__(
        self,
        db_config: str = "memory://",
        clock: Callable[[], datetime] = utc_now,
        logger: Optional[logging.Logger] = None,
    ):
        """Initialize in-memory store.

        Args:
            db_config: Connection string (only kept for reference)
            clock: Returns the current timezone-aware time
            logger: Optional logger instance
        """
        super().__init__(db_config)
        self.clock = clock
        self.logger = logger or logging.getLogger(__name__)
        self._links: Dict[str, Link] = {}
        self._locks: Dict[int, asyncio.Lock] = {}

    @property
    def _lock(self) -> asyncio.Lock:
        # One lock per event loop, created inside that loop
        loop_id = id(asyncio.get_running_loop())
        if loop_id not in self._locks:
            self._locks[loop_id] = asyncio.Lock()
        return self._locks[loop_id]

    async def get(self, code: str) -> Optional[Link]:
        link = self._links.get(code)
        return replace(link) if link else None

    async def exists(self, code: str) -> bool:
        return code in self._links

    async def insert(self, code: str, url: str) -> Link:
        async with self._lock:
            if code in self._links:
                self.logger.warning(f"Code already exists: {code}")
                raise CodeExistsError()
            now = self.clock()
            link = Link(code=code, url=url, created_at=now, updated_at=now)
            self._links[code] = link
        return replace(link)

    async def increment_click(self, code: str) -> Optional[Link]:
        async with self._lock:
            link = self._links.get(code)
            if link is None:
                return None
            now = self.clock()
            link.clicks += 1
            link.last_clicked = now
            link.updated_at = now
            return replace(link)

    async def delete(self, code: str) -> bool:
        async with self._lock:
            return self._links.pop(code, None) is not None

    async def list_links(self) -> List[Link]:
        return [replace(link) for link in self._links.values()]

    async def get_statistics(self) -> Dict[str, Any]:
        return {
            "total_links": len(self._links),
            "total_clicks": sum(link.clicks for link in self._links.values()),
            "database": "memory",
        }

    async def health_check(self) -> bool:
        return True

    async def close(self) -> None:
        self._links.clear()
        self._locks.clear()
