"""Abstract base class for link store implementations."""

from abc import ABC, abstractmethod
from typing import Optional, List, Dict, Any

from .models import Link


class LinkStoreBase(ABC):
    """Abstract base class for link store operations.

    Every operation is a single logical transaction against the backing
    store. Implementations raise StoreUnavailableError when the store can't
    be reached, never a "not found" result.
    """

    def __init__(self, db_config: str):
        """Initialize store.

        Args:
            db_config: Database connection string
        """
        self.db_config = db_config

    @abstractmethod
    async def get(self, code: str) -> Optional[Link]:
        """Get the link for a code.

        Args:
            code: The short code to lookup

        Returns:
            The link if found, None otherwise
        """
        pass

    @abstractmethod
    async def exists(self, code: str) -> bool:
        """Check if a code is already taken.

        Args:
            code: The short code to check

        Returns:
            True if exists, False otherwise
        """
        pass

    @abstractmethod
    async def insert(self, code: str, url: str) -> Link:
        """Insert a new link if the code is free.

        The presence check and the write happen atomically.

        Args:
            code: The short code to use
            url: The target URL

        Returns:
            The created link (clicks=0, no last_clicked)

        Raises:
            CodeExistsError: If the code is already present
        """
        pass

    @abstractmethod
    async def increment_click(self, code: str) -> Optional[Link]:
        """Record one click: clicks += 1 and last_clicked = now, together.

        Args:
            code: The short code that was visited

        Returns:
            The updated link, or None if the code does not exist
        """
        pass

    @abstractmethod
    async def delete(self, code: str) -> bool:
        """Delete a link.

        Args:
            code: The short code to delete

        Returns:
            True if deleted, False if not found
        """
        pass

    @abstractmethod
    async def list_links(self) -> List[Link]:
        """List every link, in no particular order."""
        pass

    @abstractmethod
    async def get_statistics(self) -> Dict[str, Any]:
        """Get store statistics.

        Returns:
            Dictionary with total_links and total_clicks
        """
        pass

    @abstractmethod
    async def health_check(self) -> bool:
        """Check if the store is reachable.

        Returns:
            True if healthy, False otherwise
        """
        pass

    @abstractmethod
    async def close(self) -> None:
        """Release store resources."""
        pass

    async def ensure_tables(self) -> None:
        """Create the backing table if needed. Nothing to do by default."""
        return None
