"""Business logic service for the link shortener."""

import asyncio
import logging
from typing import Optional, Dict, Any, List, Awaitable, TypeVar

from .common.validators import is_valid_code, is_valid_url
from .database.base import LinkStoreBase
from .database.models import Link
from .errors import InvalidUrlError, LinkNotFoundError, StoreUnavailableError
from .shortcode import CodeAllocator, ShortCodeGenerator

T = TypeVar("T")


class LinkService:
    """Service layer: link administration and redirect resolution."""

    def __init__(
        self,
        store: LinkStoreBase,
        short_code_generator: Optional[ShortCodeGenerator] = None,
        logger: Optional[logging.Logger] = None,
        max_allocation_attempts: int = 10,
        store_timeout_seconds: Optional[float] = 10,
    ):
        """Initialize link service.

        Args:
            store: Link store instance
            short_code_generator: Optional short code generator
            logger: Optional logger
            max_allocation_attempts: Random draws before giving up on a code
            store_timeout_seconds: Upper bound for each store call (None = no bound)
        """
        self.store = store
        self.logger = logger or logging.getLogger(__name__)
        self.allocator = CodeAllocator(
            store=store,
            generator=short_code_generator,
            max_attempts=max_allocation_attempts,
            logger=self.logger,
        )
        self.store_timeout_seconds = store_timeout_seconds

    async def _call(self, operation: Awaitable[T]) -> T:
        """Run one store operation under the configured timeout."""
        try:
            return await asyncio.wait_for(operation, timeout=self.store_timeout_seconds)
        except asyncio.TimeoutError as e:
            self.logger.error(f"Link store timed out after {self.store_timeout_seconds}s")
            raise StoreUnavailableError("Link store timed out. Please try again later.") from e

    async def create_link(self, url: Optional[str], code: Optional[str] = None) -> Link:
        """Create a new link.

        Args:
            url: The target URL
            code: Optional custom short code (empty string means none)

        Returns:
            The created link

        Raises:
            InvalidUrlError: If the URL is missing or not http(s)
            InvalidCodeError: If the custom code has the wrong shape
            CodeExistsError: If the code is taken, including a lost insert race
            AllocationExhaustedError: If no free random code was found
        """
        if not url or not isinstance(url, str):
            raise InvalidUrlError("URL is required")
        if not is_valid_url(url):
            raise InvalidUrlError()

        code = await self._call(self.allocator.allocate(code or None))
        link = await self._call(self.store.insert(code, url))

        self.logger.info(f"Created link: {link.code} -> {link.url}")
        return link

    async def resolve(self, code: str) -> str:
        """Resolve a code to its URL and record the visit.

        Recording the click is best-effort: if it fails the URL is still
        returned.

        Args:
            code: The short code that was requested

        Returns:
            The target URL

        Raises:
            LinkNotFoundError: If the code does not exist
        """
        # Paths like /favicon.ico can never be a code; skip the store
        if not is_valid_code(code):
            raise LinkNotFoundError()

        link = await self._call(self.store.get(code))
        if link is None:
            self.logger.warning(f"Code not found: {code}")
            raise LinkNotFoundError()

        try:
            await self._call(self.store.increment_click(code))
        except Exception:
            self.logger.exception(f"Failed to record click for {code}")

        self.logger.debug(f"Redirecting {code} -> {link.url}")
        return link.url

    async def get_link(self, code: str) -> Link:
        """Get a link without recording a visit.

        Raises:
            LinkNotFoundError: If the code does not exist
        """
        link = await self._call(self.store.get(code))
        if link is None:
            raise LinkNotFoundError()
        return link

    async def list_links(self) -> List[Link]:
        """List every link, unsorted."""
        return await self._call(self.store.list_links())

    async def delete_link(self, code: str) -> None:
        """Delete a link.

        Raises:
            LinkNotFoundError: If the code does not exist
        """
        deleted = await self._call(self.store.delete(code))
        if not deleted:
            raise LinkNotFoundError()
        self.logger.info(f"Deleted link: {code}")

    async def get_statistics(self) -> Dict[str, Any]:
        """Get totals over all links."""
        return await self._call(self.store.get_statistics())

    async def health_check(self) -> Dict[str, bool]:
        """Perform health check.

        Returns:
            Dictionary with health status
        """
        try:
            db_healthy = await self._call(self.store.health_check())
        except StoreUnavailableError:
            db_healthy = False

        return {
            "database": db_healthy,
            "overall": db_healthy,
        }

    async def close(self) -> None:
        """Close store connections."""
        await self.store.close()
