"""Short code generation and allocation."""

import logging
import random
import string
from typing import Optional

from .common.validators import is_valid_code
from .database.base import LinkStoreBase
from .errors import AllocationExhaustedError, CodeExistsError, InvalidCodeError


class ShortCodeGenerator:
    """Generate random short codes."""

    # Base62 characters (alphanumeric, case-sensitive)
    BASE62_CHARS = string.ascii_letters + string.digits  # a-zA-Z0-9

    MIN_LENGTH = 6
    MAX_LENGTH = 8

    def __init__(self, rng: Optional[random.Random] = None):
        """Initialize short code generator.

        Args:
            rng: Optional random source (defaults to a SystemRandom)
        """
        self.rng = rng or random.SystemRandom()

    def generate_random(self, length: Optional[int] = None) -> str:
        """Generate a random short code.

        Args:
            length: Length of the code (drawn from 6-8 if not specified)

        Returns:
            Random short code
        """
        if length is None:
            length = self.rng.randint(self.MIN_LENGTH, self.MAX_LENGTH)
        return ''.join(self.rng.choice(self.BASE62_CHARS) for _ in range(length))


class CodeAllocator:
    """Produce a short code that is not yet present in the store.

    The existence check here only gives early, friendly errors. The store's
    insert is what actually enforces uniqueness, so callers must still
    handle CodeExistsError from the insert.
    """

    def __init__(
        self,
        store: LinkStoreBase,
        generator: Optional[ShortCodeGenerator] = None,
        max_attempts: int = 10,
        logger: Optional[logging.Logger] = None,
    ):
        self.store = store
        self.generator = generator or ShortCodeGenerator()
        self.max_attempts = max_attempts
        self.logger = logger or logging.getLogger(__name__)

    async def allocate(self, requested_code: Optional[str] = None) -> str:
        """Return a free code, either the requested one or a random one.

        Args:
            requested_code: Optional custom short code

        Returns:
            The allocated code

        Raises:
            InvalidCodeError: If the requested code has the wrong shape
            CodeExistsError: If the requested code is taken
            AllocationExhaustedError: If every random draw collided
        """
        if requested_code is not None:
            if not is_valid_code(requested_code):
                raise InvalidCodeError()
            if await self.store.exists(requested_code):
                raise CodeExistsError()
            return requested_code

        for attempt in range(self.max_attempts):
            code = self.generator.generate_random()
            if not await self.store.exists(code):
                if attempt:
                    self.logger.debug(f"Generated code after {attempt + 1} attempts: {code}")
                return code

        self.logger.warning(f"No free code after {self.max_attempts} attempts")
        raise AllocationExhaustedError()
