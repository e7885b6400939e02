"""Error classes for the link shortener.

Each error carries the HTTP status the web layer answers with, so routes
never have to inspect message strings.
"""

from typing import Optional


class ShortlinksError(Exception):
    """
    Base error class.

    Attributes:
        status_code: HTTP status code (default: 500)
        message: Error message (default: "Internal server error")
    """
    status_code: int = 500
    message: str = "Internal server error"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.message
        super().__init__(self.message)


class InvalidInputError(ShortlinksError, ValueError):
    """400 user-correctable input error."""
    status_code = 400
    message = "Invalid input"


class InvalidUrlError(InvalidInputError):
    """400 URL missing or not http(s)."""
    message = "Invalid URL format. Must start with http:// or https://"


class InvalidCodeError(InvalidInputError):
    """400 custom code has the wrong shape."""
    message = "Code must be 6-8 alphanumeric characters"


class LinkNotFoundError(ShortlinksError):
    """404 no link for the code."""
    status_code = 404
    message = "Link not found"


class CodeExistsError(ShortlinksError):
    """409 code already taken."""
    status_code = 409
    message = "Code already exists"


class AllocationExhaustedError(ShortlinksError):
    """500 every random draw collided."""
    status_code = 500
    message = "Failed to generate unique code. Please try again."


class StoreUnavailableError(ShortlinksError):
    """503 the link store could not be reached or timed out."""
    status_code = 503
    message = "Link store unavailable. Please try again later."
