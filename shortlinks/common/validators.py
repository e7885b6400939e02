"""Validation utilities for the link shortener."""

import re
from urllib.parse import urlparse


CODE_PATTERN = re.compile(r"[A-Za-z0-9]{6,8}")

ALLOWED_SCHEMES = ("http", "https")


def is_valid_url(url) -> bool:
    """Check that a URL is absolute and uses http or https.

    Args:
        url: The URL to validate

    Returns:
        True if valid. Malformed input returns False instead of raising.
    """
    if not url or not isinstance(url, str):
        return False

    try:
        result = urlparse(url)
        # Accessing port validates it ("http://x:abc" raises here)
        result.port
    except ValueError:
        return False

    if result.scheme not in ALLOWED_SCHEMES:
        return False

    if not result.hostname or any(c.isspace() for c in result.netloc):
        return False

    return True


def is_valid_code(code) -> bool:
    """Check that a short code is 6-8 ASCII letters or digits.

    Args:
        code: The short code to validate

    Returns:
        True if valid
    """
    if not isinstance(code, str):
        return False
    return CODE_PATTERN.fullmatch(code) is not None
