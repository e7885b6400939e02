"""Proxy header helpers for building public short URLs."""

from typing import Dict, Mapping, Optional

from .url_builder import normalize_path_prefix


def _header(headers: Mapping[str, str], name: str) -> Optional[str]:
    """Case-insensitive header lookup; empty values count as missing."""
    for key, value in headers.items():
        if key.lower() == name and value:
            return value.strip()
    return None


def extract_forwarded_headers(headers: Mapping[str, str]) -> Dict[str, Optional[str]]:
    """Extract X-Forwarded-* headers set by a reverse proxy.

    Args:
        headers: Request headers

    Returns:
        Dictionary with forwarded_proto, forwarded_host, forwarded_for, forwarded_prefix
    """
    return {
        "forwarded_proto": _header(headers, "x-forwarded-proto"),
        "forwarded_host": _header(headers, "x-forwarded-host"),
        "forwarded_for": _header(headers, "x-forwarded-for"),
        "forwarded_prefix": _header(headers, "x-forwarded-prefix"),
    }


def build_base_url(
    headers: Mapping[str, str],
    fallback_base_url: str,
    request_scheme: Optional[str] = None,
    request_host: Optional[str] = None,
) -> str:
    """Build the public base URL.

    Priority:
    1. X-Forwarded-Proto + X-Forwarded-Host
    2. Request scheme + host
    3. Fallback base URL from config

    Returns:
        Base URL without trailing slash (e.g., https://example.com)
    """
    forwarded = extract_forwarded_headers(headers)

    if forwarded["forwarded_proto"] and forwarded["forwarded_host"]:
        return f"{forwarded['forwarded_proto']}://{forwarded['forwarded_host']}"

    if request_scheme and request_host:
        return f"{request_scheme}://{request_host}"

    return fallback_base_url.rstrip("/")


def get_path_prefix(headers: Mapping[str, str], configured_prefix: str = "") -> str:
    """Path prefix from X-Forwarded-Prefix, falling back to the configured one.

    Returns:
        Normalized prefix (leading slash, no trailing) or ''
    """
    forwarded = _header(headers, "x-forwarded-prefix")
    return normalize_path_prefix(forwarded or configured_prefix)
