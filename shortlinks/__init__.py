"""Core business logic for the link shortener."""

from .shortcode import ShortCodeGenerator, CodeAllocator
from .service import LinkService

__all__ = ["ShortCodeGenerator", "CodeAllocator", "LinkService"]
