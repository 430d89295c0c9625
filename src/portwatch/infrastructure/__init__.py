"""Infrastructure layer."""

from portwatch.infrastructure.cache import CachedItem, TTLCache

__all__ = ["CachedItem", "TTLCache"]
