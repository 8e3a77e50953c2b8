"""
Caching for content_sync.
"""

from .store import DEFAULT_TTL_SECONDS, CacheStore

__all__ = ["CacheStore", "DEFAULT_TTL_SECONDS"]
