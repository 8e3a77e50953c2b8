"""
Time-boxed cache of the last fetched collection per resource kind.

Each kind holds exactly one entry: the rows of its last successful fetch,
when that fetch happened, and the search term that produced it. An entry is
only served for the same search term, within the TTL, and only if it
actually holds rows.
"""

import logging
import time
from typing import Any, Callable, Dict, List, Optional

from ..models import CacheEntry, Record, ResourceKind

logger = logging.getLogger(__name__)

DEFAULT_TTL_SECONDS = 5 * 60


class CacheStore:
    """
    Per-kind cache with TTL and query matching.

    Suitable for a single event loop; all operations are synchronous.
    """

    def __init__(
        self,
        ttl_seconds: float = DEFAULT_TTL_SECONDS,
        clock: Callable[[], float] = time.time,
    ):
        """
        Initialize the cache store.

        Args:
            ttl_seconds: How long an entry stays valid after it was written
            clock: Source of the current time in seconds
        """
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._entries: Dict[ResourceKind, CacheEntry] = {
            kind: CacheEntry() for kind in ResourceKind
        }

    def get(self, kind: ResourceKind) -> CacheEntry:
        """Return the current entry for a kind."""
        return self._entries[kind]

    def is_valid(self, kind: ResourceKind, query: Optional[str] = None) -> bool:
        """
        Check whether the entry for a kind can be served for a query.

        An empty entry is never valid, so a failed or empty response is
        retried on the next access instead of being treated as authoritative.

        Args:
            kind: Resource kind to check
            query: Search term of the request (None for no filter)

        Returns:
            True if the cached rows can be served
        """
        entry = self._entries[kind]
        within_ttl = self._clock() - entry.timestamp < self.ttl_seconds
        same_query = entry.last_query == (query or "")
        return within_ttl and same_query and len(entry.data) > 0

    def update(
        self, kind: ResourceKind, data: List[Record], query: Optional[str] = None
    ) -> None:
        """Overwrite the entry for a kind with freshly fetched rows."""
        self._entries[kind] = CacheEntry(
            data=data, timestamp=self._clock(), last_query=query or ""
        )

    def invalidate(self, kind: Optional[ResourceKind] = None) -> None:
        """
        Reset one entry, or every entry when no kind is given.

        Args:
            kind: Resource kind to reset (None for all)
        """
        kinds = [kind] if kind is not None else list(self._entries)
        for k in kinds:
            self._entries[k] = CacheEntry()
        logger.debug(f"Invalidated cache for {', '.join(k.value for k in kinds)}")

    def stats(self) -> Dict[str, Any]:
        """Get a summary of every entry."""
        now = self._clock()
        return {
            kind.value: {
                "size": len(entry.data),
                "age_seconds": entry.age(now) if entry.timestamp else None,
                "last_query": entry.last_query,
                "valid": self.is_valid(kind, entry.last_query),
            }
            for kind, entry in self._entries.items()
        }
