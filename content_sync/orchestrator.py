"""
Cache-aware fetch orchestration.

Every read of every resource kind passes through `FetchOrchestrator`, which
decides whether to serve the cached rows, join a request that is already in
flight, or start a new one. Each call ends in exactly one of three outcomes:

- served from cache: returns without suspending, no loading change
- joined in flight: awaits the running request, no new network call
- fresh fetch: exactly one network call, loading flag toggled around it
"""

from __future__ import annotations

import asyncio
import logging
from typing import Awaitable, Callable, Optional

from .cache import CacheStore
from .models import FetchOptions, QueryResult, ResourceKind
from .state import ContentState
from .utils.deduplication import RequestDeduplicator, request_key

logger = logging.getLogger(__name__)

Fetcher = Callable[[], Awaitable[QueryResult]]


class FetchOrchestrator:
    """Sole writer of the cache, the in-flight registry and content state."""

    def __init__(
        self,
        cache: CacheStore,
        state: ContentState,
        deduplicator: Optional[RequestDeduplicator] = None,
    ):
        self.cache = cache
        self.state = state
        self.deduplicator = deduplicator or RequestDeduplicator()

    async def fetch_with_cache(
        self,
        kind: ResourceKind,
        fetcher: Fetcher,
        options: Optional[FetchOptions] = None,
    ) -> None:
        """
        Fetch rows for a kind, going to the network only when needed.

        Failures are logged and never raised; content state keeps its
        previous value and the loading flag returns to False.

        Args:
            kind: Resource kind being fetched
            fetcher: Zero-argument coroutine function running the query
            options: Fetch options (force, search_term, ...)
        """
        options = options or FetchOptions()
        query = options.search_term
        key = request_key(kind, query)

        if not options.force and self.cache.is_valid(kind, query):
            self.state.set(kind, self.cache.get(kind).data)
            return

        in_flight = self.deduplicator.join(key)
        if in_flight is not None:
            logger.debug(f"Joining in-flight request {key}")
            await asyncio.shield(in_flight)
            return

        # Loading is only surfaced when there is nothing valid to show
        if not self.cache.is_valid(kind, query):
            self.state.set_loading(kind, True)

        task = asyncio.create_task(self._run(kind, key, query, fetcher))
        self.deduplicator.register(key, task)
        # Cancelling a caller must not cancel the request other callers share
        await asyncio.shield(task)

    async def _run(
        self,
        kind: ResourceKind,
        key: str,
        query: Optional[str],
        fetcher: Fetcher,
    ) -> None:
        """Execute one network round trip and record its outcome."""
        try:
            result = await fetcher()
            if result.is_success:
                self.state.set(kind, result.data)
                self.cache.update(kind, result.data, query)
                logger.debug(f"Fetched {len(result.data)} {kind.value} for {key}")
            else:
                logger.error(
                    f"Error fetching {kind.value}: {result.error or 'no data returned'}"
                )
        except Exception as e:
            logger.exception(f"Exception fetching {kind.value}: {e}")
        finally:
            self.state.set_loading(kind, False)
            self.deduplicator.release(key)
