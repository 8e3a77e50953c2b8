"""
Concurrent multi-resource fetching.

Runs several resource fetchers at once and tracks the batch-wide loading
flag. A failing fetcher never cancels or blocks the others.
"""

import asyncio
import logging
from typing import Iterable, Mapping, Optional

from .fetchers import ResourceFetcher
from .models import FetchOptions, ResourceKind
from .state import ContentState

logger = logging.getLogger(__name__)


class BatchCoordinator:
    """Settle-all batch fetching across resource kinds."""

    def __init__(
        self,
        fetchers: Mapping[ResourceKind, ResourceFetcher],
        state: ContentState,
    ):
        self.fetchers = fetchers
        self.state = state

    async def fetch_multiple(
        self,
        kinds: Iterable[ResourceKind],
        options: Optional[FetchOptions] = None,
    ) -> None:
        """
        Fetch several kinds concurrently and wait for all of them to settle.

        Args:
            kinds: Resource kinds to fetch
            options: Options applied to every fetch
        """
        kinds = [ResourceKind.parse(kind) for kind in kinds]
        self.state.set_global_loading(True)
        try:
            results = await asyncio.gather(
                *(self.fetchers[kind].fetch(options) for kind in kinds),
                return_exceptions=True,
            )
            for kind, result in zip(kinds, results):
                if isinstance(result, BaseException):
                    logger.error(f"Error in fetch_multiple for {kind.value}: {result}")
        finally:
            self.state.set_global_loading(False)

    async def refresh(self, kind: ResourceKind) -> None:
        """Re-fetch one kind, bypassing the cache."""
        await self.fetchers[ResourceKind.parse(kind)].fetch(FetchOptions(force=True))
