"""
Debounced search across every resource kind.

Each change of the search term restarts a quiet-period timer. Only when the
term has been stable for the whole period does a batch fetch run: filtered
and forced for a non-blank term, unfiltered for a blank one. Superseded
timers never fire. A search that has already started runs to completion.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Iterable, Optional

from .batch import BatchCoordinator
from .models import ALL_KINDS, FetchOptions, ResourceKind

logger = logging.getLogger(__name__)

DEBOUNCE_DELAY = 0.3


class DebouncedSearchController:
    """Owns the global search term and its pending timer."""

    def __init__(
        self,
        batch: BatchCoordinator,
        delay: float = DEBOUNCE_DELAY,
        kinds: Optional[Iterable[ResourceKind]] = None,
    ):
        """
        Initialize the search controller.

        Args:
            batch: Coordinator used to run the search
            delay: Quiet period in seconds before a search runs
            kinds: Kinds searched (all kinds by default)
        """
        self.batch = batch
        self.delay = delay
        self.kinds = list(kinds) if kinds is not None else list(ALL_KINDS)
        self._search_term = ""
        self._timer: Optional[asyncio.Task] = None
        self._last: Optional[asyncio.Task] = None

    @property
    def search_term(self) -> str:
        return self._search_term

    @property
    def pending(self) -> bool:
        """True while a timer is waiting to fire."""
        return self._timer is not None and not self._timer.done()

    def set_search_term(self, term: str) -> None:
        """
        Change the search term and restart the quiet period.

        Must be called from within the running event loop.
        """
        self._search_term = term
        self._schedule()

    def search_all_content(self) -> None:
        """Restart the quiet period for the current term."""
        self._schedule()

    def cancel(self) -> None:
        """Void the pending timer, if any."""
        if self._timer is not None and not self._timer.done():
            self._timer.cancel()
        self._timer = None

    async def join(self) -> None:
        """Wait until the most recently scheduled search has finished or been voided."""
        while self._last is not None and not self._last.done():
            await asyncio.wait({self._last})

    def _schedule(self) -> None:
        self.cancel()
        self._timer = asyncio.create_task(self._fire_after_delay(self._search_term))
        self._last = self._timer

    async def _fire_after_delay(self, term: str) -> None:
        await asyncio.sleep(self.delay)
        # Past this point the search can no longer be voided
        self._timer = None
        await self.run_search(term)

    async def run_search(self, term: str) -> None:
        """Run the batch fetch for a term immediately."""
        try:
            if not term.strip():
                await self.batch.fetch_multiple(self.kinds)
                return
            logger.info(f"Searching all content for {term!r}")
            await self.batch.fetch_multiple(
                self.kinds, FetchOptions(search_term=term, force=True)
            )
        except Exception as e:
            logger.error(f"Search error: {e}")
