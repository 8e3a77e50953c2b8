"""
The content context: the object the UI talks to.

`ContentContext` is constructed once per application, owns the cache,
in-flight registry and content state, and exposes the per-kind fetch
functions, the current collections and loading flags, the debounced search
and the pagination helper.

Example:
    ```python
    config = load_config()
    async with ContentContext.from_config(config) as content:
        await content.fetch_universities(limit=20)
        for university in content.universities:
            print(university["name"])

        content.set_search_term("mba")
        await content.wait_for_search()
    ```
"""

from __future__ import annotations

import logging
import time
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Union

from .batch import BatchCoordinator
from .cache import CacheStore
from .config.models import GlobalConfig, SyncConfig
from .fetchers import ResourceFetcher, build_fetchers, coerce_options
from .models import RECORD_MODELS, FetchOptions, Record, RecordModel, ResourceKind
from .orchestrator import FetchOrchestrator
from .pagination import ContentPagination
from .search import DebouncedSearchController
from .sources.base import DataSource
from .sources.rest import RestDataSource
from .state import ChangeCallback, ContentState

logger = logging.getLogger(__name__)

KindLike = Union[ResourceKind, str]


class ContentContext:
    """Process-wide content synchronization context."""

    def __init__(
        self,
        source: DataSource,
        config: Optional[SyncConfig] = None,
        clock: Callable[[], float] = time.time,
    ):
        """
        Initialize the content context.

        Args:
            source: Data source queries are executed against
            config: Cache, paging and search settings
            clock: Time source for cache expiry
        """
        self.config = config or SyncConfig()
        self.source = source
        self.state = ContentState()
        self.cache = CacheStore(ttl_seconds=self.config.cache_ttl_seconds, clock=clock)
        self.orchestrator = FetchOrchestrator(self.cache, self.state)
        self.fetchers: Dict[ResourceKind, ResourceFetcher] = build_fetchers(
            source, self.orchestrator, self.config
        )
        self.batch = BatchCoordinator(self.fetchers, self.state)
        self.search = DebouncedSearchController(self.batch, delay=self.config.debounce_delay)
        self.pagination = ContentPagination(self.fetchers)

    @classmethod
    def from_config(cls, config: GlobalConfig) -> "ContentContext":
        """Create a context backed by the configured REST data source."""
        return cls(RestDataSource(config.data_source), config.sync)

    async def __aenter__(self) -> "ContentContext":
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Void any pending search and close the data source."""
        self.search.cancel()
        await self.source.close()

    # Fetching

    async def fetch(
        self, kind: KindLike, options: Optional[FetchOptions] = None, **kwargs: Any
    ) -> None:
        """
        Fetch one resource kind.

        Options may be given as a FetchOptions instance, as keyword arguments
        (force, limit, offset, search_term), or both.
        """
        await self.fetchers[ResourceKind.parse(kind)].fetch(coerce_options(options, **kwargs))

    async def fetch_universities(self, options: Optional[FetchOptions] = None, **kwargs: Any) -> None:
        await self.fetch(ResourceKind.UNIVERSITIES, options, **kwargs)

    async def fetch_programs(self, options: Optional[FetchOptions] = None, **kwargs: Any) -> None:
        await self.fetch(ResourceKind.PROGRAMS, options, **kwargs)

    async def fetch_testimonials(self, options: Optional[FetchOptions] = None, **kwargs: Any) -> None:
        await self.fetch(ResourceKind.TESTIMONIALS, options, **kwargs)

    async def fetch_leads(self, options: Optional[FetchOptions] = None, **kwargs: Any) -> None:
        await self.fetch(ResourceKind.LEADS, options, **kwargs)

    async def fetch_events(self, options: Optional[FetchOptions] = None, **kwargs: Any) -> None:
        await self.fetch(ResourceKind.EVENTS, options, **kwargs)

    async def fetch_top_recruiters(self, options: Optional[FetchOptions] = None, **kwargs: Any) -> None:
        await self.fetch(ResourceKind.TOP_RECRUITERS, options, **kwargs)

    async def fetch_hero_carousel(self, options: Optional[FetchOptions] = None, **kwargs: Any) -> None:
        await self.fetch(ResourceKind.HERO_CAROUSEL, options, **kwargs)

    async def fetch_blogs(self, options: Optional[FetchOptions] = None, **kwargs: Any) -> None:
        await self.fetch(ResourceKind.BLOGS, options, **kwargs)

    async def fetch_multiple(
        self,
        kinds: Iterable[KindLike],
        options: Optional[FetchOptions] = None,
        **kwargs: Any,
    ) -> None:
        """Fetch several kinds concurrently; failures of one never affect the others."""
        await self.batch.fetch_multiple(
            [ResourceKind.parse(kind) for kind in kinds], coerce_options(options, **kwargs)
        )

    async def refresh(self, kind: KindLike) -> None:
        """Re-fetch one kind, bypassing the cache."""
        await self.batch.refresh(ResourceKind.parse(kind))

    def clear_cache(self, kind: Optional[KindLike] = None) -> None:
        """Invalidate one kind's cache entry, or all of them."""
        self.cache.invalidate(ResourceKind.parse(kind) if kind is not None else None)

    async def load_more(
        self, kind: KindLike, current_length: int, limit: Optional[int] = None
    ) -> None:
        """Fetch the page starting at ``current_length``; pages are not merged."""
        await self.pagination.load_more(ResourceKind.parse(kind), current_length, limit)

    # Search

    @property
    def search_term(self) -> str:
        return self.search.search_term

    def set_search_term(self, term: str) -> None:
        """Change the global search term; the search runs after the quiet period."""
        self.search.set_search_term(term)

    def search_all_content(self) -> None:
        """Re-run the debounced search for the current term."""
        self.search.search_all_content()

    async def wait_for_search(self) -> None:
        """Wait for the scheduled search, if any, to finish."""
        await self.search.join()

    # State

    def content(self, kind: KindLike) -> List[Record]:
        """Current collection for a kind."""
        return list(self.state.get(ResourceKind.parse(kind)))

    def records(self, kind: KindLike) -> List[RecordModel]:
        """Current collection for a kind, parsed into its record model."""
        kind = ResourceKind.parse(kind)
        model = RECORD_MODELS[kind]
        return [model.model_validate(row) for row in self.state.get(kind)]

    @property
    def universities(self) -> List[Record]:
        return self.content(ResourceKind.UNIVERSITIES)

    @property
    def programs(self) -> List[Record]:
        return self.content(ResourceKind.PROGRAMS)

    @property
    def testimonials(self) -> List[Record]:
        return self.content(ResourceKind.TESTIMONIALS)

    @property
    def leads(self) -> List[Record]:
        return self.content(ResourceKind.LEADS)

    @property
    def events(self) -> List[Record]:
        return self.content(ResourceKind.EVENTS)

    @property
    def top_recruiters(self) -> List[Record]:
        return self.content(ResourceKind.TOP_RECRUITERS)

    @property
    def hero_carousel(self) -> List[Record]:
        return self.content(ResourceKind.HERO_CAROUSEL)

    @property
    def blogs(self) -> List[Record]:
        return self.content(ResourceKind.BLOGS)

    @property
    def loading(self) -> Mapping[ResourceKind, bool]:
        """Per-kind loading flags (read-only)."""
        return self.state.loading

    def is_loading(self, kind: KindLike) -> bool:
        return self.state.loading[ResourceKind.parse(kind)]

    @property
    def global_loading(self) -> bool:
        return self.state.global_loading

    def add_change_callback(self, callback: ChangeCallback) -> None:
        """Register a callback invoked on every content or loading change."""
        self.state.add_change_callback(callback)

    def remove_change_callback(self, callback: ChangeCallback) -> None:
        self.state.remove_change_callback(callback)

    def get_stats(self) -> Dict[str, Any]:
        """Cache and in-flight statistics."""
        return {
            "cache": self.cache.stats(),
            "in_flight": self.orchestrator.deduplicator.get_stats(),
            "global_loading": self.state.global_loading,
            "search_term": self.search.search_term,
        }
