"""
Per-kind resource fetchers.

Each resource kind is bound to a fixed `ResourceSpec` describing its table,
searchable column, ordering and default page size. A `ResourceFetcher` turns
fetch options into a `Query` for its kind and hands the orchestrator a
closure that executes it.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional

from .config.models import SyncConfig
from .models import FetchOptions, Query, QueryFilter, QueryResult, ResourceKind
from .orchestrator import FetchOrchestrator
from .sources.base import DataSource


@dataclass(frozen=True)
class ResourceSpec:
    """How one resource kind is queried."""

    table: str
    search_column: str
    select: str = "*"
    order_column: Optional[str] = None
    ascending: bool = False
    carousel: bool = False  # uses the smaller carousel page size

    def build_query(self, options: FetchOptions, limit: int) -> Query:
        query = Query(table=self.table, select=self.select)
        if self.order_column:
            query = query.order_by(self.order_column, self.ascending)
        query = query.range(limit, options.offset)
        if options.search_term:
            query = query.where(QueryFilter.contains(self.search_column, options.search_term))
        return query


def _check_exhaustive(specs: Dict[ResourceKind, ResourceSpec]) -> Dict[ResourceKind, ResourceSpec]:
    missing = set(ResourceKind) - set(specs)
    if missing:
        raise RuntimeError(
            f"No resource spec for: {', '.join(sorted(k.value for k in missing))}"
        )
    return specs


RESOURCE_SPECS: Mapping[ResourceKind, ResourceSpec] = _check_exhaustive({
    ResourceKind.UNIVERSITIES: ResourceSpec(
        table="universities",
        search_column="name",
    ),
    ResourceKind.PROGRAMS: ResourceSpec(
        table="programs",
        select="*, university_details:universities(id, name, logo)",
        search_column="title",
        order_column="created_at",
    ),
    ResourceKind.TESTIMONIALS: ResourceSpec(
        table="testimonials",
        search_column="name",
        order_column="created_at",
    ),
    ResourceKind.LEADS: ResourceSpec(
        table="leads",
        search_column="name",
        order_column="created_at",
    ),
    ResourceKind.EVENTS: ResourceSpec(
        table="events",
        search_column="title",
        order_column="created_at",
    ),
    ResourceKind.TOP_RECRUITERS: ResourceSpec(
        table="top_recruiters",
        search_column="company_name",
        order_column="display_order",
        ascending=True,
    ),
    ResourceKind.HERO_CAROUSEL: ResourceSpec(
        table="hero_carousel",
        search_column="title",
        order_column="display_order",
        ascending=True,
        carousel=True,
    ),
    ResourceKind.BLOGS: ResourceSpec(
        table="blogs",
        search_column="title",
        order_column="created_at",
    ),
})


class ResourceFetcher:
    """Fetches one resource kind through the orchestrator."""

    def __init__(
        self,
        kind: ResourceKind,
        source: DataSource,
        orchestrator: FetchOrchestrator,
        config: Optional[SyncConfig] = None,
    ):
        self.kind = kind
        self.spec = RESOURCE_SPECS[kind]
        self.source = source
        self.orchestrator = orchestrator
        self.config = config or SyncConfig()

    @property
    def default_limit(self) -> int:
        if self.spec.carousel:
            return self.config.carousel_limit
        return self.config.default_limit

    def build_query(self, options: FetchOptions) -> Query:
        """Build the query for the given options."""
        return self.spec.build_query(options, options.limit or self.default_limit)

    async def fetch(self, options: Optional[FetchOptions] = None) -> None:
        """
        Fetch this kind, honouring cache and in-flight requests.

        Args:
            options: Fetch options (force, limit, offset, search_term)
        """
        options = options or FetchOptions()
        query = self.build_query(options)

        async def run_query() -> QueryResult:
            return await self.source.execute(query)

        await self.orchestrator.fetch_with_cache(self.kind, run_query, options)

    async def __call__(self, options: Optional[FetchOptions] = None) -> None:
        await self.fetch(options)


def build_fetchers(
    source: DataSource,
    orchestrator: FetchOrchestrator,
    config: Optional[SyncConfig] = None,
) -> Dict[ResourceKind, ResourceFetcher]:
    """Create one fetcher per resource kind."""
    return {
        kind: ResourceFetcher(kind, source, orchestrator, config)
        for kind in ResourceKind
    }


def coerce_options(options: Optional[FetchOptions] = None, **kwargs: Any) -> FetchOptions:
    """Build FetchOptions from an instance, keyword arguments, or both."""
    if options is None:
        return FetchOptions(**kwargs)
    return options.merged(**kwargs) if kwargs else options


__all__ = [
    "RESOURCE_SPECS",
    "ResourceFetcher",
    "ResourceSpec",
    "build_fetchers",
    "coerce_options",
]
