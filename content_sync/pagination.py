"""
Offset-based "load more" helper.

`load_more` fetches rows starting at the caller's current item count. It
does not merge pages: the fetched page replaces the kind's content state,
and callers that want a growing list concatenate pages themselves.
"""

from typing import Mapping, Optional

from .fetchers import ResourceFetcher
from .models import FetchOptions, ResourceKind


class ContentPagination:
    """Forced, offset-based fetches for one kind at a time."""

    def __init__(self, fetchers: Mapping[ResourceKind, ResourceFetcher]):
        self.fetchers = fetchers

    async def load_more(
        self,
        kind: ResourceKind,
        current_length: int,
        limit: Optional[int] = None,
    ) -> None:
        """
        Fetch the page that starts after the rows the caller already holds.

        Args:
            kind: Resource kind to page through
            current_length: Number of rows already held (used as the offset)
            limit: Page size (defaults to the configured default limit for
                every kind, hero carousel included)
        """
        fetcher = self.fetchers[ResourceKind.parse(kind)]
        await fetcher.fetch(
            FetchOptions(
                offset=current_length,
                limit=limit or fetcher.config.default_limit,
                force=True,
            )
        )
