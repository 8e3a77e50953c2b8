"""
Data source interface consumed by the resource fetchers.

A data source runs a `Query` against the remote record store and returns a
`QueryResult`. It may report failures either as ``QueryResult.error`` or by
raising; the orchestrator treats both the same way.
"""
from __future__ import annotations

from abc import ABC, abstractmethod

from ..models import Query, QueryResult


class DataSource(ABC):
    """Abstract base for record stores."""

    @abstractmethod
    async def execute(self, query: Query) -> QueryResult:
        """Run a query and return its rows or error."""
        raise NotImplementedError

    async def close(self) -> None:
        """Release any held resources; default is a no-op."""
        return None

    async def __aenter__(self) -> "DataSource":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()


__all__ = ["DataSource"]
