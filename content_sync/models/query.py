"""
Declarative query description handed to a data source.

A query targets one table and supports at most one text filter, one
ordering, a row limit and an optional offset.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional


class FilterOperator(str, Enum):
    """Supported filter predicates."""

    EQ = "eq"
    ILIKE = "ilike"  # case-insensitive pattern match


@dataclass(frozen=True)
class QueryFilter:
    """A single predicate on one text column."""

    column: str
    operator: FilterOperator
    value: str

    @classmethod
    def contains(cls, column: str, term: str) -> "QueryFilter":
        """Case-insensitive "contains" predicate."""
        return cls(column, FilterOperator.ILIKE, f"*{term}*")


@dataclass(frozen=True)
class QueryOrder:
    """Ordering by one column."""

    column: str
    ascending: bool = True


@dataclass(frozen=True)
class Query:
    """Immutable query description."""

    table: str
    select: str = "*"
    filter: Optional[QueryFilter] = None
    order: Optional[QueryOrder] = None
    limit: Optional[int] = None
    offset: Optional[int] = None

    def where(self, query_filter: QueryFilter) -> "Query":
        return replace(self, filter=query_filter)

    def order_by(self, column: str, ascending: bool = True) -> "Query":
        return replace(self, order=QueryOrder(column, ascending))

    def range(self, limit: Optional[int], offset: Optional[int] = None) -> "Query":
        return replace(self, limit=limit, offset=offset)


__all__ = ["FilterOperator", "Query", "QueryFilter", "QueryOrder"]
