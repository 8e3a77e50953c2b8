"""
Resource kinds, fetch options and query result models.

These models are shared by every layer of the synchronization core.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from ..exceptions import UnknownResourceError

Record = Dict[str, Any]


class ResourceKind(str, Enum):
    """Kinds of records synchronized by the content layer.

    The set is closed: every kind must be bound to exactly one fetcher.
    """

    UNIVERSITIES = "universities"
    PROGRAMS = "programs"
    TESTIMONIALS = "testimonials"
    LEADS = "leads"
    EVENTS = "events"
    TOP_RECRUITERS = "topRecruiters"
    HERO_CAROUSEL = "heroCarousel"
    BLOGS = "blogs"

    @classmethod
    def parse(cls, value: Any) -> "ResourceKind":
        """Resolve a kind from its enum member or identifier string."""
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            raise UnknownResourceError(value) from None


ALL_KINDS: List[ResourceKind] = list(ResourceKind)


class FetchOptions(BaseModel):
    """Per-call options accepted by every resource fetcher."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    force: bool = Field(default=False, description="Bypass the cache")
    limit: Optional[int] = Field(default=None, ge=1, description="Maximum rows")
    offset: Optional[int] = Field(default=None, ge=0, description="Rows to skip")
    search_term: Optional[str] = Field(
        default=None, description="Case-insensitive contains filter"
    )

    def merged(self, **overrides: Any) -> "FetchOptions":
        """Return a validated copy with the given fields replaced."""
        return FetchOptions(**{**self.model_dump(), **overrides})


@dataclass
class ErrorInfo:
    """Error body returned by the record store."""

    message: str
    code: Optional[str] = None
    details: Optional[str] = None
    hint: Optional[str] = None
    status_code: Optional[int] = None

    def __str__(self) -> str:
        parts = [self.message]
        if self.code:
            parts.append(f"code={self.code}")
        if self.status_code is not None:
            parts.append(f"status={self.status_code}")
        return " ".join(parts)


@dataclass
class QueryResult:
    """Outcome of one data source call: rows or an error, never both."""

    data: Optional[List[Record]] = None
    error: Optional[ErrorInfo] = None

    @property
    def is_success(self) -> bool:
        return self.error is None and self.data is not None


@dataclass
class CacheEntry:
    """Last successful fetch for one resource kind."""

    data: List[Record] = field(default_factory=list)
    timestamp: float = 0.0
    last_query: str = ""

    def age(self, now: float) -> float:
        """Seconds elapsed since the entry was written."""
        return now - self.timestamp


__all__ = [
    "ALL_KINDS",
    "CacheEntry",
    "ErrorInfo",
    "FetchOptions",
    "QueryResult",
    "Record",
    "ResourceKind",
]
