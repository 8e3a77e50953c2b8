"""
Data models for content_sync.
"""

from .query import FilterOperator, Query, QueryFilter, QueryOrder
from .records import (
    RECORD_MODELS,
    BlogPost,
    Event,
    HeroSlide,
    Lead,
    Program,
    RecordModel,
    Testimonial,
    TopRecruiter,
    University,
)
from .resource import (
    ALL_KINDS,
    CacheEntry,
    ErrorInfo,
    FetchOptions,
    QueryResult,
    Record,
    ResourceKind,
)

__all__ = [
    "ALL_KINDS",
    "BlogPost",
    "CacheEntry",
    "ErrorInfo",
    "Event",
    "FetchOptions",
    "FilterOperator",
    "HeroSlide",
    "Lead",
    "Program",
    "Query",
    "QueryFilter",
    "QueryOrder",
    "QueryResult",
    "RECORD_MODELS",
    "Record",
    "RecordModel",
    "ResourceKind",
    "Testimonial",
    "TopRecruiter",
    "University",
]
