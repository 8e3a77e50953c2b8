"""
Async content synchronization layer for a university and programs catalog.

This package keeps the UI-visible collections of every content kind in sync
with a remote record store, fetching each kind at most once per TTL window.

Features:
- Time-boxed per-kind cache keyed by search term
- Deduplication of concurrent identical requests
- Per-kind loading flags and a batch-wide loading flag
- Settle-all batch fetching across kinds
- Debounced global search
- Offset-based "load more" pagination
- PostgREST data source over aiohttp
- Configuration from YAML/JSON files and environment variables
"""

from .batch import BatchCoordinator
from .cache import CacheStore
from .config import (
    ConfigLoader,
    DataSourceConfig,
    GlobalConfig,
    LoggingConfig,
    LogLevel,
    SyncConfig,
    load_config,
)
from .context import ContentContext
from .exceptions import (
    ConfigurationError,
    ConnectionError,
    ContentSyncError,
    DataSourceError,
    QueryError,
    TimeoutError,
    UnknownResourceError,
)
from .fetchers import RESOURCE_SPECS, ResourceFetcher, ResourceSpec
from .logging import LoggingManager, setup_logging
from .models import (
    ALL_KINDS,
    ErrorInfo,
    FetchOptions,
    Query,
    QueryFilter,
    QueryResult,
    Record,
    ResourceKind,
)
from .orchestrator import FetchOrchestrator
from .pagination import ContentPagination
from .search import DebouncedSearchController
from .sources import DataSource, RestDataSource
from .state import ContentState, StateChange, StateField

__version__ = "0.1.0"

__all__ = [
    # Context
    "ContentContext",
    # Core components
    "BatchCoordinator",
    "CacheStore",
    "ContentPagination",
    "ContentState",
    "DebouncedSearchController",
    "FetchOrchestrator",
    "ResourceFetcher",
    "ResourceSpec",
    "RESOURCE_SPECS",
    "StateChange",
    "StateField",
    # Models
    "ALL_KINDS",
    "ErrorInfo",
    "FetchOptions",
    "Query",
    "QueryFilter",
    "QueryResult",
    "Record",
    "ResourceKind",
    # Data sources
    "DataSource",
    "RestDataSource",
    # Configuration
    "ConfigLoader",
    "DataSourceConfig",
    "GlobalConfig",
    "LoggingConfig",
    "LogLevel",
    "SyncConfig",
    "load_config",
    # Logging
    "LoggingManager",
    "setup_logging",
    # Exceptions
    "ConfigurationError",
    "ConnectionError",
    "ContentSyncError",
    "DataSourceError",
    "QueryError",
    "TimeoutError",
    "UnknownResourceError",
]
