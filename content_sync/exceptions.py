"""
Exception hierarchy for the content synchronization layer.

Fetch paths never raise these to callers; the orchestrator logs them and
leaves content state untouched. They surface only from data sources (where
the orchestrator catches them) and from configuration or lookup mistakes.
"""

from __future__ import annotations

import asyncio
from typing import Any, Optional

import aiohttp


class ContentSyncError(Exception):
    """
    Base exception for all content synchronization errors.

    Attributes:
        message: Human-readable error message
        details: Additional error details as keyword arguments
    """

    def __init__(self, message: str, **kwargs: Any) -> None:
        super().__init__(message)
        self.message = message
        self.details = kwargs


class ConfigurationError(ContentSyncError):
    """Raised when configuration cannot be loaded or is invalid."""

    pass


class UnknownResourceError(ContentSyncError, KeyError):
    """Raised when a resource kind outside the fixed set is requested."""

    def __init__(self, kind: Any) -> None:
        super().__init__(f"Unknown resource kind: {kind!r}", kind=kind)
        self.kind = kind

    def __str__(self) -> str:
        return self.message


class DataSourceError(ContentSyncError):
    """
    Raised for failures talking to the remote record store.

    Attributes:
        table: Table that was being queried (if applicable)
    """

    def __init__(self, message: str, table: Optional[str] = None, **kwargs: Any) -> None:
        super().__init__(message, **kwargs)
        self.table = table


class ConnectionError(DataSourceError):
    """Raised when the record store cannot be reached."""

    pass


class TimeoutError(DataSourceError):
    """
    Raised when a query exceeds its timeout.

    Attributes:
        timeout_value: The timeout value that was exceeded (in seconds)
    """

    def __init__(
        self,
        message: str,
        table: Optional[str] = None,
        timeout_value: Optional[float] = None,
    ) -> None:
        super().__init__(message, table)
        self.timeout_value = timeout_value


class QueryError(DataSourceError):
    """Raised when the record store rejects a query."""

    def __init__(
        self,
        message: str,
        table: Optional[str] = None,
        status_code: Optional[int] = None,
        code: Optional[str] = None,
        hint: Optional[str] = None,
    ) -> None:
        super().__init__(message, table)
        self.status_code = status_code
        self.code = code
        self.hint = hint


class ErrorHandler:
    """Converts transport exceptions into DataSourceError subclasses."""

    @staticmethod
    def handle_aiohttp_error(
        error: Exception, table: Optional[str] = None
    ) -> DataSourceError:
        """
        Convert aiohttp exceptions to DataSourceError subclasses.

        Args:
            error: The original exception
            table: The table being queried

        Returns:
            Appropriate DataSourceError subclass
        """
        if isinstance(error, asyncio.TimeoutError):
            return TimeoutError(f"Query timed out: {error}", table=table)

        elif isinstance(error, aiohttp.ContentTypeError):
            return QueryError(
                f"Unexpected response body: {error.message}",
                table=table,
                status_code=error.status,
            )

        elif isinstance(error, aiohttp.ClientConnectionError):
            return ConnectionError(f"Connection error: {error}", table=table)

        else:
            return DataSourceError(f"Unexpected data source error: {error}", table=table)
