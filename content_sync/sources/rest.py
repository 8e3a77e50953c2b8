"""
PostgREST data source over aiohttp.

Translates a `Query` into a PostgREST request (the REST dialect served by
Supabase projects) and converts the response into a `QueryResult`:

    GET {url}/rest/v1/programs?select=*&order=created_at.desc&limit=20&title=ilike.*mba*

HTTP error bodies become ``QueryResult.error``. Transport failures and
unreadable success bodies are raised as `DataSourceError` subclasses.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Dict, Optional

import aiohttp
from aiohttp import ClientSession, ClientTimeout

from ..config.models import DataSourceConfig
from ..exceptions import ConfigurationError, DataSourceError, ErrorHandler, QueryError
from ..models import ErrorInfo, Query, QueryResult
from .base import DataSource

logger = logging.getLogger(__name__)


class RestDataSource(DataSource):
    """Record store reached through a PostgREST endpoint."""

    def __init__(
        self,
        config: DataSourceConfig,
        session: Optional[ClientSession] = None,
    ):
        """
        Initialize the REST data source.

        Args:
            config: Endpoint URL, key and timeout
            session: Existing session to reuse; it is not closed by `close`.
                After `close` the source cannot run further queries.

        Raises:
            ConfigurationError: If the endpoint URL is missing
        """
        if not config.url:
            raise ConfigurationError("Data source URL is not configured")
        self.config = config
        self._session = session
        self._owns_session = session is None
        self._closed = False

    @property
    def base_url(self) -> str:
        return f"{self.config.url}{self.config.rest_path}"

    def _headers(self) -> Dict[str, str]:
        headers = {"Accept": "application/json"}
        if self.config.api_key is not None:
            key = self.config.api_key.get_secret_value()
            headers["apikey"] = key
            headers["Authorization"] = f"Bearer {key}"
        if self.config.schema_name:
            headers["Accept-Profile"] = self.config.schema_name
        return headers

    async def _get_session(self) -> ClientSession:
        if self._closed:
            raise DataSourceError("Data source is closed")
        if self._session is None or self._session.closed:
            self._session = ClientSession(
                timeout=ClientTimeout(total=self.config.timeout),
            )
            self._owns_session = True
        return self._session

    @staticmethod
    def build_params(query: Query) -> Dict[str, str]:
        """Translate a query into PostgREST query-string parameters."""
        params = {"select": query.select}
        if query.order is not None:
            direction = "asc" if query.order.ascending else "desc"
            params["order"] = f"{query.order.column}.{direction}"
        if query.limit is not None:
            params["limit"] = str(query.limit)
        if query.offset:
            params["offset"] = str(query.offset)
        if query.filter is not None:
            params[query.filter.column] = (
                f"{query.filter.operator.value}.{query.filter.value}"
            )
        return params

    async def execute(self, query: Query) -> QueryResult:
        """
        Run a query against the endpoint.

        Raises:
            DataSourceError: On connection failures, timeouts, a success
                response that is not JSON, or a source that has been closed
        """
        session = await self._get_session()
        url = f"{self.base_url}/{query.table}"
        params = self.build_params(query)
        logger.debug(f"Querying {query.table} with {params}")

        try:
            async with session.get(
                url, params=params, headers=self._headers()
            ) as response:
                if 200 <= response.status < 300:
                    try:
                        payload = await response.json()
                    except ValueError as e:
                        raise QueryError(
                            f"Malformed response body from {query.table}: {e}",
                            table=query.table,
                            status_code=response.status,
                        ) from e
                    if not isinstance(payload, list):
                        return QueryResult(
                            error=ErrorInfo(
                                f"Expected a list of rows from {query.table}",
                                status_code=response.status,
                            )
                        )
                    return QueryResult(data=payload)
                return QueryResult(error=await self._error_info(response))
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise ErrorHandler.handle_aiohttp_error(e, table=query.table) from e

    async def _error_info(self, response: aiohttp.ClientResponse) -> ErrorInfo:
        """Build ErrorInfo from a PostgREST error body."""
        body: Any
        try:
            body = await response.json(content_type=None)
        except ValueError:
            body = None

        if isinstance(body, dict):
            return ErrorInfo(
                message=str(body.get("message") or response.reason or "Request failed"),
                code=body.get("code"),
                details=body.get("details"),
                hint=body.get("hint"),
                status_code=response.status,
            )
        return ErrorInfo(
            message=response.reason or f"HTTP {response.status}",
            status_code=response.status,
        )

    async def close(self) -> None:
        """Close the session if this source created it, and refuse further queries."""
        self._closed = True
        if self._session is not None and self._owns_session:
            await self._session.close()
        self._session = None


__all__ = ["RestDataSource"]
