"""
Shared test fixtures and configuration for the content_sync test suite.
"""

import asyncio
from typing import Dict, List, Optional

import pytest

from content_sync import ContentContext, SyncConfig
from content_sync.models import ErrorInfo, Query, QueryResult, Record
from content_sync.sources.base import DataSource


class FakeClock:
    """Manually advanced time source."""

    def __init__(self, start: float = 1_000_000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeDataSource(DataSource):
    """In-memory record store that records every query it receives."""

    def __init__(self) -> None:
        self.rows: Dict[str, List[Record]] = {}
        self.errors: Dict[str, ErrorInfo] = {}
        self.exceptions: Dict[str, Exception] = {}
        self.queries: List[Query] = []
        # Set inside a test to hold queries until released
        self.gate: Optional[asyncio.Event] = None
        self.closed = False

    async def execute(self, query: Query) -> QueryResult:
        self.queries.append(query)
        if self.gate is not None:
            await self.gate.wait()

        if query.table in self.exceptions:
            raise self.exceptions[query.table]
        if query.table in self.errors:
            return QueryResult(error=self.errors[query.table])

        rows = self.rows.get(query.table, [])
        if query.filter is not None:
            term = query.filter.value.strip("*").lower()
            rows = [
                row for row in rows
                if term in str(row.get(query.filter.column, "")).lower()
            ]
        start = query.offset or 0
        end = start + query.limit if query.limit else None
        return QueryResult(data=list(rows[start:end]))

    def calls(self, table: str) -> List[Query]:
        """Queries issued against one table."""
        return [q for q in self.queries if q.table == table]

    async def close(self) -> None:
        self.closed = True


@pytest.fixture
def clock() -> FakeClock:
    """Clock starting well past the epoch so empty entries are expired."""
    return FakeClock()


@pytest.fixture
def sample_rows() -> Dict[str, List[Record]]:
    """A few rows for every table."""
    return {
        "universities": [
            {"id": "u1", "name": "Amity University", "logo": "amity.png"},
            {"id": "u2", "name": "Manipal University", "logo": "manipal.png"},
            {"id": "u3", "name": "Jain University", "logo": "jain.png"},
        ],
        "programs": [
            {"id": "p1", "title": "Online MBA", "university_id": "u1"},
            {"id": "p2", "title": "Executive MBA", "university_id": "u2"},
            {"id": "p3", "title": "BCA", "university_id": "u3"},
        ],
        "testimonials": [
            {"id": "t1", "name": "Priya", "content": "Great program"},
        ],
        "leads": [
            {"id": "l1", "name": "Rahul", "email": "rahul@example.com"},
        ],
        "events": [
            {"id": "e1", "title": "MBA Webinar"},
        ],
        "top_recruiters": [
            {"id": "r1", "company_name": "Infosys", "display_order": 1},
        ],
        "hero_carousel": [
            {"id": "h1", "title": "Admissions open", "display_order": 1},
        ],
        "blogs": [
            {"id": "b1", "title": "Why an MBA"},
        ],
    }


@pytest.fixture
def source(sample_rows) -> FakeDataSource:
    """Fake data source populated with sample rows."""
    fake = FakeDataSource()
    fake.rows = sample_rows
    return fake


@pytest.fixture
def sync_config() -> SyncConfig:
    """Sync configuration with a short debounce for tests."""
    return SyncConfig(debounce_delay=0.05)


@pytest.fixture
def context(source, sync_config, clock) -> ContentContext:
    """Content context wired to the fake data source and clock."""
    return ContentContext(source, sync_config, clock=clock)
