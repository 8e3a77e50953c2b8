"""
Tests for settle-all batch fetching.
"""

import logging
from unittest.mock import AsyncMock, MagicMock

import pytest

from content_sync.batch import BatchCoordinator
from content_sync.exceptions import UnknownResourceError
from content_sync.models import ErrorInfo, FetchOptions, ResourceKind
from content_sync.state import ContentState, StateChange, StateField


class TestFetchMultiple:
    """Test concurrent multi-kind fetching through the context."""

    @pytest.mark.asyncio
    async def test_fetches_every_requested_kind(self, context, source):
        await context.fetch_multiple([ResourceKind.UNIVERSITIES, "programs", "blogs"])

        assert len(source.calls("universities")) == 1
        assert len(source.calls("programs")) == 1
        assert len(source.calls("blogs")) == 1
        assert source.calls("events") == []
        assert len(context.universities) == 3

    @pytest.mark.asyncio
    async def test_failure_of_one_kind_does_not_affect_others(self, context, source):
        source.exceptions["leads"] = RuntimeError("leads table unavailable")
        source.errors["events"] = ErrorInfo("relation does not exist", code="42P01")

        await context.fetch_multiple(["leads", "events", "universities"])

        assert context.leads == []
        assert context.events == []
        assert len(context.universities) == 3
        assert context.global_loading is False
        assert not any(context.loading.values())

    @pytest.mark.asyncio
    async def test_global_loading_toggles(self, context):
        changes = []
        context.add_change_callback(changes.append)

        await context.fetch_multiple(["universities"])

        global_changes = [c for c in changes if c.field == StateField.GLOBAL_LOADING]
        assert global_changes == [
            StateChange(StateField.GLOBAL_LOADING),
            StateChange(StateField.GLOBAL_LOADING),
        ]
        assert context.global_loading is False

    @pytest.mark.asyncio
    async def test_options_apply_to_every_kind(self, context, source):
        await context.fetch_multiple(["programs", "events"], search_term="mba")

        assert source.calls("programs")[0].filter.value == "*mba*"
        assert source.calls("events")[0].filter.value == "*mba*"

    @pytest.mark.asyncio
    async def test_unknown_kind_raises_before_fetching(self, context, source):
        with pytest.raises(UnknownResourceError):
            await context.fetch_multiple(["universities", "courses"])

        assert source.queries == []
        assert context.global_loading is False


class TestBatchCoordinator:
    """Test the coordinator against raising fetchers."""

    @pytest.fixture
    def state(self):
        return ContentState()

    def make_fetcher(self, side_effect=None):
        fetcher = MagicMock()
        fetcher.fetch = AsyncMock(side_effect=side_effect)
        return fetcher

    @pytest.mark.asyncio
    async def test_raising_fetcher_is_logged_and_others_settle(self, state, caplog):
        ok = self.make_fetcher()
        broken = self.make_fetcher(side_effect=RuntimeError("boom"))
        batch = BatchCoordinator(
            {ResourceKind.BLOGS: ok, ResourceKind.LEADS: broken}, state
        )

        with caplog.at_level(logging.ERROR, logger="content_sync.batch"):
            await batch.fetch_multiple([ResourceKind.LEADS, ResourceKind.BLOGS])

        ok.fetch.assert_awaited_once_with(None)
        broken.fetch.assert_awaited_once_with(None)
        assert "Error in fetch_multiple for leads: boom" in caplog.text
        assert state.global_loading is False

    @pytest.mark.asyncio
    async def test_refresh_forces(self, state):
        fetcher = self.make_fetcher()
        batch = BatchCoordinator({ResourceKind.EVENTS: fetcher}, state)

        await batch.refresh(ResourceKind.EVENTS)

        fetcher.fetch.assert_awaited_once_with(FetchOptions(force=True))


class TestRefresh:
    """Test refresh through the context."""

    @pytest.mark.asyncio
    async def test_refresh_bypasses_valid_cache(self, context, source):
        await context.fetch_universities()
        await context.fetch_universities()
        assert len(source.calls("universities")) == 1

        await context.refresh("universities")

        assert len(source.calls("universities")) == 2
