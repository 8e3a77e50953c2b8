"""
Tests for the content context facade.
"""

import pytest

from content_sync import ContentContext, GlobalConfig, RestDataSource
from content_sync.exceptions import UnknownResourceError
from content_sync.models import FetchOptions, Program, ResourceKind, University
from content_sync.state import StateChange, StateField


class TestCaching:
    """Test cache behaviour end to end."""

    @pytest.mark.asyncio
    async def test_repeat_fetch_within_ttl_hits_cache(self, context, source, clock):
        await context.fetch_universities(limit=20)
        clock.advance(1)
        await context.fetch_universities(limit=20)

        assert len(source.calls("universities")) == 1
        assert len(context.universities) == 3

    @pytest.mark.asyncio
    async def test_fetch_after_ttl_goes_to_network(self, context, source, clock):
        await context.fetch_universities()
        clock.advance(301)
        await context.fetch_universities()

        assert len(source.calls("universities")) == 2

    @pytest.mark.asyncio
    async def test_clear_cache_for_one_kind(self, context, source):
        await context.fetch_multiple(["universities", "programs"])

        context.clear_cache("universities")
        await context.fetch_universities()
        await context.fetch_programs()

        assert len(source.calls("universities")) == 2
        assert len(source.calls("programs")) == 1

    @pytest.mark.asyncio
    async def test_clear_cache_for_all_kinds(self, context, source):
        await context.fetch_multiple(["universities", "programs"])

        context.clear_cache()
        await context.fetch_multiple(["universities", "programs"])

        assert len(source.calls("universities")) == 2
        assert len(source.calls("programs")) == 2

    @pytest.mark.asyncio
    async def test_clear_cache_keeps_content(self, context):
        await context.fetch_universities()

        context.clear_cache()

        assert len(context.universities) == 3


class TestFetchFunctions:
    """Test the per-kind fetch entry points."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "method,table,attribute",
        [
            ("fetch_universities", "universities", "universities"),
            ("fetch_programs", "programs", "programs"),
            ("fetch_testimonials", "testimonials", "testimonials"),
            ("fetch_leads", "leads", "leads"),
            ("fetch_events", "events", "events"),
            ("fetch_top_recruiters", "top_recruiters", "top_recruiters"),
            ("fetch_hero_carousel", "hero_carousel", "hero_carousel"),
            ("fetch_blogs", "blogs", "blogs"),
        ],
    )
    async def test_each_kind(self, context, source, method, table, attribute):
        await getattr(context, method)()

        assert len(source.calls(table)) == 1
        assert getattr(context, attribute) == source.rows[table]

    @pytest.mark.asyncio
    async def test_fetch_by_identifier(self, context, source):
        await context.fetch("topRecruiters", FetchOptions(search_term="info"))

        assert source.calls("top_recruiters")[0].filter.value == "*info*"
        assert context.content(ResourceKind.TOP_RECRUITERS)[0]["company_name"] == "Infosys"

    @pytest.mark.asyncio
    async def test_unknown_kind(self, context):
        with pytest.raises(UnknownResourceError) as exc_info:
            await context.fetch("courses")

        assert "courses" in str(exc_info.value)
        assert isinstance(exc_info.value, KeyError)

    def test_content_returns_a_copy(self, context):
        context.content("universities").append({"id": "x"})

        assert context.universities == []


class TestRecords:
    """Test typed record access."""

    @pytest.mark.asyncio
    async def test_records_are_parsed(self, context):
        await context.fetch_multiple(["universities", "programs"])

        universities = context.records("universities")
        programs = context.records(ResourceKind.PROGRAMS)

        assert all(isinstance(u, University) for u in universities)
        assert universities[0].name == "Amity University"
        assert isinstance(programs[0], Program)
        assert programs[0].university_id == "u1"


class TestStateAccess:
    """Test loading flags and change callbacks."""

    def test_initial_state(self, context):
        assert context.global_loading is False
        assert set(context.loading) == set(ResourceKind)
        assert not any(context.loading.values())
        assert context.is_loading("blogs") is False
        assert context.search_term == ""

    def test_loading_view_is_read_only(self, context):
        with pytest.raises(TypeError):
            context.loading[ResourceKind.BLOGS] = True

    @pytest.mark.asyncio
    async def test_change_callbacks(self, context):
        changes = []
        context.add_change_callback(changes.append)

        await context.fetch_blogs()

        assert changes == [
            StateChange(StateField.LOADING, ResourceKind.BLOGS),
            StateChange(StateField.CONTENT, ResourceKind.BLOGS),
            StateChange(StateField.LOADING, ResourceKind.BLOGS),
        ]

        context.remove_change_callback(changes.append)
        await context.refresh("blogs")
        assert len(changes) == 3

    @pytest.mark.asyncio
    async def test_failing_callback_does_not_break_fetch(self, context):
        def broken(change):
            raise ValueError("render failed")

        context.add_change_callback(broken)
        await context.fetch_events()

        assert len(context.events) == 1
        assert context.is_loading("events") is False

    @pytest.mark.asyncio
    async def test_stats(self, context):
        await context.fetch_universities()

        stats = context.get_stats()

        assert stats["cache"]["universities"]["size"] == 3
        assert stats["cache"]["universities"]["valid"] is True
        assert stats["in_flight"]["pending_requests"] == 0
        assert stats["global_loading"] is False


class TestLifecycle:
    """Test construction and teardown."""

    @pytest.mark.asyncio
    async def test_async_context_manager_closes_source(self, source, sync_config, clock):
        async with ContentContext(source, sync_config, clock=clock) as context:
            context.set_search_term("mba")

        assert source.closed is True
        assert context.search.pending is False

    def test_from_config(self):
        config = GlobalConfig(
            data_source={"url": "https://project.supabase.co/", "api_key": "anon-key"},
            sync={"cache_ttl_seconds": 60, "default_limit": 10},
        )

        context = ContentContext.from_config(config)

        assert isinstance(context.source, RestDataSource)
        assert context.source.base_url == "https://project.supabase.co/rest/v1"
        assert context.cache.ttl_seconds == 60
        assert context.fetchers[ResourceKind.BLOGS].default_limit == 10
