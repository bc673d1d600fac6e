"""Tests for BrowserSession: navigation, sidebar, search and host commands."""

import asyncio
import threading

import pytest

from chestnav.commands import CommandChannel, HostCommand
from chestnav.core.config import ChestNavConfig
from chestnav.session import BrowserSession
from core.exceptions import ContentEngineError
from core.models import (
    ChestItem,
    ExtendedItemContents,
    ExtendedItemPath,
    ExtendedSearchResult,
    SearchResult,
)
from core.types import ItemKind, Theme
from services.url_resolver import ResolutionKind
from tests.conftest import PUSH_BACK, STD, VECTOR


BROKEN_LINK = "docs://[::1/broken"


@pytest.fixture
def session(engine, surface, config):
    return BrowserSession(engine, surface, config)


class TestNavigation:
    """Test cases for navigation state."""

    @pytest.mark.asyncio
    async def test_navigation_sets_location_and_sidebar(self, session):
        resolution = await session.on_did_navigate("docs://cpp/std/vector.html#push_back")

        assert resolution.kind == ResolutionKind.CONTENT
        assert session.chest_tag == "C++"
        assert session.item_path == ExtendedItemPath.from_item_path(PUSH_BACK, "C++")
        assert session.page_path == ExtendedItemPath.from_item_path(VECTOR, "C++")
        assert session.sidebar.headings == ["Contents", "Methods"]

    @pytest.mark.asyncio
    async def test_unresolved_clears_paths_and_sidebar(self, session):
        await session.on_did_navigate("docs://cpp/std/vector.html")

        await session.on_did_navigate("docs://cpp/missing.html")

        assert session.chest_tag == "C++"
        assert session.item_path is None
        assert session.page_path is None
        assert session.sidebar.is_empty

    @pytest.mark.asyncio
    async def test_home_page(self, session):
        await session.on_did_navigate("file:///app/blank.html")

        assert session.chest_tag == "Home"
        assert session.breadcrumb.tag == "Home"

    @pytest.mark.asyncio
    async def test_external_page_breadcrumb(self, session):
        await session.on_did_navigate("https://example.com/")
        session.on_title_updated("Example")

        assert session.chest_tag is None
        assert session.breadcrumb.tag == "External"
        assert session.breadcrumb.names == ("Example",)

    @pytest.mark.asyncio
    async def test_relative_link_uses_current_item_as_context(self, session, engine):
        await session.on_did_navigate("docs://cpp/std/vector.html")

        await session.on_did_navigate("std.html")

        assert session.item_path == ExtendedItemPath.from_item_path(STD, "C++")
        assert engine.context_paths[-1] == VECTOR

    @pytest.mark.asyncio
    async def test_malformed_link_shows_error_page(self, session, surface):
        await session.on_did_navigate("docs://cpp/std/vector.html")

        resolution = await session.on_did_navigate(BROKEN_LINK)

        assert resolution is None
        name, html, base_url = surface.calls[-1]
        assert name == "load_html"
        assert "Error while fetching" in html
        assert base_url == BROKEN_LINK
        assert session.page_path is None
        assert session.sidebar.is_empty

    def test_navigate_to_loads_url_and_sets_item(self, session, surface):
        path = ExtendedItemPath.from_item_path(VECTOR, "C++")

        url = session.navigate_to(path, "std/vector.html")

        assert url == "docs://cpp/std/vector.html"
        assert surface.calls == [("load_url", "docs://cpp/std/vector.html")]
        assert session.item_path == path

    @pytest.mark.asyncio
    async def test_breadcrumb_shows_page_path(self, session):
        await session.on_did_navigate("docs://cpp/std/vector.html#push_back")

        assert session.breadcrumb.tag == "C++"
        assert session.breadcrumb.names == ("std", "vector")

    @pytest.mark.asyncio
    async def test_malformed_link_finishing_late_is_discarded(self, session, surface, monkeypatch):
        gate = threading.Event()
        resolve = session._resolver.resolve

        def slow_resolve(url, context):
            if url == BROKEN_LINK:
                gate.wait(timeout=5)
            return resolve(url, context)

        monkeypatch.setattr(session._resolver, "resolve", slow_resolve)

        slow = asyncio.create_task(session.on_did_navigate(BROKEN_LINK))
        await asyncio.sleep(0)
        await session.on_did_navigate("docs://cpp/std/vector.html")
        gate.set()
        stale = await slow

        assert stale is None
        assert session.page_path == ExtendedItemPath.from_item_path(VECTOR, "C++")
        assert not session.sidebar.is_empty
        assert all(call[0] != "load_html" for call in surface.calls)

    @pytest.mark.asyncio
    async def test_engine_error_propagates(self, session, engine):
        engine.fail_with = RuntimeError("offline")

        with pytest.raises(ContentEngineError):
            await session.on_did_navigate("docs://cpp/std.html")

    @pytest.mark.asyncio
    async def test_failed_outline_fetch_leaves_empty_sidebar(self, session, engine):
        await session.on_did_navigate("docs://cpp/std/vector.html")
        assert not session.sidebar.is_empty

        def offline(path):
            raise RuntimeError("offline")

        engine.item_contents_at_path = offline

        with pytest.raises(ContentEngineError):
            await session.on_did_navigate("docs://cpp/std.html")

        assert session.page_path == ExtendedItemPath.from_item_path(STD, "C++")
        assert session.sidebar.is_empty


class TestSidebarStaleness:
    """Test cases for discarding outdated outline contents."""

    @pytest.mark.asyncio
    async def test_contents_for_previous_page_are_discarded(self, session):
        await session.on_did_navigate("docs://cpp/std/vector.html")
        sidebar = session.sidebar
        old_page = session.page_path

        await session.on_did_navigate("docs://cpp/std.html")
        applied = session.apply_contents(old_page, ExtendedItemContents())

        assert not applied
        assert session.page_path == ExtendedItemPath.from_item_path(STD, "C++")
        assert session.sidebar != sidebar
        assert session.sidebar.is_empty

    def test_contents_without_page_are_discarded(self, session, vector_page):
        assert not session.apply_contents(vector_page, ExtendedItemContents())


class TestSearchState:
    """Test cases for query, rows and selection handling."""

    @pytest.mark.asyncio
    async def test_query_produces_rows(self, session):
        applied = await session.update_query("push")

        assert applied
        assert len(session.rows) == 3
        assert session.selector.rows == session.rows

    @pytest.mark.asyncio
    async def test_empty_query_clears_rows(self, session, engine):
        await session.update_query("push")

        await session.update_query("")

        assert session.rows == ()
        assert session.selector.index is None
        assert engine.search_calls[-1][1] == "push"

    def test_results_for_old_query_are_discarded(self, session):
        session.query = "vector"

        applied = session.apply_search_results("vec", [])

        assert not applied
        assert session.rows == ()

    @pytest.mark.asyncio
    async def test_slow_search_for_old_query_is_discarded(self, session, engine):
        gate = threading.Event()
        engine.gates["vector"] = gate

        slow = asyncio.create_task(session.update_query("vector"))
        await asyncio.sleep(0)
        fast = await session.update_query("push")
        gate.set()
        stale = await slow

        assert fast
        assert not stale
        assert session.query == "push"
        assert {row.item.name for row in session.rows} == {"push_back"}

    @pytest.mark.asyncio
    async def test_submit_navigates_to_first_row(self, session, surface):
        await session.update_query("vector")

        assert session.submit_search()

        assert surface.calls[-1] == ("load_url", "docs://cpp/std/vector.html")
        assert session.item_path == ExtendedItemPath.from_item_path(VECTOR, "C++")
        assert session.query == ""
        assert session.rows == ()

    @pytest.mark.asyncio
    async def test_submit_with_stale_rows_does_nothing(self, session, surface):
        await session.update_query("vector")
        session.query = "vectors"

        assert not session.submit_search()
        assert surface.calls == []

    @pytest.mark.asyncio
    async def test_activate_selection(self, session, surface):
        await session.update_query("vector")
        session.selector.down()
        session.selector.down()

        assert session.activate_selection()

        assert surface.calls[-1] == ("load_url", "docs://cpp/std/vector.html#push_back")
        assert session.selector.index is None

    def test_activate_without_selection(self, session):
        assert not session.activate_selection()

    @pytest.mark.asyncio
    async def test_focus_lost_cancels_search(self, session):
        session.search_focused = True
        await session.update_query("push")
        session.selector.down()

        session.search_focus_lost()

        assert not session.search_focused
        assert session.query == ""
        assert session.rows == ()
        assert session.selector.current is None

    def test_dropped_results_produce_no_rows(self, session):
        hidden = ChestItem("std", ItemKind.OBJECT, ItemKind.NAMESPACE)
        session.query = "std"

        session.apply_search_results("std", [ExtendedSearchResult(SearchResult(STD), "C++", (hidden,))])

        assert session.rows == ()


class TestHostCommands:
    """Test cases for host command handling."""

    def test_commands_drive_session(self, session, surface):
        channel = CommandChannel()
        session.attach(channel)

        channel.publish(HostCommand.FOCUS_SEARCH)
        channel.publish(HostCommand.NAVIGATE_BACK)
        channel.publish(HostCommand.NAVIGATE_FORWARD)
        channel.publish(HostCommand.WINDOW_INACTIVE)
        channel.publish(HostCommand.THEME_UPDATED)

        assert session.search_focused
        assert not session.window_active
        assert surface.calls == [("go_back",), ("go_forward",), ("reload",)]

        channel.publish(HostCommand.WINDOW_ACTIVE)
        assert session.window_active

    def test_close_drops_subscriptions(self, session, surface):
        channel = CommandChannel()
        session.attach(channel)

        session.close()

        assert channel.publish(HostCommand.NAVIGATE_BACK) == 0
        assert surface.calls == []

    def test_attach_twice_subscribes_once(self, session):
        channel = CommandChannel()
        session.attach(channel)
        session.attach(channel)

        assert channel.subscriber_count(HostCommand.FOCUS_SEARCH) == 1


class TestTheme:
    """Test cases for the active content theme."""

    @pytest.mark.asyncio
    async def test_fetch_reads_assets_in_active_theme(self, session, engine):
        seen = []
        engine.read = lambda identifier, path, theme: seen.append((identifier, path, theme)) or b"<html></html>"

        session.set_theme(Theme.DARK)
        response = await session.fetch("docs://cpp/std/vector.html")

        assert response.ok
        assert seen == [("cpp", "std/vector.html", Theme.DARK)]

    @pytest.mark.asyncio
    async def test_fetch_defaults_to_configured_theme(self, engine, surface):
        seen = []
        engine.read = lambda identifier, path, theme: seen.append(theme) or b""
        config = ChestNavConfig(content={"theme": "Dark"})

        await BrowserSession(engine, surface, config).fetch("docs://cpp/a.css")

        assert seen == [Theme.DARK]

    def test_set_theme_reloads_only_on_change(self, session, surface):
        assert session.set_theme(Theme.DARK)
        assert not session.set_theme(Theme.DARK)

        assert session.theme == Theme.DARK
        assert surface.calls == [("reload",)]
