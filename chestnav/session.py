"""Browser session for chestnav - the view state of one documentation window.

The session is driven by discrete events (a click, a finished navigation, a
query edit, a host command) on a single asyncio event loop. Engine calls run
in worker threads so event handling never blocks on them, and their results
are applied only if the input they were computed for is still current:

    session = BrowserSession(engine, surface, config)
    session.attach(channel)
    await session.on_did_navigate("docs://cpp/std/vector.html")
    await session.update_query("push_back")
    session.selector.down()
    session.activate_selection()
"""

import asyncio
from typing import List, Optional, Sequence, Tuple

from loguru import logger

from core.exceptions import MalformedLinkError
from core.models import (
    ExtendedItemContents,
    ExtendedItemPath,
    ExtendedSearchResult,
    SearchParameters,
)
from core.types import Theme
from interfaces.content_engine import ContentEngine
from interfaces.content_surface import ContentSurface
from services.breadcrumb import Breadcrumb, build_breadcrumb
from services.outline_service import OutlineService, Sidebar, build_sidebar
from services.search_service import SearchRow, SearchService, aggregate_results
from services.url_resolver import Resolution, ResolutionKind, UrlResolver, content_url

from .commands import CommandChannel, HostCommand, Subscription
from .content_protocol import ContentResponse, error_document, fetch_content
from .core.config import ChestNavConfig
from .selection import SearchSelector


class BrowserSession:
    """Navigation, sidebar and search state of one window."""

    def __init__(
        self,
        engine: ContentEngine,
        surface: ContentSurface,
        config: Optional[ChestNavConfig] = None
    ):
        """Initialize browser session.

        Args:
            engine: Content engine used for resolution, outline and search
            surface: Content view the session drives
            config: Configuration, defaults to ``ChestNavConfig()``
        """
        config = config or ChestNavConfig()
        self._engine = engine
        self._surface = surface
        self._resolver = UrlResolver(
            engine,
            placeholder_page=config.content.placeholder_page,
            home_tag=config.content.home_tag,
        )
        self._outline = OutlineService(engine)
        self._search = SearchService(engine, SearchParameters(config.search.result_count))
        self.theme: Theme = config.content.theme

        # Location
        self.chest_tag: Optional[str] = None
        self.item_path: Optional[ExtendedItemPath] = None
        self.page_path: Optional[ExtendedItemPath] = None
        self.page_title: str = ""
        self.sidebar: Sidebar = Sidebar.empty()
        self._navigated_url: Optional[str] = None

        # Search
        self.query: str = ""
        self.rows: Tuple[SearchRow, ...] = ()
        self._rows_query: str = ""
        self.selector: SearchSelector[SearchRow] = SearchSelector()

        # Window
        self.window_active: bool = True
        self.search_focused: bool = False
        self._subscriptions: List[Subscription] = []

    # Navigation

    def navigate_to(self, path: ExtendedItemPath, url: str) -> str:
        """Navigate to an entry that already carries its structured path.

        Args:
            path: Path of the clicked entry
            url: Chest-relative URL of the entry

        Returns:
            The absolute URL loaded into the surface
        """
        full_url = content_url(path.identifier, url)
        logger.debug(f"Navigating to {path} ({full_url})")
        self._surface.load_url(full_url)
        self.item_path = path
        return full_url

    async def on_did_navigate(self, url: str) -> Optional[Resolution]:
        """Handle the surface finishing a navigation.

        The URL is resolved with the current item path as context. A newer
        navigation finishing first makes this one stale, and its resolution is
        then discarded.

        Args:
            url: URL the surface navigated to

        Returns:
            The applied resolution, or None when it was stale or malformed
        """
        self._navigated_url = url
        context = self.item_path
        try:
            resolution = await asyncio.to_thread(self._resolver.resolve, url, context)
        except MalformedLinkError as e:
            if url != self._navigated_url:
                logger.debug(f"Discarding stale malformed link {url}")
                return None
            logger.warning(f"Cannot navigate to malformed link: {e}")
            self._surface.load_html(error_document(url, str(e)).decode("utf-8"), url)
            self._clear_location(None)
            return None

        if url != self._navigated_url:
            logger.debug(f"Discarding stale resolution of {url}")
            return None

        self.apply_resolution(resolution)
        await self.refresh_sidebar()
        return resolution

    def apply_resolution(self, resolution: Resolution) -> None:
        """Replace the location snapshot with a resolution's result."""
        if resolution.kind == ResolutionKind.CONTENT:
            self.chest_tag = resolution.chest_tag
            self.item_path = resolution.item_path
            self.page_path = resolution.page_path
        else:
            self._clear_location(resolution.chest_tag)

    def on_title_updated(self, title: str) -> None:
        self.page_title = title

    async def fetch(self, url: str) -> ContentResponse:
        """Serve a ``docs://`` request from the surface in the active theme."""
        return await asyncio.to_thread(fetch_content, self._engine, url, self.theme)

    def set_theme(self, theme: Theme) -> bool:
        """Switch the active theme and reload the page if it changed.

        Returns:
            True if the theme changed
        """
        if theme == self.theme:
            return False
        logger.debug(f"Theme changed to {theme.value}")
        self.theme = theme
        self._surface.reload()
        return True

    def _clear_location(self, chest_tag: Optional[str]) -> None:
        self.chest_tag = chest_tag
        self.item_path = None
        self.page_path = None
        self.sidebar = Sidebar.empty()

    @property
    def breadcrumb(self) -> Optional[Breadcrumb]:
        return build_breadcrumb(self.chest_tag, self.page_path, self.page_title)

    # Sidebar

    async def refresh_sidebar(self) -> Sidebar:
        """Fetch contents for the current page and rebuild the sidebar.

        The previous page's outline is dropped before the fetch, so a failed
        fetch leaves an empty sidebar rather than one for another page.
        """
        self.sidebar = Sidebar.empty()
        path = self.page_path
        if path is None:
            return self.sidebar

        contents = await asyncio.to_thread(self._outline.contents_at_path, path)
        self.apply_contents(path, contents)
        return self.sidebar

    def apply_contents(self, path: ExtendedItemPath, contents: ExtendedItemContents) -> bool:
        """Rebuild the sidebar if ``path`` is still the current page.

        Returns:
            True if applied, False if the contents were stale
        """
        if self.page_path is None or path != self.page_path:
            logger.debug(f"Discarding stale contents for {path}")
            return False
        self.sidebar = build_sidebar(contents, self.page_path)
        return True

    # Search

    async def update_query(self, query: str) -> bool:
        """Record a query edit and search for it.

        Empty queries clear the results at once. Otherwise the search runs in
        a worker thread and its rows replace the current ones only if the
        query has not changed in the meantime.

        Returns:
            True if rows for ``query`` were applied
        """
        self.query = query
        if not query:
            self._set_rows(query, ())
            return True

        results = await asyncio.to_thread(self._search.search, query)
        return self.apply_search_results(query, results)

    def apply_search_results(self, query: str, results: Sequence[ExtendedSearchResult]) -> bool:
        """Replace the rows with results for ``query`` unless it is stale.

        Returns:
            True if applied, False if a newer query has been issued
        """
        if query != self.query:
            logger.debug(f"Discarding stale results for '{query}'")
            return False
        self._set_rows(query, aggregate_results(results))
        return True

    def _set_rows(self, query: str, rows: Sequence[SearchRow]) -> None:
        self.rows = tuple(rows)
        self._rows_query = query
        self.selector.set_rows(self.rows)

    def submit_search(self) -> bool:
        """Enter in the query box: open the first row of the current results."""
        if self._rows_query != self.query or not self.rows:
            return False
        return self._navigate_to_row(self.rows[0])

    def activate_selection(self) -> bool:
        """Open the selected row."""
        row = self.selector.activate()
        if row is None:
            return False
        return self._navigate_to_row(row)

    def _navigate_to_row(self, row: SearchRow) -> bool:
        if row.url is None:
            return False
        self.navigate_to(row.target, row.url)
        self.cancel_search()
        return True

    def cancel_search(self) -> None:
        """Clear the query, rows and cursor in one step."""
        self.query = ""
        self._set_rows("", ())

    def search_focus_lost(self) -> None:
        self.search_focused = False
        self.cancel_search()

    # Host commands

    def attach(self, channel: CommandChannel) -> None:
        """Subscribe to host commands until ``close()`` is called."""
        self.close()
        handlers = {
            HostCommand.FOCUS_SEARCH: self._on_focus_search,
            HostCommand.NAVIGATE_BACK: self._surface.go_back,
            HostCommand.NAVIGATE_FORWARD: self._surface.go_forward,
            HostCommand.WINDOW_ACTIVE: self._on_window_active,
            HostCommand.WINDOW_INACTIVE: self._on_window_inactive,
            HostCommand.THEME_UPDATED: self._surface.reload,
        }
        self._subscriptions = [
            channel.subscribe(command, handler) for command, handler in handlers.items()
        ]

    def close(self) -> None:
        """Drop all host command subscriptions."""
        for subscription in self._subscriptions:
            subscription.close()
        self._subscriptions = []

    def _on_focus_search(self) -> None:
        self.search_focused = True

    def _on_window_active(self) -> None:
        self.window_active = True

    def _on_window_inactive(self) -> None:
        self.window_active = False
