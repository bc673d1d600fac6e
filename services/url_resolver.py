"""URL resolver service for chestnav - turns followed links into structured paths."""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional, Tuple
from urllib.parse import SplitResult, unquote, urljoin, urlsplit

from loguru import logger

from core.exceptions import ContentEngineError, MalformedLinkError
from core.models import ExtendedItemPath, ItemPath, OptionalItemPath
from core.types import ChestId
from interfaces.content_engine import ContentEngine
from .base_service import BaseService


CONTENT_SCHEME = "docs"
PLACEHOLDER_SCHEME = "file"
DEFAULT_PLACEHOLDER_PAGE = "blank.html"
DEFAULT_HOME_TAG = "Home"


class ResolutionKind(Enum):
    """Outcome categories of resolving a URL."""

    CONTENT = "content"        # Chest and exact item located
    UNRESOLVED = "unresolved"  # Chest known, location inside it unknown
    HOME = "home"              # Local placeholder page
    EXTERNAL = "external"      # Any other scheme, displayed as raw content


@dataclass(frozen=True)
class Resolution:
    """Where a URL points to, at item and page granularity.

    ``item_path`` addresses the exact entity and is what equality and
    navigation context use; ``page_path`` addresses the document containing
    it and is what the outline is keyed by. They differ when a URL points at
    content owned by something other than its containing page.
    """

    kind: ResolutionKind
    url: str
    chest_tag: Optional[str] = None
    item_path: Optional[ExtendedItemPath] = None
    page_path: Optional[ExtendedItemPath] = None

    @property
    def is_located(self) -> bool:
        return self.item_path is not None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "kind": self.kind.value,
            "url": self.url,
            "chestTag": self.chest_tag,
            "itemPath": self.item_path.to_dict() if self.item_path is not None else None,
            "pagePath": self.page_path.to_dict() if self.page_path is not None else None,
        }


def content_url(identifier: str, url: str) -> str:
    """Join a chest-relative URL onto the root of a chest.

    Absolute URLs (any scheme) are returned unchanged.

    Args:
        identifier: Chest identifier
        url: Chest-relative or absolute URL

    Returns:
        Absolute ``docs://`` URL
    """
    if urlsplit(url).scheme:
        return url
    # urljoin only handles hierarchical schemes it knows about.
    joined = urljoin(f"http://{identifier}/", url)
    return CONTENT_SCHEME + joined[len("http"):]


def parse_url(url: str) -> SplitResult:
    """Split a URL, reporting unparsable input as a MalformedLinkError."""
    try:
        parts = urlsplit(url)
    except ValueError as e:
        raise MalformedLinkError(url, str(e), cause=e) from e
    if not parts.scheme:
        raise MalformedLinkError(url, "URL has no scheme")
    return parts


def split_content_url(url: str) -> Tuple[str, str]:
    """Split a ``docs://<identifier>/<path>`` URL.

    Args:
        url: Content URL

    Returns:
        Tuple of (identifier, chest-relative path). The path keeps any query
        and fragment, since those can select an item inside a page.

    Raises:
        MalformedLinkError: If the URL is unparsable, not a content URL, or
            names no chest
    """
    parts = parse_url(url)
    if parts.scheme != CONTENT_SCHEME:
        raise MalformedLinkError(url, f"Expected a {CONTENT_SCHEME}:// URL")
    if not parts.netloc:
        raise MalformedLinkError(url, "URL does not name a chest")

    path = unquote(parts.path).lstrip("/")
    if parts.query:
        path += "?" + parts.query
    if parts.fragment:
        path += "#" + parts.fragment
    return parts.netloc, path


class UrlResolver(BaseService):
    """Service resolving followed hyperlinks against the content engine."""

    def __init__(
        self,
        content_engine: ContentEngine,
        placeholder_page: str = DEFAULT_PLACEHOLDER_PAGE,
        home_tag: str = DEFAULT_HOME_TAG
    ):
        """Initialize URL resolver.

        Args:
            content_engine: Content engine used for lookups
            placeholder_page: File name of the local blank page
            home_tag: Tag reported while the placeholder page is shown
        """
        super().__init__(content_engine)
        self._placeholder_page = placeholder_page
        self._home_tag = home_tag

    def resolve(self, target_url: str, current_path: Optional[ItemPath] = None) -> Resolution:
        """Resolve a followed link into a structured location.

        Relative links are resolved against the chest of ``current_path``, and
        the current path is handed to the engine as disambiguation context.

        Args:
            target_url: Absolute or relative URL that was followed
            current_path: Where the user currently is, if anywhere

        Returns:
            Resolution describing the link target

        Raises:
            MalformedLinkError: If the URL cannot be parsed
            ContentEngineError: If an engine lookup fails
        """
        url = target_url
        try:
            has_scheme = bool(urlsplit(target_url).scheme)
        except ValueError as e:
            raise MalformedLinkError(target_url, str(e), cause=e) from e
        if not has_scheme and current_path is not None:
            url = content_url(current_path.identifier, target_url)

        parts = parse_url(url)

        if parts.scheme == CONTENT_SCHEME:
            identifier, path = split_content_url(url)
            located = self.locate(identifier, path, current_path)
            if not located.is_located:
                logger.debug(f"No item found for {url} in chest '{identifier}'")
                return Resolution(ResolutionKind.UNRESOLVED, url, chest_tag=located.chest_tag)
            return Resolution(
                ResolutionKind.CONTENT,
                url,
                chest_tag=located.chest_tag,
                item_path=located.item_path(),
                page_path=located.page_path(),
            )

        if parts.scheme == PLACEHOLDER_SCHEME and parts.path.endswith("/" + self._placeholder_page):
            return Resolution(ResolutionKind.HOME, url, chest_tag=self._home_tag)

        return Resolution(ResolutionKind.EXTERNAL, url)

    def locate(
        self,
        identifier: str,
        path: str,
        context_path: Optional[ItemPath] = None
    ) -> OptionalItemPath:
        """Look up the item and page a chest-relative URL points to.

        Both engine resolvers are always consulted. When they disagree on the
        chest identifier, or the page lookup misses, the item path doubles as
        the page path. The tag is always that of ``identifier``.

        Args:
            identifier: Chest identifier taken from the URL
            path: Chest-relative URL
            context_path: Current location used for disambiguation

        Returns:
            OptionalItemPath with ``chest_path`` None when no item matched
        """
        context = _plain(context_path)
        chest_tag = self.chest_tag(identifier)
        try:
            item = self._engine.item_for_path(identifier, path, context)
            page = self._engine.page_for_path(identifier, path, context)
        except Exception as e:
            logger.error(f"Failed to locate '{path}' in chest '{identifier}': {e}")
            raise ContentEngineError("locate", identifier, str(e), cause=e) from e

        if item is None:
            return OptionalItemPath(identifier=ChestId(identifier), chest_tag=chest_tag)

        if page is None or page.identifier != item.identifier:
            return OptionalItemPath(
                identifier=item.identifier,
                chest_tag=chest_tag,
                chest_path=item.chest_path,
                chest_page_path=item.chest_path,
            )

        return OptionalItemPath(
            identifier=item.identifier,
            chest_tag=chest_tag,
            chest_path=item.chest_path,
            chest_page_path=page.chest_path,
        )


def _plain(path: Optional[ItemPath]) -> Optional[ItemPath]:
    if isinstance(path, ExtendedItemPath):
        return path.to_item_path()
    return path
