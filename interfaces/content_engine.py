"""ContentEngine protocol for chestnav - abstract interface to the documentation database."""

from typing import Optional, Protocol

from core.models import (
    ChestItem,
    ItemContents,
    ItemPath,
    SearchParameters,
    SearchResult,
)
from core.types import Theme


class ContentEngine(Protocol):
    """Abstract protocol for content engines.

    The content engine indexes, stores and searches installed chests. chestnav
    treats it as trusted local infrastructure and consumes only the operations
    below.
    """

    def search(
        self,
        path: Optional[ItemPath],
        query: str,
        parameters: Optional[SearchParameters] = None
    ) -> list[SearchResult]:
        """Search for a query, optionally scoped to a path. Results are ranked."""
        ...

    def items_at_path(self, path: ItemPath) -> list[ChestItem]:
        """Get every entity located exactly at a path."""
        ...

    def item_for_path(
        self,
        identifier: str,
        url: str,
        context_path: Optional[ItemPath]
    ) -> Optional[ItemPath]:
        """Get the path of the item a chest-relative URL points to.

        Args:
            identifier: Chest identifier
            url: URL relative to the chest root
            context_path: Where the user currently is, used to disambiguate
        """
        ...

    def page_for_path(
        self,
        identifier: str,
        url: str,
        context_path: Optional[ItemPath]
    ) -> Optional[ItemPath]:
        """Get the path of the page containing the item a URL points to."""
        ...

    def item_contents_at_path(self, path: ItemPath) -> ItemContents:
        """Get child entities, page outline and base paths of a path."""
        ...

    def tag_for_identifier(self, identifier: str) -> Optional[str]:
        """Get the display tag of a chest."""
        ...

    def read(self, identifier: str, path: str, theme: Theme) -> bytes:
        """Read a raw asset from a chest.

        Raises:
            Exception: Any engine error when the asset or chest does not exist
        """
        ...
