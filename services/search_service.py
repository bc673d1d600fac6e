"""Search service for chestnav - runs engine searches and groups matches into rows."""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence, Tuple

from loguru import logger

from core.exceptions import ContentEngineError
from core.models import (
    ChestItem,
    ExtendedItemPath,
    ExtendedSearchResult,
    ItemPath,
    SearchParameters,
)
from core.types import RenderStyle
from interfaces.content_engine import ContentEngine
from .base_service import BaseService


@dataclass(frozen=True)
class SearchRow:
    """One rendered row of the search result list.

    A result with several distinct declarations renders as a group: a header
    row followed by one row per declaration. All rows of a group share the
    same ``odd_row`` stripe, and ``last_item`` marks the group's final row.
    """

    result: ExtendedSearchResult
    item: ChestItem
    render_style: RenderStyle
    odd_row: bool
    last_item: bool

    @property
    def display_name(self) -> str:
        return self.item.display_name

    @property
    def location(self) -> Tuple[str, ...]:
        """Chest tag followed by the names of the enclosing path elements."""
        return (self.result.chest_tag,) + self.result.path.chest_path.names[:-1]

    @property
    def target(self) -> ExtendedItemPath:
        """Path navigated to when the row is activated."""
        return ExtendedItemPath.from_item_path(self.result.path, self.result.chest_tag)

    @property
    def url(self) -> Optional[str]:
        return self.item.url

    def to_dict(self) -> Dict[str, Any]:
        return {
            "result": self.result.to_dict(),
            "item": self.item.to_dict(),
            "renderStyle": self.render_style.value,
            "oddRow": self.odd_row,
            "lastItem": self.last_item,
            "displayName": self.display_name,
            "location": list(self.location),
        }


def aggregate_results(results: Sequence[ExtendedSearchResult]) -> List[SearchRow]:
    """Group raw search results into display rows.

    Results are processed in engine order, which is never re-sorted. Items
    without a URL are dropped first; a result left with no items produces no
    rows and does not advance the row stripe.

    Args:
        results: Ranked results from the content engine

    Returns:
        Ordered display rows
    """
    rows: List[SearchRow] = []
    group = 0
    for result in results:
        items = [item for item in result.items if item.is_navigable]
        if not items:
            continue

        declarations = [item for item in items if item.has_extra_declaration]
        odd_row = group % 2 != 0

        if not declarations:
            rows.append(SearchRow(result, items[0], RenderStyle.NAME_ONLY, odd_row, True))
        elif len(declarations) == 1:
            rows.append(SearchRow(
                result, declarations[0], RenderStyle.NAME_AND_DECLARATION, odd_row, True
            ))
        else:
            rows.append(SearchRow(result, declarations[0], RenderStyle.NAME_ONLY, odd_row, False))
            last = len(declarations) - 1
            for i, declaration in enumerate(declarations):
                rows.append(SearchRow(
                    result, declaration, RenderStyle.ADDITIONAL_DECLARATION, odd_row, i == last
                ))

        group += 1
    return rows


class SearchService(BaseService):
    """Service for searching installed chests."""

    def __init__(
        self,
        content_engine: ContentEngine,
        default_parameters: Optional[SearchParameters] = None
    ):
        """Initialize search service.

        Args:
            content_engine: Content engine to search
            default_parameters: Parameters used when a call passes none
        """
        super().__init__(content_engine)
        self._default_parameters = default_parameters or SearchParameters()

    @property
    def default_parameters(self) -> SearchParameters:
        return self._default_parameters

    def search(
        self,
        query: str,
        path: Optional[ItemPath] = None,
        parameters: Optional[SearchParameters] = None
    ) -> List[ExtendedSearchResult]:
        """Search for a query and attach tags and co-located items.

        Args:
            query: Search text
            path: Optional path restricting the search scope
            parameters: Search parameters, defaults to the service defaults

        Returns:
            Results in engine order, each with its chest tag and the items at
            its path

        Raises:
            ContentEngineError: If an engine call fails
        """
        params = parameters or self._default_parameters
        try:
            logger.debug(f"Searching for '{query}' (limit {params.result_count})")
            results = self._engine.search(path, query, params)

            extended = []
            tags: Dict[str, str] = {}
            for result in results:
                identifier = result.path.identifier
                if identifier not in tags:
                    tags[identifier] = self.chest_tag(identifier)
                extended.append(ExtendedSearchResult(
                    result=result,
                    chest_tag=tags[identifier],
                    items=tuple(self._engine.items_at_path(result.path)),
                ))

            logger.info(f"Search for '{query}' found {len(extended)} results")
            return extended

        except Exception as e:
            logger.error(f"Search failed for '{query}': {e}")
            raise ContentEngineError(
                "search", path.identifier if path is not None else None, str(e), cause=e
            ) from e

    def search_rows(
        self,
        query: str,
        path: Optional[ItemPath] = None,
        parameters: Optional[SearchParameters] = None
    ) -> List[SearchRow]:
        """Search and aggregate the results into display rows."""
        return aggregate_results(self.search(query, path, parameters))
