"""chestnav Core Models Package - Domain model definitions.

This package contains the core domain models that represent the fundamental
entities in the chestnav system: structured paths into chests, the entities
the content engine returns, and search results.

The models follow these principles:
- Immutable data structures using dataclasses with frozen=True
- Tuples instead of lists, so a model shared by several views cannot change
- ``from_dict``/``to_dict`` for the camelCase wire format
"""

from .path import (
    ChestPath,
    ChestPathElement,
    ExtendedItemPath,
    ItemPath,
    OptionalItemPath,
)
from .item import BaseItems, ChestItem, ExtendedItemContents, ItemContents, PageItem
from .search import ExtendedSearchResult, SearchParameters, SearchResult

__all__ = [
    "ChestPathElement",
    "ChestPath",
    "ItemPath",
    "ExtendedItemPath",
    "OptionalItemPath",
    "ChestItem",
    "PageItem",
    "ItemContents",
    "BaseItems",
    "ExtendedItemContents",
    "SearchParameters",
    "SearchResult",
    "ExtendedSearchResult",
]
