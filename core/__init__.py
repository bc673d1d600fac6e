"""chestnav Core Package - Domain models, types, and exceptions.

This package contains the core domain models and types that form the foundation
of the chestnav architecture. These models are independent of infrastructure
concerns and provide a clean separation between navigation logic and the
content engine or user interface that surrounds it.

Modules:
    models: Path, item and search result models
    types: Common type definitions and enums
    exceptions: Core exception classes for error handling
"""

from .exceptions import (
    ChestNavError,
    ConfigurationError,
    ContentEngineError,
    MalformedLinkError,
    ModelError,
    UntrustedOriginError,
    ValidationError,
)
from .models import (
    BaseItems,
    ChestItem,
    ChestPath,
    ChestPathElement,
    ExtendedItemContents,
    ExtendedItemPath,
    ExtendedSearchResult,
    ItemContents,
    ItemPath,
    OptionalItemPath,
    PageItem,
    SearchParameters,
    SearchResult,
)
from .types import ChestId, ItemKind, PageItemType, RenderStyle, Theme

__all__ = [
    # Domain Models
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

    # Types
    "ChestId",
    "ItemKind",
    "PageItemType",
    "RenderStyle",
    "Theme",

    # Exceptions
    "ChestNavError",
    "ValidationError",
    "ModelError",
    "MalformedLinkError",
    "UntrustedOriginError",
    "ContentEngineError",
    "ConfigurationError",
]

__version__ = "0.3.0"
