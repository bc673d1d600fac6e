"""chestnav Core Types Package - Common type definitions and aliases.

This package contains type definitions, enums, and type aliases used throughout
the chestnav system.

The types are organized into logical groups:
- Item and page kind enumerations
- Display enumerations (themes, render styles)
- String aliases for chest identifiers, tags and URLs
"""

from .common import (
    ChestId,
    ChestTag,
    ContentUrl,
    ItemKind,
    PageItemType,
    RenderStyle,
    Theme,
)

__all__ = [
    # Enums
    "ItemKind",
    "PageItemType",
    "RenderStyle",
    "Theme",

    # String types
    "ChestId",
    "ChestTag",
    "ContentUrl",
]
