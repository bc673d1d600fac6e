"""chestnav Core Types - Common type definitions and aliases.

This module contains type definitions, enums, and type aliases used throughout
the chestnav system. Enum values match the strings the content engine uses on
the wire, so they can be parsed with ``from_string`` and emitted with
``.value``.
"""

from enum import Enum
from typing import NewType


# String-based type aliases for better semantic clarity
ChestId = NewType("ChestId", str)        # e.g., "cpp", "qt6"
ChestTag = NewType("ChestTag", str)      # Display label, e.g., "C++ 20"
ContentUrl = NewType("ContentUrl", str)  # Chest-relative or absolute URL


class ItemKind(Enum):
    """Enumeration of the kinds of entities a chest can contain.

    ``MODULE``, ``GROUP``, ``PAGE`` and ``OBJECT`` are the structural item
    types. The remaining members are object kinds, carried in
    ``ChestItem.object_type`` when the item type is ``OBJECT``, and also used
    as path element types.
    """

    # Structural types
    MODULE = "Module"
    GROUP = "Group"
    PAGE = "Page"
    OBJECT = "Object"

    # Object types
    CLASS = "Class"
    STRUCT = "Struct"
    UNION = "Union"
    ENUM = "Enum"
    VALUE = "Value"
    VARIANT = "Variant"
    TRAIT = "Trait"
    TRAIT_IMPLEMENTATION = "TraitImplementation"
    INTERFACE = "Interface"
    FUNCTION = "Function"
    METHOD = "Method"
    VARIABLE = "Variable"
    MEMBER = "Member"
    FIELD = "Field"
    CONSTANT = "Constant"
    PROPERTY = "Property"
    TYPEDEF = "Typedef"
    NAMESPACE = "Namespace"

    # Generic
    UNKNOWN = "Unknown"

    @classmethod
    def from_string(cls, value: str) -> "ItemKind":
        """Convert string to ItemKind enum, defaulting to UNKNOWN for invalid values."""
        try:
            return cls(value)
        except ValueError:
            return cls.UNKNOWN

    @property
    def is_bucketed_by_item_type(self) -> bool:
        """Return True if outline items of this type are grouped under the type itself.

        Object items are grouped by their object type instead.
        """
        return self in {self.MODULE, self.GROUP, self.PAGE}


class PageItemType(Enum):
    """Kinds of entries in a page's outline."""

    CATEGORY = "Category"
    LINK = "Link"

    @classmethod
    def from_string(cls, value: str) -> "PageItemType":
        """Convert string to PageItemType, treating unknown values as links."""
        try:
            return cls(value)
        except ValueError:
            return cls.LINK


class Theme(Enum):
    """Color theme used when reading assets from a chest."""

    LIGHT = "Light"
    DARK = "Dark"

    @classmethod
    def from_string(cls, value: str) -> "Theme":
        """Convert a theme name (case-insensitive) to a Theme."""
        for theme in cls:
            if theme.value.lower() == value.lower():
                return theme
        raise ValueError(f"Unknown theme: {value}")


class RenderStyle(Enum):
    """How a search row is displayed."""

    NAME_ONLY = "name_only"
    NAME_AND_DECLARATION = "name_and_declaration"
    ADDITIONAL_DECLARATION = "additional_declaration"
