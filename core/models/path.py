"""chestnav Path Domain Models - Structured addresses inside chests.

This module contains the addressing model every other component depends on.
A ChestPath is the ordered chain of typed elements leading from the root of a
chest to one entity (e.g., namespace -> class -> method); an ItemPath pins a
ChestPath to one chest identifier.

All path models are immutable. Descending into a child always produces a new
path object, so any number of views can hold the same path at once.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, Optional, Tuple, Union

from ..exceptions import ValidationError
from ..types import ChestId, ItemKind


def _lookup(data: Dict[str, Any], camel: str, snake: str, default: Any = None) -> Any:
    """Read a wire field that may be spelled in camelCase or snake_case."""
    if camel in data:
        return data[camel]
    return data.get(snake, default)


@dataclass(frozen=True)
class ChestPathElement:
    """One hop in a chest hierarchy.

    Attributes:
        element_type: Kind of the entity at this hop
        name: Name of the entity at this hop
    """

    element_type: ItemKind
    name: str

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ChestPathElement":
        """Create a path element from its wire representation."""
        element_type = _lookup(data, "elementType", "element_type")
        if isinstance(element_type, str):
            element_type = ItemKind.from_string(element_type)
        elif not isinstance(element_type, ItemKind):
            raise ValidationError("element_type", element_type, "Element type is required")

        name = data.get("name")
        if name is None:
            raise ValidationError("name", name, "Element name is required")

        return cls(element_type=element_type, name=str(name))

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the camelCase wire representation."""
        return {"elementType": self.element_type.value, "name": self.name}

    def __str__(self) -> str:
        return f"{self.element_type.value}:{self.name}"


@dataclass(frozen=True)
class ChestPath:
    """Ordered sequence of path elements; the empty path is the chest root.

    The element order is the identity of an addressable entity within a
    chest. Elements are stored in a tuple so no holder of a path can change
    it under another holder.
    """

    elements: Tuple[ChestPathElement, ...] = ()

    def __post_init__(self):
        """Normalize any iterable of elements into a tuple."""
        if not isinstance(self.elements, tuple):
            object.__setattr__(self, "elements", tuple(self.elements))

    @classmethod
    def root(cls) -> "ChestPath":
        """Return the empty path addressing the root of a chest."""
        return cls(())

    @classmethod
    def from_dict(cls, data: Union[Dict[str, Any], list, None]) -> "ChestPath":
        """Create a path from ``{"elements": [...]}`` or a bare element list."""
        if data is None:
            return cls.root()
        elements = data if isinstance(data, list) else data.get("elements", [])
        return cls(tuple(ChestPathElement.from_dict(element) for element in elements))

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the wire representation."""
        return {"elements": [element.to_dict() for element in self.elements]}

    def append(self, element: ChestPathElement) -> "ChestPath":
        """Return a new path one level deeper; this path is left untouched."""
        return ChestPath(self.elements + (element,))

    def child(self, element_type: ItemKind, name: str) -> "ChestPath":
        """Return a new path descending into the named child."""
        return self.append(ChestPathElement(element_type, name))

    def truncate(self, length: int) -> "ChestPath":
        """Return the prefix of this path with at most ``length`` elements."""
        if length < 0:
            raise ValidationError("length", length, "Length cannot be negative")
        return ChestPath(self.elements[:length])

    def parent(self) -> Optional["ChestPath"]:
        """Return the enclosing path, or None for the root."""
        if not self.elements:
            return None
        return self.truncate(len(self.elements) - 1)

    def is_parent_of(self, other: "ChestPath") -> bool:
        """Check whether ``other`` lies strictly below this path."""
        return (
            len(other.elements) > len(self.elements)
            and other.elements[:len(self.elements)] == self.elements
        )

    @property
    def is_root(self) -> bool:
        return not self.elements

    @property
    def names(self) -> Tuple[str, ...]:
        return tuple(element.name for element in self.elements)

    def __len__(self) -> int:
        return len(self.elements)

    def __iter__(self) -> Iterator[ChestPathElement]:
        return iter(self.elements)

    def __str__(self) -> str:
        return "/".join(str(element) for element in self.elements)


@dataclass(frozen=True)
class ItemPath:
    """Address of one entity inside one chest.

    Attributes:
        identifier: Identifier of the chest
        chest_path: Path to the entity inside the chest
    """

    identifier: ChestId
    chest_path: ChestPath = field(default_factory=ChestPath.root)

    def __post_init__(self):
        """Validate item path after initialization."""
        if not self.identifier:
            raise ValidationError("identifier", self.identifier, "Chest identifier cannot be empty")

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ItemPath":
        """Create an item path from its wire representation."""
        identifier = data.get("identifier")
        if not identifier:
            raise ValidationError("identifier", identifier, "Chest identifier is required")
        return cls(
            identifier=ChestId(identifier),
            chest_path=ChestPath.from_dict(_lookup(data, "chestPath", "chest_path")),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the wire representation."""
        return {"identifier": self.identifier, "chestPath": self.chest_path.to_dict()}

    def child(self, element_type: ItemKind, name: str) -> "ItemPath":
        """Return the path of a child entity in the same chest."""
        return ItemPath(self.identifier, self.chest_path.child(element_type, name))

    def same_place(self, other: Optional["ItemPath"]) -> bool:
        """Check whether two paths address the same entity, ignoring display data."""
        if other is None:
            return False
        return self.identifier == other.identifier and self.chest_path == other.chest_path

    def __str__(self) -> str:
        return f"{self.identifier}:{self.chest_path}"


@dataclass(frozen=True)
class ExtendedItemPath(ItemPath):
    """ItemPath carrying the display tag of its chest.

    The tag is derived from the identifier and excluded from equality and
    hashing: two extended paths are the same place iff identifier and chest
    path are equal.

    Attributes:
        chest_tag: Human readable label of the chest
    """

    chest_tag: str = field(default="", compare=False)

    @classmethod
    def from_item_path(cls, path: ItemPath, chest_tag: str) -> "ExtendedItemPath":
        """Attach a display tag to a plain item path."""
        return cls(identifier=path.identifier, chest_path=path.chest_path, chest_tag=chest_tag)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ExtendedItemPath":
        """Create an extended path from its wire representation."""
        base = ItemPath.from_dict(data)
        tag = _lookup(data, "chestTag", "chest_tag") or base.identifier
        return cls.from_item_path(base, tag)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the wire representation."""
        result = super().to_dict()
        result["chestTag"] = self.chest_tag
        return result

    def to_item_path(self) -> ItemPath:
        """Drop the display tag."""
        return ItemPath(self.identifier, self.chest_path)

    def with_tag(self, chest_tag: str) -> "ExtendedItemPath":
        """Return a copy with a refreshed display tag."""
        return ExtendedItemPath(self.identifier, self.chest_path, chest_tag)

    def child(self, element_type: ItemKind, name: str) -> "ExtendedItemPath":
        """Return the path of a child entity, keeping the display tag."""
        return ExtendedItemPath(
            self.identifier, self.chest_path.child(element_type, name), self.chest_tag
        )


@dataclass(frozen=True)
class OptionalItemPath:
    """Result of locating a URL inside a chest.

    ``chest_path`` is None when the chest is known but the exact item is not;
    identifier and tag are still reported for display. ``chest_page_path`` is
    the path of the containing page, which the outline is keyed by.
    """

    identifier: ChestId
    chest_tag: str
    chest_path: Optional[ChestPath] = None
    chest_page_path: Optional[ChestPath] = None

    @property
    def is_located(self) -> bool:
        return self.chest_path is not None

    def item_path(self) -> Optional[ExtendedItemPath]:
        """Return the exact item address, if one was found."""
        if self.chest_path is None:
            return None
        return ExtendedItemPath(self.identifier, self.chest_path, self.chest_tag)

    def page_path(self) -> Optional[ExtendedItemPath]:
        """Return the containing page address, if one was found."""
        if self.chest_page_path is None:
            return None
        return ExtendedItemPath(self.identifier, self.chest_page_path, self.chest_tag)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "OptionalItemPath":
        """Create from the wire representation."""
        chest_path = _lookup(data, "chestPath", "chest_path")
        page_path = _lookup(data, "chestPagePath", "chest_page_path")
        return cls(
            identifier=ChestId(data["identifier"]),
            chest_tag=_lookup(data, "chestTag", "chest_tag", ""),
            chest_path=ChestPath.from_dict(chest_path) if chest_path is not None else None,
            chest_page_path=ChestPath.from_dict(page_path) if page_path is not None else None,
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the wire representation."""
        return {
            "identifier": self.identifier,
            "chestTag": self.chest_tag,
            "chestPath": self.chest_path.to_dict() if self.chest_path is not None else None,
            "chestPagePath": (
                self.chest_page_path.to_dict() if self.chest_page_path is not None else None
            ),
        }
