"""chestnav Item Domain Models - Entities returned by the content engine.

This module contains the models for chest entities (ChestItem), page outline
entries (PageItem), and the contents of a path (ItemContents and its
base-expanded form ExtendedItemContents).
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple

from ..exceptions import ModelError, ValidationError
from ..types import ItemKind, PageItemType
from .path import ChestPath, ItemPath, _lookup


@dataclass(frozen=True)
class ChestItem:
    """A leaf or branch entity inside a chest.

    Kinds are tagged on two levels: ``item_type`` is the structural kind, and
    when it is ``OBJECT`` the ``object_type`` carries the kind used for
    display (class, function, ...).

    Attributes:
        name: Short name of the entity
        item_type: Structural kind
        object_type: Object kind when item_type is OBJECT
        full_name: Fully qualified name, when the engine knows one
        declaration: Signature or type text
        url: Chest-relative URL of the entity's documentation
    """

    name: str
    item_type: ItemKind
    object_type: Optional[ItemKind] = None
    full_name: Optional[str] = None
    declaration: Optional[str] = None
    url: Optional[str] = None

    @property
    def effective_kind(self) -> Optional[ItemKind]:
        """Kind used for display and bucketing."""
        if self.item_type == ItemKind.OBJECT:
            return self.object_type
        return self.item_type

    @property
    def is_navigable(self) -> bool:
        return self.url is not None

    @property
    def has_extra_declaration(self) -> bool:
        """True when the declaration says more than the bare name."""
        return self.declaration is not None and self.declaration != self.name

    @property
    def display_name(self) -> str:
        return self.full_name if self.full_name is not None else self.name

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ChestItem":
        """Create a ChestItem from its wire representation.

        Args:
            data: Dictionary with camelCase or snake_case keys

        Returns:
            ChestItem created from dictionary data

        Raises:
            ValidationError: If required fields are missing
        """
        name = data.get("name")
        if name is None:
            raise ValidationError("name", name, "Item name is required")

        item_type = _lookup(data, "itemType", "item_type")
        if item_type is None:
            raise ValidationError("item_type", item_type, "Item type is required")

        try:
            object_type = _lookup(data, "objectType", "object_type")
            return cls(
                name=str(name),
                item_type=_as_kind(item_type),
                object_type=_as_kind(object_type) if object_type is not None else None,
                full_name=_lookup(data, "fullName", "full_name"),
                declaration=data.get("declaration"),
                url=data.get("url"),
            )
        except (TypeError, ValueError) as e:
            raise ModelError("ChestItem", "from_dict", str(e)) from e

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the wire representation, omitting unset optional fields."""
        result: Dict[str, Any] = {"name": self.name, "itemType": self.item_type.value}
        if self.object_type is not None:
            result["objectType"] = self.object_type.value
        if self.full_name is not None:
            result["fullName"] = self.full_name
        if self.declaration is not None:
            result["declaration"] = self.declaration
        if self.url is not None:
            result["url"] = self.url
        return result


@dataclass(frozen=True)
class PageItem:
    """One entry of a page's outline.

    ``CATEGORY`` entries carry nested ``contents``; every other kind is a leaf.
    """

    title: str
    item_type: PageItemType = PageItemType.LINK
    url: Optional[str] = None
    contents: Tuple["PageItem", ...] = ()

    def __post_init__(self):
        if not isinstance(self.contents, tuple):
            object.__setattr__(self, "contents", tuple(self.contents))

    @property
    def is_category(self) -> bool:
        return self.item_type == PageItemType.CATEGORY

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PageItem":
        """Create a PageItem (and its nested contents) from the wire representation."""
        title = data.get("title")
        if title is None:
            raise ValidationError("title", title, "Page item title is required")

        item_type = _lookup(data, "itemType", "item_type", PageItemType.LINK.value)
        if not isinstance(item_type, PageItemType):
            item_type = PageItemType.from_string(str(item_type))

        return cls(
            title=str(title),
            item_type=item_type,
            url=data.get("url"),
            contents=tuple(cls.from_dict(child) for child in data.get("contents") or []),
        )

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {"title": self.title, "itemType": self.item_type.value}
        if self.url is not None:
            result["url"] = self.url
        if self.contents:
            result["contents"] = [child.to_dict() for child in self.contents]
        return result


@dataclass(frozen=True)
class ItemContents:
    """Contents of a path as answered by the content engine.

    Bases are the chest paths of inherited-from entities, relative to the
    same chest as the queried path.
    """

    chest_items: Tuple[ChestItem, ...] = ()
    page_items: Tuple[PageItem, ...] = ()
    bases: Tuple[ChestPath, ...] = ()

    def __post_init__(self):
        for name in ("chest_items", "page_items", "bases"):
            value = getattr(self, name)
            if not isinstance(value, tuple):
                object.__setattr__(self, name, tuple(value))

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ItemContents":
        return cls(
            chest_items=tuple(
                ChestItem.from_dict(item) for item in _lookup(data, "chestItems", "chest_items", [])
            ),
            page_items=tuple(
                PageItem.from_dict(item) for item in _lookup(data, "pageItems", "page_items", [])
            ),
            bases=tuple(ChestPath.from_dict(base) for base in data.get("bases", [])),
        )


@dataclass(frozen=True)
class BaseItems:
    """One inherited-base relationship.

    Attributes:
        path: Address of the base entity (in the same chest)
        items: Entities visible through that base; the first one is the
            representative link target
    """

    path: ItemPath
    items: Tuple[ChestItem, ...] = ()

    def __post_init__(self):
        if not isinstance(self.items, tuple):
            object.__setattr__(self, "items", tuple(self.items))

    @property
    def representative(self) -> Optional[ChestItem]:
        return self.items[0] if self.items else None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "BaseItems":
        return cls(
            path=ItemPath.from_dict(data["path"]),
            items=tuple(ChestItem.from_dict(item) for item in data.get("items", [])),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {"path": self.path.to_dict(), "items": [item.to_dict() for item in self.items]}


@dataclass(frozen=True)
class ExtendedItemContents:
    """Contents of a path with every base expanded into its items."""

    chest_items: Tuple[ChestItem, ...] = ()
    page_items: Tuple[PageItem, ...] = ()
    bases: Tuple[BaseItems, ...] = ()

    def __post_init__(self):
        for name in ("chest_items", "page_items", "bases"):
            value = getattr(self, name)
            if not isinstance(value, tuple):
                object.__setattr__(self, name, tuple(value))

    @property
    def is_empty(self) -> bool:
        return not (self.chest_items or self.page_items or self.bases)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ExtendedItemContents":
        return cls(
            chest_items=tuple(
                ChestItem.from_dict(item) for item in _lookup(data, "chestItems", "chest_items", [])
            ),
            page_items=tuple(
                PageItem.from_dict(item) for item in _lookup(data, "pageItems", "page_items", [])
            ),
            bases=tuple(BaseItems.from_dict(base) for base in data.get("bases", [])),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "chestItems": [item.to_dict() for item in self.chest_items],
            "pageItems": [item.to_dict() for item in self.page_items],
            "bases": [base.to_dict() for base in self.bases],
        }


def _as_kind(value: Any) -> ItemKind:
    if isinstance(value, ItemKind):
        return value
    return ItemKind.from_string(str(value))

