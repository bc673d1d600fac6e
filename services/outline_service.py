"""Outline service for chestnav - builds the sidebar for the current page."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Sequence, Tuple

from loguru import logger

from core.exceptions import ContentEngineError
from core.models import (
    BaseItems,
    ChestItem,
    ExtendedItemContents,
    ExtendedItemPath,
    ItemPath,
    PageItem,
)
from core.types import ItemKind
from .base_service import BaseService


# Sidebar sections for chest items, in display order.
SECTION_HEADINGS: Tuple[Tuple[ItemKind, str], ...] = (
    (ItemKind.PAGE, "Documentation"),
    (ItemKind.NAMESPACE, "Namespaces"),
    (ItemKind.MODULE, "Modules"),
    (ItemKind.GROUP, "Groups"),
    (ItemKind.CLASS, "Classes"),
    (ItemKind.STRUCT, "Structures"),
    (ItemKind.UNION, "Unions"),
    (ItemKind.OBJECT, "Objects"),
    (ItemKind.TRAIT, "Traits"),
    (ItemKind.FUNCTION, "Functions"),
    (ItemKind.METHOD, "Methods"),
    (ItemKind.VARIABLE, "Variables"),
    (ItemKind.MEMBER, "Members"),
    (ItemKind.FIELD, "Fields"),
    (ItemKind.ENUM, "Enumerations"),
    (ItemKind.VALUE, "Values"),
    (ItemKind.VARIANT, "Variants"),
    (ItemKind.INTERFACE, "Interfaces"),
    (ItemKind.TRAIT_IMPLEMENTATION, "Trait Implementations"),
    (ItemKind.TYPEDEF, "Types"),
    (ItemKind.CONSTANT, "Constants"),
)

CONTENTS_HEADING = "Contents"
BASE_HEADING = "Base"


class SidebarElementKind(Enum):
    HEADER = "header"
    PAGE_ITEM = "pageItem"
    CHEST_ITEM = "chestItem"
    SECTION_END = "sectionEnd"


@dataclass(frozen=True)
class SidebarElement:
    """One row of the sidebar.

    Attributes:
        kind: Row kind
        title: Heading text or entry label
        depth: Nesting depth of page outline entries
        target: Path to navigate to when the entry is clicked
        url: Chest-relative URL loaded together with ``target``
    """

    kind: SidebarElementKind
    title: str = ""
    depth: int = 0
    target: Optional[ExtendedItemPath] = None
    url: Optional[str] = None

    @property
    def is_navigable(self) -> bool:
        return self.target is not None and self.url is not None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "kind": self.kind.value,
            "title": self.title,
            "depth": self.depth,
            "target": self.target.to_dict() if self.target is not None else None,
            "url": self.url,
        }


@dataclass(frozen=True)
class Sidebar:
    """Flat, ordered list of sidebar rows.

    ``is_empty`` marks the explicit "nothing indexed for this page" state.
    """

    elements: Tuple[SidebarElement, ...] = ()
    is_empty: bool = field(default=False)

    @classmethod
    def empty(cls) -> "Sidebar":
        return cls(elements=(), is_empty=True)

    @property
    def headings(self) -> List[str]:
        return [e.title for e in self.elements if e.kind == SidebarElementKind.HEADER]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "isEmpty": self.is_empty,
            "elements": [e.to_dict() for e in self.elements],
        }


def bucket_chest_items(items: Sequence[ChestItem]) -> Dict[ItemKind, List[ChestItem]]:
    """Group chest items by display kind.

    Module, Group and Page items are keyed by their item type, Object items by
    their object type. Everything else is left out. An item is only appended
    when its name differs from the last entry of its bucket, so consecutive
    duplicates (overload sets) collapse while separated ones survive.

    Args:
        items: Chest items in engine order

    Returns:
        Mapping of kind to items, preserving input order within each bucket
    """
    buckets: Dict[ItemKind, List[ChestItem]] = {}
    for item in items:
        if item.item_type.is_bucketed_by_item_type:
            key = item.item_type
        elif item.item_type == ItemKind.OBJECT and item.object_type is not None:
            key = item.object_type
        else:
            continue

        bucket = buckets.setdefault(key, [])
        if not bucket or bucket[-1].name != item.name:
            bucket.append(item)
    return buckets


def _chest_entry(owner: ExtendedItemPath, item: ChestItem) -> SidebarElement:
    target = owner.child(item.item_type, item.name) if item.url is not None else None
    return SidebarElement(SidebarElementKind.CHEST_ITEM, item.name, target=target, url=item.url)


def _page_entries(
    page_path: ExtendedItemPath,
    items: Sequence[PageItem],
    depth: int,
    out: List[SidebarElement]
) -> None:
    for item in items:
        target = page_path if item.url is not None else None
        out.append(SidebarElement(
            SidebarElementKind.PAGE_ITEM, item.title, depth=depth, target=target, url=item.url
        ))
        if item.is_category:
            _page_entries(page_path, item.contents, depth + 1, out)


def build_sidebar(
    contents: ExtendedItemContents,
    page_path: Optional[ExtendedItemPath]
) -> Sidebar:
    """Build the sidebar for a page from its contents.

    This is a pure projection: the same contents and page path always give an
    equal sidebar, and nothing is carried over from earlier calls.

    Args:
        contents: Base-expanded contents of the page
        page_path: Path of the page being shown, None when no page is known

    Returns:
        Sidebar rows, or ``Sidebar.empty()`` when there is nothing to show
    """
    if page_path is None:
        return Sidebar.empty()

    elements: List[SidebarElement] = []

    if contents.page_items:
        elements.append(SidebarElement(SidebarElementKind.HEADER, CONTENTS_HEADING))
        _page_entries(page_path, contents.page_items, 0, elements)
        elements.append(SidebarElement(SidebarElementKind.SECTION_END))

    if contents.bases:
        elements.append(SidebarElement(SidebarElementKind.HEADER, BASE_HEADING))
        for base in contents.bases:
            if base.items:
                owner = ExtendedItemPath.from_item_path(base.path, page_path.chest_tag)
                elements.append(_chest_entry(owner, base.items[0]))
        elements.append(SidebarElement(SidebarElementKind.SECTION_END))

    buckets = bucket_chest_items(contents.chest_items)
    for kind, heading in SECTION_HEADINGS:
        bucket = buckets.get(kind)
        if not bucket:
            continue
        elements.append(SidebarElement(SidebarElementKind.HEADER, heading))
        elements.extend(_chest_entry(page_path, item) for item in bucket)
        elements.append(SidebarElement(SidebarElementKind.SECTION_END))

    if not elements:
        return Sidebar.empty()
    return Sidebar(elements=tuple(elements))


class OutlineService(BaseService):
    """Service fetching page contents and expanding inherited bases."""

    def contents_at_path(self, path: ItemPath) -> ExtendedItemContents:
        """Get the contents of a path with each base resolved to its items.

        Args:
            path: Page path to fetch contents for

        Returns:
            ExtendedItemContents whose bases carry the entities visible
            through them

        Raises:
            ContentEngineError: If an engine call fails
        """
        try:
            logger.debug(f"Fetching contents at {path}")
            contents = self._engine.item_contents_at_path(_plain(path))

            bases = []
            for base_path in contents.bases:
                base = ItemPath(path.identifier, base_path)
                bases.append(BaseItems(path=base, items=tuple(self._engine.items_at_path(base))))

            logger.debug(
                f"Contents at {path}: {len(contents.chest_items)} items, "
                f"{len(contents.page_items)} page items, {len(bases)} bases"
            )
            return ExtendedItemContents(
                chest_items=contents.chest_items,
                page_items=contents.page_items,
                bases=tuple(bases),
            )

        except Exception as e:
            logger.error(f"Failed to fetch contents at {path}: {e}")
            raise ContentEngineError(
                "item_contents_at_path", path.identifier, str(e), cause=e
            ) from e

    def sidebar_for(self, page_path: Optional[ExtendedItemPath]) -> Sidebar:
        """Fetch contents for a page and build its sidebar."""
        if page_path is None:
            return Sidebar.empty()
        return build_sidebar(self.contents_at_path(page_path), page_path)


def _plain(path: ItemPath) -> ItemPath:
    if isinstance(path, ExtendedItemPath):
        return path.to_item_path()
    return path
