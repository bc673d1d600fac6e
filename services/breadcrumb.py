"""Breadcrumb builder for chestnav - the "where am I" path shown for a page."""

from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple

from core.models import ChestPathElement, ExtendedItemPath
from core.types import ItemKind


EXTERNAL_TAG = "External"


@dataclass(frozen=True)
class Breadcrumb:
    tag: str
    elements: Tuple[ChestPathElement, ...] = ()

    @property
    def names(self) -> Tuple[str, ...]:
        return tuple(element.name for element in self.elements)

    def to_dict(self) -> Dict[str, Any]:
        return {"tag": self.tag, "elements": [e.to_dict() for e in self.elements]}


def build_breadcrumb(
    chest_tag: Optional[str],
    page_path: Optional[ExtendedItemPath],
    page_title: str = ""
) -> Optional[Breadcrumb]:
    """Build the breadcrumb for the page being displayed.

    A located page shows its own path. A page inside a known chest that could
    not be located shows the chest tag and the document title, and a page
    outside any chest shows the title under the "External" tag.

    Args:
        chest_tag: Tag of the chest being displayed, if any
        page_path: Located page path, if any
        page_title: Document title reported by the content surface

    Returns:
        Breadcrumb, or None when there is nothing to show
    """
    if page_path is not None:
        return Breadcrumb(page_path.chest_tag, tuple(page_path.chest_path.elements))

    title = ChestPathElement(ItemKind.PAGE, page_title)
    if chest_tag is not None:
        return Breadcrumb(chest_tag, (title,))
    if page_title:
        return Breadcrumb(EXTERNAL_TAG, (title,))
    return None
