"""chestnav Search Domain Models - Raw and tag-extended search results."""

from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple

from ..exceptions import ValidationError
from .item import ChestItem
from .path import ItemPath, _lookup


DEFAULT_RESULT_COUNT = 50


@dataclass(frozen=True)
class SearchParameters:
    """Parameters passed to the content engine's search."""

    result_count: int = DEFAULT_RESULT_COUNT

    def __post_init__(self):
        if self.result_count < 1:
            raise ValidationError("result_count", self.result_count, "Result count must be positive")

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "SearchParameters":
        if not data:
            return cls()
        return cls(result_count=int(_lookup(data, "resultCount", "result_count", DEFAULT_RESULT_COUNT)))

    def to_dict(self) -> Dict[str, Any]:
        return {"resultCount": self.result_count}


@dataclass(frozen=True)
class SearchResult:
    """One match location reported by the content engine."""

    path: ItemPath
    score: int = 0

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SearchResult":
        return cls(path=ItemPath.from_dict(data["path"]), score=int(data.get("score", 0)))

    def to_dict(self) -> Dict[str, Any]:
        return {"path": self.path.to_dict(), "score": self.score}


@dataclass(frozen=True)
class ExtendedSearchResult:
    """A match location together with its chest tag and co-located entities.

    ``items`` may mix kinds (an overload set, for instance) and may contain
    entries without a URL, which must not be displayed.
    """

    result: SearchResult
    chest_tag: str
    items: Tuple[ChestItem, ...] = ()

    def __post_init__(self):
        if not isinstance(self.items, tuple):
            object.__setattr__(self, "items", tuple(self.items))

    @property
    def path(self) -> ItemPath:
        return self.result.path

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ExtendedSearchResult":
        return cls(
            result=SearchResult.from_dict(data["result"]),
            chest_tag=_lookup(data, "chestTag", "chest_tag", ""),
            items=tuple(ChestItem.from_dict(item) for item in data.get("items", [])),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "result": self.result.to_dict(),
            "chestTag": self.chest_tag,
            "items": [item.to_dict() for item in self.items],
        }
