"""Manifest-backed content engine for chestnav.

Serves chests described by a YAML or JSON manifest, with raw assets read from
a directory per chest. It implements the full ContentEngine protocol and is
used for local browsing of small chests and for exercising the CLI.

Manifest layout::

    chests:
      - identifier: cpp
        tag: "C++"
        assets: cpp-html            # relative to the manifest
        entries:
          - path: [{elementType: Namespace, name: std}]
            items:
              - {name: std, itemType: Object, objectType: Namespace, url: std.html}
            pages: [{title: Overview, itemType: Link, url: "std.html#overview"}]
            bases: []
"""

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union

import yaml
from loguru import logger

from core.exceptions import ConfigurationError, ContentEngineError
from core.models import (
    ChestItem,
    ChestPath,
    ItemContents,
    ItemPath,
    PageItem,
    SearchParameters,
    SearchResult,
)
from core.types import ChestId, Theme


@dataclass
class _Entry:
    path: ChestPath
    items: Tuple[ChestItem, ...] = ()
    pages: Tuple[PageItem, ...] = ()
    bases: Tuple[ChestPath, ...] = ()


@dataclass
class _Chest:
    identifier: str
    tag: str
    assets: Optional[Path] = None
    entries: List[_Entry] = field(default_factory=list)


class StaticContentEngine:
    """Content engine over an in-memory set of chests."""

    def __init__(self, chests: Optional[List[_Chest]] = None):
        self._chests: Dict[str, _Chest] = {}
        for chest in chests or []:
            self._chests[chest.identifier] = chest

    @classmethod
    def from_manifest(cls, manifest_path: Union[str, Path]) -> "StaticContentEngine":
        """Load an engine from a YAML or JSON manifest file.

        Args:
            manifest_path: Path to the manifest

        Returns:
            Engine serving the chests the manifest describes

        Raises:
            ConfigurationError: If the manifest is missing or malformed
        """
        path = Path(manifest_path)
        try:
            with open(path, 'r', encoding='utf-8') as f:
                if path.suffix.lower() in ('.yaml', '.yml'):
                    data = yaml.safe_load(f)
                else:
                    data = json.load(f)
        except (OSError, yaml.YAMLError, json.JSONDecodeError) as e:
            raise ConfigurationError("engine.manifest", str(path), str(e)) from e

        if not isinstance(data, dict):
            raise ConfigurationError("engine.manifest", str(path), "Manifest must be a mapping")

        engine = cls.from_dict(data, base_dir=path.parent)
        logger.info(f"Loaded {len(engine.identifiers)} chests from {path}")
        return engine

    @classmethod
    def from_dict(cls, data: Dict[str, Any], base_dir: Optional[Path] = None) -> "StaticContentEngine":
        chests = []
        for chest_data in data.get("chests", []):
            identifier = chest_data.get("identifier")
            if not identifier:
                raise ConfigurationError("chests.identifier", identifier, "Chest identifier is required")

            assets = chest_data.get("assets")
            assets_dir = None
            if assets:
                assets_dir = Path(assets)
                if base_dir is not None and not assets_dir.is_absolute():
                    assets_dir = base_dir / assets_dir

            entries = [
                _Entry(
                    path=ChestPath.from_dict(entry.get("path")),
                    items=tuple(ChestItem.from_dict(item) for item in entry.get("items", [])),
                    pages=tuple(PageItem.from_dict(page) for page in entry.get("pages", [])),
                    bases=tuple(ChestPath.from_dict(base) for base in entry.get("bases", [])),
                )
                for entry in chest_data.get("entries", [])
            ]
            chests.append(_Chest(
                identifier=identifier,
                tag=chest_data.get("tag", identifier),
                assets=assets_dir,
                entries=entries,
            ))
        return cls(chests)

    @property
    def identifiers(self) -> List[str]:
        return list(self._chests)

    def search(
        self,
        path: Optional[ItemPath],
        query: str,
        parameters: Optional[SearchParameters] = None
    ) -> List[SearchResult]:
        params = parameters or SearchParameters()
        needle = query.lower()
        if not needle:
            return []

        matches: List[SearchResult] = []
        for chest in self._scope(path):
            for entry in chest.entries:
                if entry.path.is_root:
                    continue
                if path is not None and not _within(path.chest_path, entry.path):
                    continue
                name = entry.path.elements[-1].name.lower()
                if needle not in name:
                    continue
                # Exact names rank above prefixes, prefixes above substrings
                if name == needle:
                    score = 2
                elif name.startswith(needle):
                    score = 1
                else:
                    score = 0
                matches.append(SearchResult(ItemPath(ChestId(chest.identifier), entry.path), score))

        matches.sort(key=lambda result: -result.score)
        return matches[:params.result_count]

    def items_at_path(self, path: ItemPath) -> List[ChestItem]:
        entry = self._entry(path)
        return list(entry.items) if entry is not None else []

    def item_for_path(
        self,
        identifier: str,
        url: str,
        context_path: Optional[ItemPath]
    ) -> Optional[ItemPath]:
        return self._match(identifier, url, context_path)

    def page_for_path(
        self,
        identifier: str,
        url: str,
        context_path: Optional[ItemPath]
    ) -> Optional[ItemPath]:
        return self._match(identifier, url.split("#", 1)[0], context_path)

    def item_contents_at_path(self, path: ItemPath) -> ItemContents:
        chest = self._chests.get(path.identifier)
        if chest is None:
            return ItemContents()

        children: List[ChestItem] = []
        for entry in chest.entries:
            if entry.path.parent() == path.chest_path:
                children.extend(entry.items)

        entry = self._entry(path)
        return ItemContents(
            chest_items=tuple(children),
            page_items=entry.pages if entry is not None else (),
            bases=entry.bases if entry is not None else (),
        )

    def tag_for_identifier(self, identifier: str) -> Optional[str]:
        chest = self._chests.get(identifier)
        return chest.tag if chest is not None else None

    def read(self, identifier: str, path: str, theme: Theme) -> bytes:
        chest = self._chests.get(identifier)
        if chest is None:
            raise ContentEngineError("read", identifier, "Chest not found")
        if chest.assets is None:
            raise ContentEngineError("read", identifier, "Chest has no asset directory")

        relative = path.split("#", 1)[0].split("?", 1)[0].lstrip("/")
        root = chest.assets.resolve()
        for candidate in (root / theme.value.lower() / relative, root / relative):
            resolved = candidate.resolve()
            if resolved != root and root not in resolved.parents:
                raise ContentEngineError("read", identifier, f"Path escapes chest: {path}")
            if resolved.is_file():
                return resolved.read_bytes()

        raise ContentEngineError("read", identifier, f"Asset not found: {relative}")

    def _scope(self, path: Optional[ItemPath]) -> List[_Chest]:
        if path is None:
            return list(self._chests.values())
        chest = self._chests.get(path.identifier)
        return [chest] if chest is not None else []

    def _entry(self, path: ItemPath) -> Optional[_Entry]:
        chest = self._chests.get(path.identifier)
        if chest is None:
            return None
        for entry in chest.entries:
            if entry.path == path.chest_path:
                return entry
        return None

    def _match(
        self,
        identifier: str,
        url: str,
        context_path: Optional[ItemPath]
    ) -> Optional[ItemPath]:
        chest = self._chests.get(identifier)
        if chest is None:
            return None

        candidates = [
            entry.path for entry in chest.entries
            if any(item.url == url for item in entry.items)
        ]
        if not candidates:
            return None

        best = candidates[0]
        if context_path is not None and context_path.identifier == identifier:
            # Prefer the candidate sharing the longest prefix with the context
            best = max(candidates, key=lambda c: _common_prefix(c, context_path.chest_path))
        return ItemPath(ChestId(identifier), best)


def _within(scope: ChestPath, path: ChestPath) -> bool:
    return scope == path or scope.is_parent_of(path)


def _common_prefix(a: ChestPath, b: ChestPath) -> int:
    count = 0
    for left, right in zip(a.elements, b.elements):
        if left != right:
            break
        count += 1
    return count
