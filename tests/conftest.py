"""Shared fixtures: an in-memory content engine and a recording content surface."""

import os
import threading
from typing import Dict, List, Optional, Tuple

import pytest

from chestnav.core.config import ChestNavConfig, reset_config
from core.models import (
    ChestItem,
    ChestPath,
    ExtendedItemPath,
    ItemContents,
    ItemPath,
    PageItem,
    SearchParameters,
    SearchResult,
)
from core.types import ItemKind, PageItemType


def cpp_path(*elements: Tuple[ItemKind, str]) -> ItemPath:
    path = ChestPath.root()
    for kind, name in elements:
        path = path.child(kind, name)
    return ItemPath("cpp", path)


STD = cpp_path((ItemKind.NAMESPACE, "std"))
VECTOR = cpp_path((ItemKind.NAMESPACE, "std"), (ItemKind.CLASS, "vector"))
PUSH_BACK = cpp_path(
    (ItemKind.NAMESPACE, "std"), (ItemKind.CLASS, "vector"), (ItemKind.METHOD, "push_back")
)
SIZE = cpp_path(
    (ItemKind.NAMESPACE, "std"), (ItemKind.CLASS, "vector"), (ItemKind.METHOD, "size")
)


class FakeContentEngine:
    """Table-driven ContentEngine used across the test suite."""

    def __init__(self):
        self.tags: Dict[str, str] = {}
        self.item_urls: Dict[Tuple[str, str], ItemPath] = {}
        self.page_urls: Dict[Tuple[str, str], ItemPath] = {}
        self.items: Dict[Tuple[str, ChestPath], List[ChestItem]] = {}
        self.contents: Dict[Tuple[str, ChestPath], ItemContents] = {}
        self.results: Dict[str, List[SearchResult]] = {}
        self.assets: Dict[Tuple[str, str], bytes] = {}
        self.gates: Dict[str, threading.Event] = {}
        self.fail_with: Optional[Exception] = None
        self.context_paths: List[Optional[ItemPath]] = []
        self.search_calls: List[Tuple[Optional[ItemPath], str, SearchParameters]] = []

    def _check(self):
        if self.fail_with is not None:
            raise self.fail_with

    def search(self, path, query, parameters):
        self._check()
        self.search_calls.append((path, query, parameters))
        gate = self.gates.get(query)
        if gate is not None:
            gate.wait(timeout=5)
        return list(self.results.get(query, []))[:parameters.result_count]

    def items_at_path(self, path):
        self._check()
        return list(self.items.get((path.identifier, path.chest_path), []))

    def item_for_path(self, identifier, url, context_path):
        self._check()
        self.context_paths.append(context_path)
        return self.item_urls.get((identifier, url))

    def page_for_path(self, identifier, url, context_path):
        self._check()
        return self.page_urls.get((identifier, url))

    def item_contents_at_path(self, path):
        self._check()
        return self.contents.get((path.identifier, path.chest_path), ItemContents())

    def tag_for_identifier(self, identifier):
        return self.tags.get(identifier)

    def read(self, identifier, path, theme):
        self._check()
        try:
            return self.assets[(identifier, path)]
        except KeyError:
            raise FileNotFoundError(f"{identifier}/{path}")


class RecordingSurface:
    """ContentSurface that records every call."""

    def __init__(self):
        self.calls: List[Tuple] = []

    def load_url(self, url):
        self.calls.append(("load_url", url))

    def load_html(self, html, base_url):
        self.calls.append(("load_html", html, base_url))

    def go_back(self):
        self.calls.append(("go_back",))

    def go_forward(self):
        self.calls.append(("go_forward",))

    def reload(self):
        self.calls.append(("reload",))


def populate_cpp(engine: FakeContentEngine) -> FakeContentEngine:
    """Fill an engine with a small C++ standard library chest."""
    engine.tags["cpp"] = "C++"

    engine.item_urls[("cpp", "std.html")] = STD
    engine.page_urls[("cpp", "std.html")] = STD
    engine.item_urls[("cpp", "std/vector.html")] = VECTOR
    engine.page_urls[("cpp", "std/vector.html")] = VECTOR
    engine.item_urls[("cpp", "std/vector.html#push_back")] = PUSH_BACK
    engine.page_urls[("cpp", "std/vector.html#push_back")] = VECTOR

    engine.items[("cpp", STD.chest_path)] = [
        ChestItem("std", ItemKind.OBJECT, ItemKind.NAMESPACE, url="std.html"),
    ]
    engine.items[("cpp", VECTOR.chest_path)] = [
        ChestItem("vector", ItemKind.OBJECT, ItemKind.CLASS, full_name="std::vector",
                  declaration="template<class T> class vector", url="std/vector.html"),
    ]
    engine.items[("cpp", PUSH_BACK.chest_path)] = [
        ChestItem("push_back", ItemKind.OBJECT, ItemKind.METHOD,
                  declaration="void push_back(const T& value)", url="std/vector.html#push_back"),
        ChestItem("push_back", ItemKind.OBJECT, ItemKind.METHOD,
                  declaration="void push_back(T&& value)", url="std/vector.html#push_back"),
        ChestItem("push_back", ItemKind.OBJECT, ItemKind.METHOD, url=None),
    ]
    engine.items[("cpp", SIZE.chest_path)] = [
        ChestItem("size", ItemKind.OBJECT, ItemKind.METHOD, declaration="size",
                  url="std/vector.html#size"),
    ]

    engine.contents[("cpp", VECTOR.chest_path)] = ItemContents(
        chest_items=(
            ChestItem("push_back", ItemKind.OBJECT, ItemKind.METHOD, url="std/vector.html#push_back"),
            ChestItem("push_back", ItemKind.OBJECT, ItemKind.METHOD, url="std/vector.html#push_back"),
            ChestItem("size", ItemKind.OBJECT, ItemKind.METHOD, url="std/vector.html#size"),
        ),
        page_items=(
            PageItem("Member functions", PageItemType.CATEGORY, contents=(
                PageItem("push_back", PageItemType.LINK, url="std/vector.html#push_back"),
            )),
        ),
    )

    engine.results["push"] = [SearchResult(PUSH_BACK, 1)]
    engine.results["vector"] = [SearchResult(VECTOR, 2), SearchResult(PUSH_BACK, 0)]

    engine.assets[("cpp", "std/vector.html")] = b"<html>vector</html>"
    return engine


@pytest.fixture(autouse=True)
def isolated_environment(tmp_path, monkeypatch):
    """Keep user config files and CHESTNAV_* variables out of every test."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    for name in list(os.environ):
        if name.startswith("CHESTNAV_"):
            monkeypatch.delenv(name)
    reset_config()
    yield
    reset_config()


@pytest.fixture
def engine():
    return populate_cpp(FakeContentEngine())


@pytest.fixture
def surface():
    return RecordingSurface()


@pytest.fixture
def config():
    return ChestNavConfig()


@pytest.fixture
def vector_page():
    return ExtendedItemPath.from_item_path(VECTOR, "C++")
