"""Tests for the manifest-backed StaticContentEngine."""

import json

import pytest
import yaml

from core.exceptions import ConfigurationError, ContentEngineError
from core.models import ChestPath, ItemPath, SearchParameters
from core.types import ItemKind, Theme
from providers.engine import StaticContentEngine, create_engine, load_engine_factory

MANIFEST = {
    "chests": [{
        "identifier": "cpp",
        "tag": "C++",
        "assets": "cpp-html",
        "entries": [
            {
                "path": [{"elementType": "Namespace", "name": "std"}],
                "items": [{"name": "std", "itemType": "Object", "objectType": "Namespace", "url": "std.html"}],
            },
            {
                "path": [
                    {"elementType": "Namespace", "name": "std"},
                    {"elementType": "Class", "name": "vector"},
                ],
                "items": [{"name": "vector", "itemType": "Object", "objectType": "Class",
                           "url": "std/vector.html"}],
                "pages": [{"title": "Overview", "itemType": "Link", "url": "std/vector.html#overview"}],
                "bases": [[{"elementType": "Class", "name": "_Vector_base"}]],
            },
            {
                "path": [
                    {"elementType": "Namespace", "name": "std"},
                    {"elementType": "Class", "name": "vector"},
                    {"elementType": "Method", "name": "push_back"},
                ],
                "items": [{"name": "push_back", "itemType": "Object", "objectType": "Method",
                           "url": "std/vector.html#push_back"}],
            },
            {
                "path": [{"elementType": "Class", "name": "vectorizer"}],
                "items": [{"name": "vectorizer", "itemType": "Object", "objectType": "Class",
                           "url": "vectorizer.html"}],
            },
        ],
    }],
}

STD = ChestPath.root().child(ItemKind.NAMESPACE, "std")
VECTOR = STD.child(ItemKind.CLASS, "vector")


@pytest.fixture
def manifest_dir(tmp_path):
    assets = tmp_path / "cpp-html"
    (assets / "std").mkdir(parents=True)
    (assets / "dark").mkdir()
    (assets / "std" / "vector.html").write_text("<html>vector</html>")
    (assets / "style.css").write_text("body {}")
    (assets / "dark" / "style.css").write_text("body { background: black }")
    (tmp_path / "secret.txt").write_text("outside")
    (tmp_path / "chests.yaml").write_text(yaml.safe_dump(MANIFEST))
    return tmp_path


@pytest.fixture
def static_engine(manifest_dir):
    return StaticContentEngine.from_manifest(manifest_dir / "chests.yaml")


class TestManifestLoading:
    """Test cases for manifest loading."""

    def test_yaml_manifest(self, static_engine):
        assert static_engine.identifiers == ["cpp"]
        assert static_engine.tag_for_identifier("cpp") == "C++"
        assert static_engine.tag_for_identifier("rust") is None

    def test_json_manifest(self, tmp_path):
        (tmp_path / "chests.json").write_text(json.dumps(MANIFEST))

        engine = StaticContentEngine.from_manifest(tmp_path / "chests.json")

        assert engine.identifiers == ["cpp"]

    def test_missing_manifest(self, tmp_path):
        with pytest.raises(ConfigurationError):
            StaticContentEngine.from_manifest(tmp_path / "missing.yaml")

    def test_manifest_must_be_mapping(self, tmp_path):
        (tmp_path / "list.yaml").write_text("- a\n- b\n")

        with pytest.raises(ConfigurationError):
            StaticContentEngine.from_manifest(tmp_path / "list.yaml")

    def test_chest_identifier_required(self):
        with pytest.raises(ConfigurationError):
            StaticContentEngine.from_dict({"chests": [{"tag": "No id"}]})


class TestLookups:
    """Test cases for engine lookups."""

    def test_item_and_page_for_fragment_url(self, static_engine):
        item = static_engine.item_for_path("cpp", "std/vector.html#push_back", None)
        page = static_engine.page_for_path("cpp", "std/vector.html#push_back", None)

        assert item.chest_path.names == ("std", "vector", "push_back")
        assert page.chest_path == VECTOR

    def test_unknown_url(self, static_engine):
        assert static_engine.item_for_path("cpp", "nope.html", None) is None
        assert static_engine.page_for_path("rust", "std.html", None) is None

    def test_item_contents(self, static_engine):
        contents = static_engine.item_contents_at_path(ItemPath("cpp", VECTOR))

        assert [item.name for item in contents.chest_items] == ["push_back"]
        assert contents.page_items[0].title == "Overview"
        assert contents.bases[0].names == ("_Vector_base",)

    def test_items_at_path(self, static_engine):
        assert static_engine.items_at_path(ItemPath("cpp", STD))[0].name == "std"
        assert static_engine.items_at_path(ItemPath("cpp", ChestPath.root())) == []


class TestSearch:
    """Test cases for engine search."""

    def test_exact_before_prefix(self, static_engine):
        results = static_engine.search(None, "vector", SearchParameters())

        assert [r.path.chest_path.names[-1] for r in results] == ["vector", "vectorizer"]

    def test_result_count_limits(self, static_engine):
        assert len(static_engine.search(None, "vector", SearchParameters(1))) == 1

    def test_scope_to_path(self, static_engine):
        results = static_engine.search(ItemPath("cpp", STD), "vector", SearchParameters())

        assert [r.path.chest_path for r in results] == [VECTOR]

    def test_empty_query(self, static_engine):
        assert static_engine.search(None, "", SearchParameters()) == []


class TestRead:
    """Test cases for reading chest assets."""

    def test_reads_asset(self, static_engine):
        assert static_engine.read("cpp", "std/vector.html#top", Theme.LIGHT) == b"<html>vector</html>"

    def test_theme_directory_preferred(self, static_engine):
        assert b"black" in static_engine.read("cpp", "style.css", Theme.DARK)
        assert static_engine.read("cpp", "style.css", Theme.LIGHT) == b"body {}"

    def test_path_escape_rejected(self, static_engine):
        with pytest.raises(ContentEngineError):
            static_engine.read("cpp", "../secret.txt", Theme.LIGHT)

    def test_missing_asset(self, static_engine):
        with pytest.raises(ContentEngineError):
            static_engine.read("cpp", "missing.html", Theme.LIGHT)

    def test_unknown_chest(self, static_engine):
        with pytest.raises(ContentEngineError):
            static_engine.read("rust", "index.html", Theme.LIGHT)


class TestEngineLoader:
    """Test cases for loading engines by import path."""

    def test_callable_factory_is_called(self):
        engine = create_engine("providers.engine.static_engine:StaticContentEngine")

        assert isinstance(engine, StaticContentEngine)
        assert engine.identifiers == []

    def test_dotted_attribute(self):
        factory = load_engine_factory("providers.engine.static_engine:StaticContentEngine.from_dict")

        assert factory == StaticContentEngine.from_dict

    @pytest.mark.parametrize("spec", ["no_colon", ":attr", "module:", "not_a_module_xyz:thing",
                                      "providers.engine:missing"])
    def test_bad_specs(self, spec):
        with pytest.raises(ConfigurationError):
            load_engine_factory(spec)
