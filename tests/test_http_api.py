"""Tests for the chestnav HTTP API."""

import pytest
from fastapi.testclient import TestClient

from chestnav import __version__
from chestnav.core.config import ChestNavConfig
from chestnav.http_api import TOKEN_HEADER, create_app
from core.models import ExtendedItemPath
from tests.conftest import VECTOR

LOCAL = {"Origin": "file://"}


@pytest.fixture
def client(engine, config):
    with TestClient(create_app(engine=engine, config=config)) as client:
        yield client


class TestTrustBoundary:
    """Test cases for origin checks on privileged endpoints."""

    @pytest.mark.parametrize("endpoint,payload", [
        ("/api/search", {"query": "vector"}),
        ("/api/page-for-path", {"identifier": "cpp", "url": "std.html"}),
        ("/api/sidebar", {"path": {"identifier": "cpp"}}),
    ])
    def test_missing_origin_rejected(self, client, endpoint, payload):
        response = client.post(endpoint, json=payload)

        assert response.status_code == 403

    def test_remote_origin_rejected(self, client):
        response = client.post("/api/search", json={"query": "vector"},
                               headers={"Origin": "https://evil.example"})

        assert response.status_code == 403

    def test_dev_origin_only_in_debug(self, engine):
        headers = {"Origin": "http://localhost:5173"}
        with TestClient(create_app(engine=engine, config=ChestNavConfig())) as client:
            assert client.post("/api/search", json={"query": "vector"}, headers=headers).status_code == 403
        with TestClient(create_app(engine=engine, config=ChestNavConfig(debug=True))) as client:
            assert client.post("/api/search", json={"query": "vector"}, headers=headers).status_code == 200

    def test_referer_fallback(self, client):
        response = client.post("/api/search", json={"query": "vector"},
                               headers={"Referer": "file:///app/index.html"})

        assert response.status_code == 200

    def test_null_origin_of_packaged_page_accepted(self, client):
        response = client.post("/api/search", json={"query": "vector"}, headers={"Origin": "null"})

        assert response.status_code == 200


class TestAccessToken:
    """Test cases for the configured access token."""

    @pytest.fixture
    def token_client(self, engine):
        config = ChestNavConfig(server={"access_token": "s3cret"})
        with TestClient(create_app(engine=engine, config=config)) as client:
            yield client

    def test_matching_token_accepted(self, token_client):
        response = token_client.post("/api/search", json={"query": "vector"},
                                     headers={"Origin": "null", TOKEN_HEADER: "s3cret"})

        assert response.status_code == 200

    @pytest.mark.parametrize("headers", [
        {"Origin": "null"},
        {"Origin": "file://anything"},
        {"Origin": "file://anything", TOKEN_HEADER: "guess"},
    ])
    def test_local_origin_without_matching_token_rejected(self, token_client, headers):
        response = token_client.post("/api/search", json={"query": "vector"}, headers=headers)

        assert response.status_code == 403

    def test_token_does_not_replace_origin_check(self, token_client):
        response = token_client.post("/api/search", json={"query": "vector"},
                                     headers={"Origin": "https://evil.example", TOKEN_HEADER: "s3cret"})

        assert response.status_code == 403

    def test_assets_do_not_need_token(self, token_client):
        assert token_client.get("/docs/cpp/std/vector.html").status_code == 200


class TestEndpoints:
    """Test cases for API endpoints."""

    def test_health(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "healthy", "version": __version__}

    def test_search(self, client):
        response = client.post("/api/search", json={"query": "vector", "parameters": {"resultCount": 1}},
                               headers=LOCAL)

        data = response.json()
        assert response.status_code == 200
        assert len(data) == 1
        assert data[0]["chestTag"] == "C++"
        assert data[0]["items"][0]["name"] == "vector"

    def test_search_rows(self, client):
        response = client.post("/api/search/rows", json={"query": "push"}, headers=LOCAL)

        rows = response.json()
        assert [row["renderStyle"] for row in rows] == [
            "name_only", "additional_declaration", "additional_declaration",
        ]
        assert rows[-1]["lastItem"] is True
        assert rows[0]["location"] == ["C++", "std", "vector"]

    def test_invalid_search_parameters(self, client):
        response = client.post("/api/search", json={"query": "x", "parameters": {"resultCount": 0}},
                               headers=LOCAL)

        assert response.status_code == 422

    def test_page_for_path(self, client):
        response = client.post("/api/page-for-path",
                               json={"identifier": "cpp", "url": "std/vector.html#push_back"},
                               headers=LOCAL)

        data = response.json()
        assert data["chestTag"] == "C++"
        assert [e["name"] for e in data["chestPath"]["elements"]] == ["std", "vector", "push_back"]
        assert [e["name"] for e in data["chestPagePath"]["elements"]] == ["std", "vector"]

    def test_page_for_unknown_path(self, client):
        response = client.post("/api/page-for-path", json={"identifier": "cpp", "url": "nope.html"},
                               headers=LOCAL)

        assert response.json()["chestPath"] is None

    def test_item_contents(self, client):
        response = client.post("/api/item-contents-at-path", json={"path": VECTOR.to_dict()},
                               headers=LOCAL)

        data = response.json()
        assert [item["name"] for item in data["chestItems"]] == ["push_back", "push_back", "size"]
        assert data["pageItems"][0]["itemType"] == "Category"

    def test_invalid_path(self, client):
        response = client.post("/api/item-contents-at-path", json={"path": {"identifier": ""}},
                               headers=LOCAL)

        assert response.status_code == 422

    def test_sidebar(self, client):
        path = ExtendedItemPath.from_item_path(VECTOR, "C++")

        response = client.post("/api/sidebar", json={"path": path.to_dict()}, headers=LOCAL)

        data = response.json()
        assert data["isEmpty"] is False
        assert [e["title"] for e in data["elements"] if e["kind"] == "header"] == ["Contents", "Methods"]

    def test_engine_error(self, client, engine):
        engine.fail_with = RuntimeError("offline")

        response = client.post("/api/search", json={"query": "vector"}, headers=LOCAL)

        assert response.status_code == 500


class TestDocsEndpoint:
    """Test cases for asset serving."""

    def test_serves_asset(self, client):
        response = client.get("/docs/cpp/std/vector.html")

        assert response.status_code == 200
        assert response.content == b"<html>vector</html>"
        assert response.headers["content-type"].startswith("text/html")

    def test_missing_asset(self, client):
        response = client.get("/docs/cpp/missing.html")

        assert response.status_code == 404
        assert b"Error while fetching" in response.content

    def test_unknown_theme(self, client):
        assert client.get("/docs/cpp/std/vector.html?theme=sepia").status_code == 422

    def test_escaped_question_mark_reads_literal_name(self, client, engine):
        engine.assets[("cpp", "what?.html")] = b"<html>what</html>"

        response = client.get("/docs/cpp/what%3F.html")

        assert response.status_code == 200
        assert response.content == b"<html>what</html>"

    def test_path_is_decoded_once(self, client, engine):
        engine.assets[("cpp", "a%20b.html")] = b"<html>literal</html>"

        response = client.get("/docs/cpp/a%2520b.html")

        assert response.status_code == 200
        assert response.content == b"<html>literal</html>"
