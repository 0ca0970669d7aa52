"""
HTTP-level tests for health, categories and the GNews proxy routes.
"""

import httpx
import pytest
from fastapi.testclient import TestClient

from config.news_options import CATEGORIES
from conftest import make_settings
from connectors.gnews import GNewsClient
from main import create_app

ARTICLE = {
    "title": "Rover lands",
    "description": "It landed.",
    "content": "Full text",
    "url": "https://news.example/rover",
    "image": "https://news.example/rover.jpg",
    "publishedAt": "2024-05-01T10:00:00Z",
    "source": {"name": "Example News", "url": "https://news.example"},
}


class TestHealthAndCategories:
    def test_health(self, client):
        resp = client.get("/api/health")
        assert resp.status_code == 200
        body = resp.json()
        assert body["status"] == "ok"
        assert body["apiKeyConfigured"] is True
        assert body["timestamp"].endswith("Z")

    def test_health_reports_missing_key(self):
        app = create_app(make_settings(gnews_api_key="YOUR_GNEWS_API_KEY_HERE"))
        with TestClient(app) as client:
            assert client.get("/api/health").json()["apiKeyConfigured"] is False

    def test_categories(self, client):
        body = client.get("/api/categories").json()
        assert body["success"] is True
        assert [c["id"] for c in body["categories"]] == CATEGORIES
        assert body["categories"][0] == {"id": "general", "label": "General"}


class TestTopHeadlines:
    def test_success(self, client, upstream):
        upstream.payload = {"totalArticles": 42, "articles": [ARTICLE, {"title": "bare"}]}

        resp = client.get("/api/top-headlines", params={"category": "science", "page": "2"})

        assert resp.status_code == 200
        body = resp.json()
        assert body["success"] is True
        assert body["totalArticles"] == 42
        assert body["category"] == "science"
        assert body["page"] == 2
        assert body["articles"][0] == ARTICLE
        assert body["articles"][1]["source"] == {"name": "Unknown", "url": ""}
        assert body["articles"][1]["image"] is None

    def test_invalid_category(self, client, upstream):
        resp = client.get("/api/top-headlines", params={"category": "gossip"})

        assert resp.status_code == 400
        message = resp.json()["error"]
        assert message.startswith("Invalid category. Valid options:")
        for category in CATEGORIES:
            assert category in message
        assert upstream.requests == []

    @pytest.mark.parametrize("requested,forwarded", [("50", "10"), ("11", "10"), ("5", "5")])
    def test_max_is_capped(self, client, upstream, requested, forwarded):
        client.get("/api/top-headlines", params={"max": requested})
        assert upstream.last_params["max"] == forwarded

    def test_api_key_is_not_echoed(self, client, upstream):
        upstream.payload = {"totalArticles": 1, "articles": [ARTICLE]}
        resp = client.get("/api/top-headlines")
        assert "test-key" not in resp.text
        assert upstream.last_params["apikey"] == "test-key"


class TestSearch:
    def test_success(self, client, upstream):
        upstream.payload = {"totalArticles": 1, "articles": [ARTICLE]}

        resp = client.get("/api/search", params={"q": " rover ", "sortby": "relevance", "in": "title"})

        assert resp.status_code == 200
        body = resp.json()
        assert body["query"] == " rover "
        assert body["page"] == 1
        assert body["articles"] == [ARTICLE]
        assert upstream.last_params["q"] == "rover"
        assert upstream.last_params["in"] == "title"
        assert upstream.last_params["sortby"] == "relevance"

    def test_query_required(self, client, upstream):
        resp = client.get("/api/search", params={"q": "   "})
        assert resp.status_code == 400
        assert resp.json() == {"error": 'Query parameter "q" is required.'}
        assert upstream.requests == []

    def test_invalid_language(self, client):
        resp = client.get("/api/search", params={"q": "ai", "lang": "klingon"})
        assert resp.status_code == 400
        assert "en, ar, zh" in resp.json()["error"]


class TestUpstreamErrors:
    @pytest.mark.parametrize(
        "status_code,message",
        [
            (401, "Invalid API key. Check your GNews API key."),
            (403, "Daily request limit reached. Try again tomorrow."),
            (429, "Rate limit exceeded. Please slow down."),
        ],
    )
    def test_named_statuses(self, client, upstream, status_code, message):
        upstream.status_code = status_code
        upstream.payload = {"errors": ["provider text"]}

        resp = client.get("/api/search", params={"q": "ai"})

        assert resp.status_code == status_code
        assert resp.json() == {"error": message}

    def test_other_status_mirrors_provider_message(self, client, upstream):
        upstream.status_code = 400
        upstream.payload = {"errors": ["The query is invalid"]}

        resp = client.get("/api/top-headlines")

        assert resp.status_code == 400
        assert resp.json() == {"error": "The query is invalid"}

    def test_network_failure(self, client, upstream):
        upstream.exc = httpx.ConnectError("dns failure")

        resp = client.get("/api/top-headlines")

        assert resp.status_code == 500
        assert resp.json() == {"error": "Internal server error. Please try again."}

    def test_missing_key_is_configuration_failure(self, upstream):
        settings = make_settings(gnews_api_key="")
        news_client = GNewsClient("", settings.gnews_base_url, transport=httpx.MockTransport(upstream.handler))
        app = create_app(settings, news_client=news_client)

        with TestClient(app) as client:
            resp = client.get("/api/search", params={"q": "ai"})

        assert resp.status_code == 500
        assert "GNEWS_API_KEY is not configured" in resp.json()["error"]
        assert upstream.requests == []

    @pytest.mark.parametrize(
        "path,params",
        [
            ("/api/top-headlines", {"category": "gossip"}),
            ("/api/top-headlines", {"max": "abc"}),
            ("/api/search", {"q": "   "}),
            ("/api/search", {"q": "ai", "lang": "klingon"}),
        ],
    )
    def test_missing_key_checked_before_parameters(self, upstream, path, params):
        settings = make_settings(gnews_api_key="YOUR_GNEWS_API_KEY_HERE")
        news_client = GNewsClient(
            settings.gnews_api_key,
            settings.gnews_base_url,
            transport=httpx.MockTransport(upstream.handler),
        )
        app = create_app(settings, news_client=news_client)

        with TestClient(app) as client:
            resp = client.get(path, params=params)

        assert resp.status_code == 500
        assert resp.json() == {"error": "GNEWS_API_KEY is not configured. Please set it in your .env file."}
        assert upstream.requests == []


class TestUnknownRoutes:
    def test_unmatched_path(self, client):
        resp = client.get("/api/nope")
        assert resp.status_code == 404
        assert resp.json() == {"error": "Route not found"}

    def test_wrong_method(self, client):
        resp = client.delete("/api/categories")
        assert resp.status_code == 404
        assert resp.json() == {"error": "Route not found"}

    def test_outside_prefix(self, client):
        assert client.get("/health").json() == {"error": "Route not found"}
