"""
Tests for the GNews upstream client.
"""

import httpx
import pytest

from conftest import BASE_URL, UpstreamStub
from connectors.gnews import GNewsClient
from utils.errors import ConfigurationFailure
from utils.validators import build_search_params, build_top_headlines_params


def _client(upstream: UpstreamStub, api_key: str = "secret") -> GNewsClient:
    return GNewsClient(api_key, BASE_URL, transport=httpx.MockTransport(upstream.handler))


class TestConfiguration:
    @pytest.mark.parametrize("api_key", ["", "YOUR_GNEWS_API_KEY_HERE"])
    def test_not_configured(self, api_key):
        assert GNewsClient(api_key).is_configured() is False

    @pytest.mark.asyncio
    @pytest.mark.parametrize("api_key", ["", "YOUR_GNEWS_API_KEY_HERE"])
    async def test_missing_key_fails_before_network(self, api_key):
        upstream = UpstreamStub()
        client = _client(upstream, api_key=api_key)

        with pytest.raises(ConfigurationFailure):
            await client.top_headlines(build_top_headlines_params())
        with pytest.raises(ConfigurationFailure):
            await client.search(build_search_params("ai"))
        assert upstream.requests == []


class TestRequests:
    @pytest.mark.asyncio
    async def test_top_headlines_injects_key(self):
        upstream = UpstreamStub()
        upstream.payload = {"totalArticles": 1, "articles": [{"title": "t"}]}
        client = _client(upstream)

        data = await client.top_headlines(build_top_headlines_params(category="science", max_articles="50"))

        assert data["totalArticles"] == 1
        request = upstream.requests[0]
        assert request.method == "GET"
        assert str(request.url).startswith(f"{BASE_URL}/top-headlines?")
        assert upstream.last_params == {
            "category": "science",
            "lang": "en",
            "country": "us",
            "max": "10",
            "page": "1",
            "apikey": "secret",
        }

    @pytest.mark.asyncio
    async def test_search_omits_absent_filters(self):
        upstream = UpstreamStub()
        client = _client(upstream)

        await client.search(build_search_params("climate", max_articles="5"))

        params = upstream.last_params
        assert upstream.requests[0].url.path.endswith("/search")
        assert params["q"] == "climate"
        assert params["max"] == "5"
        assert "country" not in params
        assert "from" not in params
        assert "to" not in params

    @pytest.mark.asyncio
    async def test_error_status_raises(self):
        upstream = UpstreamStub()
        upstream.status_code = 403
        upstream.payload = {"errors": ["limit"]}
        client = _client(upstream)

        with pytest.raises(httpx.HTTPStatusError) as exc_info:
            await client.search(build_search_params("ai"))
        assert exc_info.value.response.status_code == 403
        assert len(upstream.requests) == 1

    @pytest.mark.asyncio
    async def test_transport_error_propagates(self):
        upstream = UpstreamStub()
        upstream.exc = httpx.ConnectError("unreachable")
        client = _client(upstream)

        with pytest.raises(httpx.ConnectError):
            await client.search(build_search_params("ai"))
