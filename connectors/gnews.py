"""
GNewsClient — thin async client for the GNews v4 REST API.

One outbound GET per call: no retries, no caching, no timeout beyond the
httpx default.  The API key is injected as the ``apikey`` query parameter
so it never reaches mobile clients.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import httpx

from config.news_options import API_KEY_PLACEHOLDER
from utils.errors import ConfigurationFailure
from utils.schemas import SearchParams, TopHeadlinesParams

logger = logging.getLogger(__name__)

GNEWS_BASE_URL = "https://gnews.io/api/v4"


class GNewsClient:
    """Proxy for the ``/top-headlines`` and ``/search`` endpoints."""

    def __init__(
        self,
        api_key: str,
        base_url: str = GNEWS_BASE_URL,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._api_key = api_key or ""
        self._base_url = base_url.rstrip("/")
        self._transport = transport

    def is_configured(self) -> bool:
        return bool(self._api_key) and self._api_key != API_KEY_PLACEHOLDER

    def require_configured(self) -> str:
        if not self.is_configured():
            raise ConfigurationFailure(
                "GNEWS_API_KEY is not configured. Please set it in your .env file."
            )
        return self._api_key

    async def top_headlines(self, params: TopHeadlinesParams) -> Dict[str, Any]:
        return await self._get("/top-headlines", params.to_query())

    async def search(self, params: SearchParams) -> Dict[str, Any]:
        return await self._get("/search", params.to_query())

    async def _get(self, path: str, query: Dict[str, Any]) -> Dict[str, Any]:
        """
        Issue one GET against the provider.

        Raises ``ConfigurationFailure`` before touching the network when the
        key is missing, ``httpx.HTTPStatusError`` for non-2xx answers and
        lets transport errors propagate unchanged.
        """
        api_key = self.require_configured()
        url = f"{self._base_url}{path}"

        async with httpx.AsyncClient(transport=self._transport) as client:
            resp = await client.get(url, params={**query, "apikey": api_key})
            resp.raise_for_status()
            data = resp.json()

        logger.debug(
            "GNews %s → %s (%d articles)",
            path, resp.status_code, len(data.get("articles") or []) if isinstance(data, dict) else 0,
        )
        return data if isinstance(data, dict) else {}
