"""
REST API routes — health, categories and the GNews proxy endpoints.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, Query

from api.dependencies import get_news_client
from api.errors import map_upstream_error
from config.news_options import category_labels
from connectors.gnews import GNewsClient
from utils.normalizer import normalize_articles
from utils.schemas import SearchResponse, TopHeadlinesResponse
from utils.timestamps import isoformat_utc, utc_now
from utils.validators import build_search_params, build_top_headlines_params

logger = logging.getLogger(__name__)

router = APIRouter(tags=["news"])


def _total_articles(data: Dict[str, Any]) -> int:
    total = data.get("totalArticles")
    return total if isinstance(total, int) and not isinstance(total, bool) else 0


@router.get("/health")
async def health(client: GNewsClient = Depends(get_news_client)) -> Dict[str, Any]:
    return {
        "status": "ok",
        "message": "GNews Backend is running",
        "apiKeyConfigured": client.is_configured(),
        "timestamp": isoformat_utc(utc_now()),
    }


@router.get("/categories")
async def categories() -> Dict[str, Any]:
    return {"success": True, "categories": category_labels()}


@router.get("/top-headlines", response_model=TopHeadlinesResponse)
async def top_headlines(
    category: Optional[str] = None,
    lang: Optional[str] = None,
    country: Optional[str] = None,
    max_articles: Optional[str] = Query(None, alias="max"),
    page: Optional[str] = None,
    client: GNewsClient = Depends(get_news_client),
) -> Dict[str, Any]:
    """Top headlines for one category, proxied from GNews."""
    client.require_configured()
    params = build_top_headlines_params(category, lang, country, max_articles, page)

    try:
        data = await client.top_headlines(params)
    except Exception as exc:
        logger.error("GNews top-headlines failed: %s", exc)
        raise map_upstream_error(exc) from exc

    return {
        "success": True,
        "totalArticles": _total_articles(data),
        "articles": normalize_articles(data.get("articles")),
        "category": params.category,
        "page": params.page,
    }


@router.get("/search", response_model=SearchResponse)
async def search(
    q: Optional[str] = None,
    lang: Optional[str] = None,
    country: Optional[str] = None,
    max_articles: Optional[str] = Query(None, alias="max"),
    page: Optional[str] = None,
    date_from: Optional[str] = Query(None, alias="from"),
    date_to: Optional[str] = Query(None, alias="to"),
    search_in: Optional[str] = Query(None, alias="in"),
    sortby: Optional[str] = None,
    client: GNewsClient = Depends(get_news_client),
) -> Dict[str, Any]:
    """Keyword search, proxied from GNews."""
    client.require_configured()
    params = build_search_params(
        q, lang, country, max_articles, page, date_from, date_to, search_in, sortby,
    )

    try:
        data = await client.search(params)
    except Exception as exc:
        logger.error("GNews search failed: %s", exc)
        raise map_upstream_error(exc) from exc

    return {
        "success": True,
        "totalArticles": _total_articles(data),
        "articles": normalize_articles(data.get("articles")),
        "query": q,
        "page": params.page,
    }
