"""
Upstream article → ``ArticleView`` mapping.

GNews omits optional fields freely; clients should never have to branch
on a missing key, so every field gets a type-correct default here.
"""

from __future__ import annotations

from typing import Any, Dict, Iterable, List, Optional

from utils.schemas import ArticleSource, ArticleView

UNKNOWN_SOURCE = "Unknown"


def _text(value: Any, default: str = "") -> str:
    if not value:
        return default
    return value if isinstance(value, str) else str(value)


def _optional_text(value: Any) -> Optional[str]:
    if not value:
        return None
    return value if isinstance(value, str) else str(value)


def normalize_article(article: Any) -> ArticleView:
    """Map one upstream article record.  Total: never raises."""
    if not isinstance(article, dict):
        article = {}
    source = article.get("source")
    if not isinstance(source, dict):
        source = {}

    return ArticleView(
        title=_text(article.get("title")),
        description=_text(article.get("description")),
        content=_text(article.get("content")),
        url=_text(article.get("url")),
        image=_optional_text(article.get("image")),
        published_at=_optional_text(article.get("publishedAt")),
        source=ArticleSource(
            name=_text(source.get("name"), UNKNOWN_SOURCE),
            url=_text(source.get("url")),
        ),
    )


def normalize_articles(articles: Optional[Iterable[Any]]) -> List[Dict[str, Any]]:
    """Normalize a provider ``articles`` list into JSON-ready dicts."""
    if not isinstance(articles, list):
        return []
    return [normalize_article(a).model_dump(by_alias=True) for a in articles]
