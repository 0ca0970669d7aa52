"""
Closed option sets accepted by the news routes, mirroring what the GNews
v4 API understands.
"""

from typing import Dict, List

CATEGORIES: List[str] = [
    "general",
    "world",
    "nation",
    "business",
    "technology",
    "entertainment",
    "sports",
    "science",
    "health",
]

LANGUAGES: List[str] = [
    "en", "ar", "zh", "nl", "fr", "de", "el", "he", "hi", "it", "ja",
    "ml", "mr", "no", "pt", "ro", "ru", "es", "sv", "ta", "te", "uk",
]

SORT_OPTIONS: List[str] = ["publishedAt", "relevance"]

# GNews free tier never returns more than 10 articles per call.
MAX_ARTICLES_PER_REQUEST = 10

DEFAULT_CATEGORY = "general"
DEFAULT_LANGUAGE = "en"
DEFAULT_COUNTRY = "us"
DEFAULT_SEARCH_IN = "title,description"
DEFAULT_SORT = "publishedAt"

API_KEY_PLACEHOLDER = "YOUR_GNEWS_API_KEY_HERE"


def category_labels() -> List[Dict[str, str]]:
    """Categories as ``{id, label}`` pairs for client menus."""
    return [{"id": cat, "label": cat.capitalize()} for cat in CATEGORIES]
