"""
FastAPI dependencies (shared across routes).
"""

from __future__ import annotations

from fastapi import Request

from connectors.gnews import GNewsClient


def get_news_client(request: Request) -> GNewsClient:
    """The app-wide GNews client, created in ``create_app``."""
    return request.app.state.news_client
