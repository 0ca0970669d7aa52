"""
GNews Backend — application entry point.
"""

from __future__ import annotations

import logging
import sys
from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api.errors import register_exception_handlers
from api.middleware import register_middleware
from api.routes import router as api_router
from auth.reset import ResetNotifier, log_reset_notifier
from auth.routes import router as auth_router
from auth.store import UserStore
from config.settings import DEFAULT_JWT_SECRET, Settings, config
from connectors.gnews import GNewsClient

logging.basicConfig(
    level=logging.DEBUG if config.debug else logging.INFO,
    format="%(asctime)s  %(levelname)-8s  %(name)s — %(message)s",
    stream=sys.stdout,
)
for _noisy in ("httpcore", "httpx"):
    logging.getLogger(_noisy).setLevel(logging.WARNING)
logger = logging.getLogger(__name__)


def create_app(
    settings: Optional[Settings] = None,
    user_store: Optional[UserStore] = None,
    news_client: Optional[GNewsClient] = None,
    reset_notifier: Optional[ResetNotifier] = None,
) -> FastAPI:
    settings = settings or config

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("GNews API key configured: %s", app.state.news_client.is_configured())
        if settings.jwt_secret == DEFAULT_JWT_SECRET:
            logger.warning("JWT_SECRET is the built-in default; set a real secret in production")
        logger.info("Application ready to accept requests on prefix %s", settings.api_prefix)
        yield
        await app.state.user_store.clear()

    if news_client is None:
        news_client = GNewsClient(settings.gnews_api_key, settings.gnews_base_url)

    app = FastAPI(
        title="GNews Backend",
        version="1.0.0",
        description="GNews proxy with token-based auth for the mobile app.",
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.user_store = user_store if user_store is not None else UserStore()
    app.state.news_client = news_client
    app.state.reset_notifier = reset_notifier or log_reset_notifier

    register_middleware(app, settings)

    # CORS (outermost)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    # Routes
    app.include_router(auth_router, prefix=settings.auth_prefix)
    app.include_router(api_router, prefix=settings.api_prefix)

    return app


app = create_app()

if __name__ == "__main__":
    uvicorn.run(
        "main:app",
        host=config.host,
        port=config.port,
        reload=config.debug,
        log_level="debug" if config.debug else "info",
    )
