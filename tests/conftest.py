"""
Shared fixtures: an app wired to a stubbed GNews transport.
"""

from typing import Any, Dict, List, Optional, Tuple

import httpx
import pytest
from fastapi.testclient import TestClient

from auth.models import UserRecord
from auth.store import UserStore
from config.settings import Settings
from connectors.gnews import GNewsClient
from main import create_app

BASE_URL = "https://gnews.test/api/v4"


class UpstreamStub:
    """Records outbound requests and answers with a canned response."""

    def __init__(self) -> None:
        self.requests: List[httpx.Request] = []
        self.status_code = 200
        self.payload: Any = {"totalArticles": 0, "articles": []}
        self.exc: Optional[Exception] = None

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.exc is not None:
            raise self.exc
        return httpx.Response(self.status_code, json=self.payload)

    @property
    def last_params(self) -> Dict[str, str]:
        return dict(self.requests[-1].url.params)


class CapturingNotifier:
    def __init__(self) -> None:
        self.sent: List[Tuple[UserRecord, str]] = []

    async def __call__(self, record: UserRecord, token: str) -> None:
        self.sent.append((record, token))


def make_settings(**overrides) -> Settings:
    values = {
        "gnews_api_key": "test-key",
        "gnews_base_url": BASE_URL,
        "jwt_secret": "test-secret",
        "bcrypt_rounds": 4,
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


@pytest.fixture
def settings() -> Settings:
    return make_settings()


@pytest.fixture
def upstream() -> UpstreamStub:
    return UpstreamStub()


@pytest.fixture
def news_client(settings, upstream) -> GNewsClient:
    return GNewsClient(
        settings.gnews_api_key,
        settings.gnews_base_url,
        transport=httpx.MockTransport(upstream.handler),
    )


@pytest.fixture
def user_store() -> UserStore:
    return UserStore()


@pytest.fixture
def notifier() -> CapturingNotifier:
    return CapturingNotifier()


@pytest.fixture
def app(settings, news_client, user_store, notifier):
    return create_app(
        settings,
        user_store=user_store,
        news_client=news_client,
        reset_notifier=notifier,
    )


@pytest.fixture
def client(app):
    with TestClient(app) as test_client:
        yield test_client


def register(client: TestClient, email: str = "a@b.com", password: str = "abcdef", full_name: str = "A"):
    return client.post(
        "/api/auth/register",
        json={"fullName": full_name, "email": email, "password": password},
    )


def bearer(token: str) -> Dict[str, str]:
    return {"Authorization": f"Bearer {token}"}
