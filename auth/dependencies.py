"""
FastAPI dependencies for authentication.

Provides the app-owned collaborators (settings, user store, reset
notifier) and ``get_current_claims`` used by every protected route.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from fastapi import Depends, Header, Request

from auth.jwt import InvalidTokenError, verify_token
from auth.reset import ResetNotifier
from auth.store import UserStore
from config.settings import Settings
from utils.errors import Unauthorized


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_user_store(request: Request) -> UserStore:
    return request.app.state.user_store


def get_reset_notifier(request: Request) -> ResetNotifier:
    return request.app.state.reset_notifier


async def get_current_claims(
    authorization: Optional[str] = Header(None, alias="Authorization"),
    settings: Settings = Depends(get_settings),
) -> Dict[str, Any]:
    """
    Extract and verify the Bearer token, returning its claims
    (``id``, ``email``, …).

    The token is the second word of the header, whatever the scheme.
    No token → 401; bad or expired token (or a non-Bearer credential) → 403.
    """
    parts = (authorization or "").split()
    token = parts[1] if len(parts) > 1 else ""
    if not token:
        raise Unauthorized("Access token required")
    try:
        return verify_token(token, settings.jwt_secret)
    except InvalidTokenError:
        raise Unauthorized("Invalid or expired token", status_code=403) from None
