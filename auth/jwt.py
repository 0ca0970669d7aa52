"""
JWT-style token creation and verification.

Tokens are base64url-encoded JSON payloads signed with HMAC-SHA256.
Every payload carries ``typ`` (``access`` or ``reset``), ``iat`` and
``exp``.  There is no server-side record of issued tokens: a token stays
valid until ``exp`` whatever happens to the session that obtained it.
"""

from __future__ import annotations

import hashlib
import hmac
import json
import time
from base64 import urlsafe_b64decode, urlsafe_b64encode
from typing import Any, Dict

ACCESS_TOKEN = "access"
RESET_TOKEN = "reset"


class InvalidTokenError(ValueError):
    """Bad format, bad signature, wrong type or expired."""


def _now() -> float:
    return time.time()


def _sign(raw: bytes, secret: str) -> str:
    return hmac.new(secret.encode(), raw, hashlib.sha256).hexdigest()


def create_token(
    claims: Dict[str, Any],
    secret: str,
    expires_in: int,
    token_type: str = ACCESS_TOKEN,
) -> str:
    """Create a signed token containing ``claims`` plus type and expiry."""
    issued_at = int(_now())
    payload = {
        **claims,
        "typ": token_type,
        "iat": issued_at,
        "exp": issued_at + expires_in,
    }
    raw = json.dumps(payload, separators=(",", ":"), sort_keys=True).encode()
    encoded = urlsafe_b64encode(raw).decode().rstrip("=")
    return encoded + "." + _sign(raw, secret)


def verify_token(token: str, secret: str, token_type: str = ACCESS_TOKEN) -> Dict[str, Any]:
    """
    Verify token and return its payload.

    Raises ``InvalidTokenError`` on any problem.
    """
    try:
        encoded, sig = token.split(".", 1)
        raw = urlsafe_b64decode(encoded + "=" * (-len(encoded) % 4))
        signature_ok = hmac.compare_digest(sig, _sign(raw, secret))
    except (ValueError, TypeError) as exc:
        raise InvalidTokenError("bad format") from exc
    if not signature_ok:
        raise InvalidTokenError("bad signature")

    try:
        payload = json.loads(raw)
    except ValueError as exc:
        raise InvalidTokenError("bad payload") from exc
    if not isinstance(payload, dict):
        raise InvalidTokenError("bad payload")

    if payload.get("typ") != token_type:
        raise InvalidTokenError("wrong token type")
    exp = payload.get("exp")
    if not isinstance(exp, (int, float)) or exp <= _now():
        raise InvalidTokenError("token expired")
    return payload
