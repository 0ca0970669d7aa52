"""
Password-reset tokens.

A reset token is a short-lived signed token bound to the account's
current password hash through a fingerprint: once the password changes,
every outstanding reset token for that account stops verifying.

Delivering the token (email, SMS, …) is not implemented.  The app hands
it to a *reset notifier*; the default one only records that a token was
issued.
"""

from __future__ import annotations

import logging
from typing import Any, Awaitable, Callable, Dict

from auth.jwt import RESET_TOKEN, InvalidTokenError, create_token, verify_token
from auth.models import UserRecord
from auth.password import password_fingerprint

logger = logging.getLogger(__name__)

ResetNotifier = Callable[[UserRecord, str], Awaitable[None]]


def create_reset_token(record: UserRecord, secret: str, expires_in: int) -> str:
    claims = {
        "id": record.id,
        "email": record.email,
        "pwd": password_fingerprint(record.password_hash),
    }
    return create_token(claims, secret, expires_in, token_type=RESET_TOKEN)


def verify_reset_token(token: str, secret: str) -> Dict[str, Any]:
    claims = verify_token(token, secret, token_type=RESET_TOKEN)
    if not claims.get("email") or not claims.get("pwd"):
        raise InvalidTokenError("incomplete reset claims")
    return claims


def token_matches_record(claims: Dict[str, Any], record: UserRecord) -> bool:
    return (
        claims.get("id") == record.id
        and claims.get("pwd") == password_fingerprint(record.password_hash)
    )


async def log_reset_notifier(record: UserRecord, token: str) -> None:
    logger.info("Password reset requested for user %s; no delivery channel configured", record.id)
