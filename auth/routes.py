"""
Auth API routes — register, login, logout, refresh, profile, password reset.

Route prefix: {api_prefix}/auth
"""

from __future__ import annotations

import logging
from typing import Any, Dict

from fastapi import APIRouter, Depends, status

from auth.dependencies import (
    get_current_claims,
    get_reset_notifier,
    get_settings,
    get_user_store,
)
from auth.jwt import InvalidTokenError, create_token
from auth.models import UserRecord
from auth.password import hash_password_async, verify_password_async
from auth.reset import (
    ResetNotifier,
    create_reset_token,
    token_matches_record,
    verify_reset_token,
)
from auth.store import UserStore
from config.settings import Settings
from utils.errors import Conflict, InvalidInput, NotFound, Unauthorized
from utils.schemas import (
    AuthResponse,
    ForgotPasswordRequest,
    LoginRequest,
    MessageResponse,
    ProfileResponse,
    RegisterRequest,
    ResetPasswordRequest,
    TokenResponse,
    UpdateProfileRequest,
    UserUpdateResponse,
)
from utils.validators import (
    normalize_email,
    validate_full_name,
    validate_login,
    validate_password,
    validate_registration,
)

logger = logging.getLogger(__name__)

router = APIRouter(tags=["auth"])

INVALID_CREDENTIALS = "Invalid email or password"
FORGOT_PASSWORD_ACK = "If email exists, reset link has been sent"
INVALID_RESET_TOKEN = "Invalid or expired reset token"


def _issue_token(user_id: str, email: str, settings: Settings) -> str:
    return create_token(
        {"id": user_id, "email": email},
        settings.jwt_secret,
        settings.jwt_expiry_seconds,
    )


async def _current_record(claims: Dict[str, Any], store: UserStore) -> UserRecord:
    record = await store.get(claims.get("email", ""))
    if record is None:
        raise NotFound("User not found")
    return record


# ── Endpoints ──────────────────────────────────────────────────────────


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
async def register(
    req: RegisterRequest,
    store: UserStore = Depends(get_user_store),
    settings: Settings = Depends(get_settings),
) -> Dict[str, Any]:
    """Register a new user."""
    req = validate_registration(req)
    if req.email in store:
        raise Conflict("User already exists")

    password_hash = await hash_password_async(req.password, settings.bcrypt_rounds)
    # create() re-checks under the store lock: another registration may land during the hash
    record = await store.create(req.full_name, req.email, password_hash)

    token = _issue_token(record.id, record.email, settings)
    logger.info("Registered user %s", record.id)

    return {
        "message": "User registered successfully",
        "token": token,
        "user": record.public_view(),
    }


@router.post("/login", response_model=AuthResponse)
async def login(
    req: LoginRequest,
    store: UserStore = Depends(get_user_store),
    settings: Settings = Depends(get_settings),
) -> Dict[str, Any]:
    """Login with email + password."""
    req = validate_login(req)
    record = await store.get(req.email)

    if record is None or not await verify_password_async(req.password, record.password_hash):
        raise Unauthorized(INVALID_CREDENTIALS)

    token = _issue_token(record.id, record.email, settings)
    logger.info("Login: %s", record.id)

    return {
        "message": "Login successful",
        "token": token,
        "user": record.public_view(),
    }


@router.post("/logout", response_model=MessageResponse)
async def logout(claims: Dict[str, Any] = Depends(get_current_claims)) -> Dict[str, Any]:
    """
    Acknowledge a logout.

    Tokens are stateless: the presented token stays valid until it
    expires, the client is expected to drop it.
    """
    return {"message": "Logout successful"}


@router.post("/refresh", response_model=TokenResponse)
async def refresh(
    claims: Dict[str, Any] = Depends(get_current_claims),
    settings: Settings = Depends(get_settings),
) -> Dict[str, Any]:
    """Re-sign the caller's claims with a fresh expiry."""
    token = _issue_token(claims.get("id", ""), claims.get("email", ""), settings)
    return {"message": "Token refreshed", "token": token}


@router.get("/me", response_model=ProfileResponse)
async def me(
    claims: Dict[str, Any] = Depends(get_current_claims),
    store: UserStore = Depends(get_user_store),
) -> Dict[str, Any]:
    record = await _current_record(claims, store)
    return {"user": record.profile_view()}


@router.put("/update-profile", response_model=UserUpdateResponse)
async def update_profile(
    req: UpdateProfileRequest,
    claims: Dict[str, Any] = Depends(get_current_claims),
    store: UserStore = Depends(get_user_store),
) -> Dict[str, Any]:
    """Update the caller's full name; an empty or missing value leaves it as is."""
    record = await _current_record(claims, store)

    if req.full_name and req.full_name.strip():
        record = await store.update_full_name(record.email, validate_full_name(req.full_name))
        if record is None:
            raise NotFound("User not found")

    return {
        "message": "Profile updated successfully",
        "user": record.public_view(),
    }


@router.post("/forgot-password", response_model=MessageResponse)
async def forgot_password(
    req: ForgotPasswordRequest,
    store: UserStore = Depends(get_user_store),
    settings: Settings = Depends(get_settings),
    notifier: ResetNotifier = Depends(get_reset_notifier),
) -> Dict[str, Any]:
    """Start a password reset.  The answer never reveals whether the account exists."""
    if not req.email or not req.email.strip():
        raise InvalidInput("Email is required")

    record = await store.get(normalize_email(req.email))
    if record is not None:
        token = create_reset_token(record, settings.jwt_secret, settings.reset_token_expiry_seconds)
        await notifier(record, token)

    return {"message": FORGOT_PASSWORD_ACK}


@router.post("/reset-password", response_model=MessageResponse)
async def reset_password(
    req: ResetPasswordRequest,
    store: UserStore = Depends(get_user_store),
    settings: Settings = Depends(get_settings),
) -> Dict[str, Any]:
    """Set a new password using a reset token from ``/forgot-password``."""
    new_password = validate_password(req.new_password)
    if not req.token:
        raise InvalidInput("Reset token is required")

    try:
        claims = verify_reset_token(req.token, settings.jwt_secret)
    except InvalidTokenError:
        raise InvalidInput(INVALID_RESET_TOKEN) from None

    record = await store.get(claims["email"])
    if record is None or not token_matches_record(claims, record):
        raise InvalidInput(INVALID_RESET_TOKEN)

    new_hash = await hash_password_async(new_password, settings.bcrypt_rounds)
    if not await store.set_password_hash(record.email, new_hash, expected_hash=record.password_hash):
        raise InvalidInput(INVALID_RESET_TOKEN)

    logger.info("Password reset for user %s", record.id)
    return {"message": "Password reset successfully"}
