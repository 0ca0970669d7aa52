"""
Request validators for the news and auth routes.

Each helper either returns a normalized value or raises ``InvalidInput``
with a message naming the offending field.
"""

from __future__ import annotations

import re
from typing import Iterable, Optional

from config.news_options import (
    CATEGORIES,
    DEFAULT_CATEGORY,
    DEFAULT_COUNTRY,
    DEFAULT_LANGUAGE,
    DEFAULT_SEARCH_IN,
    DEFAULT_SORT,
    LANGUAGES,
    MAX_ARTICLES_PER_REQUEST,
    SORT_OPTIONS,
)
from utils.errors import InvalidInput
from utils.schemas import (
    LoginRequest,
    RegisterRequest,
    SearchParams,
    TopHeadlinesParams,
)

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
MIN_PASSWORD_LENGTH = 6
MAX_PASSWORD_BYTES = 72  # bcrypt ignores/rejects anything longer
MAX_FULL_NAME_LENGTH = 100


# ── Generic helpers ───────────────────────────────────────────────────


def validate_choice(value: Optional[str], allowed: Iterable[str], field: str, default: str) -> str:
    """Return ``value`` (or ``default`` when absent) if it is in ``allowed``."""
    allowed = list(allowed)
    if value is None or value == "":
        value = default
    if value not in allowed:
        raise InvalidInput(f"Invalid {field}. Valid options: {', '.join(allowed)}")
    return value


def parse_positive_int(value: Optional[str], field: str, default: int) -> int:
    if value is None or value == "":
        return default
    try:
        number = int(str(value).strip())
    except ValueError:
        raise InvalidInput(f'Query parameter "{field}" must be a positive integer.') from None
    if number < 1:
        raise InvalidInput(f'Query parameter "{field}" must be a positive integer.')
    return number


def clamp_max(value: Optional[str]) -> int:
    """Parse ``max`` and cap it at the provider ceiling."""
    requested = parse_positive_int(value, "max", MAX_ARTICLES_PER_REQUEST)
    return min(requested, MAX_ARTICLES_PER_REQUEST)


def require_query(value: Optional[str]) -> str:
    if value is None or not value.strip():
        raise InvalidInput('Query parameter "q" is required.')
    return value.strip()


def _optional(value: Optional[str]) -> Optional[str]:
    if value is None or not value.strip():
        return None
    return value.strip()


# ── News routes ───────────────────────────────────────────────────────


def build_top_headlines_params(
    category: Optional[str] = None,
    lang: Optional[str] = None,
    country: Optional[str] = None,
    max_articles: Optional[str] = None,
    page: Optional[str] = None,
) -> TopHeadlinesParams:
    return TopHeadlinesParams(
        category=validate_choice(category, CATEGORIES, "category", DEFAULT_CATEGORY),
        lang=validate_choice(lang, LANGUAGES, "lang", DEFAULT_LANGUAGE),
        country=_optional(country) or DEFAULT_COUNTRY,
        max=clamp_max(max_articles),
        page=parse_positive_int(page, "page", 1),
    )


def build_search_params(
    q: Optional[str],
    lang: Optional[str] = None,
    country: Optional[str] = None,
    max_articles: Optional[str] = None,
    page: Optional[str] = None,
    date_from: Optional[str] = None,
    date_to: Optional[str] = None,
    search_in: Optional[str] = None,
    sortby: Optional[str] = None,
) -> SearchParams:
    return SearchParams(
        q=require_query(q),
        lang=validate_choice(lang, LANGUAGES, "lang", DEFAULT_LANGUAGE),
        country=_optional(country),
        max=clamp_max(max_articles),
        page=parse_positive_int(page, "page", 1),
        date_from=_optional(date_from),
        date_to=_optional(date_to),
        search_in=_optional(search_in) or DEFAULT_SEARCH_IN,
        sortby=validate_choice(sortby, SORT_OPTIONS, "sortby", DEFAULT_SORT),
    )


# ── Auth bodies ───────────────────────────────────────────────────────


def normalize_email(email: str) -> str:
    return email.strip().lower()


def validate_email(email: str) -> str:
    email = normalize_email(email)
    if not EMAIL_PATTERN.match(email):
        raise InvalidInput("Invalid email format")
    return email


def validate_password(password: Optional[str]) -> str:
    if not password or len(password) < MIN_PASSWORD_LENGTH:
        raise InvalidInput(f"Password must be at least {MIN_PASSWORD_LENGTH} characters")
    if len(password.encode("utf-8")) > MAX_PASSWORD_BYTES:
        raise InvalidInput(f"Password must be at most {MAX_PASSWORD_BYTES} bytes")
    return password


def validate_full_name(full_name: str) -> str:
    full_name = full_name.strip()
    if not full_name:
        raise InvalidInput("Full name must not be empty")
    if len(full_name) > MAX_FULL_NAME_LENGTH:
        raise InvalidInput(f"Full name must be at most {MAX_FULL_NAME_LENGTH} characters")
    return full_name


def validate_registration(req: RegisterRequest) -> RegisterRequest:
    """Return a copy of ``req`` with normalized fields."""
    if not req.full_name or not req.email or not req.password:
        raise InvalidInput("Full name, email, and password are required")
    return RegisterRequest(
        full_name=validate_full_name(req.full_name),
        email=validate_email(req.email),
        password=validate_password(req.password),
    )


def validate_login(req: LoginRequest) -> LoginRequest:
    if not req.email or not req.password:
        raise InvalidInput("Email and password are required")
    return LoginRequest(email=normalize_email(req.email), password=req.password)
