"""
Pydantic schemas for the GNews backend.

Client-facing keys are camelCase (``fullName``, ``publishedAt``); the
Python attributes are snake_case with aliases.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


# ═══════════════════════════════════════════════════════════════════════════════
# Articles
# ═══════════════════════════════════════════════════════════════════════════════


class ArticleSource(BaseModel):
    name: str = "Unknown"
    url: str = ""


class ArticleView(BaseModel):
    """One article as clients see it.  Every key is always present."""

    model_config = ConfigDict(populate_by_name=True)

    title: str = ""
    description: str = ""
    content: str = ""
    url: str = ""
    image: Optional[str] = None
    published_at: Optional[str] = Field(default=None, alias="publishedAt")
    source: ArticleSource = Field(default_factory=ArticleSource)


class TopHeadlinesResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    success: bool = True
    total_articles: int = Field(default=0, alias="totalArticles")
    articles: List[ArticleView] = Field(default_factory=list)
    category: str
    page: int


class SearchResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    success: bool = True
    total_articles: int = Field(default=0, alias="totalArticles")
    articles: List[ArticleView] = Field(default_factory=list)
    query: str
    page: int


# ═══════════════════════════════════════════════════════════════════════════════
# Upstream request parameters (already validated)
# ═══════════════════════════════════════════════════════════════════════════════


class TopHeadlinesParams(BaseModel):
    category: str
    lang: str
    country: Optional[str] = None
    max: int
    page: int

    def to_query(self) -> Dict[str, Any]:
        return self.model_dump(exclude_none=True)


class SearchParams(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    q: str
    lang: str
    country: Optional[str] = None
    max: int
    page: int
    date_from: Optional[str] = Field(default=None, alias="from")
    date_to: Optional[str] = Field(default=None, alias="to")
    search_in: str = Field(alias="in")
    sortby: str

    def to_query(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)


# ═══════════════════════════════════════════════════════════════════════════════
# Auth request bodies
#
# Every field is optional at the schema level so that missing values are
# reported by the validators with the same messages clients already rely on.
# ═══════════════════════════════════════════════════════════════════════════════


class _CamelBody(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class RegisterRequest(_CamelBody):
    full_name: Optional[str] = Field(default=None, alias="fullName")
    email: Optional[str] = None
    password: Optional[str] = None


class LoginRequest(_CamelBody):
    email: Optional[str] = None
    password: Optional[str] = None


class UpdateProfileRequest(_CamelBody):
    full_name: Optional[str] = Field(default=None, alias="fullName")


class ForgotPasswordRequest(_CamelBody):
    email: Optional[str] = None


class ResetPasswordRequest(_CamelBody):
    token: Optional[str] = None
    new_password: Optional[str] = Field(default=None, alias="newPassword")


# ═══════════════════════════════════════════════════════════════════════════════
# Auth responses
# ═══════════════════════════════════════════════════════════════════════════════


class PublicUser(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    full_name: str = Field(alias="fullName")
    email: str


class ProfileUser(PublicUser):
    created_at: str = Field(alias="createdAt")


class AuthResponse(BaseModel):
    message: str
    token: str
    user: PublicUser


class TokenResponse(BaseModel):
    message: str
    token: str


class ProfileResponse(BaseModel):
    user: ProfileUser


class UserUpdateResponse(BaseModel):
    message: str
    user: PublicUser


class MessageResponse(BaseModel):
    message: str
