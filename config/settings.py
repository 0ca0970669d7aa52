"""
Application settings loaded from environment variables.
"""

from typing import List

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # ── GNews provider ──────────────────────────────────────────────────
    gnews_api_key: str = ""
    gnews_base_url: str = "https://gnews.io/api/v4"

    # ── Security Secrets ──────────────────────────────────────────────────
    jwt_secret: str = "your-secret-key-change-in-production"   # HMAC secret for auth tokens
    jwt_expiry_seconds: int = 604800                             # 7 days
    reset_token_expiry_seconds: int = 3600                       # 1 hour
    bcrypt_rounds: int = 10

    # ── Rate limiting ───────────────────────────────────────────────────
    rate_limit_window_seconds: int = 900   # 15 minutes
    rate_limit_max_requests: int = 100

    # ── Server ───────────────────────────────────────────────────────────
    api_prefix: str = "/api"
    port: int = 3000
    host: str = "0.0.0.0"
    debug: bool = False
    cors_origins: List[str] = ["*"]

    model_config = {
        "env_file": ".env",
        "case_sensitive": False,
    }

    @property
    def auth_prefix(self) -> str:
        return f"{self.api_prefix}/auth"


DEFAULT_JWT_SECRET = Settings.model_fields["jwt_secret"].default

config = Settings()
