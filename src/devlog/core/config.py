from functools import lru_cache
from typing import Literal

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # App
    app_name: str = "DevLog"
    app_env: str = "development"  # development, testing, production
    debug: bool = False
    enable_openapi: bool = True  # Set to False in production

    # Security
    log_user_emails: bool = False  # Set to False in production for GDPR compliance
    csp_production: str = "default-src 'self'; frame-ancestors 'none'"

    # Document store
    store_backend: Literal["memory", "sql"] = "sql"
    database_url: str = "sqlite+aiosqlite:///./devlog.db"
    database_echo: bool = False
    auto_migrate: bool = True  # Apply migrations on startup (sql backend)

    # Auth
    jwt_secret_key: str = "dev-only-secret-key-please-override-in-env"
    jwt_algorithm: str = "HS256"
    access_token_expire_minutes: int = 60 * 24
    argon2_time_cost: int = 3
    argon2_memory_cost: int = 65536
    argon2_parallelism: int = 1

    # Projects
    slug_claim_attempts: int = 5

    # CORS
    cors_origins: list[str] = ["http://localhost:3000"]

    # Metrics
    metrics_api_key: str | None = None  # If set, /metrics requires this key

    # Rate limiting (auth endpoints)
    rate_limit_enabled: bool = True
    signup_rate_limit: str = "5/hour"
    signin_rate_limit: str = "10/minute"

    @field_validator("jwt_secret_key")
    @classmethod
    def validate_jwt_secret(cls, v: str) -> str:
        if v == "change-this-to-a-secure-random-string":
            raise ValueError(
                "JWT_SECRET_KEY must be changed from default value. "
                "Generate a secure secret with: openssl rand -hex 32"
            )
        if len(v) < 32:
            raise ValueError("JWT_SECRET_KEY must be at least 32 characters")
        return v

    @field_validator("cors_origins")
    @classmethod
    def validate_cors_origins(cls, v: list[str]) -> list[str]:
        """Validate CORS origins - reject wildcards when credentials are used."""
        for origin in v:
            if origin == "*":
                raise ValueError(
                    "CORS wildcard '*' is not allowed when allow_credentials=True. "
                    "Specify explicit origins instead."
                )
        return v

    @field_validator("slug_claim_attempts")
    @classmethod
    def validate_slug_claim_attempts(cls, v: int) -> int:
        if v < 1:
            raise ValueError("SLUG_CLAIM_ATTEMPTS must be at least 1")
        return v


@lru_cache
def get_settings() -> Settings:
    return Settings()
