"""Rate limiting for the authentication endpoints (slowapi, in-memory)."""

from slowapi import Limiter
from slowapi.util import get_remote_address
from starlette.requests import Request

from src.devlog.core.config import get_settings
from src.devlog.core.logging import get_logger

logger = get_logger(__name__)


def get_rate_limit_key(request: Request) -> str:
    """Key by client IP only; never by user-controlled headers."""
    return get_remote_address(request) or "unknown"


def create_limiter() -> Limiter:
    """Create the limiter. Disabled in testing or when switched off in settings."""
    settings = get_settings()
    if settings.app_env == "testing" or not settings.rate_limit_enabled:
        logger.info("Rate limiter disabled")
        return Limiter(key_func=get_rate_limit_key, enabled=False)
    return Limiter(key_func=get_rate_limit_key)


# Reads settings at import time; changing limits needs a restart
limiter = create_limiter()
