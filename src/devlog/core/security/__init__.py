"""Security utilities - crypto and validators.

Re-exports all security-related functions for convenience.
"""

from src.devlog.core.security.crypto import (
    DUMMY_PASSWORD_HASH,
    TOKEN_TYPE_ACCESS,
    create_access_token,
    decode_token,
    hash_password,
    hash_token,
    verify_password,
)
from src.devlog.core.security.headers import SecurityHeadersMiddleware
from src.devlog.core.security.validators import normalize_username, validate_username_format

__all__ = [
    # Crypto
    "DUMMY_PASSWORD_HASH",
    "TOKEN_TYPE_ACCESS",
    "create_access_token",
    "decode_token",
    "hash_password",
    "hash_token",
    "verify_password",
    # Middleware
    "SecurityHeadersMiddleware",
    # Validators
    "normalize_username",
    "validate_username_format",
]
