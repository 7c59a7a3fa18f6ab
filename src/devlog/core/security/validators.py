"""Security validators."""

import re
from typing import Final

MIN_USERNAME_LENGTH: Final[int] = 3
MAX_USERNAME_LENGTH: Final[int] = 30
USERNAME_REGEX: Final[str] = r"^[a-z0-9][a-z0-9_-]*$"

# Top-level paths that would shadow a public profile URL
RESERVED_USERNAMES: Final[frozenset[str]] = frozenset(
    {"api", "auth", "health", "metrics", "me", "profile", "projects", "signin", "signup"}
)

_USERNAME_PATTERN: Final[re.Pattern[str]] = re.compile(USERNAME_REGEX)


def normalize_username(username: str) -> str:
    """Normalize a username for storage and lookup."""
    return username.strip().lower()


def validate_username_format(username: str) -> str:
    """Validate a normalized username.

    Usernames appear as the first path segment of public URLs, so they are
    limited to lowercase letters, digits, hyphens and underscores.
    """
    if not MIN_USERNAME_LENGTH <= len(username) <= MAX_USERNAME_LENGTH:
        raise ValueError(
            f"Username must be between {MIN_USERNAME_LENGTH} and "
            f"{MAX_USERNAME_LENGTH} characters"
        )
    if not _USERNAME_PATTERN.match(username):
        raise ValueError(
            "Username must start with a letter or digit and contain only lowercase "
            "letters, numbers, hyphens and underscores"
        )
    if username in RESERVED_USERNAMES:
        raise ValueError(f"Username '{username}' is reserved")
    return username
