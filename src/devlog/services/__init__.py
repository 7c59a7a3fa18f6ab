"""Service layer - business logic."""

from src.devlog.services.access import is_visible_to, view_for
from src.devlog.services.account_service import AccountService
from src.devlog.services.auth_service import AuthService, SignInResult
from src.devlog.services.project_service import ProjectService
from src.devlog.services.slug_service import assign_unique_slug, claim_unique_slug, slugify

__all__ = [
    "AccountService",
    "AuthService",
    "ProjectService",
    "SignInResult",
    "assign_unique_slug",
    "claim_unique_slug",
    "is_visible_to",
    "slugify",
    "view_for",
]
