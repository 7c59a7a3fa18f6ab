"""FastAPI dependency injection definitions.

Re-exports all dependencies.
"""

from src.devlog.api.dependencies.auth import (
    BearerToken,
    CurrentAccount,
    OptionalAccount,
    get_current_account,
    get_optional_account,
)
from src.devlog.api.dependencies.services import (
    AccountServiceDep,
    AuthServiceDep,
    ProjectServiceDep,
    get_account_service,
    get_auth_service,
    get_project_service,
)
from src.devlog.api.dependencies.store import (
    AppSettings,
    IdentityProviderDep,
    Store,
    get_app_settings,
    get_document_store,
    get_identity_provider,
)

__all__ = [
    # Store
    "AppSettings",
    "IdentityProviderDep",
    "Store",
    "get_app_settings",
    "get_document_store",
    "get_identity_provider",
    # Auth
    "BearerToken",
    "CurrentAccount",
    "OptionalAccount",
    "get_current_account",
    "get_optional_account",
    # Services
    "AccountServiceDep",
    "AuthServiceDep",
    "ProjectServiceDep",
    "get_account_service",
    "get_auth_service",
    "get_project_service",
]
