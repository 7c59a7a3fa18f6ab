"""Service factory dependencies."""

from typing import Annotated

from fastapi import Depends

from src.devlog.api.dependencies.store import AppSettings, IdentityProviderDep, Store
from src.devlog.services import AccountService, AuthService, ProjectService


def get_project_service(store: Store, settings: AppSettings) -> ProjectService:
    """Get project service."""
    return ProjectService(store, settings.slug_claim_attempts)


def get_account_service(store: Store, identity_provider: IdentityProviderDep) -> AccountService:
    """Get account service."""
    return AccountService(store, identity_provider)


def get_auth_service(store: Store, identity_provider: IdentityProviderDep) -> AuthService:
    """Get auth service."""
    return AuthService(store, identity_provider)


ProjectServiceDep = Annotated[ProjectService, Depends(get_project_service)]
AccountServiceDep = Annotated[AccountService, Depends(get_account_service)]
AuthServiceDep = Annotated[AuthService, Depends(get_auth_service)]
