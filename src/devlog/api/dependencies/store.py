"""Settings, document store and identity provider dependencies.

All three are created once per application and kept on
``app.state``; tests swap them by passing their own to ``create_app``.
"""

from typing import Annotated

from fastapi import Depends, Request

from src.devlog.core.config import Settings
from src.devlog.identity import IdentityProvider
from src.devlog.store.base import DocumentStore


def get_document_store(request: Request) -> DocumentStore:
    return request.app.state.store  # type: ignore[no-any-return]


def get_identity_provider(request: Request) -> IdentityProvider:
    return request.app.state.identity_provider  # type: ignore[no-any-return]


def get_app_settings(request: Request) -> Settings:
    """Settings the application was built with."""
    return request.app.state.settings  # type: ignore[no-any-return]


Store = Annotated[DocumentStore, Depends(get_document_store)]
IdentityProviderDep = Annotated[IdentityProvider, Depends(get_identity_provider)]
AppSettings = Annotated[Settings, Depends(get_app_settings)]
