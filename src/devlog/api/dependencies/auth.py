"""Authentication dependencies."""

from typing import Annotated

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from src.devlog.api.dependencies.services import AuthServiceDep
from src.devlog.core.logging import bind_account_context
from src.devlog.models import Account

# auto_error=False: missing credentials are handled below, not by FastAPI
bearer_scheme = HTTPBearer(auto_error=False)

BearerCredentials = Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)]


def get_bearer_token(credentials: BearerCredentials) -> str | None:
    return credentials.credentials if credentials is not None else None


BearerToken = Annotated[str | None, Depends(get_bearer_token)]


async def get_current_account(token: BearerToken, service: AuthServiceDep) -> Account:
    """Require a signed-in account.

    Raises:
        UnauthenticatedError: no token, or the token does not resolve.
    """
    account = await service.authenticate(token)
    bind_account_context(account.id, account.email)
    return account


async def get_optional_account(token: BearerToken, service: AuthServiceDep) -> Account | None:
    """The signed-in account, or None for anonymous requests.

    A token that is present but invalid is still rejected.
    """
    if token is None:
        return None
    return await get_current_account(token, service)


CurrentAccount = Annotated[Account, Depends(get_current_account)]
OptionalAccount = Annotated[Account | None, Depends(get_optional_account)]
