"""Authentication endpoints."""

from fastapi import APIRouter, Response, status
from starlette.requests import Request

from src.devlog.api.dependencies import (
    AccountServiceDep,
    AuthServiceDep,
    BearerToken,
)
from src.devlog.core.config import get_settings
from src.devlog.core.rate_limit import limiter
from src.devlog.schemas import (
    AccountRead,
    SignInRequest,
    SignInResponse,
    SignUpRequest,
    UsernameAvailability,
)
from src.devlog.schemas.account import UsernameField

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post(
    "/signup",
    response_model=AccountRead,
    status_code=status.HTTP_201_CREATED,
    responses={
        201: {"description": "Account created"},
        409: {"description": "Username taken or email already registered"},
        422: {"description": "Invalid username, email or weak password"},
    },
)
@limiter.limit(get_settings().signup_rate_limit)
async def sign_up(
    request: Request, data: SignUpRequest, service: AccountServiceDep
) -> AccountRead:
    """Create an identity, its profile and its username.

    Nothing is left behind when any step fails.
    """
    account = await service.sign_up(
        email=data.email,
        password=data.password,
        username=data.username,
        display_name=data.display_name,
    )
    return AccountRead.model_validate(account)


@router.post(
    "/signin",
    response_model=SignInResponse,
    responses={
        200: {
            "description": "Successful authentication",
            "content": {
                "application/json": {
                    "example": {
                        "access_token": "eyJhbGciOiJIUzI1NiIsInR5cCI6IkpXVCJ9...",
                        "token_type": "bearer",
                        "account": {
                            "id": "3f2c9a0e8b6d4c1fa7e5b9d2c4a6e8f0",
                            "email": "ada@example.com",
                            "username": "ada",
                            "display_name": "Ada",
                            "created_at": "2026-01-01T00:00:00Z",
                        },
                    }
                }
            },
        },
        401: {"description": "Invalid credentials"},
    },
)
@limiter.limit(get_settings().signin_rate_limit)
async def sign_in(
    request: Request, data: SignInRequest, service: AuthServiceDep
) -> SignInResponse:
    """Authenticate and return a bearer token."""
    result = await service.sign_in(data.email, data.password)
    return SignInResponse(
        access_token=result.access_token,
        account=AccountRead.model_validate(result.account),
    )


@router.post("/signout", status_code=status.HTTP_204_NO_CONTENT)
async def sign_out(token: BearerToken, service: AuthServiceDep) -> Response:
    """End the current session. Signing out without a session is a no-op."""
    if token:
        await service.sign_out(token)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/usernames/{username}", response_model=UsernameAvailability)
async def check_username(username: str, service: AccountServiceDep) -> UsernameAvailability:
    """Whether a username can still be registered.

    Malformed and reserved names are reported as unavailable.
    """
    try:
        normalized = UsernameField(username=username).username
    except ValueError:
        return UsernameAvailability(username=username, available=False)
    taken = await service.is_username_taken(normalized)
    return UsernameAvailability(username=normalized, available=not taken)
