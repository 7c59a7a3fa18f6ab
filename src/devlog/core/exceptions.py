"""Domain errors and the exception handlers that turn them into responses.

Services raise the errors below; the API layer never inspects messages to
decide status codes, it relies on the class hierarchy.
"""

from asgi_correlation_id import correlation_id
from fastapi import FastAPI, HTTPException, Request, status
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from src.devlog.core.logging import get_logger

logger = get_logger(__name__)


class DevLogError(Exception):
    """Base class for every error raised by the DevLog core."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail: str = "Internal server error"

    def __init__(self, detail: str | None = None):
        self.detail = detail or self.default_detail
        super().__init__(self.detail)


class NotFoundError(DevLogError):
    """A username, account, project or document does not exist."""

    status_code = status.HTTP_404_NOT_FOUND
    default_detail = "Not found"


class UnauthenticatedError(DevLogError):
    """A call that requires an account was made without a valid one."""

    status_code = status.HTTP_401_UNAUTHORIZED
    default_detail = "Not authenticated"


class ForbiddenError(DevLogError):
    """The requester may know the resource exists but may not read it."""

    status_code = status.HTTP_403_FORBIDDEN
    default_detail = "Forbidden"


class UsernameTakenError(DevLogError):
    status_code = status.HTTP_409_CONFLICT
    default_detail = "Username is already taken"


class InvalidUsernameError(DevLogError):
    status_code = status.HTTP_422_UNPROCESSABLE_ENTITY
    default_detail = "Invalid username"


class ConflictError(DevLogError):
    """A create-if-absent write found an existing document."""

    status_code = status.HTTP_409_CONFLICT
    default_detail = "Conflict"


class StoreFailureError(DevLogError):
    """Opaque wrapper around any document store failure."""

    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    default_detail = "Document store unavailable"


class IdentityProviderError(DevLogError):
    """Opaque wrapper around any identity provider failure."""

    status_code = status.HTTP_502_BAD_GATEWAY
    default_detail = "Identity provider failure"


class EmailAlreadyRegisteredError(IdentityProviderError):
    status_code = status.HTTP_409_CONFLICT
    default_detail = "Email already registered"


class InvalidCredentialsError(IdentityProviderError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_detail = "Invalid email or password"


def _error_response(status_code: int, detail: str) -> JSONResponse:
    headers = {"WWW-Authenticate": "Bearer"} if status_code == 401 else None
    return JSONResponse(
        status_code=status_code,
        content={
            "detail": detail,
            "request_id": correlation_id.get(),
        },
        headers=headers,
    )


def setup_exception_handlers(app: FastAPI) -> None:
    """Configure exception handlers that include request_id in responses."""

    @app.exception_handler(DevLogError)
    async def devlog_error_handler(request: Request, exc: DevLogError) -> JSONResponse:
        if exc.status_code >= 500:
            logger.error(
                "Collaborator failure",
                error_type=type(exc).__name__,
                detail=exc.detail,
                path=request.url.path,
            )
        return _error_response(exc.status_code, exc.detail)

    @app.exception_handler(StarletteHTTPException)
    async def starlette_exception_handler(
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content={
                "detail": exc.detail,
                "request_id": correlation_id.get(),
            },
            headers=exc.headers,
        )

    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content={
                "detail": exc.detail,
                "request_id": correlation_id.get(),
            },
            headers=exc.headers,
        )

    @app.exception_handler(Exception)
    async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        request_id = correlation_id.get()
        logger.exception(
            "Unhandled exception",
            exc_info=exc,
            request_id=request_id,
            path=request.url.path,
        )
        return JSONResponse(
            status_code=500,
            content={
                "detail": "Internal server error",
                "request_id": request_id,
            },
        )
