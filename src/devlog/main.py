import secrets
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Any

from asgi_correlation_id import CorrelationIdMiddleware, correlation_id
from fastapi import Depends, FastAPI, HTTPException, Request, Response, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.security import APIKeyHeader
from prometheus_fastapi_instrumentator import Instrumentator
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from starlette.middleware.base import RequestResponseEndpoint

from src.devlog.api.v1.router import api_router
from src.devlog.core.config import Settings, get_settings
from src.devlog.core.db import run_migrations_async
from src.devlog.core.exceptions import DevLogError, setup_exception_handlers
from src.devlog.core.logging import (
    bind_request_context,
    clear_request_context,
    get_logger,
    setup_logging,
)
from src.devlog.core.rate_limit import limiter
from src.devlog.core.security import SecurityHeadersMiddleware
from src.devlog.identity import IdentityProvider, PasswordIdentityProvider
from src.devlog.store.base import DocumentStore
from src.devlog.store.factory import create_store

logger = get_logger(__name__)

OPENAPI_TAGS = [
    {"name": "auth", "description": "Sign-up, sign-in and username availability"},
    {"name": "accounts", "description": "Own profile and public profile pages"},
    {"name": "projects", "description": "Project management for the signed-in owner"},
]


def _build_lifespan(settings: Settings, run_migrations: bool):
    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
        """Application lifespan - startup and shutdown."""
        setup_logging(settings.debug)
        logger.info(f"Starting {settings.app_name}", store_backend=settings.store_backend)
        if run_migrations:
            await run_migrations_async(settings.database_url)

        yield

        logger.info("Closing document store...")
        await app.state.store.close()
        logger.info("Shutdown complete")

    return lifespan


def create_app(
    settings: Settings | None = None,
    store: DocumentStore | None = None,
    identity_provider: IdentityProvider | None = None,
) -> FastAPI:
    """Build the application.

    ``store`` and ``identity_provider`` default to the ones configured in
    settings; tests pass their own. Request handlers read ``settings`` from
    ``app.state``. Rate-limit strings are bound when the routes are declared
    and always come from the process settings.
    """
    settings = settings or get_settings()
    run_migrations = store is None and settings.store_backend == "sql" and settings.auto_migrate
    store = store or create_store(settings)
    identity_provider = identity_provider or PasswordIdentityProvider(store)

    app = FastAPI(
        title=settings.app_name,
        description="Developer project log: public profiles and project pages",
        version="0.1.0",
        openapi_tags=OPENAPI_TAGS,
        openapi_url="/openapi.json" if settings.enable_openapi else None,
        lifespan=_build_lifespan(settings, run_migrations),
    )
    app.state.settings = settings
    app.state.store = store
    app.state.identity_provider = identity_provider

    setup_exception_handlers(app)

    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)  # type: ignore[arg-type]

    # Add correlation ID middleware first (outermost middleware)
    app.add_middleware(CorrelationIdMiddleware)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PATCH", "DELETE"],
        allow_headers=["Authorization", "Content-Type", "X-Request-ID"],
    )

    csp = settings.csp_production if settings.app_env == "production" else None
    app.add_middleware(SecurityHeadersMiddleware, content_security_policy=csp)

    @app.middleware("http")
    async def logging_context_middleware(
        request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        """Bind request_id to log context for all requests."""
        clear_request_context()
        bind_request_context(correlation_id.get())
        try:
            response = await call_next(request)
            return response
        finally:
            clear_request_context()

    app.include_router(api_router)

    # Prometheus metrics instrumentation
    instrumentator = Instrumentator().instrument(app)

    # Protect /metrics endpoint if API key is configured
    if settings.metrics_api_key:
        api_key_header = APIKeyHeader(name="X-Metrics-Key", auto_error=False)

        async def verify_metrics_key(api_key: str | None = Depends(api_key_header)) -> None:
            if (
                api_key is None
                or settings.metrics_api_key is None
                or not secrets.compare_digest(api_key, settings.metrics_api_key)
            ):
                raise HTTPException(
                    status_code=status.HTTP_401_UNAUTHORIZED,
                    detail="Invalid or missing metrics API key",
                )

        instrumentator.expose(app, endpoint="/metrics", dependencies=[Depends(verify_metrics_key)])
    else:
        instrumentator.expose(app, endpoint="/metrics")

    @app.get("/health")
    async def health(request: Request) -> JSONResponse:
        """Health check: the document store must answer a read."""
        health_status: dict[str, Any] = {"status": "healthy", "store": "unknown"}
        try:
            await request.app.state.store.get("health", "ping")
            health_status["store"] = "healthy"
        except DevLogError as e:
            health_status["store"] = f"unhealthy: {e.detail}"
            health_status["status"] = "unhealthy"

        status_code = 200 if health_status["status"] == "healthy" else 503
        return JSONResponse(content=health_status, status_code=status_code)

    return app
