"""Root test fixtures shared across all test types.

Unit tests run services against both document store implementations;
integration tests (tests/integration/conftest.py) drive the HTTP API.
"""

import os

# Set APP_ENV to testing before any app imports to disable rate limiting
os.environ.setdefault("APP_ENV", "testing")
os.environ.setdefault("STORE_BACKEND", "memory")
# Cheap hashing keeps the suite fast
os.environ.setdefault("ARGON2_TIME_COST", "1")
os.environ.setdefault("ARGON2_MEMORY_COST", "1024")

# ruff: noqa: E402 - Imports must be after env var setup
from collections.abc import AsyncGenerator
from pathlib import Path

import pytest
from sqlmodel import SQLModel

from src.devlog.core.config import get_settings
from src.devlog.core.db import create_engine_for_url
from src.devlog.identity import PasswordIdentityProvider
from src.devlog.models import Account
from src.devlog.services import AccountService, AuthService, ProjectService
from src.devlog.store import DocumentStore, InMemoryDocumentStore
from src.devlog.store.sql import SQLDocumentStore
from tests.factories import DEFAULT_TEST_PASSWORD

# Clear settings cache to ensure test environment variables are picked up
get_settings.cache_clear()


async def _sql_store(path: Path) -> SQLDocumentStore:
    # A file database: concurrent sessions need separate connections
    engine = create_engine_for_url(f"sqlite+aiosqlite:///{path / 'devlog.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    return SQLDocumentStore(engine)


@pytest.fixture(params=["memory", "sql"])
async def store(request: pytest.FixtureRequest, tmp_path: Path) -> AsyncGenerator[DocumentStore]:
    """Every store-backed test runs against both implementations."""
    if request.param == "memory":
        document_store: DocumentStore = InMemoryDocumentStore()
    else:
        document_store = await _sql_store(tmp_path)
    yield document_store
    await document_store.close()


@pytest.fixture
def identity_provider(store: DocumentStore) -> PasswordIdentityProvider:
    return PasswordIdentityProvider(store)


@pytest.fixture
def account_service(
    store: DocumentStore, identity_provider: PasswordIdentityProvider
) -> AccountService:
    return AccountService(store, identity_provider)


@pytest.fixture
def auth_service(store: DocumentStore, identity_provider: PasswordIdentityProvider) -> AuthService:
    return AuthService(store, identity_provider)


@pytest.fixture
def project_service(store: DocumentStore) -> ProjectService:
    return ProjectService(store, slug_claim_attempts=5)


@pytest.fixture
async def alice(account_service: AccountService) -> Account:
    return await account_service.sign_up(
        "alice@example.com", DEFAULT_TEST_PASSWORD, "alice", display_name="Alice"
    )


@pytest.fixture
async def bob(account_service: AccountService) -> Account:
    return await account_service.sign_up("bob@example.com", DEFAULT_TEST_PASSWORD, "bob")
