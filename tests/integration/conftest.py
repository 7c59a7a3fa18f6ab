"""Integration test fixtures: the full app over an in-memory document store.

The app is driven through httpx's ASGI transport, so no server or external
database is needed.
"""

from collections.abc import AsyncGenerator, Awaitable, Callable

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from src.devlog.main import create_app
from src.devlog.store import InMemoryDocumentStore
from tests.factories import DEFAULT_TEST_PASSWORD

AuthHeaders = dict[str, str]


@pytest.fixture
def document_store() -> InMemoryDocumentStore:
    return InMemoryDocumentStore()


@pytest.fixture
def app(document_store: InMemoryDocumentStore) -> FastAPI:
    return create_app(store=document_store)


@pytest.fixture
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient]:
    """Anonymous HTTP client."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
def sign_up(client: AsyncClient) -> Callable[..., Awaitable[AuthHeaders]]:
    """Sign up and sign in an account, returning its Authorization header."""

    async def _sign_up(username: str, display_name: str | None = None) -> AuthHeaders:
        email = f"{username}@example.com"
        response = await client.post(
            "/api/v1/auth/signup",
            json={
                "email": email,
                "password": DEFAULT_TEST_PASSWORD,
                "username": username,
                "display_name": display_name,
            },
        )
        assert response.status_code == 201, response.text
        response = await client.post(
            "/api/v1/auth/signin",
            json={"email": email, "password": DEFAULT_TEST_PASSWORD},
        )
        assert response.status_code == 200, response.text
        return {"Authorization": f"Bearer {response.json()['access_token']}"}

    return _sign_up


@pytest.fixture
async def ada(sign_up) -> AuthHeaders:
    return await sign_up("ada", "Ada Lovelace")


@pytest.fixture
async def grace(sign_up) -> AuthHeaders:
    return await sign_up("grace")
