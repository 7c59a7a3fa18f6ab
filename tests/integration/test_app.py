"""Tests for app-level behaviour: health, error bodies and headers."""

from uuid import uuid4

import pytest
from fastapi.testclient import TestClient
from httpx import AsyncClient

from src.devlog.core.exceptions import StoreFailureError
from src.devlog.main import create_app
from src.devlog.store import InMemoryDocumentStore

pytestmark = pytest.mark.integration


async def test_health(client: AsyncClient) -> None:
    response = await client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "healthy", "store": "healthy"}


async def test_health_reports_store_failure(
    client: AsyncClient, document_store: InMemoryDocumentStore, monkeypatch
) -> None:
    async def failing_get(*args, **kwargs):
        raise StoreFailureError("disk on fire")

    monkeypatch.setattr(document_store, "get", failing_get)

    response = await client.get("/health")

    assert response.status_code == 503
    assert response.json()["status"] == "unhealthy"


async def test_error_body_includes_request_id(client: AsyncClient) -> None:
    request_id = str(uuid4())

    response = await client.get("/api/v1/users/nobody", headers={"X-Request-ID": request_id})

    assert response.status_code == 404
    assert response.json()["request_id"] == request_id
    assert response.headers["X-Request-ID"] == request_id


async def test_unknown_route_includes_request_id(client: AsyncClient) -> None:
    response = await client.get("/api/v1/nonexistent-endpoint")

    assert response.status_code == 404
    assert isinstance(response.json()["request_id"], str)


async def test_store_failure_maps_to_503(
    client: AsyncClient, document_store: InMemoryDocumentStore, monkeypatch
) -> None:
    async def failing_get(*args, **kwargs):
        raise StoreFailureError()

    monkeypatch.setattr(document_store, "get", failing_get)

    response = await client.get("/api/v1/users/ada")

    assert response.status_code == 503
    assert response.json()["detail"] == "Document store unavailable"


async def test_security_headers(client: AsyncClient) -> None:
    response = await client.get("/health")

    assert response.headers["X-Content-Type-Options"] == "nosniff"
    assert response.headers["X-Frame-Options"] == "DENY"
    assert "Cache-Control" not in response.headers


async def test_metrics_exposed(client: AsyncClient) -> None:
    await client.get("/health")

    response = await client.get("/metrics")

    assert response.status_code == 200


def test_lifespan_closes_store(monkeypatch) -> None:
    store = InMemoryDocumentStore()
    closed = []

    async def record_close() -> None:
        closed.append(True)

    monkeypatch.setattr(store, "close", record_close)

    with TestClient(create_app(store=store)) as client:
        assert client.get("/health").status_code == 200

    assert closed == [True]
