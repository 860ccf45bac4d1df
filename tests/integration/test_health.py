"""Health endpoints, request tracing and the not-found envelope."""

import logging

import pytest
from httpx import ASGITransport, AsyncClient
from tests.conftest import auth_headers


@pytest.mark.asyncio
@pytest.mark.integration
async def test_gateway_health(client):
    response = await client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok", "environment": "test"}


@pytest.mark.asyncio
@pytest.mark.integration
@pytest.mark.parametrize(
    "module,service",
    [
        ("services.accounts_service.app.main", "accounts"),
        ("services.store_service.app.main", "store"),
    ],
)
async def test_service_health(module, service):
    import importlib

    app = importlib.import_module(module).app
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        response = await ac.get("/health")

    assert response.json() == {"status": "ok", "service": service}


@pytest.mark.asyncio
@pytest.mark.integration
async def test_unknown_route_uses_failure_envelope(client):
    response = await client.get("/api/nothing-here")

    assert response.status_code == 404
    assert response.json() == {"success": False, "error": "Not Found"}


@pytest.mark.asyncio
@pytest.mark.integration
async def test_request_id_is_echoed(client):
    response = await client.get("/api/products", headers={"X-Request-ID": "req-123"})

    assert response.headers["X-Request-ID"] == "req-123"


@pytest.mark.asyncio
@pytest.mark.integration
async def test_request_log_names_the_caller(client, customer, caplog):
    with caplog.at_level(logging.WARNING, logger="libs.common.middleware"):
        response = await client.delete(
            "/api/products/1", headers=auth_headers(customer)
        )

    assert response.status_code == 403
    completed = [r for r in caplog.records if r.getMessage() == "Request completed"]
    assert completed
    fields = completed[-1].extra_fields
    assert fields["status_code"] == 403
    assert fields["user_id"] == str(customer.id)
    assert fields["role"] == "b2c"
