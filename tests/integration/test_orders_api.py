"""Integration tests for the /api/orders endpoints."""

import uuid
from decimal import Decimal

import pytest
from services.store_service.models import Order
from sqlalchemy import func, select
from tests.conftest import auth_headers
from tests.factories import ProductFactory


async def _seed_products(db_session):
    db_session.add_all(
        [
            ProductFactory.create(id=101, name="Brown Eggs", b2c_price=Decimal("3.99")),
            ProductFactory.create(id=102, name="Duck Eggs", b2c_price=Decimal("9.00")),
        ]
    )
    await db_session.commit()


# ---------------------------------------------------------------------------
# Create
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
@pytest.mark.integration
async def test_create_order(client, db_session, customer):
    """POST /api/orders: totals use the retail price when none is sent."""
    await _seed_products(db_session)

    response = await client.post(
        "/api/orders",
        json={"items": [{"productId": 101, "quantity": 2}]},
        headers=auth_headers(customer),
    )

    assert response.status_code == 201, response.text
    body = response.json()
    assert body["message"] == "Order created successfully"
    assert Decimal(body["data"]["totalAmount"]) == Decimal("7.98")
    assert body["data"]["orderNumber"].startswith("ORD-")
    uuid.UUID(body["data"]["orderId"])


@pytest.mark.asyncio
@pytest.mark.integration
async def test_create_order_unknown_product_is_rolled_back(client, db_session, customer):
    await _seed_products(db_session)

    response = await client.post(
        "/api/orders",
        json={
            "items": [
                {"productId": 101, "quantity": 1},
                {"productId": 999, "quantity": 1},
            ]
        },
        headers=auth_headers(customer),
    )

    assert response.status_code == 500
    assert response.json() == {
        "success": False,
        "error": "Failed to create order: Product with ID 999 not found",
    }
    count = (await db_session.execute(select(func.count()).select_from(Order))).scalar_one()
    assert count == 0


@pytest.mark.asyncio
@pytest.mark.integration
async def test_create_order_requires_items(client, customer):
    response = await client.post(
        "/api/orders", json={"items": []}, headers=auth_headers(customer)
    )

    assert response.status_code == 400
    assert response.json()["success"] is False


@pytest.mark.asyncio
@pytest.mark.integration
async def test_create_order_requires_auth(client):
    response = await client.post(
        "/api/orders", json={"items": [{"productId": 101, "quantity": 1}]}
    )

    assert response.status_code == 401


# ---------------------------------------------------------------------------
# Read
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
@pytest.mark.integration
async def test_list_and_get_orders(client, db_session, customer, business):
    await _seed_products(db_session)
    headers = auth_headers(customer)
    created = await client.post(
        "/api/orders",
        json={"items": [{"productId": 102, "quantity": 1, "price": "8.50"}]},
        headers=headers,
    )
    order_id = created.json()["data"]["orderId"]

    listed = await client.get("/api/orders", headers=headers)
    orders = listed.json()["data"]
    assert isinstance(orders, list)
    assert [o["id"] for o in orders] == [order_id]
    assert orders[0]["items"][0]["name"] == "Duck Eggs"
    assert Decimal(orders[0]["items"][0]["price"]) == Decimal("8.50")

    fetched = await client.get(f"/api/orders/{order_id}", headers=headers)
    assert fetched.status_code == 200
    assert fetched.json()["data"]["order"]["status"] == "pending"

    foreign = await client.get(f"/api/orders/{order_id}", headers=auth_headers(business))
    assert foreign.status_code == 404

    malformed = await client.get("/api/orders/not-a-uuid", headers=headers)
    assert malformed.status_code == 404


@pytest.mark.asyncio
@pytest.mark.integration
async def test_order_history(client, db_session, customer):
    await _seed_products(db_session)
    headers = auth_headers(customer)
    for items in (
        [{"productId": 101, "quantity": 2}],
        [{"productId": 101, "quantity": 1}, {"productId": 102, "quantity": 4}],
    ):
        response = await client.post("/api/orders", json={"items": items}, headers=headers)
        assert response.status_code == 201

    response = await client.get("/api/orders/history", headers=headers)

    assert response.status_code == 200, response.text
    data = response.json()["data"]
    assert data["totalProducts"] == 2
    by_product = {entry["productId"]: entry for entry in data["orderHistory"]}
    assert by_product[101]["orderCount"] == 2
    assert by_product[101]["totalQuantity"] == 3
    assert by_product[102]["totalQuantity"] == 4
    assert len(by_product[101]["orderDates"]) == 2
    assert Decimal(by_product[101]["b2cPrice"]) == Decimal("3.99")
    assert "b2bPrice" in by_product[101]


@pytest.mark.asyncio
@pytest.mark.integration
async def test_order_history_empty(client, customer):
    response = await client.get("/api/orders/history", headers=auth_headers(customer))

    assert response.status_code == 200
    assert response.json()["data"] == {"orderHistory": [], "totalProducts": 0}
