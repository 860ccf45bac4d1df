"""Tests for the BundleUp API client, end to end against the app and with mocked HTTP."""

from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from httpx import ASGITransport
from libs.auth.tokens import TokenPair
from libs.shop_client import ApiError, BundleUpClient, create_store
from libs.shop_client import cart
from libs.shop_client import state as app_state
from tests.factories import ProductFactory


@pytest.fixture
def api(client):
    """A BundleUpClient wired to the same app and session as ``client``."""
    from services.gateway_service.app.main import app

    return BundleUpClient("http://test", transport=ASGITransport(app=app))


# ---------------------------------------------------------------------------
# End to end
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
@pytest.mark.integration
async def test_register_shop_and_checkout(api, db_session):
    db_session.add(
        ProductFactory.create(
            id=101, b2c_price=Decimal("3.99"), b2b_price=Decimal("3.10"), inventory_by_box=4
        )
    )
    await db_session.commit()
    store = create_store()

    auth = await api.register(
        email="shop@biz.com",
        password="Abc12345!",
        firstName="Shop",
        lastName="Keeper",
        role="b2b",
        companyName="Biz",
    )
    store.dispatch(
        app_state.signed_in, auth["user"], TokenPair.model_validate(auth["tokens"])
    )
    assert api.access_token == auth["tokens"]["accessToken"]

    catalog = await api.list_products(eggCount=12)
    product = catalog["products"][0]
    assert product["pricingType"] == "wholesale"

    store.dispatch(app_state.add_to_cart, product, 2)
    assert store.state.cart.get(101).price == Decimal("3.10")

    created = await api.create_order(cart.to_order_items(store.state.cart))
    assert Decimal(created["totalAmount"]) == Decimal("6.20")

    history = await api.get_order_history()
    assert history["totalProducts"] == 1

    order = await api.get_order(created["orderId"])
    assert order["items"][0]["quantity"] == 2


@pytest.mark.asyncio
@pytest.mark.integration
async def test_failure_envelope_raises_api_error(api):
    with pytest.raises(ApiError) as exc_info:
        await api.login("nobody@example.com", "whatever1")

    assert exc_info.value.status_code == 401
    assert exc_info.value.message == "Invalid credentials"


# ---------------------------------------------------------------------------
# Mocked HTTP
# ---------------------------------------------------------------------------


def _response(status_code, body):
    response = MagicMock()
    response.status_code = status_code
    response.json.return_value = body
    response.text = ""
    return response


@pytest.mark.asyncio
@pytest.mark.unit
async def test_bearer_header_is_sent():
    api = BundleUpClient("https://api.example.com/", access_token="tok")
    body = {"success": True, "data": []}

    with patch("httpx.AsyncClient.request", new_callable=AsyncMock) as mock_request:
        mock_request.return_value = _response(200, body)
        orders = await api.list_orders()

    assert orders == []
    args, kwargs = mock_request.call_args
    assert args == ("GET", "https://api.example.com/api/orders")
    assert kwargs["headers"]["Authorization"] == "Bearer tok"


@pytest.mark.asyncio
@pytest.mark.unit
async def test_logout_forgets_token():
    api = BundleUpClient("https://api.example.com", access_token="tok")

    with patch("httpx.AsyncClient.request", new_callable=AsyncMock) as mock_request:
        mock_request.return_value = _response(200, {"success": True, "data": None})
        await api.logout()

    assert api.access_token is None


@pytest.mark.asyncio
@pytest.mark.unit
async def test_non_json_failure():
    api = BundleUpClient("https://api.example.com")
    response = _response(502, None)
    response.json.side_effect = ValueError("no json")
    response.text = "Bad Gateway"

    with patch("httpx.AsyncClient.request", new_callable=AsyncMock) as mock_request:
        mock_request.return_value = response
        with pytest.raises(ApiError) as exc_info:
            await api.get_profile()

    assert exc_info.value.status_code == 502
    assert exc_info.value.message == "Bad Gateway"
