"""Unit tests for the client application store."""

import pytest
from libs.auth.models import Role
from libs.auth.tokens import TokenPair
from libs.shop_client import state as app_state
from libs.shop_client.cart import InventoryExceeded
from libs.shop_client.state import AppState, create_store


def _make_product(product_id=1, carton=5, box=2):
    return {
        "id": product_id,
        "b2cPrice": "3.99",
        "b2bPrice": "3.00",
        "inventoryByCarton": carton,
        "inventoryByBox": box,
    }


def _tokens(access="access-1"):
    return TokenPair(access_token=access, refresh_token="refresh-1")


@pytest.mark.unit
def test_sign_in_sets_cart_role():
    store = create_store()

    store.dispatch(app_state.signed_in, {"id": "u1", "role": "b2b"}, _tokens())

    assert store.state.auth.is_authenticated
    assert store.state.auth.role is Role.B2B
    assert store.state.cart.role is Role.B2B


@pytest.mark.unit
def test_sign_out_resets_everything():
    store = create_store()
    store.dispatch(app_state.signed_in, {"id": "u1", "role": "b2c"}, _tokens())
    store.dispatch(app_state.add_to_cart, _make_product(), 1)

    store.dispatch(app_state.signed_out)

    assert store.state == AppState()


@pytest.mark.unit
def test_token_refresh_keeps_refresh_token():
    store = create_store()
    store.dispatch(app_state.signed_in, {"id": "u1", "role": "b2c"}, _tokens())

    store.dispatch(app_state.token_refreshed, "access-2")

    assert store.state.auth.tokens.access_token == "access-2"
    assert store.state.auth.tokens.refresh_token == "refresh-1"


@pytest.mark.unit
def test_rejected_cart_action_leaves_state_untouched():
    store = create_store()
    store.dispatch(app_state.add_to_cart, _make_product(carton=1), 1)
    before = store.state

    with pytest.raises(InventoryExceeded):
        store.dispatch(app_state.add_to_cart, _make_product(carton=1), 1)

    assert store.state is before


@pytest.mark.unit
def test_subscribers_and_undo():
    store = create_store()
    seen = []
    unsubscribe = store.subscribe(seen.append)

    store.dispatch(app_state.add_to_cart, _make_product(), 2)
    assert seen[-1].cart.quantity_of(1) == 2

    store.undo()
    assert store.state.cart.is_empty
    assert len(seen) == 2

    unsubscribe()
    store.dispatch(app_state.add_to_cart, _make_product(), 1)
    assert len(seen) == 2
