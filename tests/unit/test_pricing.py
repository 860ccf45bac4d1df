"""Unit tests for role-based price resolution."""

from decimal import Decimal

import pytest
from libs.auth.models import Role
from services.store_service.pricing import price_comparison, resolve_price

from tests.factories import ProductFactory

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _make_product(**overrides):
    return ProductFactory.create(
        b2c_price=Decimal("5.99"),
        b2b_price=Decimal("4.50"),
        inventory_by_carton=100,
        inventory_by_box=20,
        **overrides,
    )


# ---------------------------------------------------------------------------
# resolve_price
# ---------------------------------------------------------------------------


@pytest.mark.unit
@pytest.mark.parametrize("role", [None, Role.B2C, "b2c"])
def test_retail_callers_see_carton_tier(role):
    resolved = resolve_price(_make_product(), role)

    assert resolved.price == Decimal("5.99")
    assert resolved.inventory == 100
    assert resolved.pricing_type == "retail"


@pytest.mark.unit
@pytest.mark.parametrize("role", [Role.B2B, Role.ADMIN, "admin"])
def test_wholesale_callers_see_box_tier(role):
    resolved = resolve_price(_make_product(), role)

    assert resolved.price == Decimal("4.50")
    assert resolved.inventory == 20
    assert resolved.pricing_type == "wholesale"


@pytest.mark.unit
def test_resolves_camel_case_mapping():
    product = {
        "id": 1,
        "b2cPrice": "3.25",
        "b2bPrice": 2.75,
        "inventoryByCarton": 7,
        "inventoryByBox": 3,
    }

    retail = resolve_price(product, Role.B2C)
    wholesale = resolve_price(product, Role.B2B)

    assert retail.price == Decimal("3.25")
    assert retail.inventory == 7
    assert wholesale.price == Decimal("2.75")
    assert wholesale.inventory == 3


@pytest.mark.unit
def test_unknown_role_string_is_rejected():
    with pytest.raises(ValueError):
        resolve_price(_make_product(), "distributor")


# ---------------------------------------------------------------------------
# price_comparison
# ---------------------------------------------------------------------------


@pytest.mark.unit
def test_price_comparison_lists_both_tiers_and_savings():
    comparison = price_comparison(_make_product())

    assert comparison["b2c"] == {"price": Decimal("5.99"), "inventory": 100}
    assert comparison["b2b"] == {"price": Decimal("4.50"), "inventory": 20}
    assert comparison["savings"] == Decimal("1.49")
