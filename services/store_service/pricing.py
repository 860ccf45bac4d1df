"""Role-based pricing.

A product carries two tiers. Wholesale accounts (business and admin) see the
box price and box inventory; everyone else, including anonymous callers, sees
the carton price and carton inventory.
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Literal, Mapping, Optional, Union

from libs.auth.models import Role

PricingType = Literal["retail", "wholesale"]

_FIELD_ALIASES = {
    "b2c_price": "b2cPrice",
    "b2b_price": "b2bPrice",
    "inventory_by_carton": "inventoryByCarton",
    "inventory_by_box": "inventoryByBox",
}


@dataclass(frozen=True)
class ResolvedPrice:
    price: Decimal
    inventory: int
    pricing_type: PricingType


def _field(product: Any, name: str) -> Any:
    """Read a product field from an ORM row, a schema or a snake/camel mapping."""
    if isinstance(product, Mapping):
        if name in product:
            return product[name]
        return product.get(_FIELD_ALIASES[name])
    return getattr(product, name)


def _as_role(role: Union[Role, str, None]) -> Optional[Role]:
    if role is None or isinstance(role, Role):
        return role
    return Role(role)


def resolve_price(product: Any, role: Union[Role, str, None]) -> ResolvedPrice:
    """Return the price, inventory ceiling and tier a caller with ``role`` sees."""
    role = _as_role(role)
    tier: PricingType = role.pricing_tier if role is not None else "retail"
    if tier == "wholesale":
        return ResolvedPrice(
            price=Decimal(str(_field(product, "b2b_price"))),
            inventory=int(_field(product, "inventory_by_box") or 0),
            pricing_type="wholesale",
        )
    return ResolvedPrice(
        price=Decimal(str(_field(product, "b2c_price"))),
        inventory=int(_field(product, "inventory_by_carton") or 0),
        pricing_type="retail",
    )


def price_comparison(product: Any) -> dict[str, Any]:
    """Both tiers side by side for the admin compare view."""
    retail = resolve_price(product, Role.B2C)
    wholesale = resolve_price(product, Role.B2B)
    return {
        "b2c": {"price": retail.price, "inventory": retail.inventory},
        "b2b": {"price": wholesale.price, "inventory": wholesale.inventory},
        "savings": retail.price - wholesale.price,
    }
