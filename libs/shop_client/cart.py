"""Client-side cart.

The cart is an immutable ``CartState``; every operation is a reducer that
returns a new state. A product's quantity in the cart never exceeds the
inventory ceiling its role-resolved tier allows. Exceeding it raises
``InventoryExceeded`` and leaves the input state untouched.
"""

from dataclasses import dataclass, field, replace
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Mapping, Optional, Union

from libs.auth.models import Role
from services.store_service.pricing import resolve_price

CENTS = Decimal("0.01")

DEFAULT_TAX_RATE = Decimal("0.08")
DEFAULT_FREE_SHIPPING_THRESHOLD = Decimal("50")
DEFAULT_FLAT_SHIPPING_COST = Decimal("5.99")

Number = Union[Decimal, int, float, str]


class CartError(Exception):
    """Base class for cart rejections. Never crosses HTTP."""


class InventoryExceeded(CartError):
    def __init__(self, ceiling: int, current: int, requested: int):
        self.ceiling = ceiling
        self.current = current
        self.requested = requested
        super().__init__(
            f"Only {ceiling} available and {current} already in your cart"
        )


class ItemNotFound(CartError):
    def __init__(self, product_id: int):
        self.product_id = product_id
        super().__init__(f"Product {product_id} is not in the cart")


@dataclass(frozen=True)
class CartItem:
    product_id: int
    quantity: int
    # Unit price resolved when the item was first added
    price: Decimal
    product: Any
    # Role the price and ceiling were resolved for
    role: Optional[Role] = None


@dataclass(frozen=True)
class CartState:
    role: Optional[Role] = None
    items: tuple[CartItem, ...] = field(default_factory=tuple)

    def get(self, product_id: int) -> Optional[CartItem]:
        for item in self.items:
            if item.product_id == product_id:
                return item
        return None

    def quantity_of(self, product_id: int) -> int:
        item = self.get(product_id)
        return item.quantity if item else 0

    @property
    def is_empty(self) -> bool:
        return not self.items


@dataclass(frozen=True)
class CartTotals:
    subtotal: Decimal
    discount_amount: Decimal
    tax: Decimal
    shipping: Decimal
    total: Decimal
    item_count: int


def _product_id(product: Any) -> int:
    value = product["id"] if isinstance(product, Mapping) else product.id
    return int(value)


def _as_role(role: Union[Role, str, None]) -> Optional[Role]:
    if role is None or isinstance(role, Role):
        return role
    return Role(role)


def _money(value: Number) -> Decimal:
    return Decimal(str(value))


def _round(value: Decimal) -> Decimal:
    return value.quantize(CENTS, rounding=ROUND_HALF_UP)


# ---------------------------------------------------------------------------
# Reducers
# ---------------------------------------------------------------------------


def add_item(
    state: CartState,
    product: Any,
    quantity: int = 1,
    role: Union[Role, str, None] = None,
) -> CartState:
    """Add ``quantity`` of ``product``, merging with an existing line.

    An existing line keeps the role it was first added under. A new line is
    priced for ``role`` when given, the cart's role otherwise.
    """
    if quantity < 1:
        raise ValueError("quantity must be at least 1")

    product_id = _product_id(product)
    existing = state.get(product_id)
    if existing is not None:
        effective_role = existing.role
    elif role is not None:
        effective_role = _as_role(role)
    else:
        effective_role = state.role
    resolved = resolve_price(product, effective_role)
    current = existing.quantity if existing else 0

    if current + quantity > resolved.inventory:
        raise InventoryExceeded(resolved.inventory, current, quantity)

    if current:
        items = tuple(
            replace(item, quantity=item.quantity + quantity)
            if item.product_id == product_id
            else item
            for item in state.items
        )
    else:
        items = state.items + (
            CartItem(
                product_id=product_id,
                quantity=quantity,
                price=resolved.price,
                product=product,
                role=effective_role,
            ),
        )
    return replace(state, items=items)


def update_quantity(state: CartState, product_id: int, quantity: int) -> CartState:
    """Set a line's quantity. Zero or less removes the line."""
    item = state.get(product_id)
    if item is None:
        raise ItemNotFound(product_id)
    if quantity <= 0:
        return remove_item(state, product_id)

    ceiling = resolve_price(item.product, item.role).inventory
    if quantity > ceiling:
        raise InventoryExceeded(ceiling, item.quantity, quantity)

    items = tuple(
        replace(i, quantity=quantity) if i.product_id == product_id else i
        for i in state.items
    )
    return replace(state, items=items)


def remove_item(state: CartState, product_id: int) -> CartState:
    return replace(
        state, items=tuple(i for i in state.items if i.product_id != product_id)
    )


def clear(state: CartState) -> CartState:
    return replace(state, items=())


def with_role(state: CartState, role: Union[Role, str, None]) -> CartState:
    """Switch the pricing role. Lines already in the cart keep their price and
    ceiling."""
    return replace(state, role=_as_role(role))


# ---------------------------------------------------------------------------
# Totals
# ---------------------------------------------------------------------------


def subtotal(state: CartState) -> Decimal:
    return sum((item.price * item.quantity for item in state.items), Decimal("0"))


def item_count(state: CartState) -> int:
    return sum(item.quantity for item in state.items)


def compute_totals(
    state: CartState,
    tax_rate: Number = DEFAULT_TAX_RATE,
    free_shipping_threshold: Number = DEFAULT_FREE_SHIPPING_THRESHOLD,
    flat_shipping_cost: Number = DEFAULT_FLAT_SHIPPING_COST,
    discount_percent: Number = 0,
) -> CartTotals:
    """Order summary for the cart.

    Tax applies to the discounted subtotal, and shipping is free once the
    discounted subtotal reaches ``free_shipping_threshold``.
    """
    raw_subtotal = subtotal(state)
    discount_percent = _money(discount_percent)
    discount_amount = (
        raw_subtotal * discount_percent / 100 if discount_percent > 0 else Decimal("0")
    )
    discounted = raw_subtotal - discount_amount
    tax = discounted * _money(tax_rate)
    shipping = (
        Decimal("0")
        if discounted >= _money(free_shipping_threshold)
        else _money(flat_shipping_cost)
    )
    return CartTotals(
        subtotal=_round(raw_subtotal),
        discount_amount=_round(discount_amount),
        tax=_round(tax),
        shipping=_round(shipping),
        total=_round(discounted + tax + shipping),
        item_count=item_count(state),
    )


def qualifies_for_free_shipping(
    state: CartState, threshold: Number = DEFAULT_FREE_SHIPPING_THRESHOLD
) -> bool:
    return subtotal(state) >= _money(threshold)


def amount_needed_for_free_shipping(
    state: CartState, threshold: Number = DEFAULT_FREE_SHIPPING_THRESHOLD
) -> Decimal:
    return _round(max(Decimal("0"), _money(threshold) - subtotal(state)))


def to_order_items(state: CartState) -> list[dict[str, Any]]:
    """Line items in the shape ``POST /api/orders`` expects."""
    return [
        {
            "productId": item.product_id,
            "quantity": item.quantity,
            "price": str(item.price),
        }
        for item in state.items
    ]
