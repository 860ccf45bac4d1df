"""Order operations: the all-or-nothing order creation transaction, order
queries and the per-product order history fold."""

import uuid
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Any, Iterable, NamedTuple, Optional, Sequence

from libs.common.datetime_utils import as_utc
from libs.common.errors import NotFoundError, ValidationError
from libs.common.logging import get_logger
from services.store_service.models import (
    Cart,
    Order,
    OrderItem,
    OrderStatus,
    Product,
)
from services.store_service.schemas import (
    OrderHistoryEntry,
    OrderItemCreate,
    OrderItemResponse,
    OrderResponse,
)
from sqlalchemy import Uuid, column, select, table
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

logger = get_logger(__name__)

CENTS = Decimal("0.01")

# Lightweight reference to the accounts addresses table
_addresses = table("addresses", column("id", Uuid()), column("user_id", Uuid()))


class ProductNotFound(Exception):
    def __init__(self, product_id: int):
        self.product_id = product_id
        super().__init__(f"Product with ID {product_id} not found")


@dataclass(frozen=True)
class OrderCreated:
    order_id: uuid.UUID
    order_number: str
    total_amount: Decimal


def coerce_status(status: Optional[str]) -> OrderStatus:
    """Requested status if it is a known one, else ``pending``."""
    try:
        return OrderStatus(status)
    except ValueError:
        return OrderStatus.PENDING


async def _ensure_owned(
    db: AsyncSession,
    *,
    user_id: uuid.UUID,
    cart_id: Optional[uuid.UUID],
    address_id: Optional[uuid.UUID],
) -> None:
    if cart_id is not None:
        result = await db.execute(
            select(Cart.id).where(Cart.id == cart_id, Cart.user_id == user_id)
        )
        if result.scalar_one_or_none() is None:
            raise ValidationError("Cart does not belong to the current user")
    if address_id is not None:
        result = await db.execute(
            select(_addresses.c.id).where(
                _addresses.c.id == address_id, _addresses.c.user_id == user_id
            )
        )
        if result.scalar_one_or_none() is None:
            raise ValidationError("Address does not belong to the current user")


# ---------------------------------------------------------------------------
# Order creation
# ---------------------------------------------------------------------------


async def create_order(
    db: AsyncSession,
    *,
    user_id: uuid.UUID,
    items: Sequence[OrderItemCreate],
    status: Optional[str] = None,
    cart_id: Optional[uuid.UUID] = None,
    address_id: Optional[uuid.UUID] = None,
    notes: Optional[str] = None,
) -> OrderCreated:
    """Create an order and its items in one transaction.

    Each item is priced at the unit price the client sent, or the product's
    retail price when none was sent. Tax and shipping are left at zero. Any
    failure rolls the whole order back and is re-raised.

    Raises:
        ValidationError: no items, or a cart/address that is not the caller's.
        ProductNotFound: an item references a product that does not exist.
    """
    if not items:
        raise ValidationError("Order items are required")
    await _ensure_owned(db, user_id=user_id, cart_id=cart_id, address_id=address_id)

    try:
        order = Order(
            user_id=user_id,
            order_number=Order.generate_order_number(),
            status=coerce_status(status),
            cart_id=cart_id,
            address_id=address_id,
            notes=notes,
            subtotal=Decimal("0"),
            tax=Decimal("0"),
            shipping=Decimal("0"),
            total=Decimal("0"),
        )
        db.add(order)
        await db.flush()

        total_amount = Decimal("0")
        for item in items:
            product = await db.get(Product, item.product_id)
            if product is None:
                raise ProductNotFound(item.product_id)

            unit_price = (
                Decimal(str(item.price)) if item.price is not None else product.b2c_price
            )
            total_amount += unit_price * item.quantity
            db.add(
                OrderItem(
                    order_id=order.id,
                    product_id=product.id,
                    quantity=item.quantity,
                    price=unit_price,
                )
            )

        total_amount = total_amount.quantize(CENTS)
        order.subtotal = total_amount
        order.total = total_amount
        await db.commit()
    except Exception:
        await db.rollback()
        logger.exception("Order creation failed for user %s, rolled back", user_id)
        raise

    logger.info(
        "Created order %s for user %s (%d items, total=%s)",
        order.order_number,
        user_id,
        len(items),
        total_amount,
    )
    return OrderCreated(
        order_id=order.id,
        order_number=order.order_number,
        total_amount=total_amount,
    )


# ---------------------------------------------------------------------------
# Order queries
# ---------------------------------------------------------------------------


def serialize_order(order: Order) -> OrderResponse:
    items = [
        OrderItemResponse(
            id=item.id,
            product_id=item.product_id,
            quantity=item.quantity,
            price=item.price,
            name=item.product.name if item.product else None,
            description=item.product.description if item.product else None,
            image_url=item.product.image_url if item.product else None,
        )
        for item in order.items
    ]
    response = OrderResponse.model_validate(order, from_attributes=True)
    return response.model_copy(update={"items": items})


def _order_query():
    return select(Order).options(
        selectinload(Order.items).selectinload(OrderItem.product)
    )


async def list_orders(db: AsyncSession, *, user_id: uuid.UUID) -> list[OrderResponse]:
    result = await db.execute(
        _order_query()
        .where(Order.user_id == user_id)
        .order_by(Order.created_at.desc())
    )
    return [serialize_order(order) for order in result.scalars().all()]


async def get_order(
    db: AsyncSession, *, user_id: uuid.UUID, order_id: Any
) -> OrderResponse:
    """One of the caller's orders. Unknown, foreign and malformed ids are all 404."""
    try:
        order_uuid = order_id if isinstance(order_id, uuid.UUID) else uuid.UUID(str(order_id))
    except ValueError:
        raise NotFoundError("Order not found")

    result = await db.execute(
        _order_query().where(Order.id == order_uuid, Order.user_id == user_id)
    )
    order = result.scalar_one_or_none()
    if order is None:
        raise NotFoundError("Order not found")
    return serialize_order(order)


# ---------------------------------------------------------------------------
# Order history
# ---------------------------------------------------------------------------


class HistoryRow(NamedTuple):
    """One ordered line: when it was ordered, how many, and the product."""

    order_date: datetime
    quantity: int
    product: Any


def fold_order_history(rows: Iterable[HistoryRow]) -> list[OrderHistoryEntry]:
    """Group ordered lines by product.

    Each entry carries the product fields plus the latest order date, the
    number of lines, the summed quantity and every order date seen. Entries
    are sorted by latest order date, newest first.
    """
    grouped: dict[int, dict[str, Any]] = {}
    for row in rows:
        product = row.product
        order_date = as_utc(row.order_date)
        entry = grouped.get(product.id)
        if entry is None:
            entry = grouped[product.id] = {
                "product_id": product.id,
                "name": product.name,
                "description": product.description,
                "category": product.category,
                "egg_color": product.egg_color,
                "egg_count": product.egg_count,
                "image_url": product.image_url,
                "b2c_price": product.b2c_price,
                "b2b_price": product.b2b_price,
                "last_ordered": order_date,
                "order_count": 0,
                "total_quantity": 0,
                "order_dates": [],
            }
        entry["order_count"] += 1
        entry["total_quantity"] += row.quantity
        entry["order_dates"].append(order_date)
        if order_date > entry["last_ordered"]:
            entry["last_ordered"] = order_date

    ordered = sorted(grouped.values(), key=lambda e: e["last_ordered"], reverse=True)
    return [OrderHistoryEntry(**entry) for entry in ordered]


async def get_order_history(
    db: AsyncSession, *, user_id: uuid.UUID
) -> list[OrderHistoryEntry]:
    result = await db.execute(
        select(Order.created_at, OrderItem.quantity, Product)
        .join(OrderItem, OrderItem.order_id == Order.id)
        .join(Product, Product.id == OrderItem.product_id)
        .where(Order.user_id == user_id)
        .order_by(Order.created_at.desc())
    )
    return fold_order_history(HistoryRow(*row) for row in result.all())
