"""Unit tests for the order creation transaction and order queries."""

import re
import uuid
from decimal import Decimal

import pytest
from libs.common.errors import NotFoundError, ValidationError
from services.store_service.models import Order, OrderItem, OrderStatus
from services.store_service.schemas import OrderItemCreate
from services.store_service.services import order_ops
from sqlalchemy import func, select

from tests.factories import (
    AddressFactory,
    CartFactory,
    ProductFactory,
    UserFactory,
)

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


async def _make_user(db_session):
    user = UserFactory.create()
    db_session.add(user)
    await db_session.commit()
    return user


async def _make_product(db_session, **overrides):
    product = ProductFactory.create(**overrides)
    db_session.add(product)
    await db_session.commit()
    return product


async def _count(db_session, model) -> int:
    return (await db_session.execute(select(func.count()).select_from(model))).scalar_one()


# ---------------------------------------------------------------------------
# Order numbers and status
# ---------------------------------------------------------------------------


@pytest.mark.unit
def test_order_number_format():
    number = Order.generate_order_number()

    assert re.fullmatch(r"ORD-\d{13}-[0-9a-z]{9}", number)


@pytest.mark.unit
def test_unknown_status_falls_back_to_pending():
    assert order_ops.coerce_status("shipped") is OrderStatus.SHIPPED
    assert order_ops.coerce_status("teleported") is OrderStatus.PENDING
    assert order_ops.coerce_status(None) is OrderStatus.PENDING


# ---------------------------------------------------------------------------
# create_order
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
@pytest.mark.unit
async def test_create_order_uses_retail_price_when_none_sent(db_session):
    user = await _make_user(db_session)
    await _make_product(db_session, id=101, b2c_price=Decimal("3.99"))

    created = await order_ops.create_order(
        db_session,
        user_id=user.id,
        items=[OrderItemCreate(product_id=101, quantity=2)],
    )

    assert created.total_amount == Decimal("7.98")
    items = (await db_session.execute(select(OrderItem))).scalars().all()
    assert len(items) == 1
    assert items[0].price == Decimal("3.99")
    assert items[0].quantity == 2

    order = await db_session.get(Order, created.order_id)
    assert order.total == Decimal("7.98")
    assert order.subtotal == Decimal("7.98")
    assert order.tax == Decimal("0")
    assert order.status is OrderStatus.PENDING


@pytest.mark.asyncio
@pytest.mark.unit
async def test_create_order_uses_client_price(db_session):
    user = await _make_user(db_session)
    await _make_product(db_session, id=5, b2c_price=Decimal("5.99"))

    created = await order_ops.create_order(
        db_session,
        user_id=user.id,
        items=[OrderItemCreate(product_id=5, quantity=3, price=Decimal("4.50"))],
    )

    assert created.total_amount == Decimal("13.50")


@pytest.mark.asyncio
@pytest.mark.unit
async def test_missing_product_rolls_back_whole_order(db_session):
    user = await _make_user(db_session)
    await _make_product(db_session, id=1)

    with pytest.raises(order_ops.ProductNotFound) as exc_info:
        await order_ops.create_order(
            db_session,
            user_id=user.id,
            items=[
                OrderItemCreate(product_id=1, quantity=1),
                OrderItemCreate(product_id=999, quantity=1),
            ],
        )

    assert str(exc_info.value) == "Product with ID 999 not found"
    assert await _count(db_session, Order) == 0
    assert await _count(db_session, OrderItem) == 0


@pytest.mark.asyncio
@pytest.mark.unit
async def test_create_order_requires_items(db_session):
    with pytest.raises(ValidationError):
        await order_ops.create_order(db_session, user_id=uuid.uuid4(), items=[])


@pytest.mark.asyncio
@pytest.mark.unit
async def test_foreign_cart_or_address_is_rejected(db_session):
    user = await _make_user(db_session)
    other = await _make_user(db_session)
    await _make_product(db_session, id=1)
    cart = CartFactory.create(user_id=other.id)
    address = AddressFactory.create(user_id=other.id)
    db_session.add_all([cart, address])
    await db_session.commit()

    items = [OrderItemCreate(product_id=1, quantity=1)]
    with pytest.raises(ValidationError):
        await order_ops.create_order(
            db_session, user_id=user.id, items=items, cart_id=cart.id
        )
    with pytest.raises(ValidationError):
        await order_ops.create_order(
            db_session, user_id=user.id, items=items, address_id=address.id
        )
    assert await _count(db_session, Order) == 0


@pytest.mark.asyncio
@pytest.mark.unit
async def test_own_address_is_recorded(db_session):
    user = await _make_user(db_session)
    await _make_product(db_session, id=1)
    address = AddressFactory.create(user_id=user.id)
    db_session.add(address)
    await db_session.commit()

    created = await order_ops.create_order(
        db_session,
        user_id=user.id,
        items=[OrderItemCreate(product_id=1, quantity=1)],
        address_id=address.id,
        notes="Leave at the gate",
    )

    order = await db_session.get(Order, created.order_id)
    assert order.address_id == address.id
    assert order.notes == "Leave at the gate"


# ---------------------------------------------------------------------------
# Queries
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
@pytest.mark.unit
async def test_get_order_scoped_to_owner(db_session):
    user = await _make_user(db_session)
    other = await _make_user(db_session)
    await _make_product(db_session, id=1, name="Duck Eggs")
    created = await order_ops.create_order(
        db_session, user_id=user.id, items=[OrderItemCreate(product_id=1, quantity=2)]
    )

    order = await order_ops.get_order(db_session, user_id=user.id, order_id=created.order_id)
    assert order.items[0].name == "Duck Eggs"

    with pytest.raises(NotFoundError):
        await order_ops.get_order(db_session, user_id=other.id, order_id=created.order_id)
    with pytest.raises(NotFoundError):
        await order_ops.get_order(db_session, user_id=user.id, order_id="not-a-uuid")


@pytest.mark.asyncio
@pytest.mark.unit
async def test_order_history_aggregates_across_orders(db_session):
    user = await _make_user(db_session)
    await _make_product(db_session, id=1)
    await _make_product(db_session, id=2)

    await order_ops.create_order(
        db_session, user_id=user.id, items=[OrderItemCreate(product_id=1, quantity=2)]
    )
    await order_ops.create_order(
        db_session,
        user_id=user.id,
        items=[
            OrderItemCreate(product_id=1, quantity=3),
            OrderItemCreate(product_id=2, quantity=1),
        ],
    )

    history = await order_ops.get_order_history(db_session, user_id=user.id)

    by_product = {entry.product_id: entry for entry in history}
    assert by_product[1].order_count == 2
    assert by_product[1].total_quantity == 5
    assert by_product[2].total_quantity == 1
