"""
Model factories for creating valid test data.

Every factory produces a valid, insertable SQLAlchemy model instance.
Override any field via kwargs.

Usage:
    product = ProductFactory.create(b2c_price=Decimal("5.99"))
    db_session.add(product)
    await db_session.commit()
"""

import itertools
import uuid
from datetime import datetime, timezone
from decimal import Decimal

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

_product_ids = itertools.count(1000)


def _uuid() -> uuid.UUID:
    return uuid.uuid4()


def _now() -> datetime:
    return datetime.now(timezone.utc)


def _unique_email() -> str:
    return f"test-{uuid.uuid4().hex[:8]}@test.com"


# ---------------------------------------------------------------------------
# Accounts Service
# ---------------------------------------------------------------------------


class UserFactory:
    @staticmethod
    def create(**overrides):
        from services.accounts_service.models import Role, User

        defaults = {
            "id": _uuid(),
            "email": _unique_email(),
            "first_name": "Test",
            "last_name": "User",
            "role": Role.B2C,
            "password_hash": None,
            "is_email_verified": True,
            "created_at": _now(),
            "updated_at": _now(),
        }
        defaults.update(overrides)
        return User(**defaults)


class AddressFactory:
    @staticmethod
    def create(user_id=None, **overrides):
        from services.accounts_service.models import Address

        defaults = {
            "id": _uuid(),
            "user_id": user_id or _uuid(),
            "street": "12 Hen House Lane",
            "city": "Springfield",
            "state": "IL",
            "zip_code": "62701",
            "is_default": False,
            "created_at": _now(),
        }
        defaults.update(overrides)
        return Address(**defaults)


# ---------------------------------------------------------------------------
# Store Service
# ---------------------------------------------------------------------------


class ProductFactory:
    @staticmethod
    def create(**overrides):
        from services.store_service.models import Product

        defaults = {
            "id": next(_product_ids),
            "name": "Organic Brown Eggs - 12 Count",
            "description": "Farm fresh organic brown eggs.",
            "category": "organic",
            "egg_color": "brown",
            "egg_count": 12,
            "image_url": "/images/products/1.jpg",
            "b2c_price": Decimal("5.99"),
            "b2b_price": Decimal("4.50"),
            "inventory_by_carton": 100,
            "inventory_by_box": 20,
            "is_available": True,
            "is_active": True,
            "created_at": _now(),
            "updated_at": _now(),
        }
        defaults.update(overrides)
        return Product(**defaults)


class CartFactory:
    @staticmethod
    def create(user_id=None, **overrides):
        from services.store_service.models import Cart

        defaults = {
            "id": _uuid(),
            "user_id": user_id or _uuid(),
            "subtotal": Decimal("0"),
            "tax": Decimal("0"),
            "total": Decimal("0"),
            "is_active": True,
            "updated_at": _now(),
        }
        defaults.update(overrides)
        return Cart(**defaults)


class OrderFactory:
    @staticmethod
    def create(user_id=None, **overrides):
        from services.store_service.models import Order, OrderStatus

        defaults = {
            "id": _uuid(),
            "order_number": Order.generate_order_number(),
            "user_id": user_id or _uuid(),
            "status": OrderStatus.PENDING,
            "subtotal": Decimal("0"),
            "tax": Decimal("0"),
            "shipping": Decimal("0"),
            "total": Decimal("0"),
            "created_at": _now(),
            "updated_at": _now(),
        }
        defaults.update(overrides)
        return Order(**defaults)


class OrderItemFactory:
    @staticmethod
    def create(order_id=None, product_id=None, **overrides):
        from services.store_service.models import OrderItem

        defaults = {
            "id": _uuid(),
            "order_id": order_id or _uuid(),
            "product_id": product_id or 1,
            "quantity": 1,
            "price": Decimal("5.99"),
        }
        defaults.update(overrides)
        return OrderItem(**defaults)
