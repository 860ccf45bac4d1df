"""Store Service models package."""

from services.store_service.models.catalog import Product
from services.store_service.models.commerce import (
    Cart,
    CartItem,
    Order,
    OrderItem,
    Payment,
)
from services.store_service.models.enums import (
    OrderStatus,
    PaymentStatus,
    ProductCategory,
)

__all__ = [
    "Cart",
    "CartItem",
    "Order",
    "OrderItem",
    "OrderStatus",
    "Payment",
    "PaymentStatus",
    "Product",
    "ProductCategory",
]
