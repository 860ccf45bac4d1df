"""Enum definitions for store service models."""

import enum


def enum_values(enum_cls):
    """Return persistent DB values for SAEnum mappings."""
    return [member.value for member in enum_cls]


class ProductCategory(str, enum.Enum):
    COMMODITY = "commodity"
    ORGANIC = "organic"
    CAGE_FREE = "cage-free"
    SPECIALTY = "specialty"
    PASTURE_RAISED = "pasture-raised"
    HEIRLOOM = "heirloom"


class OrderStatus(str, enum.Enum):
    PENDING = "pending"
    SHIPPED = "shipped"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"


class PaymentStatus(str, enum.Enum):
    PAID = "paid"
    FAILED = "failed"
    PENDING = "pending"
