"""Pydantic schemas for store service."""

import uuid
from datetime import datetime
from decimal import Decimal
from typing import Any, Optional

from libs.common.schemas import CamelModel
from pydantic import Field, model_validator
from services.store_service.models import OrderStatus, ProductCategory

# ============================================================================
# PRODUCT SCHEMAS
# ============================================================================


class ProductBase(CamelModel):
    name: str = Field(..., min_length=1, max_length=255)
    description: str = Field(..., min_length=1)
    category: ProductCategory
    egg_color: Optional[str] = Field(None, max_length=50)
    egg_count: int = Field(..., gt=0)
    image_url: str = Field(..., min_length=1, max_length=500)
    b2c_price: Decimal = Field(..., gt=0)
    b2b_price: Decimal = Field(..., gt=0)
    inventory_by_carton: int = Field(0, ge=0)
    inventory_by_box: int = Field(0, ge=0)
    is_available: bool = True
    is_active: bool = True


class ProductCreate(ProductBase):
    # Optional explicit id so it can match the product image file name
    id: Optional[int] = Field(None, gt=0)


class ProductUpdate(CamelModel):
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = Field(None, min_length=1)
    category: Optional[ProductCategory] = None
    egg_color: Optional[str] = Field(None, max_length=50)
    egg_count: Optional[int] = Field(None, gt=0)
    image_url: Optional[str] = Field(None, min_length=1, max_length=500)
    b2c_price: Optional[Decimal] = Field(None, gt=0)
    b2b_price: Optional[Decimal] = Field(None, gt=0)
    inventory_by_carton: Optional[int] = Field(None, ge=0)
    inventory_by_box: Optional[int] = Field(None, ge=0)
    is_available: Optional[bool] = None
    is_active: Optional[bool] = None


class InventoryUpdate(CamelModel):
    inventory_by_carton: Optional[int] = Field(None, ge=0)
    inventory_by_box: Optional[int] = Field(None, ge=0)

    @model_validator(mode="after")
    def require_one_level(self):
        if self.inventory_by_carton is None and self.inventory_by_box is None:
            raise ValueError("inventoryByCarton or inventoryByBox is required")
        return self


class ProductResponse(ProductBase):
    # Stored categories are not restricted to the known set
    category: str
    id: int
    created_at: datetime
    updated_at: datetime


class PricedProductResponse(ProductResponse):
    """A product with the price and inventory the caller's role sees."""

    price: Decimal
    inventory: int
    pricing_type: str
    comparison: Optional[dict[str, Any]] = None


class Pagination(CamelModel):
    page: int
    limit: int
    total: int
    total_pages: int
    has_next: bool
    has_prev: bool


class ProductFilters(CamelModel):
    category: Optional[str] = None
    egg_color: Optional[str] = None
    egg_count: Optional[int] = None
    available: Optional[bool] = None
    search: Optional[str] = None
    role: Optional[str] = None


class ProductListPayload(CamelModel):
    products: list[PricedProductResponse]
    total: int
    pagination: Pagination
    filters: ProductFilters


class ProductPayload(CamelModel):
    product: PricedProductResponse


class AdminProductPayload(CamelModel):
    product: ProductResponse


class AdminProductListPayload(CamelModel):
    products: list[ProductResponse]


# ============================================================================
# ORDER SCHEMAS
# ============================================================================


class OrderItemCreate(CamelModel):
    product_id: int = Field(..., gt=0)
    quantity: int = Field(..., ge=1)
    # Unit price the client saw; the retail price is used when omitted
    price: Optional[Decimal] = Field(None, gt=0)


class OrderCreate(CamelModel):
    items: list[OrderItemCreate] = Field(..., min_length=1)
    status: Optional[str] = None
    cart_id: Optional[uuid.UUID] = None
    address_id: Optional[uuid.UUID] = None
    notes: Optional[str] = None


class OrderCreatedResponse(CamelModel):
    order_id: uuid.UUID
    order_number: str
    total_amount: Decimal


class OrderItemResponse(CamelModel):
    id: uuid.UUID
    product_id: int
    quantity: int
    price: Decimal
    name: Optional[str] = None
    description: Optional[str] = None
    image_url: Optional[str] = None


class OrderResponse(CamelModel):
    id: uuid.UUID
    order_number: str
    user_id: uuid.UUID
    cart_id: Optional[uuid.UUID] = None
    address_id: Optional[uuid.UUID] = None
    status: OrderStatus
    subtotal: Decimal
    tax: Decimal
    shipping: Decimal
    total: Decimal
    notes: Optional[str] = None
    created_at: datetime
    updated_at: datetime
    items: list[OrderItemResponse] = []


class OrderPayload(CamelModel):
    order: OrderResponse


class OrderHistoryEntry(CamelModel):
    """One previously ordered product with its reorder statistics."""

    product_id: int
    name: str
    description: str
    category: str
    egg_color: Optional[str] = None
    egg_count: int
    image_url: str
    b2c_price: Decimal
    b2b_price: Decimal
    last_ordered: datetime
    order_count: int
    total_quantity: int
    order_dates: list[datetime]


class OrderHistoryPayload(CamelModel):
    order_history: list[OrderHistoryEntry]
    total_products: int
