"""Store catalog model: egg products with retail and wholesale pricing."""

from datetime import datetime
from decimal import Decimal
from typing import Optional

from libs.common.datetime_utils import utc_now
from libs.db.base import Base
from sqlalchemy import Boolean, CheckConstraint, DateTime, Integer, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column


class Product(Base):
    """Products in the catalog (e.g., 'Organic Brown Eggs - 12 Count').

    Each product has two price/inventory tiers: retail cartons for individual
    customers and wholesale boxes for business and admin accounts.
    """

    __tablename__ = "products"

    # Integer ids match the product image file names, so seeds set them explicitly
    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    # Basic info
    name: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    category: Mapped[str] = mapped_column(String(50), nullable=False, index=True)
    egg_color: Mapped[Optional[str]] = mapped_column(
        String(50), nullable=True, index=True
    )
    egg_count: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    image_url: Mapped[str] = mapped_column(String(500), nullable=False)

    # Pricing
    b2c_price: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    b2b_price: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)

    # Inventory: cartons for retail, boxes for wholesale
    inventory_by_carton: Mapped[int] = mapped_column(
        Integer, default=0, server_default="0", nullable=False
    )
    inventory_by_box: Mapped[int] = mapped_column(
        Integer, default=0, server_default="0", nullable=False
    )

    # Status
    is_available: Mapped[bool] = mapped_column(
        Boolean, default=True, server_default="true", index=True
    )
    is_active: Mapped[bool] = mapped_column(
        Boolean, default=True, server_default="true", index=True
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utc_now, index=True
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utc_now, onupdate=utc_now
    )

    __table_args__ = (
        CheckConstraint("b2c_price > 0", name="positive_b2c_price"),
        CheckConstraint("b2b_price > 0", name="positive_b2b_price"),
        CheckConstraint("inventory_by_carton >= 0", name="non_negative_carton_inventory"),
        CheckConstraint("inventory_by_box >= 0", name="non_negative_box_inventory"),
    )

    def __repr__(self):
        return f"<Product {self.id} {self.name}>"
