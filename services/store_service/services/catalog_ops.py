"""Catalog queries and admin product management."""

import math
from typing import Optional

from libs.auth.models import Role
from libs.common.errors import ConflictError, NotFoundError
from libs.common.logging import get_logger
from services.store_service.models import Product
from services.store_service.pricing import price_comparison, resolve_price
from services.store_service.schemas import (
    InventoryUpdate,
    Pagination,
    PricedProductResponse,
    ProductCreate,
    ProductFilters,
    ProductListPayload,
    ProductResponse,
    ProductUpdate,
)
from sqlalchemy import func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

logger = get_logger(__name__)

LOW_INVENTORY_THRESHOLD = 10


def priced_product(
    product: Product, role: Optional[Role], compare: bool = False
) -> PricedProductResponse:
    resolved = resolve_price(product, role)
    base = ProductResponse.model_validate(product).model_dump()
    return PricedProductResponse(
        **base,
        price=resolved.price,
        inventory=resolved.inventory,
        pricing_type=resolved.pricing_type,
        comparison=price_comparison(product) if compare else None,
    )


async def list_products(
    db: AsyncSession,
    *,
    filters: ProductFilters,
    role: Optional[Role] = None,
    page: int = 1,
    limit: int = 10,
    compare: bool = False,
) -> ProductListPayload:
    """Active products matching ``filters``, ordered by name and paginated."""
    conditions = [Product.is_active.is_(True)]
    if filters.category:
        conditions.append(Product.category == filters.category)
    if filters.egg_color:
        conditions.append(Product.egg_color == filters.egg_color)
    if filters.egg_count:
        conditions.append(Product.egg_count == filters.egg_count)
    if filters.available is not None:
        conditions.append(Product.is_available.is_(filters.available))
    if filters.search:
        term = f"%{filters.search}%"
        conditions.append(
            or_(Product.name.ilike(term), Product.description.ilike(term))
        )

    total = (
        await db.execute(select(func.count()).select_from(Product).where(*conditions))
    ).scalar_one()

    result = await db.execute(
        select(Product)
        .where(*conditions)
        .order_by(Product.name)
        .offset((page - 1) * limit)
        .limit(limit)
    )
    products = [
        priced_product(product, role, compare) for product in result.scalars().all()
    ]

    total_pages = math.ceil(total / limit) if limit else 0
    return ProductListPayload(
        products=products,
        total=total,
        pagination=Pagination(
            page=page,
            limit=limit,
            total=total,
            total_pages=total_pages,
            has_next=page < total_pages,
            has_prev=page > 1,
        ),
        filters=filters,
    )


async def get_product(db: AsyncSession, product_id: int) -> Product:
    """An active product, else 404."""
    product = await db.get(Product, product_id)
    if product is None or not product.is_active:
        raise NotFoundError("Product not found")
    return product


async def _get_any_product(db: AsyncSession, product_id: int) -> Product:
    product = await db.get(Product, product_id)
    if product is None:
        raise NotFoundError("Product not found")
    return product


async def list_low_inventory(db: AsyncSession) -> list[Product]:
    result = await db.execute(
        select(Product)
        .where(
            Product.is_active.is_(True),
            or_(
                Product.inventory_by_carton < LOW_INVENTORY_THRESHOLD,
                Product.inventory_by_box < LOW_INVENTORY_THRESHOLD,
            ),
        )
        .order_by(Product.inventory_by_carton.asc())
    )
    return list(result.scalars().all())


# ---------------------------------------------------------------------------
# Admin writes
# ---------------------------------------------------------------------------


async def create_product(db: AsyncSession, data: ProductCreate) -> Product:
    values = data.to_columns()
    if values.get("id") is None:
        values.pop("id", None)
    elif await db.get(Product, values["id"]) is not None:
        raise ConflictError(f"Product with ID {values['id']} already exists")

    values["category"] = data.category.value
    product = Product(**values)
    db.add(product)
    await db.commit()
    await db.refresh(product)
    logger.info("Created product %s (%s)", product.id, product.name)
    return product


async def update_product(
    db: AsyncSession, product_id: int, data: ProductUpdate
) -> Product:
    product = await _get_any_product(db, product_id)
    for key, value in data.to_columns(exclude_unset=True).items():
        if value is None:
            continue
        setattr(product, key, getattr(value, "value", value))
    await db.commit()
    await db.refresh(product)
    return product


async def soft_delete_product(db: AsyncSession, product_id: int) -> None:
    product = await _get_any_product(db, product_id)
    product.is_active = False
    await db.commit()
    logger.info("Deactivated product %s", product_id)


async def update_inventory(
    db: AsyncSession, product_id: int, data: InventoryUpdate
) -> Product:
    product = await _get_any_product(db, product_id)
    if data.inventory_by_carton is not None:
        product.inventory_by_carton = data.inventory_by_carton
    if data.inventory_by_box is not None:
        product.inventory_by_box = data.inventory_by_box
    await db.commit()
    await db.refresh(product)
    logger.info(
        "Inventory for product %s set to carton=%d box=%d",
        product_id,
        product.inventory_by_carton,
        product.inventory_by_box,
    )
    return product


async def toggle_availability(db: AsyncSession, product_id: int) -> Product:
    product = await _get_any_product(db, product_id)
    product.is_available = not product.is_available
    await db.commit()
    await db.refresh(product)
    return product
