"""Public catalog endpoints. Prices follow the caller's role."""

from typing import Optional

from fastapi import APIRouter, Depends, Query
from libs.auth.dependencies import get_optional_user, require_admin
from libs.auth.models import AuthUser
from libs.common.responses import ApiResponse
from libs.db.session import get_async_db
from services.store_service.schemas import (
    AdminProductListPayload,
    ProductFilters,
    ProductListPayload,
    ProductPayload,
    ProductResponse,
)
from services.store_service.services import catalog_ops
from sqlalchemy.ext.asyncio import AsyncSession

router = APIRouter(prefix="/products", tags=["products"])


@router.get("", response_model=ApiResponse[ProductListPayload])
async def list_products(
    category: Optional[str] = None,
    egg_color: Optional[str] = Query(None, alias="eggColor"),
    egg_count: Optional[int] = Query(None, alias="eggCount", gt=0),
    available: Optional[bool] = None,
    search: Optional[str] = None,
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    compare: bool = False,
    current_user: Optional[AuthUser] = Depends(get_optional_user),
    db: AsyncSession = Depends(get_async_db),
):
    """List active products with filters and pagination.

    ``compare`` adds both price tiers to each product; it is honoured for
    admins only.
    """
    role = current_user.role if current_user else None
    filters = ProductFilters(
        category=category,
        egg_color=egg_color,
        egg_count=egg_count,
        available=available,
        search=search,
        role=role.value if role else None,
    )
    payload = await catalog_ops.list_products(
        db,
        filters=filters,
        role=role,
        page=page,
        limit=limit,
        compare=compare and role is not None and role.is_admin,
    )
    return ApiResponse(data=payload)


@router.get("/low-inventory", response_model=ApiResponse[AdminProductListPayload])
async def list_low_inventory(
    _admin: AuthUser = Depends(require_admin),
    db: AsyncSession = Depends(get_async_db),
):
    """Active products with fewer than 10 cartons or boxes left."""
    products = await catalog_ops.list_low_inventory(db)
    return ApiResponse(
        data=AdminProductListPayload(
            products=[ProductResponse.model_validate(p) for p in products]
        )
    )


@router.get("/{product_id}", response_model=ApiResponse[ProductPayload])
async def get_product(
    product_id: int,
    current_user: Optional[AuthUser] = Depends(get_optional_user),
    db: AsyncSession = Depends(get_async_db),
):
    product = await catalog_ops.get_product(db, product_id)
    role = current_user.role if current_user else None
    return ApiResponse(
        data=ProductPayload(product=catalog_ops.priced_product(product, role))
    )
