"""Admin product management endpoints."""

from fastapi import APIRouter, Depends, status
from libs.auth.dependencies import require_admin
from libs.auth.models import AuthUser
from libs.common.responses import ApiResponse
from libs.db.session import get_async_db
from services.store_service.schemas import (
    AdminProductPayload,
    InventoryUpdate,
    ProductCreate,
    ProductResponse,
    ProductUpdate,
)
from services.store_service.services import catalog_ops
from sqlalchemy.ext.asyncio import AsyncSession

router = APIRouter(prefix="/products", tags=["admin-products"])


def _payload(product) -> AdminProductPayload:
    return AdminProductPayload(product=ProductResponse.model_validate(product))


@router.post(
    "",
    response_model=ApiResponse[AdminProductPayload],
    status_code=status.HTTP_201_CREATED,
)
async def create_product(
    data: ProductCreate,
    _admin: AuthUser = Depends(require_admin),
    db: AsyncSession = Depends(get_async_db),
):
    product = await catalog_ops.create_product(db, data)
    return ApiResponse(data=_payload(product), message="Product created successfully")


@router.put("/{product_id}", response_model=ApiResponse[AdminProductPayload])
async def update_product(
    product_id: int,
    data: ProductUpdate,
    _admin: AuthUser = Depends(require_admin),
    db: AsyncSession = Depends(get_async_db),
):
    product = await catalog_ops.update_product(db, product_id, data)
    return ApiResponse(data=_payload(product), message="Product updated successfully")


@router.delete("/{product_id}", response_model=ApiResponse[None])
async def delete_product(
    product_id: int,
    _admin: AuthUser = Depends(require_admin),
    db: AsyncSession = Depends(get_async_db),
):
    """Soft delete: the product is hidden from the catalog but kept for orders."""
    await catalog_ops.soft_delete_product(db, product_id)
    return ApiResponse(message="Product deleted successfully")


@router.patch("/{product_id}/inventory", response_model=ApiResponse[AdminProductPayload])
async def update_inventory(
    product_id: int,
    data: InventoryUpdate,
    _admin: AuthUser = Depends(require_admin),
    db: AsyncSession = Depends(get_async_db),
):
    product = await catalog_ops.update_inventory(db, product_id, data)
    return ApiResponse(data=_payload(product), message="Inventory updated")


@router.patch(
    "/{product_id}/availability", response_model=ApiResponse[AdminProductPayload]
)
async def toggle_availability(
    product_id: int,
    _admin: AuthUser = Depends(require_admin),
    db: AsyncSession = Depends(get_async_db),
):
    product = await catalog_ops.toggle_availability(db, product_id)
    return ApiResponse(data=_payload(product), message="Availability updated")
