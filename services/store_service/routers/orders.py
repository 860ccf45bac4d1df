"""Order endpoints for the authenticated customer."""

from fastapi import APIRouter, Depends, status
from libs.auth.dependencies import get_current_user
from libs.auth.models import AuthUser
from libs.common.errors import AppError, InternalError
from libs.common.responses import ApiResponse
from libs.db.session import get_async_db
from services.store_service.schemas import (
    OrderCreate,
    OrderCreatedResponse,
    OrderHistoryPayload,
    OrderPayload,
    OrderResponse,
)
from services.store_service.services import order_ops
from sqlalchemy.ext.asyncio import AsyncSession

router = APIRouter(prefix="/orders", tags=["orders"])


@router.post(
    "",
    response_model=ApiResponse[OrderCreatedResponse],
    status_code=status.HTTP_201_CREATED,
)
async def create_order(
    data: OrderCreate,
    current_user: AuthUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_db),
):
    """Place an order. The whole order is rolled back if any item fails."""
    try:
        created = await order_ops.create_order(
            db,
            user_id=current_user.user_id,
            items=data.items,
            status=data.status,
            cart_id=data.cart_id,
            address_id=data.address_id,
            notes=data.notes,
        )
    except AppError:
        raise
    except Exception as exc:
        raise InternalError(f"Failed to create order: {exc}") from exc

    return ApiResponse(
        data=OrderCreatedResponse(
            order_id=created.order_id,
            order_number=created.order_number,
            total_amount=created.total_amount,
        ),
        message="Order created successfully",
    )


@router.get("", response_model=ApiResponse[list[OrderResponse]])
async def list_orders(
    current_user: AuthUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_db),
):
    orders = await order_ops.list_orders(db, user_id=current_user.user_id)
    return ApiResponse(data=orders)


@router.get("/history", response_model=ApiResponse[OrderHistoryPayload])
async def get_order_history(
    current_user: AuthUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_db),
):
    """Previously ordered products with reorder statistics."""
    history = await order_ops.get_order_history(db, user_id=current_user.user_id)
    return ApiResponse(
        data=OrderHistoryPayload(order_history=history, total_products=len(history)),
        message="Order history retrieved successfully",
    )


@router.get("/{order_id}", response_model=ApiResponse[OrderPayload])
async def get_order(
    order_id: str,
    current_user: AuthUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_db),
):
    order = await order_ops.get_order(
        db, user_id=current_user.user_id, order_id=order_id
    )
    return ApiResponse(data=OrderPayload(order=order))
