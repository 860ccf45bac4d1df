"""Delivery address endpoints for the current user."""

import uuid

from fastapi import APIRouter, Depends, status
from libs.auth.dependencies import get_current_user
from libs.auth.models import AuthUser
from libs.common.responses import ApiResponse
from libs.db.session import get_async_db
from services.accounts_service.schemas import (
    AddressCreate,
    AddressResponse,
    AddressUpdate,
)
from services.accounts_service.services import user_ops
from sqlalchemy.ext.asyncio import AsyncSession

router = APIRouter(prefix="/users/me/addresses", tags=["addresses"])


@router.get("", response_model=ApiResponse[list[AddressResponse]])
async def list_addresses(
    current_user: AuthUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_db),
):
    addresses = await user_ops.list_addresses(db, user_id=current_user.user_id)
    return ApiResponse(data=[AddressResponse.model_validate(a) for a in addresses])


@router.post(
    "",
    response_model=ApiResponse[AddressResponse],
    status_code=status.HTTP_201_CREATED,
)
async def create_address(
    data: AddressCreate,
    current_user: AuthUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_db),
):
    """Add an address; marking it default clears the previous default."""
    address = await user_ops.create_address(
        db, user_id=current_user.user_id, data=data
    )
    return ApiResponse(
        data=AddressResponse.model_validate(address), message="Address created"
    )


@router.put("/{address_id}", response_model=ApiResponse[AddressResponse])
async def update_address(
    address_id: uuid.UUID,
    data: AddressUpdate,
    current_user: AuthUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_db),
):
    address = await user_ops.update_address(
        db, user_id=current_user.user_id, address_id=address_id, data=data
    )
    return ApiResponse(
        data=AddressResponse.model_validate(address), message="Address updated"
    )


@router.delete("/{address_id}", response_model=ApiResponse[None])
async def delete_address(
    address_id: uuid.UUID,
    current_user: AuthUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_db),
):
    await user_ops.delete_address(
        db, user_id=current_user.user_id, address_id=address_id
    )
    return ApiResponse(message="Address deleted")
