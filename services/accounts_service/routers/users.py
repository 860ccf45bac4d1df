"""Self-service profile and admin user management endpoints."""

import uuid
from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from libs.auth.dependencies import get_current_user, require_admin
from libs.auth.models import AuthUser
from libs.common.responses import ApiResponse
from libs.db.session import get_async_db
from services.accounts_service.models import Role
from services.accounts_service.schemas import (
    AdminUserCreate,
    AdminUserUpdate,
    PasswordChange,
    UserPayload,
    UserResponse,
    UserSelfUpdate,
)
from services.accounts_service.services import auth_ops, user_ops
from sqlalchemy.ext.asyncio import AsyncSession

router = APIRouter(prefix="/users", tags=["users"])


def _user_payload(user) -> UserPayload:
    return UserPayload(user=UserResponse.model_validate(user))


# ---------------------------------------------------------------------------
# Current user
# ---------------------------------------------------------------------------


@router.get("/me", response_model=ApiResponse[UserPayload])
async def get_me(
    current_user: AuthUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_db),
):
    user = await auth_ops.get_user_by_id(db, current_user.user_id)
    return ApiResponse(data=_user_payload(user))


@router.put("/me", response_model=ApiResponse[UserPayload])
async def update_me(
    data: UserSelfUpdate,
    current_user: AuthUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_db),
):
    user = await user_ops.update_self(db, user_id=current_user.user_id, data=data)
    return ApiResponse(data=_user_payload(user), message="Profile updated successfully")


@router.delete("/me", response_model=ApiResponse[None])
async def deactivate_me(
    current_user: AuthUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_db),
):
    await user_ops.deactivate_user(db, user_id=current_user.user_id)
    return ApiResponse(message="Account deactivated successfully")


@router.put("/me/password", response_model=ApiResponse[None])
async def change_password(
    data: PasswordChange,
    current_user: AuthUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_db),
):
    await auth_ops.change_password(
        db,
        user_id=current_user.user_id,
        current_password=data.current_password,
        new_password=data.new_password,
    )
    return ApiResponse(message="Password changed successfully")


# ---------------------------------------------------------------------------
# Admin
# ---------------------------------------------------------------------------


@router.get("", response_model=ApiResponse[list[UserResponse]])
async def list_users(
    role: Optional[Role] = Query(None),
    _admin: AuthUser = Depends(require_admin),
    db: AsyncSession = Depends(get_async_db),
):
    users = await user_ops.list_users(db, role=role)
    return ApiResponse(data=[UserResponse.model_validate(u) for u in users])


@router.post(
    "",
    response_model=ApiResponse[UserPayload],
    status_code=status.HTTP_201_CREATED,
)
async def create_user(
    data: AdminUserCreate,
    _admin: AuthUser = Depends(require_admin),
    db: AsyncSession = Depends(get_async_db),
):
    user = await user_ops.create_user(db, data)
    return ApiResponse(data=_user_payload(user), message="User created successfully")


@router.get("/{user_id}", response_model=ApiResponse[UserPayload])
async def get_user(
    user_id: uuid.UUID,
    _admin: AuthUser = Depends(require_admin),
    db: AsyncSession = Depends(get_async_db),
):
    user = await auth_ops.get_user_by_id(db, user_id)
    return ApiResponse(data=_user_payload(user))


@router.put("/{user_id}", response_model=ApiResponse[UserPayload])
async def update_user(
    user_id: uuid.UUID,
    data: AdminUserUpdate,
    _admin: AuthUser = Depends(require_admin),
    db: AsyncSession = Depends(get_async_db),
):
    user = await user_ops.admin_update_user(db, user_id=user_id, data=data)
    return ApiResponse(data=_user_payload(user), message="User updated successfully")


@router.delete("/{user_id}", response_model=ApiResponse[None])
async def delete_user(
    user_id: uuid.UUID,
    _admin: AuthUser = Depends(require_admin),
    db: AsyncSession = Depends(get_async_db),
):
    await user_ops.delete_user(db, user_id=user_id)
    return ApiResponse(message="User deleted successfully")
