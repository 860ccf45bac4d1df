"""User profile, admin user management and delivery addresses."""

import uuid
from typing import Optional

from libs.auth.passwords import hash_password_async
from libs.common.errors import ConflictError, NotFoundError
from libs.common.logging import get_logger
from services.accounts_service.models import Address, Role, User
from services.accounts_service.schemas import (
    AddressCreate,
    AddressUpdate,
    AdminUserCreate,
    AdminUserUpdate,
    ProfileUpdate,
    UserSelfUpdate,
)
from services.accounts_service.services.auth_ops import (
    commit_unique,
    get_user_by_email,
    get_user_by_id,
)
from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

logger = get_logger(__name__)


async def _ensure_email_free(
    db: AsyncSession, email: str, user_id: Optional[uuid.UUID] = None
) -> None:
    existing = await get_user_by_email(db, email)
    if existing is not None and existing.id != user_id:
        raise ConflictError("User already exists")


def _apply(user: User, values: dict) -> None:
    for key, value in values.items():
        setattr(user, key, value)


# ---------------------------------------------------------------------------
# Self-service profile
# ---------------------------------------------------------------------------


async def update_profile(
    db: AsyncSession, *, user_id: uuid.UUID, data: ProfileUpdate
) -> User:
    user = await get_user_by_id(db, user_id)
    _apply(user, data.to_columns())
    await db.commit()
    await db.refresh(user)
    return user


async def update_self(
    db: AsyncSession, *, user_id: uuid.UUID, data: UserSelfUpdate
) -> User:
    user = await get_user_by_id(db, user_id)
    values = data.to_columns(exclude_unset=True)
    if values.get("email") and values["email"] != user.email:
        await _ensure_email_free(db, values["email"], user.id)
    _apply(user, {k: v for k, v in values.items() if v is not None})
    await commit_unique(db)
    await db.refresh(user)
    return user


async def deactivate_user(db: AsyncSession, *, user_id: uuid.UUID) -> None:
    """Deactivation clears the verified flag; the row is kept."""
    user = await get_user_by_id(db, user_id)
    user.is_email_verified = False
    user.email_verified_at = None
    await db.commit()
    logger.info("Deactivated user %s", user.id)


# ---------------------------------------------------------------------------
# Admin user management
# ---------------------------------------------------------------------------


async def list_users(db: AsyncSession, *, role: Optional[Role] = None) -> list[User]:
    query = select(User).order_by(User.created_at.desc())
    if role is not None:
        query = query.where(User.role == role)
    result = await db.execute(query)
    return list(result.scalars().all())


async def create_user(db: AsyncSession, data: AdminUserCreate) -> User:
    await _ensure_email_free(db, data.email)
    values = data.to_columns()
    password = values.pop("password", None)
    user = User(**values)
    if password:
        user.password_hash = await hash_password_async(password)
    db.add(user)
    await commit_unique(db)
    await db.refresh(user)
    logger.info("Admin created user %s (role=%s)", user.id, user.role.value)
    return user


async def admin_update_user(
    db: AsyncSession, *, user_id: uuid.UUID, data: AdminUserUpdate
) -> User:
    user = await get_user_by_id(db, user_id)
    values = data.to_columns(exclude_unset=True)
    if values.get("email") and values["email"] != user.email:
        await _ensure_email_free(db, values["email"], user.id)
    _apply(user, {k: v for k, v in values.items() if v is not None})
    await commit_unique(db)
    await db.refresh(user)
    return user


async def delete_user(db: AsyncSession, *, user_id: uuid.UUID) -> None:
    user = await get_user_by_id(db, user_id)
    await db.delete(user)
    await db.commit()
    logger.info("Admin deleted user %s", user_id)


# ---------------------------------------------------------------------------
# Addresses
# ---------------------------------------------------------------------------


async def _clear_default(
    db: AsyncSession, user_id: uuid.UUID, keep: Optional[uuid.UUID] = None
) -> None:
    stmt = (
        update(Address)
        .where(Address.user_id == user_id, Address.is_default.is_(True))
        .values(is_default=False)
    )
    if keep is not None:
        stmt = stmt.where(Address.id != keep)
    await db.execute(stmt)


async def list_addresses(db: AsyncSession, *, user_id: uuid.UUID) -> list[Address]:
    result = await db.execute(
        select(Address)
        .where(Address.user_id == user_id)
        .order_by(Address.is_default.desc(), Address.created_at.desc())
    )
    return list(result.scalars().all())


async def get_address(
    db: AsyncSession, *, user_id: uuid.UUID, address_id: uuid.UUID
) -> Address:
    result = await db.execute(
        select(Address).where(Address.id == address_id, Address.user_id == user_id)
    )
    address = result.scalar_one_or_none()
    if address is None:
        raise NotFoundError("Address not found")
    return address


async def create_address(
    db: AsyncSession, *, user_id: uuid.UUID, data: AddressCreate
) -> Address:
    if data.is_default:
        await _clear_default(db, user_id)
    address = Address(user_id=user_id, **data.to_columns())
    db.add(address)
    await db.commit()
    await db.refresh(address)
    return address


async def update_address(
    db: AsyncSession,
    *,
    user_id: uuid.UUID,
    address_id: uuid.UUID,
    data: AddressUpdate,
) -> Address:
    address = await get_address(db, user_id=user_id, address_id=address_id)
    values = {k: v for k, v in data.to_columns(exclude_unset=True).items() if v is not None}
    if values.get("is_default"):
        await _clear_default(db, user_id, keep=address.id)
    _apply(address, values)
    await db.commit()
    await db.refresh(address)
    return address


async def delete_address(
    db: AsyncSession, *, user_id: uuid.UUID, address_id: uuid.UUID
) -> None:
    address = await get_address(db, user_id=user_id, address_id=address_id)
    await db.delete(address)
    await db.commit()
