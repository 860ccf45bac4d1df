"""Account authentication: registration, password and Google sign-in, refresh."""

import uuid
from dataclasses import dataclass
from typing import Optional

from libs.auth.passwords import hash_password_async, verify_password_async
from libs.auth.tokens import (
    TokenError,
    TokenPair,
    create_access_token,
    issue_tokens,
    verify_refresh_token,
)
from libs.common.config import get_settings
from libs.common.datetime_utils import utc_now
from libs.common.errors import (
    AuthenticationError,
    ConflictError,
    NotFoundError,
    ValidationError,
)
from libs.common.logging import get_logger
from services.accounts_service.models import Role, User
from services.accounts_service.schemas import GoogleProfile, RegisterRequest
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

logger = get_logger(__name__)

GOOGLE_SIGN_IN_REQUIRED = "Please sign in with Google"


@dataclass
class AuthResult:
    user: User
    tokens: TokenPair


def tokens_for(user: User) -> TokenPair:
    return issue_tokens(user_id=user.id, email=user.email, role=user.role)


def is_admin_email(email: str) -> bool:
    domain = email.rsplit("@", 1)[-1].lower()
    return domain == get_settings().ADMIN_EMAIL_DOMAIN.lower()


def resolve_signup_role(email: str, requested: Optional[Role]) -> Role:
    """Admin comes only from the email domain; anything else is self-selected."""
    if is_admin_email(email):
        return Role.ADMIN
    if requested is Role.ADMIN:
        raise ValidationError("Admin accounts cannot be self-registered")
    return requested or Role.B2C


async def commit_unique(db: AsyncSession) -> None:
    """Commit, turning a users unique-constraint violation into a 409."""
    try:
        await db.commit()
    except IntegrityError:
        await db.rollback()
        raise ConflictError("User already exists")


async def get_user_by_email(db: AsyncSession, email: str) -> Optional[User]:
    result = await db.execute(select(User).where(User.email == email.lower()))
    return result.scalar_one_or_none()


async def get_user_by_id(db: AsyncSession, user_id: uuid.UUID) -> User:
    user = await db.get(User, user_id)
    if user is None:
        raise NotFoundError("User not found")
    return user


# ---------------------------------------------------------------------------
# Registration and sign-in
# ---------------------------------------------------------------------------


async def register(db: AsyncSession, data: RegisterRequest) -> AuthResult:
    if await get_user_by_email(db, data.email):
        raise ConflictError("User already exists")

    role = resolve_signup_role(data.email, data.role)
    now = utc_now()
    user = User(
        email=data.email,
        first_name=data.first_name,
        last_name=data.last_name,
        role=role,
        company_name=data.company_name,
        password_hash=await hash_password_async(data.password),
        last_login_at=now,
    )
    db.add(user)
    await commit_unique(db)
    await db.refresh(user)

    logger.info("Registered user %s (role=%s)", user.id, role.value)
    return AuthResult(user=user, tokens=tokens_for(user))


async def login(db: AsyncSession, *, email: str, password: str) -> AuthResult:
    user = await get_user_by_email(db, email)
    if user is None:
        raise AuthenticationError("Invalid credentials")
    if not user.password_hash:
        raise AuthenticationError(GOOGLE_SIGN_IN_REQUIRED)
    if not await verify_password_async(password, user.password_hash):
        logger.info("Failed login for user %s", user.id)
        raise AuthenticationError("Invalid credentials")

    user.last_login_at = utc_now()
    await db.commit()
    await db.refresh(user)

    logger.info("User %s logged in", user.id)
    return AuthResult(user=user, tokens=tokens_for(user))


async def google_login(db: AsyncSession, profile: GoogleProfile) -> AuthResult:
    """Sign in with a Google profile.

    Lookup order: linked Google id, then an existing account with the same
    email (which gets linked), then a new verified account.
    """
    email = profile.primary_email
    now = utc_now()

    result = await db.execute(select(User).where(User.google_id == profile.id))
    user = result.scalar_one_or_none()

    if user is None:
        user = await get_user_by_email(db, email)
        if user is not None:
            user.google_id = profile.id
            if not user.is_email_verified:
                user.is_email_verified = True
                user.email_verified_at = now
            logger.info("Linked Google account to user %s", user.id)

    if user is None:
        user = User(
            email=email,
            first_name=profile.name.given_name,
            last_name=profile.name.family_name,
            role=Role.ADMIN if is_admin_email(email) else Role.B2C,
            google_id=profile.id,
            is_email_verified=True,
            email_verified_at=now,
        )
        db.add(user)
        logger.info("Creating account from Google profile for %s", email)

    user.last_login_at = now
    await commit_unique(db)
    await db.refresh(user)
    return AuthResult(user=user, tokens=tokens_for(user))


async def refresh(db: AsyncSession, refresh_token: str) -> TokenPair:
    """Exchange a refresh token for a new access token.

    The refresh token itself is returned unchanged.
    """
    try:
        payload = verify_refresh_token(refresh_token)
    except TokenError:
        raise AuthenticationError("Invalid refresh token")

    user = await db.get(User, payload.user_id)
    if user is None:
        raise AuthenticationError("User not found")

    access_token = create_access_token(
        user_id=user.id, email=user.email, role=user.role
    )
    return TokenPair(access_token=access_token, refresh_token=refresh_token)


async def change_password(
    db: AsyncSession,
    *,
    user_id: uuid.UUID,
    current_password: str,
    new_password: str,
) -> None:
    user = await get_user_by_id(db, user_id)
    if not user.password_hash:
        raise AuthenticationError(GOOGLE_SIGN_IN_REQUIRED)
    if not await verify_password_async(current_password, user.password_hash):
        raise AuthenticationError("Current password is incorrect")

    user.password_hash = await hash_password_async(new_password)
    await db.commit()
    logger.info("Password changed for user %s", user.id)
