from typing import Annotated, Callable, Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy import String, Uuid, column, select, table
from sqlalchemy.ext.asyncio import AsyncSession

from libs.auth.models import AuthUser, Role
from libs.auth.tokens import TokenError, TokenExpired, verify_access_token
from libs.common.errors import AuthenticationError, AuthorizationError
from libs.db.session import get_async_db

security = HTTPBearer(auto_error=False)

# Lightweight reference to the accounts table; avoids importing service models.
_users = table("users", column("id", Uuid()), column("role", String()))


async def _resolve_user(token: str, db: AsyncSession) -> AuthUser:
    try:
        payload = verify_access_token(token)
    except TokenExpired:
        raise AuthenticationError("Token expired")
    except TokenError:
        raise AuthenticationError("Invalid token")

    # The account must still exist; its stored role wins over the token's.
    result = await db.execute(select(_users.c.role).where(_users.c.id == payload.user_id))
    role = result.scalar_one_or_none()
    if role is None:
        raise AuthenticationError("User not found")

    return AuthUser(user_id=payload.user_id, email=payload.email, role=Role(role))


def _remember(request: Request, user: AuthUser) -> AuthUser:
    # Read back by RequestContextMiddleware for the request log line
    request.state.auth_user = user
    return user


async def get_current_user(
    request: Request,
    token: Annotated[Optional[HTTPAuthorizationCredentials], Depends(security)],
    db: AsyncSession = Depends(get_async_db),
) -> AuthUser:
    """
    Validate the bearer access token and return the authenticated user.
    """
    if token is None:
        raise AuthenticationError("Access token required")
    return _remember(request, await _resolve_user(token.credentials, db))


async def get_optional_user(
    request: Request,
    token: Annotated[Optional[HTTPAuthorizationCredentials], Depends(security)],
    db: AsyncSession = Depends(get_async_db),
) -> Optional[AuthUser]:
    """Like ``get_current_user`` but anonymous callers get ``None``."""
    if token is None:
        return None
    return _remember(request, await _resolve_user(token.credentials, db))


def authorize(user: AuthUser, *roles: Role) -> AuthUser:
    """Raise 403 unless the user holds one of ``roles``."""
    if user.role not in roles:
        raise AuthorizationError("Insufficient permissions")
    return user


def require_roles(*roles: Role) -> Callable:
    """Dependency factory: authenticated user restricted to ``roles``."""

    async def dependency(
        current_user: Annotated[AuthUser, Depends(get_current_user)],
    ) -> AuthUser:
        return authorize(current_user, *roles)

    return dependency


require_admin = require_roles(Role.ADMIN)
