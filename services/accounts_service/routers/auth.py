"""Authentication endpoints."""

from fastapi import APIRouter, Depends, Request, status
from libs.auth.dependencies import get_current_user
from libs.auth.models import AuthUser
from libs.common.rate_limit import auth_rate_limit, limiter
from libs.common.responses import ApiResponse
from libs.db.session import get_async_db
from services.accounts_service.schemas import (
    AuthPayload,
    GoogleProfile,
    LoginRequest,
    ProfileUpdate,
    RefreshRequest,
    RegisterRequest,
    TokensPayload,
    UserPayload,
    UserResponse,
)
from services.accounts_service.services import auth_ops, user_ops
from sqlalchemy.ext.asyncio import AsyncSession

router = APIRouter(prefix="/auth", tags=["auth"])


def _auth_payload(result: auth_ops.AuthResult) -> AuthPayload:
    return AuthPayload(
        user=UserResponse.model_validate(result.user), tokens=result.tokens
    )


@router.post(
    "/register",
    response_model=ApiResponse[AuthPayload],
    status_code=status.HTTP_201_CREATED,
)
@limiter.limit(auth_rate_limit)
async def register(
    request: Request,
    data: RegisterRequest,
    db: AsyncSession = Depends(get_async_db),
):
    """Create a password account and sign it in."""
    result = await auth_ops.register(db, data)
    return ApiResponse(data=_auth_payload(result), message="Registration successful")


@router.post("/login", response_model=ApiResponse[AuthPayload])
@limiter.limit(auth_rate_limit)
async def login(
    request: Request,
    data: LoginRequest,
    db: AsyncSession = Depends(get_async_db),
):
    result = await auth_ops.login(db, email=data.email, password=data.password)
    return ApiResponse(data=_auth_payload(result), message="Login successful")


@router.post("/google", response_model=ApiResponse[AuthPayload])
async def google_login(
    profile: GoogleProfile,
    db: AsyncSession = Depends(get_async_db),
):
    """Sign in with a profile returned by the Google OAuth handshake."""
    result = await auth_ops.google_login(db, profile)
    return ApiResponse(data=_auth_payload(result), message="Login successful")


@router.post("/refresh", response_model=ApiResponse[TokensPayload])
async def refresh_token(
    data: RefreshRequest,
    db: AsyncSession = Depends(get_async_db),
):
    tokens = await auth_ops.refresh(db, data.refresh_token)
    return ApiResponse(data=TokensPayload(tokens=tokens))


@router.post("/logout", response_model=ApiResponse[None])
async def logout(current_user: AuthUser = Depends(get_current_user)):
    """Tokens are stateless; the client discards its pair."""
    return ApiResponse(message="Logged out successfully")


@router.get("/profile", response_model=ApiResponse[UserPayload])
async def get_profile(
    current_user: AuthUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_db),
):
    user = await auth_ops.get_user_by_id(db, current_user.user_id)
    return ApiResponse(data=UserPayload(user=UserResponse.model_validate(user)))


@router.put("/profile", response_model=ApiResponse[UserPayload])
async def update_profile(
    data: ProfileUpdate,
    current_user: AuthUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_db),
):
    user = await user_ops.update_profile(db, user_id=current_user.user_id, data=data)
    return ApiResponse(
        data=UserPayload(user=UserResponse.model_validate(user)),
        message="Profile updated successfully",
    )
