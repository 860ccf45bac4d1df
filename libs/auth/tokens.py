"""JWT issuance and verification.

Access and refresh tokens carry ``{userId, email, role, type}`` and are signed
with different secrets. ``decode_token`` always checks the ``type`` claim, so a
validly signed token of the wrong kind is still rejected.
"""

import enum
import uuid
from datetime import timedelta
from typing import Any, Optional

from jose import ExpiredSignatureError, JWTError, jwt
from pydantic import BaseModel, ConfigDict, Field

from libs.common.config import get_settings
from libs.common.datetime_utils import utc_now


class TokenType(str, enum.Enum):
    ACCESS = "access"
    REFRESH = "refresh"


class TokenError(Exception):
    """Raised when a token cannot be accepted."""


class TokenExpired(TokenError):
    pass


class TokenTypeMismatch(TokenError):
    pass


class TokenPayload(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    user_id: uuid.UUID = Field(..., alias="userId")
    email: str
    role: str
    type: TokenType
    iat: Optional[int] = None
    exp: Optional[int] = None


class TokenPair(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    access_token: str = Field(..., alias="accessToken")
    refresh_token: str = Field(..., alias="refreshToken")


def _secret_for(token_type: TokenType) -> str:
    settings = get_settings()
    if token_type is TokenType.REFRESH:
        return settings.JWT_REFRESH_SECRET
    return settings.JWT_SECRET


def _expiry_for(token_type: TokenType) -> int:
    settings = get_settings()
    if token_type is TokenType.REFRESH:
        return settings.JWT_REFRESH_EXPIRY
    return settings.JWT_ACCESS_EXPIRY


def create_token(
    *,
    user_id: uuid.UUID,
    email: str,
    role: str,
    token_type: TokenType,
    expires_in: Optional[int] = None,
) -> str:
    now = utc_now()
    lifetime = expires_in if expires_in is not None else _expiry_for(token_type)
    claims: dict[str, Any] = {
        "userId": str(user_id),
        "email": email,
        "role": getattr(role, "value", role),
        "type": token_type.value,
        "iat": int(now.timestamp()),
        "exp": int((now + timedelta(seconds=lifetime)).timestamp()),
    }
    return jwt.encode(
        claims, _secret_for(token_type), algorithm=get_settings().JWT_ALGORITHM
    )


def create_access_token(*, user_id: uuid.UUID, email: str, role: str) -> str:
    return create_token(
        user_id=user_id, email=email, role=role, token_type=TokenType.ACCESS
    )


def create_refresh_token(*, user_id: uuid.UUID, email: str, role: str) -> str:
    return create_token(
        user_id=user_id, email=email, role=role, token_type=TokenType.REFRESH
    )


def issue_tokens(*, user_id: uuid.UUID, email: str, role: str) -> TokenPair:
    """Issue a fresh access + refresh pair for a user."""
    return TokenPair(
        access_token=create_access_token(user_id=user_id, email=email, role=role),
        refresh_token=create_refresh_token(user_id=user_id, email=email, role=role),
    )


def decode_token(token: str, expected_type: TokenType) -> TokenPayload:
    """
    Verify signature, expiry and ``type`` claim.

    Raises:
        TokenExpired: the token is past its ``exp``.
        TokenTypeMismatch: the token is validly signed but of another kind.
        TokenError: any other verification failure.
    """
    try:
        claims = jwt.decode(
            token,
            _secret_for(expected_type),
            algorithms=[get_settings().JWT_ALGORITHM],
        )
    except ExpiredSignatureError as exc:
        raise TokenExpired("Token expired") from exc
    except JWTError as exc:
        raise TokenError("Invalid token") from exc

    if claims.get("type") != expected_type.value:
        raise TokenTypeMismatch(f"Expected a {expected_type.value} token")

    try:
        return TokenPayload.model_validate(claims)
    except ValueError as exc:
        raise TokenError("Invalid token claims") from exc


def verify_access_token(token: str) -> TokenPayload:
    return decode_token(token, TokenType.ACCESS)


def verify_refresh_token(token: str) -> TokenPayload:
    return decode_token(token, TokenType.REFRESH)
