"""Pydantic schemas for accounts service."""

import uuid
from datetime import datetime
from typing import Optional

from libs.auth.tokens import TokenPair
from libs.common.schemas import CamelModel
from libs.shop_client.validators import (
    MAX_PASSWORD_BYTES,
    MIN_PASSWORD_LENGTH,
    password_too_long,
    validate_email,
    validate_password,
    validate_required,
)
from pydantic import Field, field_validator
from services.accounts_service.models import Role


def _check_email(value: str) -> str:
    if not validate_email(value):
        raise ValueError("Invalid email format")
    return value.strip().lower()


def _check_password(value: str) -> str:
    if password_too_long(value):
        raise ValueError(f"Password must be at most {MAX_PASSWORD_BYTES} bytes long")
    if not validate_password(value):
        raise ValueError(
            f"Password must be at least {MIN_PASSWORD_LENGTH} characters long"
        )
    return value


def _check_optional(check):
    """Apply ``check`` unless the field was sent as null (left unchanged)."""

    def wrapper(value: Optional[str]) -> Optional[str]:
        if value is None:
            return value
        return check(value)

    return wrapper


def _check_name(value: str) -> str:
    if not validate_required(value):
        raise ValueError("must not be blank")
    return value.strip()


# ============================================================================
# USER SCHEMAS
# ============================================================================


class UserResponse(CamelModel):
    id: uuid.UUID
    email: str
    first_name: str
    last_name: str
    role: Role
    company_name: Optional[str] = None
    google_id: Optional[str] = None
    is_email_verified: bool = False
    last_login_at: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime


class UserSelfUpdate(CamelModel):
    first_name: Optional[str] = Field(None, max_length=100)
    last_name: Optional[str] = Field(None, max_length=100)
    company_name: Optional[str] = Field(None, max_length=255)
    email: Optional[str] = None

    _email = field_validator("email")(_check_optional(_check_email))


class ProfileUpdate(CamelModel):
    first_name: str = Field(..., max_length=100)
    last_name: str = Field(..., max_length=100)

    _names = field_validator("first_name", "last_name")(_check_name)


class PasswordChange(CamelModel):
    current_password: str = Field(..., min_length=1)
    new_password: str

    _new_password = field_validator("new_password")(_check_password)


class AdminUserCreate(CamelModel):
    email: str
    first_name: str = Field(..., max_length=100)
    last_name: str = Field(..., max_length=100)
    role: Role = Role.B2C
    company_name: Optional[str] = Field(None, max_length=255)
    password: Optional[str] = None
    is_email_verified: bool = False

    _email = field_validator("email")(_check_email)
    _password = field_validator("password")(_check_optional(_check_password))
    _names = field_validator("first_name", "last_name")(_check_name)


class AdminUserUpdate(CamelModel):
    email: Optional[str] = None
    first_name: Optional[str] = Field(None, max_length=100)
    last_name: Optional[str] = Field(None, max_length=100)
    role: Optional[Role] = None
    company_name: Optional[str] = Field(None, max_length=255)
    is_email_verified: Optional[bool] = None

    _email = field_validator("email")(_check_optional(_check_email))


# ============================================================================
# AUTH SCHEMAS
# ============================================================================


class RegisterRequest(CamelModel):
    email: str
    password: str
    first_name: str = Field(..., max_length=100)
    last_name: str = Field(..., max_length=100)
    role: Optional[Role] = None
    company_name: Optional[str] = Field(None, max_length=255)

    _email = field_validator("email")(_check_email)
    _password = field_validator("password")(_check_password)
    _names = field_validator("first_name", "last_name")(_check_name)


class LoginRequest(CamelModel):
    email: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return v.strip().lower()


class GoogleEmail(CamelModel):
    value: str


class GoogleName(CamelModel):
    given_name: str = ""
    family_name: str = ""


class GoogleProfile(CamelModel):
    """OAuth provider profile: ``{id, emails[0].value, name.givenName, name.familyName}``."""

    id: str = Field(..., min_length=1)
    emails: list[GoogleEmail] = Field(..., min_length=1)
    name: GoogleName = Field(default_factory=GoogleName)

    @property
    def primary_email(self) -> str:
        return _check_email(self.emails[0].value)


class RefreshRequest(CamelModel):
    refresh_token: str = Field(..., min_length=1)


class AuthPayload(CamelModel):
    user: UserResponse
    tokens: TokenPair


class TokensPayload(CamelModel):
    tokens: TokenPair


class UserPayload(CamelModel):
    user: UserResponse


# ============================================================================
# ADDRESS SCHEMAS
# ============================================================================


class AddressBase(CamelModel):
    street: str = Field(..., min_length=1, max_length=255)
    city: str = Field(..., min_length=1, max_length=100)
    state: str = Field(..., min_length=1, max_length=100)
    zip_code: str = Field(..., min_length=1, max_length=20)
    is_default: bool = False


class AddressCreate(AddressBase):
    pass


class AddressUpdate(CamelModel):
    street: Optional[str] = Field(None, min_length=1, max_length=255)
    city: Optional[str] = Field(None, min_length=1, max_length=100)
    state: Optional[str] = Field(None, min_length=1, max_length=100)
    zip_code: Optional[str] = Field(None, min_length=1, max_length=20)
    is_default: Optional[bool] = None


class AddressResponse(AddressBase):
    id: uuid.UUID
    user_id: uuid.UUID
    created_at: datetime
