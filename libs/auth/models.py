import enum
import uuid
from typing import Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field


class Role(str, enum.Enum):
    """The three account roles. Every role decision goes through this type."""

    ADMIN = "admin"
    B2C = "b2c"
    B2B = "b2b"

    @property
    def is_wholesale(self) -> bool:
        """Admin and business accounts buy at the wholesale tier."""
        return self in (Role.ADMIN, Role.B2B)

    @property
    def is_admin(self) -> bool:
        return self is Role.ADMIN

    @property
    def pricing_tier(self) -> str:
        return "wholesale" if self.is_wholesale else "retail"


class AuthUser(BaseModel):
    """
    The authenticated caller, built from a verified access token.
    """

    model_config = ConfigDict(populate_by_name=True)

    user_id: uuid.UUID = Field(..., alias="userId")
    email: Optional[EmailStr] = None
    role: Role = Role.B2C
