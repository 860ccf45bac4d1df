"""Accounts Service models package."""

from services.accounts_service.models.enums import Role
from services.accounts_service.models.user import Address, User

__all__ = ["Address", "Role", "User"]
