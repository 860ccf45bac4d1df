"""Accounts service routers."""

from services.accounts_service.routers.addresses import router as addresses_router
from services.accounts_service.routers.auth import router as auth_router
from services.accounts_service.routers.users import router as users_router

__all__ = [
    "addresses_router",
    "auth_router",
    "users_router",
]
