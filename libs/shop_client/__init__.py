"""Client-side helpers: API client, cart reducers, app state and form validation."""

from libs.shop_client.api import ApiError, BundleUpClient
from libs.shop_client.cart import (
    CartError,
    CartItem,
    CartState,
    CartTotals,
    InventoryExceeded,
    ItemNotFound,
)
from libs.shop_client.state import AppState, AppStore, create_store

__all__ = [
    "ApiError",
    "AppState",
    "AppStore",
    "BundleUpClient",
    "CartError",
    "CartItem",
    "CartState",
    "CartTotals",
    "InventoryExceeded",
    "ItemNotFound",
    "create_store",
]
