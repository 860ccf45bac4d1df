"""Typed async client for the BundleUp API."""

from typing import Any, Optional

import httpx

from libs.auth.tokens import TokenPair
from libs.common.logging import get_logger

logger = get_logger(__name__)

DEFAULT_TIMEOUT = 10.0


class ApiError(Exception):
    """A ``{success: false, error}`` response, or a non-JSON failure."""

    def __init__(self, status_code: int, message: str):
        self.status_code = status_code
        self.message = message
        super().__init__(f"{status_code}: {message}")


class BundleUpClient:
    """Thin wrapper over ``httpx.AsyncClient`` that unwraps the envelope.

    Every method returns the envelope's ``data``; failures raise ``ApiError``.
    """

    def __init__(
        self,
        base_url: str,
        access_token: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        timeout: float = DEFAULT_TIMEOUT,
    ):
        self.base_url = base_url.rstrip("/")
        self.access_token = access_token
        self._transport = transport
        self._timeout = timeout

    def _headers(self) -> dict[str, str]:
        headers = {"Accept": "application/json"}
        if self.access_token:
            headers["Authorization"] = f"Bearer {self.access_token}"
        return headers

    async def _make_request(
        self,
        method: str,
        path: str,
        json: Optional[dict] = None,
        params: Optional[dict] = None,
    ) -> Any:
        url = f"{self.base_url}{path}"
        async with httpx.AsyncClient(
            transport=self._transport, timeout=self._timeout
        ) as client:
            response = await client.request(
                method, url, headers=self._headers(), json=json, params=params
            )

        try:
            body = response.json()
        except ValueError:
            raise ApiError(response.status_code, response.text or "Invalid response")

        if response.status_code >= 400 or not body.get("success", False):
            message = body.get("error") or body.get("message") or "Request failed"
            logger.warning("%s %s failed: %s", method, path, message)
            raise ApiError(response.status_code, message)
        return body.get("data")

    def _remember(self, data: dict) -> dict:
        tokens = TokenPair.model_validate(data["tokens"])
        self.access_token = tokens.access_token
        return data

    # ------------------------------------------------------------------
    # Auth
    # ------------------------------------------------------------------

    async def register(self, **fields: Any) -> dict:
        """Register with camelCase fields (email, password, firstName, ...)."""
        data = await self._make_request("POST", "/api/auth/register", json=fields)
        return self._remember(data)

    async def login(self, email: str, password: str) -> dict:
        data = await self._make_request(
            "POST", "/api/auth/login", json={"email": email, "password": password}
        )
        return self._remember(data)

    async def google_login(self, profile: dict) -> dict:
        data = await self._make_request("POST", "/api/auth/google", json=profile)
        return self._remember(data)

    async def refresh(self, refresh_token: str) -> TokenPair:
        data = await self._make_request(
            "POST", "/api/auth/refresh", json={"refreshToken": refresh_token}
        )
        tokens = TokenPair.model_validate(data["tokens"])
        self.access_token = tokens.access_token
        return tokens

    async def logout(self) -> None:
        await self._make_request("POST", "/api/auth/logout")
        self.access_token = None

    async def get_profile(self) -> dict:
        data = await self._make_request("GET", "/api/auth/profile")
        return data["user"]

    # ------------------------------------------------------------------
    # Catalog
    # ------------------------------------------------------------------

    async def list_products(self, **filters: Any) -> dict:
        """Filters use the API's query names (category, eggColor, page, ...)."""
        params = {k: v for k, v in filters.items() if v is not None}
        return await self._make_request("GET", "/api/products", params=params)

    async def get_product(self, product_id: int) -> dict:
        data = await self._make_request("GET", f"/api/products/{product_id}")
        return data["product"]

    # ------------------------------------------------------------------
    # Orders
    # ------------------------------------------------------------------

    async def create_order(self, items: list[dict], **extra: Any) -> dict:
        payload = {"items": items, **extra}
        return await self._make_request("POST", "/api/orders", json=payload)

    async def list_orders(self) -> list[dict]:
        return await self._make_request("GET", "/api/orders")

    async def get_order(self, order_id: str) -> dict:
        data = await self._make_request("GET", f"/api/orders/{order_id}")
        return data["order"]

    async def get_order_history(self) -> dict:
        return await self._make_request("GET", "/api/orders/history")
