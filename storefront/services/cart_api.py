"""
Authenticated Cart API Client

Thin async client over the storefront backend's cart endpoints.
The backend wraps payloads in an ApiResponse envelope:
{statusCode, data, message, success}.
"""
import os
from typing import Any, Optional

import httpx

from storefront.errors import CartAPIError, ERROR_CART_API_NOT_CONFIGURED, ERROR_CART_API_UNAVAILABLE
from storefront.logging import get_logger, sanitize_id_for_logging

logger = get_logger(__name__)

STOREFRONT_API_URL = os.environ.get("STOREFRONT_API_URL", "")


class CartEndpoints:
    """Backend cart routes."""

    GET = "/cart"
    ADD_ITEM = "/cart/add"
    UPDATE_ITEM = "/cart/update/{product_id}"
    REMOVE_ITEM = "/cart/remove/{product_id}"
    CLEAR = "/cart/clear"


class UserCartAPI:
    """Cart operations on behalf of an authenticated user."""

    def __init__(
        self,
        access_token: str,
        base_url: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Args:
            access_token: Bearer token of the logged-in user
            base_url: Backend root URL, defaults to STOREFRONT_API_URL
            transport: Optional httpx transport (tests pass a MockTransport)
        """
        self.access_token = access_token
        self.base_url = base_url if base_url is not None else STOREFRONT_API_URL
        self._transport = transport
        self._http_client: Optional[httpx.AsyncClient] = None

    async def _get_http_client(self) -> httpx.AsyncClient:
        """Lazily create the shared httpx client."""
        if self._http_client is None:
            if not self.base_url:
                raise CartAPIError(ERROR_CART_API_NOT_CONFIGURED)
            self._http_client = httpx.AsyncClient(
                base_url=self.base_url,
                headers={"Authorization": f"Bearer {self.access_token}"},
                timeout=httpx.Timeout(10.0, connect=5.0),
                transport=self._transport,
            )
        return self._http_client

    async def aclose(self) -> None:
        if self._http_client is not None:
            await self._http_client.aclose()
            self._http_client = None

    async def __aenter__(self) -> "UserCartAPI":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    @staticmethod
    def _unwrap(body: Any) -> Any:
        """Return `data` from an ApiResponse envelope, or the body as-is."""
        if isinstance(body, dict) and "data" in body:
            return body["data"]
        return body

    @staticmethod
    def _error_message(response: httpx.Response) -> str:
        try:
            body = response.json()
        except ValueError:
            return response.text[:200] or ERROR_CART_API_UNAVAILABLE
        if isinstance(body, dict):
            return body.get("message") or body.get("error") or str(body)
        return str(body)

    async def _request(self, method: str, url: str, json: Optional[dict] = None) -> Any:
        client = await self._get_http_client()
        try:
            response = await client.request(method, url, json=json)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            message = self._error_message(e.response)
            logger.warning("Cart API %s %s failed with %s: %s", method, url, e.response.status_code, message)
            raise CartAPIError(message, status_code=e.response.status_code) from e
        except httpx.RequestError as e:
            logger.error("Cart API network error on %s %s: %s", method, url, e)
            raise CartAPIError(f"{ERROR_CART_API_UNAVAILABLE}: {e}") from e

        if not response.content:
            return None
        try:
            return self._unwrap(response.json())
        except ValueError as e:
            raise CartAPIError(f"Invalid JSON from cart API: {e}", status_code=response.status_code) from e

    async def get_cart(self) -> Any:
        return await self._request("GET", CartEndpoints.GET)

    async def add_item(self, product_id: str, quantity: int = 1) -> Any:
        """Add a product to the user's cart and return the server cart."""
        logger.debug("Adding %s x%d to user cart", sanitize_id_for_logging(product_id), quantity)
        return await self._request(
            "POST",
            CartEndpoints.ADD_ITEM,
            json={"productId": product_id, "quantity": quantity},
        )

    async def update_item(self, product_id: str, quantity: int) -> Any:
        return await self._request(
            "PUT",
            CartEndpoints.UPDATE_ITEM.format(product_id=product_id),
            json={"quantity": quantity},
        )

    async def remove_item(self, product_id: str) -> Any:
        return await self._request("DELETE", CartEndpoints.REMOVE_ITEM.format(product_id=product_id))

    async def clear_cart(self) -> Any:
        return await self._request("DELETE", CartEndpoints.CLEAR)
