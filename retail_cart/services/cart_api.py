import logging
from typing import Any, Dict, Optional

import requests

from retail_cart.config import settings
from retail_cart.exceptions import AuthenticationRequired, CartApiError, NoResponseError
from retail_cart.schemas.cart_schemas import CartData

logger = logging.getLogger(__name__)


def extract_error_message(body: Any, fallback: str) -> str:
    """Best-effort message: body ``message``, then body ``error``, then the fallback."""
    if isinstance(body, dict):
        for key in ("message", "error"):
            value = body.get(key)
            if isinstance(value, str) and value.strip():
                return value
    return fallback


def _json_body(response: requests.Response) -> Any:
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        return None


class CartApiClient:
    """Thin client for the upstream ordering backend."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
    ):
        self.base_url = (base_url or settings.api_root).rstrip("/")
        self.timeout = timeout if timeout is not None else settings.request_timeout
        self.session = session or requests.Session()

    def _request(
        self,
        method: str,
        path: str,
        *,
        token: Optional[str],
        fallback: str,
        json: Optional[Dict[str, Any]] = None,
    ) -> Any:
        # no credential, no round trip
        if not token:
            raise AuthenticationRequired()

        headers = {
            "Authorization": f"Bearer {token}",
            "Content-Type": "application/json",
        }
        url = f"{self.base_url}{path}"

        try:
            response = self.session.request(
                method,
                url,
                json=json,
                headers=headers,
                timeout=self.timeout,
            )
        except (requests.ConnectionError, requests.Timeout) as e:
            logger.error(f"{method} {path} got no response: {e}")
            raise NoResponseError() from e
        except requests.RequestException as e:
            logger.exception(f"{method} {path} failed before a response")
            raise CartApiError(str(e) or fallback) from e

        body = _json_body(response)

        if response.status_code >= 400:
            message = extract_error_message(body, fallback)
            logger.error(f"{method} {path} failed ({response.status_code}): {message}")
            raise CartApiError(message, status_code=response.status_code, body=body)

        logger.info(f"{method} {path} -> {response.status_code}")
        return body

    # Cart

    def get_cart(self, token: Optional[str]) -> CartData:
        fallback = "Failed to fetch cart data"
        try:
            body = self._request("GET", "/product/cart", token=token, fallback=fallback)
        except CartApiError as e:
            if e.status_code == 401:
                raise CartApiError(
                    "Please login to view your cart", status_code=401, body=e.body
                ) from e
            raise

        if isinstance(body, dict) and body.get("status") and body.get("data"):
            return CartData.model_validate(body["data"])
        raise CartApiError(fallback, body=body)

    def update_product_quantity(self, product_id: int, quantity: float, token: Optional[str]):
        self._request(
            "PUT",
            "/product/quantity",
            token=token,
            json={"productId": product_id, "quantity": quantity},
            fallback="Failed to update product quantity",
        )

    def update_package_quantity(self, package_id: int, quantity: float, token: Optional[str]):
        self._request(
            "PUT",
            "/product/package/quantity",
            token=token,
            json={"packageId": package_id, "quantity": quantity},
            fallback="Failed to update package quantity",
        )

    def remove_product(self, product_id: int, token: Optional[str]):
        self._request(
            "DELETE",
            f"/product/{product_id}",
            token=token,
            fallback="Failed to remove product from cart",
        )

    def remove_package(self, package_id: int, token: Optional[str]):
        self._request(
            "DELETE",
            f"/product/package/{package_id}",
            token=token,
            fallback="Failed to remove package from cart",
        )

    # Orders

    def create_order(self, payload: Dict[str, Any], token: Optional[str]) -> Any:
        return self._request(
            "POST",
            "/cart/create-order",
            token=token,
            json=payload,
            fallback="Failed to submit order",
        )
