import logging
from typing import Any, Optional, Union

from retail_cart.exceptions import (
    CartApiError,
    NoResponseError,
    OrderSubmissionError,
    OrderValidationError,
)
from retail_cart.schemas.checkout_schemas import OrderPayload
from retail_cart.services.cart_api import CartApiClient, extract_error_message
from retail_cart.services.order_validator import validate

logger = logging.getLogger(__name__)

GENERIC_FAILURE = "Order submission failed"


def _wire_payload(payload: Union[OrderPayload, dict]) -> dict:
    if isinstance(payload, OrderPayload):
        return payload.model_dump(by_alias=True, mode="json")
    return payload


class OrderSubmissionCoordinator:
    """
    Sends an already validated order payload to the backend.

    Failures are reported as ``OrderSubmissionError`` with a ``kind``:
    ``rejected`` when the backend explained itself, ``failed`` when it did
    not, ``no_response`` when nothing came back and the outcome is unknown.
    """

    def __init__(self, client: CartApiClient):
        self.client = client

    def submit(self, payload: Union[OrderPayload, dict], token: Optional[str]) -> Any:
        body = _wire_payload(payload)

        try:
            result = self.client.create_order(body, token)
        except NoResponseError as e:
            logger.error("Order submission got no response from server")
            raise OrderSubmissionError(
                e.message, kind=OrderSubmissionError.NO_RESPONSE
            ) from e
        except CartApiError as e:
            message = None
            if isinstance(e.body, dict):
                message = e.body.get("message")

            if isinstance(message, str) and message.strip():
                logger.warning(f"Order rejected by backend: {message}")
                raise OrderSubmissionError(
                    message,
                    kind=OrderSubmissionError.REJECTED,
                    status_code=e.status_code,
                ) from e

            detail = extract_error_message(e.body, "")
            if not detail:
                detail = f"HTTP {e.status_code}" if e.status_code else e.message
            logger.error(f"Order submission failed: {detail}")
            raise OrderSubmissionError(
                f"{GENERIC_FAILURE}: {detail}" if detail else GENERIC_FAILURE,
                kind=OrderSubmissionError.FAILED,
                status_code=e.status_code,
            ) from e

        logger.info(f"Order submitted for cart {body.get('cartId') or body.get('cart_id')}")
        return result

    def validate_and_submit(self, payload: Union[OrderPayload, dict], token: Optional[str]) -> Any:
        result = validate(payload)
        if not result.is_valid:
            raise OrderValidationError(result.errors)
        return self.submit(payload, token)
