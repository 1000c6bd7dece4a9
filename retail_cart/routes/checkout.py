from fastapi import APIRouter, Depends, HTTPException
from typing import Optional

from retail_cart.dependencies.cart import get_cart_store, get_order_coordinator
from retail_cart.exceptions import CartError
from retail_cart.schemas.checkout_schemas import CheckoutPreviewResponse, CheckoutRequest
from retail_cart.services.cart_store import CartStore
from retail_cart.services.order_payload_builder import build_payload_from_state
from retail_cart.services.order_submission import OrderSubmissionCoordinator
from retail_cart.services.order_validator import validate
from retail_cart.utils.errors import to_http_error
from retail_cart.utils.token import get_bearer_token

router = APIRouter()


# Order preview: payload + every validation problem

@router.post("/preview", response_model=CheckoutPreviewResponse)
def preview_order(
    data: CheckoutRequest,
    store: CartStore = Depends(get_cart_store),
):
    payload = build_payload_from_state(store.state, data.checkout_details, data.payment_method)

    return {
        "payload": payload,
        "validation": validate(payload),
    }


# Place order

@router.post("/submit")
def submit_order(
    data: CheckoutRequest,
    store: CartStore = Depends(get_cart_store),
    coordinator: OrderSubmissionCoordinator = Depends(get_order_coordinator),
    token: Optional[str] = Depends(get_bearer_token),
):
    if store.is_empty():
        raise HTTPException(400, "Your cart is empty.")

    # the payload is rebuilt for every attempt and never edited afterwards
    payload = build_payload_from_state(store.state, data.checkout_details, data.payment_method)

    try:
        result = coordinator.validate_and_submit(payload, token)
    except CartError as e:
        raise to_http_error(e)

    return {"message": "Order placed", "order": result}
