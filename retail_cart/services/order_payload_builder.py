from typing import List, Optional, Union

from retail_cart.config import settings
from retail_cart.constants.cart_constants import ITEM_PACKAGE, ORDER_ITEM_TYPES
from retail_cart.schemas.cart_schemas import CartState, UnifiedItem
from retail_cart.schemas.checkout_schemas import CheckoutDetails, OrderLine, OrderPayload


def to_order_line(item: UnifiedItem) -> OrderLine:
    if item.item_type == ITEM_PACKAGE:
        # id stays the constituent record id, the backend reconciles
        # package contents with it
        return OrderLine(
            product_id=item.id,
            unit=item.unit,
            quantity=item.quantity,
            total_discount=item.total_discount,
            total_price=item.total_price,
            item_type=ORDER_ITEM_TYPES[ITEM_PACKAGE],
            package_id=item.package_id,
            id=item.id,
            name=item.name,
        )

    return OrderLine(
        product_id=item.id,
        unit=item.unit,
        quantity=item.quantity,
        total_discount=item.total_discount,
        total_price=item.total_price,
        item_type=ORDER_ITEM_TYPES[item.item_type],
        id=item.cart_item_id,
        name=item.name,
    )


def build_payload(
    items: List[UnifiedItem],
    checkout_details: Union[CheckoutDetails, dict],
    *,
    cart_id,
    payment_method: str,
    discount_amount: float,
    grand_total: float,
    order_app: Optional[str] = None,
) -> OrderPayload:
    """Map the unified items and the checkout form into the order wire format."""
    if not isinstance(checkout_details, CheckoutDetails):
        checkout_details = CheckoutDetails.model_validate(checkout_details)

    return OrderPayload(
        cart_id=str(cart_id) if cart_id else None,
        payment_method=payment_method,
        discount_amount=discount_amount,
        grand_total=grand_total,
        order_app=order_app or settings.order_app,
        items=[to_order_line(item) for item in items],
        checkout_details=checkout_details.model_copy(),
    )


def build_payload_from_state(
    state: CartState,
    checkout_details: Union[CheckoutDetails, dict],
    payment_method: str,
) -> OrderPayload:
    summary = state.summary
    discount_amount = summary.coupon_discount if summary else 0
    grand_total = 0
    if summary:
        grand_total = summary.final_total or summary.grand_total

    return build_payload(
        state.items,
        checkout_details,
        cart_id=state.cart_id,
        payment_method=payment_method,
        discount_amount=discount_amount,
        grand_total=grand_total,
    )
