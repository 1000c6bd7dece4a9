# retail_cart/schemas/checkout_schemas.py
from pydantic import BaseModel
from typing import List, Literal, Optional

from retail_cart.schemas.cart_schemas import CamelModel


class CheckoutDetails(CamelModel):
    # Presence rules live in the order validator, not here
    center_id: Optional[int] = None
    delivery_method: Optional[str] = None
    title: Optional[str] = None
    full_name: Optional[str] = None
    phone_code1: Optional[str] = None
    phone1: Optional[str] = None
    phone_code2: Optional[str] = None
    phone2: Optional[str] = None
    building_type: Optional[str] = None
    building_no: Optional[str] = None
    building_name: Optional[str] = None
    flat_number: Optional[str] = None
    floor_number: Optional[str] = None
    house_no: Optional[str] = None
    street: Optional[str] = None
    city_name: Optional[str] = None
    delivery_date: Optional[str] = None
    time_slot: Optional[str] = None
    schedule_type: Optional[str] = None
    coupon_code: Optional[str] = None
    is_coupon: Optional[int] = None
    coupon_value: Optional[str] = None


class OrderLine(CamelModel):
    product_id: Optional[int] = None
    unit: Optional[str] = None
    quantity: Optional[float] = None
    total_discount: float = 0
    total_price: Optional[float] = None
    item_type: Literal["product", "package"]
    package_id: Optional[int] = None
    id: Optional[int] = None
    name: Optional[str] = None


class OrderPayload(CamelModel):
    cart_id: Optional[str] = None
    payment_method: str
    discount_amount: Optional[float] = 0
    grand_total: Optional[float] = None
    order_app: Optional[str] = None
    items: List[OrderLine] = []
    checkout_details: CheckoutDetails


class ValidationResult(CamelModel):
    is_valid: bool
    errors: List[str] = []


class CheckoutRequest(BaseModel):
    payment_method: str
    checkout_details: CheckoutDetails


class CheckoutPreviewResponse(BaseModel):
    payload: OrderPayload
    validation: ValidationResult
