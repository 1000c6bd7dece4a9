"""
Order payload validation.

Every rule is checked and every failure is collected, so a checkout form can
show all problems at once. ``validate`` never raises: a malformed payload
(missing blocks, wrong types, camelCase or snake_case keys) just produces
more error strings.
"""
import logging
import math
from typing import Any, List, Optional

from pydantic import BaseModel
from pydantic.alias_generators import to_camel

from retail_cart.constants.cart_constants import (
    BUILDING_APARTMENT,
    BUILDING_TYPES,
    DELIVERY_ALIASES,
    DELIVERY_HOME,
    DELIVERY_METHODS,
    PAYMENT_METHODS,
)
from retail_cart.schemas.checkout_schemas import ValidationResult

logger = logging.getLogger(__name__)

MIN_NAME_LENGTH = 2
MIN_CITY_LENGTH = 2
MIN_PHONE_LENGTH = 9

APARTMENT_FIELDS = [
    ("building_no", "Building number"),
    ("building_name", "Building name"),
    ("flat_number", "Flat number"),
    ("floor_number", "Floor number"),
]

HOUSE_FIELDS = [
    ("house_no", "House number"),
    ("street", "Street name"),
]


def _field(data: Any, name: str) -> Any:
    if not isinstance(data, dict):
        return None
    if name in data:
        return data[name]
    return data.get(to_camel(name))


def _present(value: Any) -> bool:
    if value is None:
        return False
    if isinstance(value, str):
        return value.strip() != ""
    return True


def _text(value: Any) -> str:
    if value is None:
        return ""
    return str(value).strip()


def _number(value: Any) -> Optional[float]:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str) and value.strip():
        try:
            number = float(value)
        except ValueError:
            return None
    else:
        return None
    if math.isnan(number):
        return None
    return number


def _normalize_delivery(value: Any) -> str:
    method = _text(value).lower()
    return DELIVERY_ALIASES.get(method, method)


def _validate_items(items: Any, errors: List[str]):
    if not isinstance(items, (list, tuple)) or len(items) == 0:
        errors.append("Order must contain at least one item (items must be a non-empty list)")
        return

    for index, item in enumerate(items, start=1):
        label = f"Item {index}"
        if not isinstance(item, dict):
            errors.append(f"{label}: item must be an object")
            continue

        if not _present(_field(item, "product_id")):
            errors.append(f"{label}: product ID is required")

        if not _present(_field(item, "unit")):
            errors.append(f"{label}: unit is required")

        quantity = _number(_field(item, "quantity"))
        if quantity is None or quantity <= 0:
            errors.append(f"{label}: quantity must be a positive number")

        total_price = _number(_field(item, "total_price"))
        if total_price is None or total_price < 0:
            errors.append(f"{label}: total price is required and cannot be negative")

        item_type = _text(_field(item, "item_type")).lower()
        if item_type == "package" and not _present(_field(item, "package_id")):
            errors.append(f"{label}: package ID is required for package items")


def _validate_checkout_details(details: Any, errors: List[str]):
    if not isinstance(details, dict):
        errors.append("Checkout details are required")
        details = {}

    delivery_method = _normalize_delivery(_field(details, "delivery_method"))
    if delivery_method not in DELIVERY_METHODS:
        errors.append("Delivery method must be either 'home' or 'pickup'")

    if not _present(_field(details, "title")):
        errors.append("Title is required")

    if len(_text(_field(details, "full_name"))) < MIN_NAME_LENGTH:
        errors.append(f"Full name must be at least {MIN_NAME_LENGTH} characters")

    if not _present(_field(details, "phone_code1")):
        errors.append("Phone country code is required")

    if len(_text(_field(details, "phone1"))) < MIN_PHONE_LENGTH:
        errors.append(f"Phone number must be at least {MIN_PHONE_LENGTH} digits")

    if not _present(_field(details, "delivery_date")):
        errors.append("Delivery date is required")

    if not _present(_field(details, "time_slot")):
        errors.append("Time slot is required")

    if delivery_method != DELIVERY_HOME:
        return

    if len(_text(_field(details, "city_name"))) < MIN_CITY_LENGTH:
        errors.append(f"City name must be at least {MIN_CITY_LENGTH} characters")

    building_type = _text(_field(details, "building_type")).lower()
    if building_type not in BUILDING_TYPES:
        errors.append("Building type must be either 'apartment' or 'house'")
        return

    # apartment and house fields are mutually exclusive
    required = APARTMENT_FIELDS if building_type == BUILDING_APARTMENT else HOUSE_FIELDS
    for name, label in required:
        if not _present(_field(details, name)):
            errors.append(f"{label} is required for {building_type} delivery")


def validate(payload: Any) -> ValidationResult:
    if isinstance(payload, BaseModel):
        payload = payload.model_dump()
    if not isinstance(payload, dict):
        payload = {}

    errors: List[str] = []

    payment_method = _field(payload, "payment_method")
    if payment_method not in PAYMENT_METHODS:
        errors.append("Payment method must be either 'card' or 'cash'")

    _validate_items(_field(payload, "items"), errors)

    if not _present(_field(payload, "cart_id")):
        errors.append("Cart ID is required")

    _validate_checkout_details(_field(payload, "checkout_details"), errors)

    grand_total = _number(_field(payload, "grand_total"))
    if grand_total is None or grand_total <= 0:
        errors.append("Grand total must be a positive number")

    discount_amount = _number(_field(payload, "discount_amount"))
    if discount_amount is None or discount_amount < 0:
        errors.append("Discount amount is required and cannot be negative")

    if errors:
        logger.info(f"Order payload rejected with {len(errors)} errors")

    return ValidationResult(is_valid=len(errors) == 0, errors=errors)
