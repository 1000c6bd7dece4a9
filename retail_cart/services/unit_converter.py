"""
Unit price helpers.

Gram-denominated items are priced per kilogram upstream, so both the price
and the flat discount are scaled down to a per-gram figure before being
multiplied by the quantity. Every other unit is used as-is.
"""
from typing import Optional

from retail_cart.constants.cart_constants import GRAMS_PER_KG, UNIT_G, UNIT_KG


def per_unit_price(unit: str, price: float) -> float:
    if unit == UNIT_G:
        return price / GRAMS_PER_KG
    return price


def total_discount(unit: str, discount: Optional[float], quantity: float) -> float:
    if not discount:
        return 0
    if unit == UNIT_G:
        return (discount / GRAMS_PER_KG) * quantity
    return discount * quantity


def convert_quantity(quantity: float, from_unit: str, to_unit: str) -> float:
    """Re-express a quantity when the shopper toggles between kg and g."""
    if from_unit == UNIT_KG and to_unit == UNIT_G:
        return quantity * GRAMS_PER_KG
    if from_unit == UNIT_G and to_unit == UNIT_KG:
        return quantity / GRAMS_PER_KG
    return quantity
