import logging
from typing import List, Optional

from retail_cart.constants.cart_constants import ITEM_ADDITIONAL, ITEM_PACKAGE, UNIT_PACKAGE
from retail_cart.schemas.cart_schemas import (
    AdditionalItemGroup,
    CartData,
    CartState,
    Package,
    RawCartItem,
    UnifiedItem,
)
from retail_cart.services.unit_converter import per_unit_price, total_discount

logger = logging.getLogger(__name__)


def additional_to_unified(item: RawCartItem) -> UnifiedItem:
    unit_price = per_unit_price(item.unit, item.price)

    return UnifiedItem(
        id=item.id,
        cart_item_id=item.cart_item_id,
        product_id=item.id,
        name=item.name,
        display_name=item.name,
        item_type=ITEM_ADDITIONAL,
        unit=item.unit,
        quantity=item.quantity,
        unit_price=unit_price,
        total_price=unit_price * item.quantity,
        total_discount=total_discount(item.unit, item.discount, item.quantity),
        original_price=item.price,
        discounted_price=item.discounted_price,
        normal_price=item.normal_price,
        image=item.image,
        variety_name_english=item.variety_name_english,
        category=item.category,
        created_at=item.created_at,
    )


def package_to_unified(package: Package) -> List[UnifiedItem]:
    # Packages are priced per bundle: every constituent line carries the
    # package price and no line-level discount.
    lines = []
    for line in package.items:
        lines.append(UnifiedItem(
            id=line.id if line.id is not None else package.id,
            cart_item_id=package.cart_item_id,
            mp_item_id=package.id,
            name=line.name,
            display_name=line.name,
            item_type=ITEM_PACKAGE,
            unit=UNIT_PACKAGE,
            quantity=line.quantity,
            unit_price=package.price,
            total_price=package.price,
            total_discount=0,
            original_price=package.price,
            package_id=package.id,
            package_name=package.package_name,
            image=package.image,
            has_special_badge=line.has_special_badge,
        ))
    return lines


def build_items(
    additional_items: List[AdditionalItemGroup],
    packages: List[Package],
) -> List[UnifiedItem]:
    """Additional-derived items first, then package-derived items."""
    items = [
        additional_to_unified(item)
        for group in additional_items
        for item in group.items
    ]
    for package in packages:
        items.extend(package_to_unified(package))
    return items


def aggregate(cart_data: CartData, current_cart_id: Optional[int] = None) -> CartState:
    cart_id = current_cart_id or 0
    if cart_data.cart and cart_data.cart.cart_id:
        cart_id = cart_data.cart.cart_id

    items = build_items(cart_data.additional_items, cart_data.packages)

    logger.info(
        f"Aggregated cart {cart_id}: {len(cart_data.packages)} packages, "
        f"{len(cart_data.additional_items)} item groups, {len(items)} unified items"
    )

    return CartState(
        cart_id=cart_id,
        cart=cart_data.cart,
        packages=cart_data.packages,
        additional_items=cart_data.additional_items,
        summary=cart_data.summary,
        items=items,
    )
