from fastapi import APIRouter, Depends, HTTPException
from typing import Optional

from retail_cart.dependencies.cart import get_cart_store, get_cart_sync
from retail_cart.exceptions import CartError
from retail_cart.schemas.cart_schemas import (
    CartBulkDeleteRequest,
    CartQuantityUpdateRequest,
    CartSummaryPatch,
    ItemType,
)
from retail_cart.services.cart_store import CartStore
from retail_cart.services.cart_sync import CartSyncService
from retail_cart.utils.errors import to_http_error
from retail_cart.utils.token import get_bearer_token


router = APIRouter()


def cart_response(store: CartStore):
    state = store.state
    return {
        "cart_id": state.cart_id,
        "items": state.items,
        "summary": state.summary,
        "is_empty": store.is_empty(),
    }


# View Cart

@router.get("/")
def get_cart(store: CartStore = Depends(get_cart_store)):
    return cart_response(store)


# Refresh from backend

@router.post("/refresh")
def refresh_cart(
    sync: CartSyncService = Depends(get_cart_sync),
    token: Optional[str] = Depends(get_bearer_token),
):
    try:
        sync.load(token)
    except CartError as e:
        raise to_http_error(e)

    return cart_response(sync.store)


# Update quantity

@router.put("/items/{item_id}")
def update_cart_item(
    item_id: int,
    data: CartQuantityUpdateRequest,
    sync: CartSyncService = Depends(get_cart_sync),
    token: Optional[str] = Depends(get_bearer_token),
):
    if data.quantity <= 0:
        raise HTTPException(400, "Quantity must be greater than zero")

    try:
        if data.defer:
            updated = sync.queue_quantity(item_id, data.quantity, data.item_type)
        else:
            updated = sync.update_quantity(token, item_id, data.quantity, data.item_type)
    except CartError as e:
        raise to_http_error(e)

    if not updated:
        raise HTTPException(404, "Cart item not found")

    return {"message": "Quantity updated", **cart_response(sync.store)}


# Push deferred quantity edits

@router.post("/sync")
def sync_cart(
    sync: CartSyncService = Depends(get_cart_sync),
    token: Optional[str] = Depends(get_bearer_token),
):
    try:
        sync.flush_pending(token)
    except CartError as e:
        raise to_http_error(e)

    return cart_response(sync.store)


# Remove item / package

@router.delete("/items/{item_id}")
def remove_item(
    item_id: int,
    item_type: ItemType = "additional",
    sync: CartSyncService = Depends(get_cart_sync),
    token: Optional[str] = Depends(get_bearer_token),
):
    try:
        removed = sync.remove(token, item_id, item_type)
    except CartError as e:
        raise to_http_error(e)

    # removing something already gone is not an error
    message = "Item removed from cart" if removed else "Item not in cart"
    return {"message": message, **cart_response(sync.store)}


@router.post("/items/bulk-delete")
def bulk_remove_items(
    data: CartBulkDeleteRequest,
    sync: CartSyncService = Depends(get_cart_sync),
    token: Optional[str] = Depends(get_bearer_token),
):
    try:
        removed = sync.remove_products(token, data.item_ids)
    except CartError as e:
        raise to_http_error(e)

    return {"removed": removed, **cart_response(sync.store)}


# Summary

@router.patch("/summary")
def patch_cart_summary(
    data: CartSummaryPatch,
    store: CartStore = Depends(get_cart_store),
):
    if not store.patch_summary(data.model_dump(exclude_none=True)):
        raise HTTPException(404, "Cart summary not loaded")

    return {"summary": store.summary}
