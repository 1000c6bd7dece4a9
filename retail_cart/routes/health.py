from fastapi import APIRouter, Depends
from datetime import datetime, timezone

from retail_cart.dependencies.cart import get_cart_store
from retail_cart.services.cart_store import CartStore

router = APIRouter()

@router.get("/check")
def health_check(store: CartStore = Depends(get_cart_store)):
    return {
        "status": "ok",
        "cart_loaded": not store.is_empty(),
        "timestamp": datetime.now(timezone.utc).isoformat()
    }
