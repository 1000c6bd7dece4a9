from retail_cart.services.cart_api import CartApiClient
from retail_cart.services.cart_store import CartStore
from retail_cart.services.cart_sync import CartSyncService
from retail_cart.services.order_submission import OrderSubmissionCoordinator

# One cart store per process, shared by every route
cart_store = CartStore()
cart_api_client = CartApiClient()
cart_sync = CartSyncService(cart_store, cart_api_client)
order_coordinator = OrderSubmissionCoordinator(cart_api_client)


def get_cart_store() -> CartStore:
    return cart_store


def get_cart_sync() -> CartSyncService:
    return cart_sync


def get_order_coordinator() -> OrderSubmissionCoordinator:
    return order_coordinator
