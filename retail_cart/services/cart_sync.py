"""
Optimistic cart mutations.

Each mutation runs in two phases: apply it to the local store right away,
then confirm it with the backend. If the backend call fails only the records
this mutation touched are put back and the error is raised again, so the cart
never shows something the backend refused and edits made by other requests in
the meantime survive.
"""
import logging
from typing import Dict, Iterable, List, Optional

from retail_cart.constants.cart_constants import ITEM_ADDITIONAL, ITEM_PACKAGE
from retail_cart.exceptions import CartError
from retail_cart.schemas.cart_schemas import CartState
from retail_cart.services.cart_api import CartApiClient
from retail_cart.services.cart_store import CartStore

logger = logging.getLogger(__name__)


class CartSyncService:
    def __init__(self, store: CartStore, client: CartApiClient):
        self.store = store
        self.client = client
        # item id -> quantity, applied locally but not yet pushed upstream
        self.pending: Dict[int, float] = {}
        # item id -> quantity the backend last confirmed, for queued items
        self.confirmed: Dict[int, float] = {}

    def load(self, token: Optional[str]) -> CartState:
        cart_data = self.client.get_cart(token)
        state = self.store.set_cart_data(cart_data)
        # a fresh fetch is authoritative, queued edits are void
        self.pending.clear()
        self.confirmed.clear()
        return state

    def _forget(self, item_id: int):
        self.pending.pop(item_id, None)
        self.confirmed.pop(item_id, None)

    def update_quantity(
        self,
        token: Optional[str],
        item_id: int,
        quantity: float,
        item_type: str = ITEM_ADDITIONAL,
    ) -> bool:
        previous = self.store.swap_quantity(item_id, quantity, item_type)
        if previous is None:
            return False

        try:
            self.client.update_product_quantity(item_id, quantity, token)
        except CartError:
            logger.warning(f"Quantity update for item {item_id} rejected, rolling back")
            self.store.swap_quantity(item_id, previous, item_type, expected=quantity)
            raise

        self._forget(item_id)
        return True

    def remove(self, token: Optional[str], item_id: int, item_type: str) -> bool:
        removed = self.store.pop(item_id, item_type)
        if removed is None:
            return False

        try:
            if item_type == ITEM_PACKAGE:
                self.client.remove_package(item_id, token)
            else:
                self.client.remove_product(item_id, token)
        except CartError:
            logger.warning(f"Removal of {item_type} {item_id} rejected, rolling back")
            self.store.reinsert(removed)
            raise

        self._forget(item_id)
        return True

    def remove_products(self, token: Optional[str], item_ids: Iterable[int]) -> List[int]:
        """
        Bulk removal. Removals the backend already confirmed stay removed;
        the failed one and those never sent are put back.
        """
        removed = self.store.pop_many(item_ids)

        for index, record in enumerate(removed):
            try:
                self.client.remove_product(record.record.id, token)
            except CartError:
                unconfirmed = removed[index:]
                logger.warning(
                    f"Bulk removal rejected at item {record.record.id}, "
                    f"putting back {[r.record.id for r in unconfirmed]}"
                )
                # reverse order restores the original positions
                for entry in reversed(unconfirmed):
                    self.store.reinsert(entry)
                raise
            self._forget(record.record.id)

        return [record.record.id for record in removed]

    # Deferred quantity edits, pushed when the shopper proceeds to checkout

    def queue_quantity(self, item_id: int, quantity: float, item_type: str = ITEM_ADDITIONAL) -> bool:
        previous = self.store.swap_quantity(item_id, quantity, item_type)
        if previous is None:
            return False
        self.confirmed.setdefault(item_id, previous)
        self.pending[item_id] = quantity
        return True

    def flush_pending(self, token: Optional[str]) -> CartState:
        queued = list(self.pending.items())

        for index, (item_id, quantity) in enumerate(queued):
            try:
                self.client.update_product_quantity(item_id, quantity, token)
            except CartError:
                logger.warning(f"Queued quantity for item {item_id} rejected, rolling back")
                for unsent_id, unsent_quantity in queued[index:]:
                    self.store.swap_quantity(
                        unsent_id, self.confirmed[unsent_id], ITEM_ADDITIONAL,
                        expected=unsent_quantity,
                    )
                    self._forget(unsent_id)
                raise
            self._forget(item_id)
            logger.info(f"Pushed queued quantity {quantity} for item {item_id}")

        # refetch so the summary matches the backend again
        return self.load(token)
