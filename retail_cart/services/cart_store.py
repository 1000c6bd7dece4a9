"""
In-memory cart store.

The store owns one ``CartState`` snapshot made of the raw collections
(packages, additional item groups, summary). The unified item list is a
projection of those collections, computed on first read and dropped on every
raw mutation, so the derived view can never drift from its backing records.

Every mutation copies the current snapshot, edits the copy and swaps it in
with a single assignment. Readers only ever see whole snapshots.
"""
import logging
import threading
from typing import Any, Dict, Iterable, List, NamedTuple, Optional, Union

from retail_cart.constants.cart_constants import (
    ITEM_ADDITIONAL,
    ITEM_PACKAGE,
    QUANTITY_EDITABLE_TYPES,
)
from retail_cart.exceptions import UnsupportedCartOperation
from retail_cart.schemas.cart_schemas import (
    AdditionalItemGroup,
    CartData,
    CartState,
    CartSummaryPatch,
    Package,
    RawCartItem,
    UnifiedItem,
)
from retail_cart.services.cart_aggregator import aggregate, build_items

logger = logging.getLogger(__name__)


class RemovedRecord(NamedTuple):
    """A record taken out of the cart, with enough context to put it back."""

    item_type: str
    record: Union[RawCartItem, Package]
    group: Optional[AdditionalItemGroup]
    group_position: Optional[int]
    position: int


def supports_quantity_update(item_type: str) -> bool:
    return item_type in QUANTITY_EDITABLE_TYPES


class CartStore:
    def __init__(self):
        self._lock = threading.RLock()
        self._state = CartState()
        self._items: Optional[List[UnifiedItem]] = []

    # Reads

    @property
    def items(self) -> List[UnifiedItem]:
        return [item.model_copy() for item in self._projection()]

    @property
    def state(self) -> CartState:
        with self._lock:
            state = self._state.model_copy(deep=True)
            state.items = [item.model_copy() for item in self._projection()]
            return state

    @property
    def cart_id(self) -> int:
        return self._state.cart_id

    @property
    def summary(self):
        summary = self._state.summary
        return summary.model_copy() if summary else None

    def find_item(self, item_id: int, item_type: str) -> Optional[UnifiedItem]:
        for item in self._projection():
            if item.item_type != item_type:
                continue
            matched = item.package_id if item_type == ITEM_PACKAGE else item.id
            if matched == item_id:
                return item.model_copy()
        return None

    def is_empty(self) -> bool:
        state = self._state
        if not state.cart:
            return True
        has_packages = len(state.packages) > 0
        has_items = any(group.items for group in state.additional_items)
        return not has_packages and not has_items

    def _projection(self) -> List[UnifiedItem]:
        with self._lock:
            if self._items is None:
                self._items = build_items(
                    self._state.additional_items, self._state.packages
                )
            return self._items

    def _commit(self, state: CartState, items: Optional[List[UnifiedItem]] = None):
        # one assignment: snapshot and projection change together
        self._state, self._items = state, items

    # Snapshots for compensating actions

    def snapshot(self) -> CartState:
        with self._lock:
            return self._state.model_copy(deep=True)

    def restore(self, snapshot: CartState):
        with self._lock:
            self._commit(snapshot.model_copy(deep=True))
            logger.info(f"Cart {snapshot.cart_id} restored from snapshot")

    # Mutations

    def set_cart_data(self, cart_data: CartData) -> CartState:
        with self._lock:
            new_state = aggregate(cart_data.model_copy(deep=True), self._state.cart_id)
            items = new_state.items
            new_state.items = []
            self._commit(new_state, items)
            return self.state

    def update_quantity(self, item_id: int, new_quantity: float, item_type: str) -> bool:
        """
        Set the quantity of an additional item.

        Unit price, total price and total discount are re-derived from the
        raw record's list price and discount. Unknown ids are ignored.
        """
        return self.swap_quantity(item_id, new_quantity, item_type) is not None

    def swap_quantity(
        self,
        item_id: int,
        new_quantity: float,
        item_type: str,
        expected: Optional[float] = None,
    ) -> Optional[float]:
        """
        Set the quantity and return the one it replaced, or ``None`` when
        nothing changed. With ``expected``, only a record still holding that
        quantity is touched.
        """
        if not supports_quantity_update(item_type):
            raise UnsupportedCartOperation(
                f"Quantity of '{item_type}' items cannot be changed in the cart"
            )

        with self._lock:
            new_state = self._state.model_copy(deep=True)
            previous = None
            for group in new_state.additional_items:
                for raw in group.items:
                    if raw.id != item_id:
                        continue
                    if expected is not None and raw.quantity != expected:
                        continue
                    previous = raw.quantity
                    raw.quantity = new_quantity

            if previous is None:
                logger.info(f"Quantity update ignored, item {item_id} not in cart")
                return None

            self._commit(new_state)
            logger.info(f"Item {item_id} quantity set to {new_quantity}")
            return previous

    def remove(self, item_id: int, item_type: str) -> bool:
        return self.pop(item_id, item_type) is not None

    def pop(self, item_id: int, item_type: str) -> Optional[RemovedRecord]:
        """Remove an item or a whole package and hand back what was taken out."""
        with self._lock:
            new_state = self._state.model_copy(deep=True)
            removed = None

            if item_type == ITEM_ADDITIONAL:
                for group_position, group in enumerate(new_state.additional_items):
                    for position, raw in enumerate(group.items):
                        if raw.id == item_id:
                            removed = RemovedRecord(
                                item_type, raw,
                                group.model_copy(update={"items": []}),
                                group_position, position,
                            )
                    group.items = [raw for raw in group.items if raw.id != item_id]
                # empty groups are dropped, never kept as placeholders
                new_state.additional_items = [
                    group for group in new_state.additional_items if group.items
                ]
            elif item_type == ITEM_PACKAGE:
                for position, pkg in enumerate(new_state.packages):
                    if pkg.id == item_id:
                        removed = RemovedRecord(item_type, pkg, None, None, position)
                new_state.packages = [
                    pkg for pkg in new_state.packages if pkg.id != item_id
                ]

            if removed is None:
                logger.info(f"Removal ignored, {item_type} {item_id} not in cart")
                return None

            self._commit(new_state)
            logger.info(f"Removed {item_type} {item_id} from cart {new_state.cart_id}")
            return removed

    def reinsert(self, removed: RemovedRecord) -> bool:
        """
        Put back a record taken out by ``pop``, at its old position. Anything
        else that changed in the meantime is left alone.
        """
        with self._lock:
            new_state = self._state.model_copy(deep=True)
            record = removed.record.model_copy(deep=True)

            if removed.item_type == ITEM_PACKAGE:
                if any(pkg.id == record.id for pkg in new_state.packages):
                    return False
                new_state.packages.insert(removed.position, record)
            else:
                group = next(
                    (g for g in new_state.additional_items if g.id == removed.group.id),
                    None,
                )
                if group is None:
                    group = removed.group.model_copy(update={"items": []})
                    new_state.additional_items.insert(removed.group_position, group)
                elif any(raw.id == record.id for raw in group.items):
                    return False
                group.items.insert(removed.position, record)

            self._commit(new_state)
            logger.info(f"Put {removed.item_type} {record.id} back into cart {new_state.cart_id}")
            return True

    def remove_many(self, item_ids: Iterable[int]) -> List[int]:
        """Remove several additional items at once; returns the ids actually removed."""
        return [removed.record.id for removed in self.pop_many(item_ids)]

    def pop_many(self, item_ids: Iterable[int]) -> List[RemovedRecord]:
        with self._lock:
            popped = [self.pop(item_id, ITEM_ADDITIONAL) for item_id in item_ids]
            return [removed for removed in popped if removed is not None]

    def patch_summary(self, partial: Dict[str, Any]) -> bool:
        """Merge explicit summary fields. Nothing is recomputed from raw data."""
        with self._lock:
            if self._state.summary is None:
                return False

            fields = CartSummaryPatch.model_validate(partial).model_dump(exclude_none=True)
            new_state = self._state.model_copy(deep=True)
            new_state.summary = new_state.summary.model_copy(update=fields)
            # raw collections are untouched, the projection stays valid
            self._commit(new_state, self._items)
            return True

    def clear(self):
        with self._lock:
            self._commit(CartState(), [])
            logger.info("Cart cleared")
